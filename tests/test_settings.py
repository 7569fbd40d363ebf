import pytest

from token_lifecycle.domain.constants import TokenClass
from token_lifecycle.domain.value_objects import Secret
from token_lifecycle.env import (
    DEFAULT_REDIS_URL,
    cookie_settings_from_env,
    redis_url_from_env,
    token_settings_from_env,
)
from token_lifecycle.settings import CookieSettings, TokenSettings


def _settings(**overrides) -> TokenSettings:
    values = dict(
        access_secret=b"a" * 32,
        refresh_secret=b"r" * 32,
        issuer="iss",
        access_ttl_seconds=60,
        refresh_ttl_seconds=3600,
    )
    values.update(overrides)
    return TokenSettings(**values)


def test_token_settings_coerce_secrets():
    settings = _settings(refresh_secret="text-secret")
    assert isinstance(settings.access_secret, Secret)
    assert settings.refresh_secret == Secret(b"text-secret")
    assert "aaaa" not in repr(settings)

    assert settings.secret_for(TokenClass.ACCESS) == Secret(b"a" * 32)
    assert settings.ttl_for(TokenClass.ACCESS) == 60
    assert settings.ttl_for(TokenClass.REFRESH) == 3600


@pytest.mark.parametrize(
    "overrides",
    [
        {"issuer": ""},
        {"access_ttl_seconds": 0},
        {"refresh_ttl_seconds": -1},
        {"access_ttl_seconds": 3600, "refresh_ttl_seconds": 3600},
        {"operation_timeout_seconds": 0},
        {"access_secret": b""},
    ],
)
def test_token_settings_rejects_invalid_values(overrides):
    with pytest.raises(ValueError):
        _settings(**overrides)


def test_cookie_max_age_defaults_to_token_ttl():
    tokens = _settings()
    cookies = CookieSettings()
    assert cookies.max_age_for(TokenClass.ACCESS, tokens) == 60
    assert cookies.max_age_for(TokenClass.REFRESH, tokens) == 3600

    cookies = CookieSettings(access_max_age=30)
    assert cookies.max_age_for(TokenClass.ACCESS, tokens) == 30


def test_token_settings_from_env(monkeypatch):
    monkeypatch.setenv("TOKEN_ACCESS_SECRET", "access-secret")
    monkeypatch.setenv("TOKEN_REFRESH_SECRET", "refresh-secret")
    monkeypatch.setenv("TOKEN_ISSUER", "identity")
    monkeypatch.setenv("TOKEN_ACCESS_TTL_SECONDS", "300")
    monkeypatch.setenv("TOKEN_REFRESH_TTL_SECONDS", "7200")
    monkeypatch.delenv("TOKEN_OPERATION_TIMEOUT_SECONDS", raising=False)

    settings = token_settings_from_env()
    assert settings.access_secret == Secret(b"access-secret")
    assert settings.issuer == "identity"
    assert settings.access_ttl_seconds == 300
    assert settings.refresh_ttl_seconds == 7200
    assert settings.operation_timeout_seconds == 5.0


def test_token_settings_from_env_lists_missing(monkeypatch):
    for key in (
        "TOKEN_ACCESS_SECRET",
        "TOKEN_REFRESH_SECRET",
        "TOKEN_ISSUER",
        "TOKEN_ACCESS_TTL_SECONDS",
        "TOKEN_REFRESH_TTL_SECONDS",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("TOKEN_ISSUER", "identity")

    with pytest.raises(RuntimeError) as exc_info:
        token_settings_from_env()

    message = str(exc_info.value)
    assert "TOKEN_ACCESS_SECRET" in message
    assert "TOKEN_REFRESH_TTL_SECONDS" in message
    assert "TOKEN_ISSUER" not in message


def test_token_settings_from_env_rejects_non_integer_ttl(monkeypatch):
    monkeypatch.setenv("TOKEN_ACCESS_TTL_SECONDS", "soon")
    with pytest.raises(RuntimeError):
        token_settings_from_env()


def test_cookie_settings_from_env(monkeypatch):
    monkeypatch.setenv("COOKIE_DOMAIN", "example.test")
    monkeypatch.setenv("COOKIE_SECURE", "false")
    monkeypatch.delenv("COOKIE_HTTP_ONLY", raising=False)
    monkeypatch.setenv("COOKIE_REFRESH_MAX_AGE", "120")
    monkeypatch.delenv("COOKIE_ACCESS_MAX_AGE", raising=False)

    cookies = cookie_settings_from_env()
    assert cookies.domain == "example.test"
    assert cookies.secure is False
    assert cookies.http_only is True
    assert cookies.refresh_max_age == 120
    assert cookies.access_max_age is None


def test_redis_url_from_env(monkeypatch):
    monkeypatch.delenv("REDIS_URL", raising=False)
    assert redis_url_from_env() == DEFAULT_REDIS_URL
    monkeypatch.setenv("REDIS_URL", "redis://cache:6379/3")
    assert redis_url_from_env() == "redis://cache:6379/3"
