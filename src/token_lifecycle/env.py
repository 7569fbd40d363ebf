from __future__ import annotations

import os
from typing import Optional

from .settings import CookieSettings, TokenSettings

DEFAULT_REDIS_URL = "redis://localhost:6379/0"


def _bool(key: str, default: bool = True) -> bool:
    raw = os.getenv(key)
    if raw is None:
        return default
    return str(raw).strip().lower() in {"1", "true", "yes", "on"}


def _int(key: str) -> Optional[int]:
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{key} must be an integer, got {raw!r}") from exc


def token_settings_from_env() -> TokenSettings:
    access_secret = os.getenv("TOKEN_ACCESS_SECRET")
    refresh_secret = os.getenv("TOKEN_REFRESH_SECRET")
    issuer = os.getenv("TOKEN_ISSUER")
    access_ttl = _int("TOKEN_ACCESS_TTL_SECONDS")
    refresh_ttl = _int("TOKEN_REFRESH_TTL_SECONDS")
    if not all([access_secret, refresh_secret, issuer, access_ttl, refresh_ttl]):
        missing = [
            n
            for n, v in [
                ("TOKEN_ACCESS_SECRET", access_secret),
                ("TOKEN_REFRESH_SECRET", refresh_secret),
                ("TOKEN_ISSUER", issuer),
                ("TOKEN_ACCESS_TTL_SECONDS", access_ttl),
                ("TOKEN_REFRESH_TTL_SECONDS", refresh_ttl),
            ]
            if not v
        ]
        raise RuntimeError(f"Missing token settings: {', '.join(missing)}")

    timeout_raw = os.getenv("TOKEN_OPERATION_TIMEOUT_SECONDS")
    timeout = float(timeout_raw) if timeout_raw else 5.0

    return TokenSettings(
        access_secret=access_secret.encode("utf-8"),
        refresh_secret=refresh_secret.encode("utf-8"),
        issuer=issuer,
        access_ttl_seconds=access_ttl,
        refresh_ttl_seconds=refresh_ttl,
        operation_timeout_seconds=timeout,
    )


def cookie_settings_from_env() -> CookieSettings:
    return CookieSettings(
        domain=os.getenv("COOKIE_DOMAIN") or None,
        secure=_bool("COOKIE_SECURE", True),
        http_only=_bool("COOKIE_HTTP_ONLY", True),
        access_max_age=_int("COOKIE_ACCESS_MAX_AGE"),
        refresh_max_age=_int("COOKIE_REFRESH_MAX_AGE"),
    )


def redis_url_from_env() -> str:
    return os.getenv("REDIS_URL") or DEFAULT_REDIS_URL
