from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .domain.constants import (
    DEFAULT_ACCESS_COOKIE,
    DEFAULT_DISPLAY_NAME_COOKIE,
    DEFAULT_REFRESH_COOKIE,
    DEFAULT_USER_ID_COOKIE,
    TokenClass,
)
from .domain.value_objects import Secret


@dataclass(frozen=True, slots=True)
class TokenSettings:
    """
    Signing and lifetime settings for both token classes.

    Host code decides how to construct this (env, config file, etc.);
    it is built once at start-up and shared read-only afterwards.
    """
    access_secret: Secret = field(repr=False)
    refresh_secret: Secret = field(repr=False)
    issuer: str
    access_ttl_seconds: int
    refresh_ttl_seconds: int
    operation_timeout_seconds: float = 5.0

    def __post_init__(self) -> None:
        for name in ("access_secret", "refresh_secret"):
            value = getattr(self, name)
            if isinstance(value, (bytes, bytearray)):
                object.__setattr__(self, name, Secret(bytes(value)))
            elif isinstance(value, str):
                object.__setattr__(self, name, Secret.from_text(value))

        if not self.issuer:
            raise ValueError("issuer must not be empty")
        if self.access_ttl_seconds <= 0 or self.refresh_ttl_seconds <= 0:
            raise ValueError("token TTLs must be positive")
        if self.access_ttl_seconds >= self.refresh_ttl_seconds:
            raise ValueError("access TTL must be shorter than refresh TTL")
        if self.operation_timeout_seconds <= 0:
            raise ValueError("operation timeout must be positive")

    def secret_for(self, token_class: TokenClass) -> Secret:
        if token_class is TokenClass.ACCESS:
            return self.access_secret
        return self.refresh_secret

    def ttl_for(self, token_class: TokenClass) -> int:
        if token_class is TokenClass.ACCESS:
            return self.access_ttl_seconds
        return self.refresh_ttl_seconds


@dataclass(frozen=True, slots=True)
class CookieSettings:
    """
    How token pairs are carried in cookies by the HTTP integrations.

    Max-age values default to the matching token TTL when left as None.
    """
    domain: Optional[str] = None
    path: str = "/"
    secure: bool = True
    http_only: bool = True
    access_cookie_name: str = DEFAULT_ACCESS_COOKIE
    refresh_cookie_name: str = DEFAULT_REFRESH_COOKIE
    display_name_cookie_name: str = DEFAULT_DISPLAY_NAME_COOKIE
    user_id_cookie_name: str = DEFAULT_USER_ID_COOKIE
    access_max_age: Optional[int] = None
    refresh_max_age: Optional[int] = None

    def max_age_for(self, token_class: TokenClass, tokens: TokenSettings) -> int:
        if token_class is TokenClass.ACCESS:
            return self.access_max_age or tokens.access_ttl_seconds
        return self.refresh_max_age or tokens.refresh_ttl_seconds
