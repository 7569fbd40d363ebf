from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .constants import TokenClass


@dataclass(frozen=True, slots=True)
class TokenClaims:
    """
    Claims carried by a signed token.

    `audience` is the user-id the token was issued for; `token_id` is the
    liveness store key. Timestamps are epoch seconds.
    """
    issuer: str
    audience: str
    token_id: str
    issued_at: int
    expires_at: int

    @classmethod
    def build(
            cls,
            *,
            issuer: str,
            audience: str,
            token_id: str,
            issued_at: int,
            ttl_seconds: int,
    ) -> "TokenClaims":
        return cls(
            issuer=issuer,
            audience=audience,
            token_id=token_id,
            issued_at=issued_at,
            expires_at=issued_at + ttl_seconds,
        )

    @property
    def lifetime_seconds(self) -> int:
        return self.expires_at - self.issued_at

    def to_payload(self) -> dict[str, object]:
        return {
            "iss": self.issuer,
            "aud": self.audience,
            "jti": self.token_id,
            "iat": self.issued_at,
            "exp": self.expires_at,
        }


@dataclass(frozen=True, slots=True)
class TokenDetail:
    """Minimal liveness identity of a validated token."""
    token_id: str
    user_id: str


@dataclass(frozen=True, slots=True)
class LivenessRecord:
    token_id: str
    user_id: str
    ttl_seconds: int


@dataclass(frozen=True, slots=True)
class TokenPair:
    access_token: str
    refresh_token: str

    def for_class(self, token_class: TokenClass) -> str:
        if token_class is TokenClass.ACCESS:
            return self.access_token
        return self.refresh_token


@dataclass(frozen=True, slots=True)
class SessionInput:
    """
    Tokens presented by a client at the transport boundary.

    Either side may be missing (a client can lose one cookie and keep the
    other); empty strings are treated as absent.
    """
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "access_token", self.access_token or None)
        object.__setattr__(self, "refresh_token", self.refresh_token or None)

    @property
    def is_empty(self) -> bool:
        return self.access_token is None and self.refresh_token is None


@dataclass(frozen=True, slots=True)
class Account:
    """Account Store record."""
    user_id: str
    identifier: str
    display_name: str
    password_hash: str
    created_at: datetime
