# src/token_lifecycle/domain/value_objects.py

from __future__ import annotations

from dataclasses import dataclass

from .constants import REFRESH_ID_SEPARATOR


# --- Signing material ------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Secret:
    """
    Shared HMAC secret for one token class.

    Kept as a separate type so the raw bytes never end up in a repr,
    a log line or an exception message by accident.
    """
    value: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.value, (bytes, bytearray)):
            raise TypeError("Secret value must be bytes")
        if not self.value:
            raise ValueError("Secret must not be empty")

    @classmethod
    def from_text(cls, text: str) -> "Secret":
        return cls(text.encode("utf-8"))

    def __bytes__(self) -> bytes:
        return bytes(self.value)

    def __repr__(self) -> str:
        return "Secret(***)"

    __str__ = __repr__


# --- Token identifiers ------------------------------------------------------


def derive_refresh_id(access_id: str, user_id: str) -> str:
    """
    Refresh token-id paired with an access token-id.

    Deterministic, so logout can revoke the refresh record of a pair
    knowing only the access token.
    """
    if not access_id or not user_id:
        raise ValueError("access_id and user_id are required")
    return f"{access_id}{REFRESH_ID_SEPARATOR}{user_id}"
