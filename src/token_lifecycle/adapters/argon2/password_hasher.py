from __future__ import annotations

from typing import Optional

from argon2 import PasswordHasher as _Argon2Hasher
from argon2.exceptions import InvalidHashError, VerificationError

from ...domain.ports import PasswordHasher


class Argon2PasswordHasher(PasswordHasher):
    """PasswordHasher port backed by argon2-cffi (argon2id)."""

    def __init__(self, hasher: Optional[_Argon2Hasher] = None) -> None:
        self._hasher = hasher or _Argon2Hasher()

    def hash(self, password: str) -> str:
        return self._hasher.hash(password)

    def verify(self, password_hash: str, password: str) -> bool:
        try:
            return self._hasher.verify(password_hash, password)
        except (VerificationError, InvalidHashError):
            return False
