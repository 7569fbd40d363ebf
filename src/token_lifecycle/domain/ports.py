from __future__ import annotations

from datetime import datetime
from typing import Iterable, Protocol

from .entities import Account, LivenessRecord, TokenClaims
from .value_objects import Secret


class TokenCodec(Protocol):
    """
    Port for turning claims into a signed token string and back.

    Implementations live in the adapters layer (e.g. the PyJWT codec).
    The codec knows nothing about persistence.
    """

    def sign(self, claims: TokenClaims, secret: Secret) -> str:
        """
        Raises:
          - SigningError
        """
        ...

    def verify(self, token: str, secret: Secret) -> TokenClaims:
        """
        Verify signature and expiry, then parse the claims.

        Raises:
          - InvalidSignatureError
          - MalformedTokenError / MissingClaimError
          - TokenExpiredError
        """
        ...


class LivenessStore(Protocol):
    """
    Port for the token-id -> user-id revocation records.

    Every operation is atomic at the key level. Backend failures raise
    StoreUnavailableError.
    """

    async def put(self, token_id: str, user_id: str, ttl_seconds: int) -> None:
        ...

    async def put_many(self, records: Iterable[LivenessRecord]) -> None:
        """Write all records in one atomic command."""
        ...

    async def get(self, token_id: str) -> str:
        """
        Raises:
          - RecordNotFoundError if absent or TTL-expired
        """
        ...

    async def delete(self, token_id: str) -> None:
        """Deleting an absent key is not an error."""
        ...

    async def delete_many(self, token_ids: Iterable[str]) -> None:
        ...

    async def ping(self) -> bool:
        """
        Health check: True when the backend answers.

        Raises:
          - StoreUnavailableError
        """
        ...

    async def close(self) -> None:
        ...


class AccountStore(Protocol):
    async def find_by_identifier(self, identifier: str) -> Account:
        """
        Raises:
          - AccountNotFoundError
        """
        ...

    async def create(
            self,
            identifier: str,
            display_name: str,
            password_hash: str,
            created_at: datetime,
    ) -> Account:
        """
        Raises:
          - ConflictError if the identifier already exists
        """
        ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str:
        ...

    def verify(self, password_hash: str, password: str) -> bool:
        ...
