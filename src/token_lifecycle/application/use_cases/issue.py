from __future__ import annotations

import time
import uuid
from dataclasses import dataclass
from typing import Callable

from ...domain.constants import TokenClass
from ...domain.entities import LivenessRecord, TokenClaims, TokenPair
from ...domain.ports import LivenessStore, TokenCodec
from ...domain.value_objects import derive_refresh_id
from ...logging import get_logger
from ...settings import TokenSettings

logger = get_logger(__name__)


def _new_token_id() -> str:
    return str(uuid.uuid4())


@dataclass(slots=True)
class IssueTokenPairUseCase:
    """
    Application use case:
    - Sign a fresh access token and its paired refresh token
    - Persist both liveness records in one atomic store write

    The refresh token-id is derived from the access token-id and the
    user-id, so the pair can be revoked from the access token alone.
    """

    codec: TokenCodec
    store: LivenessStore
    settings: TokenSettings
    clock: Callable[[], float] = time.time
    id_factory: Callable[[], str] = _new_token_id

    async def execute(self, user_id: str) -> TokenPair:
        """
        Raises:
            ValueError          if user_id is empty
            SigningError
            StoreUnavailableError
        """
        if not user_id:
            raise ValueError("user_id is required")

        now = int(self.clock())
        access_id = self.id_factory()
        refresh_id = derive_refresh_id(access_id, user_id)

        access_claims = self._claims(TokenClass.ACCESS, access_id, user_id, now)
        refresh_claims = self._claims(TokenClass.REFRESH, refresh_id, user_id, now)

        access_token = self.codec.sign(access_claims, self.settings.access_secret)
        refresh_token = self.codec.sign(refresh_claims, self.settings.refresh_secret)

        # Both records or neither.
        await self.store.put_many(
            [
                LivenessRecord(access_id, user_id, access_claims.lifetime_seconds),
                LivenessRecord(refresh_id, user_id, refresh_claims.lifetime_seconds),
            ]
        )

        logger.info("token_pair_issued", user_id=user_id, access_id=access_id)
        return TokenPair(access_token=access_token, refresh_token=refresh_token)

    def _claims(
            self,
            token_class: TokenClass,
            token_id: str,
            user_id: str,
            now: int,
    ) -> TokenClaims:
        return TokenClaims.build(
            issuer=self.settings.issuer,
            audience=user_id,
            token_id=token_id,
            issued_at=now,
            ttl_seconds=self.settings.ttl_for(token_class),
        )
