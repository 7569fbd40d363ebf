from __future__ import annotations

from dataclasses import dataclass

from ...domain.entities import TokenDetail
from ...domain.exceptions import (
    InvalidTokenError,
    RecordNotFoundError,
    TokenExpiredError,
    UnauthorizedError,
)
from ...domain.ports import LivenessStore, TokenCodec
from ...domain.value_objects import Secret
from ...logging import get_logger

logger = get_logger(__name__)


@dataclass(slots=True)
class ValidateTokenUseCase:
    """
    Application use case:
    - Verify a signed token via the TokenCodec port
    - Cross-check its token-id against the liveness store

    A valid signature alone proves nothing about revocation; only the
    store record makes a token live.
    """

    codec: TokenCodec
    store: LivenessStore

    async def execute(self, token: str, secret: Secret) -> TokenDetail:
        """
        Raises:
            InvalidSignatureError
            MalformedTokenError
            TokenExpiredError
            UnauthorizedError      revoked, lapsed or re-bound token-id
            StoreUnavailableError
        """
        try:
            claims = self.codec.verify(token, secret)
        except (TokenExpiredError, InvalidTokenError) as exc:
            logger.info("token_rejected", reason=type(exc).__name__)
            raise

        try:
            stored_user_id = await self.store.get(claims.token_id)
        except RecordNotFoundError as exc:
            logger.info("token_rejected", reason="not_live", token_id=claims.token_id)
            raise UnauthorizedError("Token has been revoked or has expired") from exc

        if stored_user_id != claims.audience:
            logger.warning(
                "token_rejected",
                reason="subject_mismatch",
                token_id=claims.token_id,
            )
            raise UnauthorizedError("Token subject does not match its record")

        return TokenDetail(token_id=claims.token_id, user_id=claims.audience)
