from __future__ import annotations

from dataclasses import dataclass

from ...domain.entities import TokenPair
from ...domain.exceptions import AuthenticationError, UnauthorizedError
from ...domain.ports import LivenessStore
from ...domain.value_objects import Secret
from ...logging import get_logger
from .issue import IssueTokenPairUseCase
from .validate import ValidateTokenUseCase

logger = get_logger(__name__)


@dataclass(slots=True)
class RefreshTokenPairUseCase:
    """
    Application use case: exchange a live refresh token for a new pair.

    The consumed refresh record is deleted (rotation). The previous
    access token is left to run out its own short TTL.
    """

    validate: ValidateTokenUseCase
    issue: IssueTokenPairUseCase
    store: LivenessStore
    refresh_secret: Secret

    async def execute(self, refresh_token: str) -> TokenPair:
        """
        Raises:
            UnauthorizedError      the refresh token is not valid and live
            InternalError          issuing or rotating failed
        """
        try:
            detail = await self.validate.execute(refresh_token, self.refresh_secret)
        except UnauthorizedError:
            raise
        except AuthenticationError as exc:
            raise UnauthorizedError(f"Refresh token rejected: {exc}") from exc

        pair = await self.issue.execute(detail.user_id)
        await self.store.delete(detail.token_id)

        logger.info(
            "token_pair_refreshed",
            user_id=detail.user_id,
            rotated_id=detail.token_id,
        )
        return pair
