from __future__ import annotations

from dataclasses import dataclass

from ...domain.entities import SessionInput, TokenDetail
from ...domain.exceptions import AuthenticationError, UnauthorizedError
from ...domain.ports import LivenessStore
from ...domain.value_objects import Secret, derive_refresh_id
from ...logging import get_logger
from .validate import ValidateTokenUseCase

logger = get_logger(__name__)


@dataclass(slots=True)
class LogoutUseCase:
    """
    Application use case: revoke the credentials presented by a session.

    Policy:
      - access token present: it must validate, otherwise the logout
        fails; the refresh token is never consulted in that case. On
        success the access record and its paired refresh record are
        deleted together.
      - only a refresh token present: it must validate; only its own
        record is deleted.
    """

    validate: ValidateTokenUseCase
    store: LivenessStore
    access_secret: Secret
    refresh_secret: Secret

    async def execute(self, session: SessionInput) -> TokenDetail:
        """
        Returns:
            The TokenDetail of the token that authorised the logout.

        Raises:
            UnauthorizedError      no token, or the chosen token is invalid
            StoreUnavailableError
        """
        if session.is_empty:
            raise UnauthorizedError("You are not logged in")

        if session.access_token is not None:
            detail = await self._checked(session.access_token, self.access_secret)
            await self.store.delete_many(
                [detail.token_id, derive_refresh_id(detail.token_id, detail.user_id)]
            )
        else:
            detail = await self._checked(session.refresh_token, self.refresh_secret)
            await self.store.delete(detail.token_id)

        logger.info("session_logged_out", user_id=detail.user_id)
        return detail

    async def _checked(self, token: str, secret: Secret) -> TokenDetail:
        try:
            return await self.validate.execute(token, secret)
        except UnauthorizedError:
            raise
        except AuthenticationError as exc:
            raise UnauthorizedError(f"Logout rejected: {exc}") from exc
