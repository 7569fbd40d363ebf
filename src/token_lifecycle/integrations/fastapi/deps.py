from __future__ import annotations

from dataclasses import dataclass, field

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials

from .security import bearer_scheme, extract_session_input
from ..common.auth_factory import AuthDependencies
from ...domain.entities import SessionInput, TokenDetail
from ...domain.exceptions import (
    AuthenticationError,
    ConflictError,
    ForbiddenError,
    InternalError,
    InvalidCredentialsError,
    InvalidInputError,
    OperationTimeoutError,
    TokenExpiredError,
    TokenLifecycleError,
)
from ...logging import get_logger
from ...settings import CookieSettings

logger = get_logger(__name__)


def http_exception_for(exc: TokenLifecycleError) -> HTTPException:
    """Map a domain error onto the HTTP status the client should see."""
    if isinstance(exc, TokenExpiredError):
        return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token expired")
    if isinstance(exc, InvalidCredentialsError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    if isinstance(exc, AuthenticationError):
        return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc))
    if isinstance(exc, ConflictError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Item already exist")
    if isinstance(exc, InvalidInputError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    if isinstance(exc, ForbiddenError):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc))
    if isinstance(exc, OperationTimeoutError):
        return HTTPException(status_code=status.HTTP_504_GATEWAY_TIMEOUT, detail="Timed out")

    if isinstance(exc, InternalError):
        logger.error("internal_error", error=str(exc), kind=type(exc).__name__)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Internal Server Error",
    )


@dataclass(slots=True)
class FastAPITokenAuth:
    """
    FastAPI integration for token_lifecycle.

    Built on top of the framework-agnostic AuthDependencies facade.
    """

    auth: AuthDependencies
    cookies: CookieSettings = field(default_factory=CookieSettings)

    # ------------------------------------------------------------------ #
    # Base dependencies
    # ------------------------------------------------------------------ #

    async def get_session_input(
            self,
            request: Request,
            credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    ) -> SessionInput:
        """Dependency: whatever tokens the request carries (maybe none)."""
        return extract_session_input(request, self.cookies, credentials)

    async def get_current_user(
            self,
            request: Request,
            credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    ) -> TokenDetail:
        """Dependency: Require a live access token."""
        session = extract_session_input(request, self.cookies, credentials)
        if session.access_token is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Not authenticated",
            )
        try:
            return await self.auth.authenticate(session.access_token)
        except TokenLifecycleError as exc:
            raise http_exception_for(exc) from exc

    async def get_optional_user(
            self,
            request: Request,
            credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    ) -> TokenDetail | None:
        """Dependency: Optional authentication."""
        session = extract_session_input(request, self.cookies, credentials)
        if session.access_token is None:
            return None

        try:
            return await self.auth.authenticate(session.access_token)
        except AuthenticationError:
            # bad token -> treat as anonymous
            return None
        except TokenLifecycleError as exc:
            raise http_exception_for(exc) from exc

    async def require_anonymous(
            self,
            request: Request,
            credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    ) -> None:
        """Dependency: refuse requests that already carry a token."""
        session = extract_session_input(request, self.cookies, credentials)
        if not session.is_empty:
            raise http_exception_for(ForbiddenError("You have logged in"))
