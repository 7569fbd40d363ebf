from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Type

from graphql import GraphQLError
from starlette.requests import Request
from strawberry.permission import BasePermission
from strawberry.types import Info

from ...domain.entities import TokenDetail
from ...domain.exceptions import AuthenticationError, TokenExpiredError
from ...settings import CookieSettings, TokenSettings
from ..common.auth_factory import AuthDependencies, create_auth_dependencies


# --------------------------------------------------------------------- #
# Context type used by Strawberry
# --------------------------------------------------------------------- #

@dataclass(slots=True)
class StrawberryAuthContext:
    """
    Default context type for Strawberry GraphQL.

    You can use this directly, or extend it in your app by adding more fields.
    """
    request: Request
    user: Optional[TokenDetail] = None
    extra: Any = None  # host app can put UoW, services, etc. here if desired


# --------------------------------------------------------------------- #
# Helper: token extraction (header + cookie)
# --------------------------------------------------------------------- #

def _extract_access_token(request: Request, cookie_name: str) -> Optional[str]:
    """
    1. Authorization: Bearer <token>
    2. Cookie: cookie_name
    """
    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.startswith("Bearer "):
        token = auth_header.removeprefix("Bearer ").strip()
        if token:
            return token

    return request.cookies.get(cookie_name) or None


# --------------------------------------------------------------------- #
# Main integration: StrawberryTokenAuth
# --------------------------------------------------------------------- #

@dataclass(slots=True)
class StrawberryTokenAuth:
    """
    Strawberry GraphQL integration for token_lifecycle.

    Responsibilities:
      - provide a `context_getter` for Strawberry's GraphQLRouter that
        validates the access token against the liveness store
      - provide a permission class requiring an authenticated user
    """

    auth: AuthDependencies
    cookies: CookieSettings = field(default_factory=CookieSettings)

    def make_context_getter(
        self,
        *,
        optional: bool = True,
        extra_factory: Optional[Callable[[Request, Optional[TokenDetail]], Any]] = None,
    ):
        """
        Build an async function compatible with:

            strawberry.fastapi.GraphQLRouter(context_getter=...)

        Args:
            optional:
                - True:   auth errors become `user=None` in context
                - False:  auth errors become GraphQL errors
            extra_factory:
                - Optional callable: (request, user) -> Any, stored on context.extra
        """

        def _context(request: Request, user: Optional[TokenDetail]) -> StrawberryAuthContext:
            extra = extra_factory(request, user) if extra_factory else None
            return StrawberryAuthContext(request=request, user=user, extra=extra)

        async def _context_getter(request: Request) -> StrawberryAuthContext:
            token = _extract_access_token(request, self.cookies.access_cookie_name)

            if not token:
                if optional:
                    return _context(request, None)
                raise GraphQLError("Not authenticated")

            try:
                user = await self.auth.authenticate(token)
            except TokenExpiredError:
                if optional:
                    return _context(request, None)
                raise GraphQLError("Token expired")
            except AuthenticationError as exc:
                if optional:
                    return _context(request, None)
                raise GraphQLError(str(exc))

            return _context(request, user)

        return _context_getter

    def require_authenticated(self) -> Type[BasePermission]:
        """
        Permission: user must be authenticated (context.user is not None).
        """

        class _RequireAuthenticated(BasePermission):
            message = "Authentication required"

            def has_permission(self, source: Any, info: Info, **kwargs: Any) -> bool:
                ctx: StrawberryAuthContext = info.context
                return ctx.user is not None

        return _RequireAuthenticated


def create_strawberry_auth(
    *,
    settings: TokenSettings,
    cookies: CookieSettings | None = None,
    auth: AuthDependencies | None = None,
) -> StrawberryTokenAuth:
    """
    Convenience helper:

        strawberry_auth = create_strawberry_auth(settings=token_settings)
        router = GraphQLRouter(
            schema,
            context_getter=strawberry_auth.make_context_getter(),
        )

    Pass `auth` to share one AuthDependencies (and liveness store) with
    a FastAPI integration in the same app.
    """
    return StrawberryTokenAuth(
        auth=auth or create_auth_dependencies(settings=settings),
        cookies=cookies or CookieSettings(),
    )
