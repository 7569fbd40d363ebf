from __future__ import annotations

from .deps import FastAPITokenAuth, http_exception_for
from .router import build_auth_router
from ..common.auth_factory import AuthDependencies, create_auth_dependencies
from ...domain.ports import AccountStore, LivenessStore
from ...settings import CookieSettings, TokenSettings


def create_fastapi_auth(
    *,
    settings: TokenSettings,
    cookies: CookieSettings | None = None,
    store: LivenessStore | None = None,
    accounts: AccountStore | None = None,
) -> FastAPITokenAuth:
    """
    High-level helper for FastAPI apps:

    - Creates AuthDependencies from token settings and adapters
    - Wraps them in FastAPITokenAuth, exposing dependencies like:

        fastapi_auth.get_current_user
        fastapi_auth.get_optional_user
        fastapi_auth.get_session_input
        fastapi_auth.require_anonymous

    Mount the session endpoints with:

        app.include_router(build_auth_router(fastapi_auth))
    """
    auth: AuthDependencies = create_auth_dependencies(
        settings=settings,
        store=store,
        accounts=accounts,
    )
    return FastAPITokenAuth(auth=auth, cookies=cookies or CookieSettings())


__all__ = [
    "FastAPITokenAuth",
    "build_auth_router",
    "create_fastapi_auth",
    "http_exception_for",
]
