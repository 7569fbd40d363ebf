from __future__ import annotations

from typing import Optional

from fastapi import Request, Response
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ...domain.constants import REFRESH_TOKEN_HEADER, TokenClass
from ...domain.entities import Account, SessionInput, TokenPair
from ...settings import CookieSettings, TokenSettings

# Expose this so apps can plug it into dependencies if they want OpenAPI security
bearer_scheme = HTTPBearer(auto_error=False)


def _bearer_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials],
) -> Optional[str]:
    if credentials is not None:
        token = (credentials.credentials or "").strip()
        if token:
            return token

    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.startswith("Bearer "):
        token = auth_header.removeprefix("Bearer ").strip()
        if token:
            return token
    return None


def extract_session_input(
    request: Request,
    cookies: CookieSettings,
    credentials: Optional[HTTPAuthorizationCredentials] = None,
) -> SessionInput:
    """
    Collect whatever tokens the client sent.

    Access token:
      1. HTTP Bearer auth header (preferred)
      2. The access cookie
    Refresh token:
      1. The refresh cookie
      2. The X-Refresh-Token header

    Either may be missing; the caller decides what that means.
    """
    access_token = _bearer_token(request, credentials) or request.cookies.get(
        cookies.access_cookie_name
    )
    refresh_token = request.cookies.get(cookies.refresh_cookie_name) or (
        request.headers.get(REFRESH_TOKEN_HEADER) or ""
    ).strip()

    return SessionInput(access_token=access_token, refresh_token=refresh_token)


def set_token_cookies(
    response: Response,
    pair: TokenPair,
    cookies: CookieSettings,
    tokens: TokenSettings,
) -> None:
    for token_class, name in (
        (TokenClass.ACCESS, cookies.access_cookie_name),
        (TokenClass.REFRESH, cookies.refresh_cookie_name),
    ):
        response.set_cookie(
            key=name,
            value=pair.for_class(token_class),
            max_age=cookies.max_age_for(token_class, tokens),
            path=cookies.path,
            domain=cookies.domain,
            secure=cookies.secure,
            httponly=cookies.http_only,
            samesite="lax",
        )


def set_account_cookies(
    response: Response,
    account: Account,
    cookies: CookieSettings,
    tokens: TokenSettings,
) -> None:
    """Write the display name and user-id cookies; both live as long as the refresh token."""
    max_age = cookies.max_age_for(TokenClass.REFRESH, tokens)
    for name, value, http_only in (
        # Readable by front-end scripts, so never http-only.
        (cookies.display_name_cookie_name, account.display_name, False),
        (cookies.user_id_cookie_name, account.user_id, cookies.http_only),
    ):
        response.set_cookie(
            key=name,
            value=value,
            max_age=max_age,
            path=cookies.path,
            domain=cookies.domain,
            secure=cookies.secure,
            httponly=http_only,
            samesite="lax",
        )


def clear_session_cookies(response: Response, cookies: CookieSettings) -> None:
    for name in (
        cookies.access_cookie_name,
        cookies.refresh_cookie_name,
        cookies.display_name_cookie_name,
        cookies.user_id_cookie_name,
    ):
        response.delete_cookie(
            key=name,
            path=cookies.path,
            domain=cookies.domain,
            secure=cookies.secure,
            httponly=name != cookies.display_name_cookie_name,
            samesite="lax",
        )
