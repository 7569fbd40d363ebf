from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import BaseModel, Field

from .deps import FastAPITokenAuth, http_exception_for
from .security import clear_session_cookies, set_account_cookies, set_token_cookies
from ...domain.entities import SessionInput, TokenPair
from ...domain.exceptions import TokenLifecycleError


class RegisterBody(BaseModel):
    identifier: str = Field(min_length=1)
    display_name: str = Field(min_length=1)
    password: str = Field(min_length=6)


class LoginBody(BaseModel):
    identifier: str
    password: str


def _pair_body(pair: TokenPair) -> dict[str, Any]:
    return {
        "access_token": pair.access_token,
        "refresh_token": pair.refresh_token,
        "token_type": "bearer",
    }


def build_auth_router(fastapi_auth: FastAPITokenAuth, *, prefix: str = "") -> APIRouter:
    """
    Router exposing the session endpoints:

        POST /register  -> 201 {"ok": true}
        POST /login     -> 200, sets token, display name and user-id cookies
        POST /refresh   -> 200, rotates the pair and resets cookies
        POST /logout    -> 200 {"logout": true}, clears cookies

    /register and /login refuse requests that already carry a token.
    """
    router = APIRouter(prefix=prefix)
    auth = fastapi_auth.auth
    cookies = fastapi_auth.cookies
    tokens = auth.tokens.settings

    @router.post(
        "/register",
        status_code=status.HTTP_201_CREATED,
        dependencies=[Depends(fastapi_auth.require_anonymous)],
    )
    async def register(body: RegisterBody) -> dict[str, Any]:
        try:
            await auth.register(body.identifier, body.display_name, body.password)
        except TokenLifecycleError as exc:
            raise http_exception_for(exc) from exc
        return {"ok": True}

    @router.post("/login", dependencies=[Depends(fastapi_auth.require_anonymous)])
    async def login(body: LoginBody, response: Response) -> dict[str, Any]:
        try:
            account, pair = await auth.login(body.identifier, body.password)
        except TokenLifecycleError as exc:
            raise http_exception_for(exc) from exc

        set_token_cookies(response, pair, cookies, tokens)
        set_account_cookies(response, account, cookies, tokens)
        return {"display_name": account.display_name, **_pair_body(pair)}

    @router.post("/refresh")
    async def refresh(
            response: Response,
            session: SessionInput = Depends(fastapi_auth.get_session_input),
    ) -> dict[str, Any]:
        if session.refresh_token is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Not authenticated",
            )
        try:
            pair = await auth.refresh(session.refresh_token)
        except TokenLifecycleError as exc:
            raise http_exception_for(exc) from exc

        set_token_cookies(response, pair, cookies, tokens)
        return _pair_body(pair)

    @router.post("/logout")
    async def logout(
            response: Response,
            session: SessionInput = Depends(fastapi_auth.get_session_input),
    ) -> dict[str, Any]:
        try:
            await auth.logout(session)
        except TokenLifecycleError as exc:
            raise http_exception_for(exc) from exc

        clear_session_cookies(response, cookies)
        return {"logout": True}

    return router
