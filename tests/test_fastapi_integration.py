from datetime import datetime, timezone

import pytest
from fastapi import Depends, FastAPI, Response
from fastapi.testclient import TestClient

from token_lifecycle.domain.entities import Account, TokenDetail
from token_lifecycle.domain.exceptions import (
    ConflictError,
    InvalidCredentialsError,
    OperationTimeoutError,
    StoreUnavailableError,
    TokenExpiredError,
    UnauthorizedError,
)
from token_lifecycle.integrations.fastapi import (
    build_auth_router,
    create_fastapi_auth,
    http_exception_for,
)
from token_lifecycle.integrations.fastapi.security import set_account_cookies
from token_lifecycle.settings import CookieSettings


@pytest.fixture
def fastapi_auth(settings):
    return create_fastapi_auth(settings=settings, cookies=CookieSettings(secure=False))


@pytest.fixture
def client(fastapi_auth) -> TestClient:
    app = FastAPI()
    app.include_router(build_auth_router(fastapi_auth))

    @app.get("/me")
    async def me(user: TokenDetail = Depends(fastapi_auth.get_current_user)):
        return {"user_id": user.user_id}

    @app.get("/whoami")
    async def whoami(user: TokenDetail | None = Depends(fastapi_auth.get_optional_user)):
        return {"user_id": user.user_id if user else None}

    return TestClient(app)


def _register_and_login(client: TestClient) -> dict:
    resp = client.post(
        "/register",
        json={"identifier": "alice", "display_name": "Alice", "password": "hunter22"},
    )
    assert resp.status_code == 201, resp.text
    resp = client.post("/login", json={"identifier": "alice", "password": "hunter22"})
    assert resp.status_code == 200, resp.text
    return resp.json()


def test_login_sets_cookies_and_authenticates(client):
    body = _register_and_login(client)

    assert body["display_name"] == "Alice"
    assert client.cookies.get("access_token") == body["access_token"]
    assert client.cookies.get("refresh_token") == body["refresh_token"]
    assert client.cookies.get("displayname") == "Alice"

    resp = client.get("/me")
    assert resp.status_code == 200
    assert resp.json()["user_id"] == client.cookies.get("userid")


def test_bearer_header_authenticates(client):
    body = _register_and_login(client)
    client.cookies.clear()

    resp = client.get("/me", headers={"Authorization": f"Bearer {body['access_token']}"})
    assert resp.status_code == 200


def test_anonymous_requests(client):
    assert client.get("/me").status_code == 401
    assert client.get("/whoami").json() == {"user_id": None}
    assert client.get(
        "/whoami", headers={"Authorization": "Bearer garbage"}
    ).json() == {"user_id": None}


def test_register_and_login_refused_when_logged_in(client):
    _register_and_login(client)

    resp = client.post(
        "/register",
        json={"identifier": "bob", "display_name": "Bob", "password": "hunter22"},
    )
    assert resp.status_code == 403
    resp = client.post("/login", json={"identifier": "alice", "password": "hunter22"})
    assert resp.status_code == 403


def test_register_duplicate_and_bad_login(client):
    payload = {"identifier": "alice", "display_name": "Alice", "password": "hunter22"}
    assert client.post("/register", json=payload).status_code == 201
    assert client.post("/register", json=payload).status_code == 409

    resp = client.post("/login", json={"identifier": "alice", "password": "nope-nope"})
    assert resp.status_code == 400


def test_register_validates_body(client):
    resp = client.post(
        "/register",
        json={"identifier": "alice", "display_name": "Alice", "password": "short"},
    )
    assert resp.status_code == 422


def test_refresh_rotates_cookies(client):
    body = _register_and_login(client)

    resp = client.post("/refresh")
    assert resp.status_code == 200
    rotated = resp.json()
    assert rotated["refresh_token"] != body["refresh_token"]
    assert client.cookies.get("refresh_token") == rotated["refresh_token"]

    client.cookies.clear()
    resp = client.post("/refresh", headers={"X-Refresh-Token": body["refresh_token"]})
    assert resp.status_code == 401

    resp = client.post("/refresh", headers={"X-Refresh-Token": rotated["refresh_token"]})
    assert resp.status_code == 200


def test_refresh_without_token(client):
    assert client.post("/refresh").status_code == 401


def test_logout_clears_cookies_and_revokes(client):
    body = _register_and_login(client)

    resp = client.post("/logout")
    assert resp.status_code == 200
    assert resp.json() == {"logout": True}
    assert client.cookies.get("access_token") is None
    assert client.cookies.get("refresh_token") is None
    assert client.cookies.get("displayname") is None
    assert client.cookies.get("userid") is None

    headers = {"Authorization": f"Bearer {body['access_token']}"}
    assert client.get("/me", headers=headers).status_code == 401
    resp = client.post("/refresh", headers={"X-Refresh-Token": body["refresh_token"]})
    assert resp.status_code == 401


def test_logout_without_tokens(client):
    resp = client.post("/logout")
    assert resp.status_code == 401
    assert resp.json()["detail"] == "You are not logged in"


def test_account_cookies(settings):
    account = Account(
        user_id="u1",
        identifier="alice",
        display_name="Alice",
        password_hash="hash",
        created_at=datetime.now(timezone.utc),
    )
    response = Response()
    set_account_cookies(response, account, CookieSettings(), settings)

    set_cookies = [v.decode() for k, v in response.raw_headers if k == b"set-cookie"]
    user_id_cookie = next(c for c in set_cookies if c.startswith("userid="))
    display_name_cookie = next(c for c in set_cookies if c.startswith("displayname="))

    assert user_id_cookie.startswith("userid=u1;")
    assert "HttpOnly" in user_id_cookie
    assert "HttpOnly" not in display_name_cookie
    assert "Max-Age=86400" in user_id_cookie


@pytest.mark.parametrize(
    "exc, status_code",
    [
        (UnauthorizedError("x"), 401),
        (TokenExpiredError("x"), 401),
        (InvalidCredentialsError("x"), 400),
        (ConflictError("x"), 409),
        (OperationTimeoutError("x"), 504),
        (StoreUnavailableError("x"), 500),
    ],
)
def test_http_exception_mapping(exc, status_code):
    http_exc = http_exception_for(exc)
    assert http_exc.status_code == status_code
    if status_code == 500:
        assert "x" not in http_exc.detail
