"""Unit tests for middleware auth (src/notekeeper/middleware/auth.py)."""

import uuid
from typing import Optional

import pytest
from fastapi import Depends, FastAPI, Request
from httpx import ASGITransport, AsyncClient

from notekeeper.middleware.auth import (
    deserialize_user,
    get_current_user_id,
    get_refresh_token,
    get_token_blacklist,
)
from notekeeper.security.jwt import sign_jwt


def build_app(blacklist) -> FastAPI:
    app = FastAPI()

    @app.get("/whoami")
    async def whoami(request: Request, user_id: Optional[uuid.UUID] = Depends(deserialize_user)):
        claims = getattr(request.state, "user", None)
        return {
            "user_id": str(user_id) if user_id else None,
            "sub": claims["sub"] if claims else None,
        }

    @app.get("/protected")
    async def protected(user_id: uuid.UUID = Depends(get_current_user_id)):
        return {"user_id": str(user_id)}

    @app.get("/refresh-token")
    async def refresh_token(token: Optional[str] = Depends(get_refresh_token)):
        return {"token": token}

    app.dependency_overrides[get_token_blacklist] = lambda: blacklist
    return app


@pytest.fixture
async def client(token_blacklist):
    app = build_app(token_blacklist)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="https://testserver") as ac:
        yield ac


@pytest.mark.asyncio
async def test_bearer_token_identifies_user(client, auth_headers, test_user):
    resp = await client.get("/whoami", headers=auth_headers)

    assert resp.status_code == 200
    assert resp.json() == {"user_id": str(test_user.id), "sub": str(test_user.id)}


@pytest.mark.asyncio
async def test_anonymous_request(client):
    resp = await client.get("/whoami")
    assert resp.json() == {"user_id": None, "sub": None}


@pytest.mark.asyncio
async def test_cookie_preferred_over_header(client, token_service, test_user, other_user):
    cookie_token = token_service.sign_access_token(test_user)
    header_token = token_service.sign_access_token(other_user)

    client.cookies.set("accessToken", cookie_token)
    resp = await client.get("/whoami", headers={"Authorization": f"Bearer {header_token}"})

    assert resp.json()["user_id"] == str(test_user.id)


@pytest.mark.asyncio
async def test_blacklisted_token_is_anonymous(client, token_blacklist, token_service, test_user):
    token = token_service.sign_access_token(test_user)
    await token_blacklist.add(token)

    resp = await client.get("/whoami", headers={"Authorization": f"Bearer {token}"})
    assert resp.json()["user_id"] is None

    resp = await client.get("/protected", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_token_signed_with_wrong_key_is_anonymous(client, test_settings, test_user):
    # a refresh token is signed with the refresh key, not the access key
    token = sign_jwt({"sub": str(test_user.id)}, test_settings.refresh_token_private_key, 60)

    resp = await client.get("/whoami", headers={"Authorization": f"Bearer {token}"})

    assert resp.json()["user_id"] is None


@pytest.mark.asyncio
async def test_expired_token_is_anonymous(client, test_settings, test_user):
    token = sign_jwt({"sub": str(test_user.id)}, test_settings.access_token_private_key, -10)

    resp = await client.get("/protected", headers={"Authorization": f"Bearer {token}"})

    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_malformed_subject_is_anonymous(client, test_settings):
    token = sign_jwt({"sub": "someone"}, test_settings.access_token_private_key, 60)

    resp = await client.get("/whoami", headers={"Authorization": f"Bearer {token}"})

    assert resp.json()["user_id"] is None


@pytest.mark.asyncio
async def test_protected_route_accepts_valid_token(client, auth_headers, test_user):
    resp = await client.get("/protected", headers=auth_headers)

    assert resp.status_code == 200
    assert resp.json() == {"user_id": str(test_user.id)}


@pytest.mark.asyncio
async def test_protected_route_rejects_anonymous(client):
    resp = await client.get("/protected")

    assert resp.status_code == 401
    assert resp.json()["detail"] == "Unauthorized"


@pytest.mark.asyncio
async def test_refresh_token_cookie_then_header(client):
    resp = await client.get("/refresh-token", headers={"x-refresh-token": "from-header"})
    assert resp.json() == {"token": "from-header"}

    client.cookies.set("refreshToken", "from-cookie")
    resp = await client.get("/refresh-token", headers={"x-refresh-token": "from-header"})
    assert resp.json() == {"token": "from-cookie"}


@pytest.mark.asyncio
async def test_missing_blacklist_is_an_error():
    app = FastAPI()

    @app.get("/whoami")
    async def whoami(user_id=Depends(deserialize_user)):
        return {"user_id": user_id}

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="https://testserver") as ac:
        resp = await ac.get("/whoami", headers={"Authorization": "Bearer token"})

    assert resp.status_code == 500
