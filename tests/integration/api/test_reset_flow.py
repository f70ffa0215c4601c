"""
End-to-end password reset flows through both endpoints
"""
import secrets

import pytest
from httpx import AsyncClient
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.services.password_hasher import verify_password
from tests.integration.conftest import token_from_response_text


async def request_token(client: AsyncClient, username: str = "alice") -> str:
    response = await client.post("/request-reset", data={"username": username, "redirectTo": "/"})
    assert response.status_code == 200
    return token_from_response_text(response.text)


@pytest.mark.asyncio
async def test_request_then_redeem_once(client: AsyncClient, db_session: AsyncSession, create_user):
    """Token redeems once, then is rejected"""
    user = await create_user("alice")
    token = await request_token(client)

    redeemed = await client.post("/reset-password", data={"token": token, "newPassword": "NewSecurePass123!"})
    assert redeemed.status_code == 200
    assert redeemed.text == "Password successfully reset!"

    await db_session.refresh(user)
    assert verify_password("NewSecurePass123!", user.password_hash)

    again = await client.post("/reset-password", data={"token": token, "newPassword": "Another123!"})
    assert again.status_code == 400
    assert again.text == "Invalid or expired reset token"


@pytest.mark.asyncio
async def test_new_request_invalidates_previous_token(client: AsyncClient, create_user):
    """Only the most recent token redeems"""
    await create_user("alice")
    old_token = await request_token(client)
    new_token = await request_token(client)

    stale = await client.post("/reset-password", data={"token": old_token, "newPassword": "NewSecurePass123!"})
    assert stale.status_code == 400

    fresh = await client.post("/reset-password", data={"token": new_token, "newPassword": "NewSecurePass123!"})
    assert fresh.status_code == 200


@pytest.mark.asyncio
async def test_never_issued_token(client: AsyncClient, create_user):
    await create_user("alice")
    await request_token(client)

    response = await client.post(
        "/reset-password", data={"token": secrets.token_hex(32), "newPassword": "NewSecurePass123!"}
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_redeem_with_redirect(client: AsyncClient, create_user):
    await create_user("alice")
    token = await request_token(client)

    response = await client.post(
        "/reset-password",
        data={"token": token, "newPassword": "NewSecurePass123!", "redirectTo": "/dashboard"},
    )

    assert response.status_code == 302
    assert response.headers["location"] == "/dashboard"


@pytest.mark.asyncio
async def test_tokens_are_per_user(client: AsyncClient, db_session: AsyncSession, create_user):
    alice = await create_user("alice")
    bob = await create_user("bob")
    await request_token(client, "alice")
    bob_token = await request_token(client, "bob")

    response = await client.post("/reset-password", data={"token": bob_token, "newPassword": "BobNew123!"})

    assert response.status_code == 200
    await db_session.refresh(alice)
    await db_session.refresh(bob)
    assert alice.reset_token is not None
    assert bob.reset_token is None
    assert verify_password("BobNew123!", bob.password_hash)


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_session_cookie_only_set_when_session_is_written(app, client: AsyncClient, create_user):
    """Session middleware is installed but the reset routes never write to the session"""
    from starlette.middleware.sessions import SessionMiddleware

    assert any(middleware.cls is SessionMiddleware for middleware in app.user_middleware)

    await create_user("alice")
    response = await client.post("/request-reset", data={"username": "alice", "redirectTo": "/"})

    assert response.status_code == 200
    assert "session" not in response.cookies
    assert "set-cookie" not in response.headers
