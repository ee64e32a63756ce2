"""
Tests for login, registration, logout and the current-user lookup.
"""

import pytest
from httpx import AsyncClient

from stayfront.core.config import get_settings
from stayfront.core.errors import HttpError
from stayfront.schemas.user import LoginRequest, RegisterRequest
from stayfront.services import auth_service
from tests.conftest import SESSION_ID, VALID_TOKEN


@pytest.mark.asyncio
async def test_login_stores_token(api_client, marketplace, session, token_store, test_user):
    marketplace.on("POST", "/auth/login", json_body={"user": test_user, "token": "fresh-token"})

    user = await auth_service.login(
        api_client, session, LoginRequest(email="guest@example.com", password="secret123")
    )

    assert user.id == test_user["id"]
    assert session.token == "fresh-token"
    assert session.id != SESSION_ID
    assert await token_store.get(session.id) == "fresh-token"
    assert await token_store.get(SESSION_ID) is None
    assert marketplace.body(marketplace.sent("POST", "/auth/login")[0]) == {
        "email": "guest@example.com",
        "password": "secret123",
    }


@pytest.mark.asyncio
async def test_login_without_token_in_response(api_client, marketplace, session, test_user):
    marketplace.on("POST", "/auth/login", json_body={"user": test_user})

    await auth_service.login(api_client, session, LoginRequest(email="guest@example.com", password="x"))

    assert session.token is None


@pytest.mark.asyncio
async def test_login_wrong_password(api_client, marketplace, session):
    """Bad credentials are an ordinary error with the server's message."""
    marketplace.on("POST", "/auth/login", status=401, json_body={"error": "Wrong password"})

    with pytest.raises(HttpError) as exc_info:
        await auth_service.login(api_client, session, LoginRequest(email="guest@example.com", password="x"))

    assert exc_info.value.message == "Wrong password"


@pytest.mark.asyncio
async def test_login_wrong_password_default_message(api_client, marketplace, session):
    marketplace.on("POST", "/auth/login", status=401, content=b"")

    with pytest.raises(HttpError) as exc_info:
        await auth_service.login(api_client, session, LoginRequest(email="guest@example.com", password="x"))

    assert exc_info.value.message == "Invalid email or password"


@pytest.mark.asyncio
async def test_register_stores_token(api_client, marketplace, session, test_user):
    marketplace.on("POST", "/auth/register", status=201, json_body={"user": test_user, "token": "new-token"})

    user = await auth_service.register(
        api_client,
        session,
        RegisterRequest(name="Test Guest", email="guest@example.com", password="secret123"),
    )

    assert user.name == "Test Guest"
    assert session.token == "new-token"


@pytest.mark.asyncio
async def test_register_duplicate_email(api_client, marketplace, session):
    marketplace.on("POST", "/auth/register", status=409, json_body={"error": "Email already registered"})

    with pytest.raises(HttpError) as exc_info:
        await auth_service.register(
            api_client,
            session,
            RegisterRequest(name="Test Guest", email="guest@example.com", password="secret123"),
        )

    assert exc_info.value.message == "Email already registered"


@pytest.mark.asyncio
async def test_logout_clears_token(api_client, marketplace, auth_session, token_store):
    marketplace.on("POST", "/auth/logout", json_body={"message": "Logged out"})

    await auth_service.logout(api_client, auth_session)

    assert auth_session.token is None
    assert await token_store.get(SESSION_ID) is None
    sent = marketplace.sent("POST", "/auth/logout")[0]
    assert sent.headers["Authorization"] == f"Bearer {VALID_TOKEN}"


@pytest.mark.asyncio
async def test_logout_failure_keeps_token(api_client, marketplace, auth_session):
    marketplace.on("POST", "/auth/logout", status=500, content=b"oops")

    with pytest.raises(HttpError) as exc_info:
        await auth_service.logout(api_client, auth_session)

    assert exc_info.value.message == "Logout failed"
    assert auth_session.token == VALID_TOKEN


@pytest.mark.asyncio
async def test_current_user_without_token_sends_nothing(api_client, marketplace, session):
    assert await auth_service.get_current_user(api_client, session) is None
    assert marketplace.requests == []


@pytest.mark.asyncio
async def test_current_user(api_client, auth_session, test_user):
    user = await auth_service.get_current_user(api_client, auth_session)

    assert user.email == test_user["email"]


@pytest.mark.asyncio
async def test_current_user_on_server_error(api_client, marketplace, auth_session):
    marketplace.on("GET", "/auth/me", status=503, content=b"")

    assert await auth_service.get_current_user(api_client, auth_session) is None
    # Only a 401 ends the session
    assert auth_session.token == VALID_TOKEN


@pytest.mark.asyncio
async def test_login_page_sets_session_cookie(api_client, marketplace, token_store, test_user):
    """First-time visitors get a session cookie holding their token."""
    from httpx import ASGITransport
    from stayfront.main import app
    from stayfront.api.deps import get_api_client
    from stayfront.services.store_factory import get_token_store

    marketplace.on("POST", "/auth/login", json_body={"user": test_user, "token": "fresh-token"})
    app.dependency_overrides[get_api_client] = lambda: api_client
    app.dependency_overrides[get_token_store] = lambda: token_store
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            response = await ac.post("/login", json={"email": "guest@example.com", "password": "secret123"})
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 200
    assert response.json()["user"]["id"] == test_user["id"]
    session_id = response.cookies[get_settings().SESSION_COOKIE_NAME]
    assert await token_store.get(session_id) == "fresh-token"


@pytest.mark.asyncio
async def test_login_page_bad_credentials(client: AsyncClient, marketplace):
    marketplace.on("POST", "/auth/login", status=401, json_body={"error": "Invalid email or password"})

    response = await client.post("/login", json={"email": "guest@example.com", "password": "nope"})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid email or password"}


@pytest.mark.asyncio
async def test_login_page_rejects_bad_email(client: AsyncClient, marketplace):
    response = await client.post("/login", json={"email": "not-an-email", "password": "x"})

    assert response.status_code == 422
    assert marketplace.requests == []


@pytest.mark.asyncio
async def test_me_page(client: AsyncClient, auth_session, test_user):
    response = await client.get("/me")

    assert response.json()["user"] == test_user


@pytest.mark.asyncio
async def test_logout_page_redirects_home(client: AsyncClient, marketplace, auth_session, token_store):
    marketplace.on("POST", "/auth/logout", status=204)

    response = await client.post("/logout")

    assert response.status_code == 303
    assert response.headers["location"] == "/"
    assert await token_store.get(SESSION_ID) is None


@pytest.mark.asyncio
async def test_logout_page_with_expired_token(client: AsyncClient, marketplace, auth_session, token_store):
    marketplace.on("POST", "/auth/logout", status=401, json_body={"error": "Token expired"})

    response = await client.post("/logout")

    assert response.status_code == 303
    assert response.headers["location"] == "/"
    assert await token_store.get(SESSION_ID) is None


@pytest.mark.asyncio
async def test_login_page_replaces_existing_session_cookie(client: AsyncClient, marketplace, token_store, test_user):
    """A cookie value sent before login never ends up holding the token."""
    marketplace.on("POST", "/auth/login", json_body={"user": test_user, "token": "fresh-token"})

    response = await client.post("/login", json={"email": "guest@example.com", "password": "secret123"})

    assert response.status_code == 200
    new_id = response.cookies[get_settings().SESSION_COOKIE_NAME]
    assert new_id != SESSION_ID
    assert await token_store.get(new_id) == "fresh-token"
    assert await token_store.get(SESSION_ID) is None


@pytest.mark.asyncio
async def test_register_page_replaces_existing_session_cookie(client: AsyncClient, marketplace, token_store, test_user):
    marketplace.on("POST", "/auth/register", status=201, json_body={"user": test_user, "token": "new-token"})

    response = await client.post(
        "/register", json={"name": "Test Guest", "email": "guest@example.com", "password": "secret123"}
    )

    assert response.status_code == 201
    new_id = response.cookies[get_settings().SESSION_COOKIE_NAME]
    assert new_id != SESSION_ID
    assert await token_store.get(new_id) == "new-token"
    assert await token_store.get(SESSION_ID) is None
