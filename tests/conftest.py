"""
Pytest fixtures: a fake marketplace API, sessions, and the page client.

The marketplace API is replaced by an httpx.MockTransport, so every test
sees exactly which requests Stayfront sent upstream.
"""

import json
from typing import AsyncGenerator, Callable, Optional

import httpx
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from stayfront.main import app
from stayfront.api.deps import get_api_client
from stayfront.core.config import get_settings
from stayfront.services.api_client import ApiClient
from stayfront.services.interfaces import MemoryTokenStore
from stayfront.services.session import Session
from stayfront.services.store_factory import get_token_store

SESSION_ID = "test-session"
VALID_TOKEN = "valid-token"


class FakeMarketplace:
    """In-memory stand-in for the marketplace REST API."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.routes: dict[tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}

    def on(self, method: str, path: str, status: int = 200, json_body=None, content: Optional[bytes] = None):
        """Answer ``method path`` with a fixed response."""
        def respond(request: httpx.Request) -> httpx.Response:
            if content is not None:
                return httpx.Response(status, content=content)
            if json_body is None:
                return httpx.Response(status)
            return httpx.Response(status, json=json_body)

        self.routes[(method, path)] = respond

    def on_call(self, method: str, path: str, handler: Callable[[httpx.Request], httpx.Response]):
        self.routes[(method, path)] = handler

    def authenticate(self, user: dict, token: str = VALID_TOKEN):
        """GET /auth/me answers ``user`` for ``token`` and 401 otherwise."""
        def me(request: httpx.Request) -> httpx.Response:
            if request.headers.get("Authorization") == f"Bearer {token}":
                return httpx.Response(200, json=user)
            return httpx.Response(401, json={"error": "Not authenticated"})

        self.on_call("GET", "/auth/me", me)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": "Not found"})
        return route(request)

    def sent(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    @staticmethod
    def body(request: httpx.Request) -> dict:
        return json.loads(request.content)


@pytest.fixture
def marketplace() -> FakeMarketplace:
    return FakeMarketplace()


@pytest_asyncio.fixture
async def api_client(marketplace: FakeMarketplace) -> AsyncGenerator[ApiClient, None]:
    http = httpx.AsyncClient(
        transport=httpx.MockTransport(marketplace.handle),
        base_url="http://marketplace.test",
    )
    client = ApiClient(http)
    yield client
    await client.close()


@pytest.fixture
def token_store() -> MemoryTokenStore:
    return MemoryTokenStore()


@pytest.fixture
def session(token_store: MemoryTokenStore) -> Session:
    """Anonymous session."""
    return Session(id=SESSION_ID, store=token_store)


@pytest_asyncio.fixture
async def auth_session(session: Session, marketplace: FakeMarketplace, test_user: dict) -> Session:
    """Session holding a token the fake marketplace accepts."""
    marketplace.authenticate(test_user)
    await session.set_token(VALID_TOKEN)
    return session


@pytest_asyncio.fixture
async def client(api_client: ApiClient, token_store: MemoryTokenStore) -> AsyncGenerator[AsyncClient, None]:
    """Page client sharing the fake marketplace and token store with the test."""
    app.dependency_overrides[get_api_client] = lambda: api_client
    app.dependency_overrides[get_token_store] = lambda: token_store

    transport = ASGITransport(app=app)
    cookies = {get_settings().SESSION_COOKIE_NAME: SESSION_ID}
    async with AsyncClient(transport=transport, base_url="http://test", cookies=cookies) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def test_user() -> dict:
    return {"id": 7, "email": "guest@example.com", "name": "Test Guest"}


@pytest.fixture
def test_listing() -> dict:
    return {
        "id": 1,
        "host_id": 42,
        "host_name": "Hannah Host",
        "title": "Cabin by the Lake",
        "description": "Quiet two-bedroom cabin",
        "location": "Lake Tahoe",
        "price_per_night": 100,
        "image_url": "https://img.example.com/cabin.jpg",
        "max_guests": 4,
        "bedrooms": 2,
        "bathrooms": 1.5,
        "created_at": "2024-01-01T10:00:00Z",
        "updated_at": "2024-01-02T10:00:00Z",
    }


@pytest.fixture
def second_listing(test_listing: dict) -> dict:
    return {**test_listing, "id": 2, "title": "Beach House", "location": "Malibu", "price_per_night": 250}


@pytest.fixture
def test_booking() -> dict:
    return {
        "id": 11,
        "listing_id": 1,
        "user_id": 7,
        "check_in_date": "2024-06-01",
        "check_out_date": "2024-06-04",
        "total_price": 300,
        "status": "pending",
        "created_at": "2024-05-01T09:00:00Z",
        "updated_at": "2024-05-01T09:00:00Z",
    }
