"""Pytest configuration and fixtures."""
import itertools
import json

import httpx
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient

from app.gateway import gateway
from app.main import app
from app.models.auth import AuthTokens, AuthUser, Session
from app.utils.session import MemorySessionStore, get_session_store

SLUGGED = {"categories", "products"}


def _json(status: int, payload) -> httpx.Response:
    return httpx.Response(status, json=payload)


class FakeBackend:
    """
    In-memory stand-in for the catalog, auth and image backends.

    Each ``*_handler`` method is an ``httpx.MockTransport`` handler.
    """

    def __init__(self):
        self.collections = {
            "categories": {},
            "products": {},
            "branches": {},
            "branch-products": {},
        }
        self.images = {}
        self._ids = itertools.count(1)
        self.users = {"admin": "secret"}
        self.access_token = "access-1"
        self.refresh_token = "refresh-1"
        self.catalog_requests: list[httpx.Request] = []
        self.fail_catalog = False

    def add(self, collection: str, **record) -> dict:
        """Seed a record and return it."""
        record.setdefault("id", next(self._ids))
        self.collections[collection][record["id"]] = record
        return record

    def expire_access_token(self) -> None:
        self.access_token = f"{self.access_token}-rotated"

    # ---- catalog ----

    def catalog_handler(self, request: httpx.Request) -> httpx.Response:
        self.catalog_requests.append(request)
        if self.fail_catalog:
            return _json(500, {"message": "boom"})
        if request.headers.get("authorization") != f"Bearer {self.access_token}":
            return _json(401, {"message": "Unauthorized"})

        parts = request.url.path.strip("/").split("/")
        if parts[:2] == ["products", "admin"]:
            name, rest = "products", parts[2:]
        else:
            name, rest = parts[0], parts[1:]
        if name not in self.collections:
            return _json(404, {"message": "Not found"})
        items = self.collections[name]

        if not rest:
            if request.method == "GET":
                return self._list(name, request)
            if request.method == "POST":
                return self._create(name, json.loads(request.content))
            return _json(405, {"message": "Method not allowed"})

        item_id = int(rest[0])
        if item_id not in items:
            return _json(404, {"message": "Not found"})
        if request.method == "GET":
            return _json(200, items[item_id])
        if request.method == "PATCH":
            data = json.loads(request.content)
            if name in SLUGGED and self._slug_taken(name, data.get("slug"), item_id):
                return _json(409, {"message": "slug already exists"})
            items[item_id].update(data)
            return _json(200, items[item_id])
        if request.method == "DELETE":
            del items[item_id]
            return httpx.Response(204)
        return _json(405, {"message": "Method not allowed"})

    def _list(self, name: str, request: httpx.Request) -> httpx.Response:
        items = list(self.collections[name].values())
        if name != "categories":
            return _json(200, items)

        query = request.url.params
        if query.get("name"):
            items = [i for i in items if query["name"].lower() in i["name"].lower()]
        page = int(query.get("page", 1))
        limit = int(query.get("limit", 10))
        start = (page - 1) * limit
        return _json(
            200,
            {
                "items": items[start:start + limit],
                "meta": {"total": len(items), "page": page, "limit": limit},
            },
        )

    def _create(self, name: str, data: dict) -> httpx.Response:
        if name in SLUGGED and self._slug_taken(name, data.get("slug")):
            return _json(409, {"message": "slug already exists"})
        if name == "branch-products":
            for link in self.collections[name].values():
                if (link["productId"], link["branchId"]) == (data["productId"], data["branchId"]):
                    return _json(409, {"message": "Product already attached to branch"})
        record = self.add(name, **data)
        if name == "products":
            record.setdefault("images", [])
        if name in ("branches", "branch-products"):
            record.setdefault("isActive", True)
        return _json(201, record)

    def _slug_taken(self, name: str, slug, exclude_id=None) -> bool:
        if not slug:
            return False
        return any(
            str(item.get("slug", "")).lower() == slug.lower() and item["id"] != exclude_id
            for item in self.collections[name].values()
        )

    # ---- auth ----

    def _tokens(self) -> dict:
        return {
            "accessToken": self.access_token,
            "refreshToken": self.refresh_token,
            "tokenType": "Bearer",
        }

    def auth_handler(self, request: httpx.Request) -> httpx.Response:
        data = json.loads(request.content or b"{}")
        if request.url.path == "/users/auth":
            if self.users.get(data.get("login")) != data.get("password"):
                return _json(401, {"message": "Invalid credentials"})
            return _json(
                200,
                {
                    "tokens": self._tokens(),
                    "user": {"id": "1", "username": data["login"], "email": None, "role": "admin"},
                },
            )
        if request.url.path == "/users/auth/refresh":
            if data.get("refreshToken") != self.refresh_token:
                return _json(401, {"message": "Invalid refresh token"})
            self.refresh_token = f"{self.refresh_token}-next"
            return _json(200, {"tokens": self._tokens()})
        return _json(404, {"message": "Not found"})

    # ---- images ----

    def images_handler(self, request: httpx.Request) -> httpx.Response:
        if request.method == "POST" and request.url.path == "/images/upload":
            if request.headers.get("authorization") != f"Bearer {self.access_token}":
                return _json(401, {"message": "Unauthorized"})
            external_id = f"img-{len(self.images) + 1}"
            self.images[external_id] = request.content
            return _json(201, {"externalId": external_id})
        if request.method == "GET":
            external_id = request.url.path.rsplit("/", 1)[-1]
            if external_id not in self.images:
                return _json(404, {"message": "Not found"})
            return httpx.Response(
                200, content=b"\x89PNG-fake", headers={"content-type": "image/png"}
            )
        return _json(404, {"message": "Not found"})

    # ---- clients ----

    def catalog_client(self) -> AsyncClient:
        return AsyncClient(
            base_url="http://catalog.test", transport=httpx.MockTransport(self.catalog_handler)
        )

    def auth_client(self) -> AsyncClient:
        return AsyncClient(
            base_url="http://auth.test", transport=httpx.MockTransport(self.auth_handler)
        )

    def images_client(self) -> AsyncClient:
        return AsyncClient(
            base_url="http://images.test", transport=httpx.MockTransport(self.images_handler)
        )


@pytest.fixture
def backend():
    """Fresh fake backends."""
    return FakeBackend()


@pytest.fixture
def store():
    """Empty in-memory session store."""
    return MemorySessionStore()


@pytest.fixture
def logged_in(backend, store):
    """Session store holding tokens the fake backends accept."""
    store.set(
        Session(
            tokens=AuthTokens(
                access_token=backend.access_token,
                refresh_token=backend.refresh_token,
            ),
            user=AuthUser(id="1", username="admin", role="admin"),
        )
    )
    return store


def _install(backend: FakeBackend, store) -> tuple:
    original = (gateway.catalog, gateway.auth, gateway.images)
    gateway.catalog = backend.catalog_client()
    gateway.auth = backend.auth_client()
    gateway.images = backend.images_client()
    app.dependency_overrides[get_session_store] = lambda: store
    return original


def _restore(original: tuple) -> None:
    gateway.catalog, gateway.auth, gateway.images = original
    app.dependency_overrides.pop(get_session_store, None)


@pytest_asyncio.fixture
async def app_client(backend, store):
    """
    Create a test client wired to the fake backends.

    This fixture:
    - Points the gateway at in-memory backends
    - Yields an async HTTP client for testing
    - Restores the gateway and dependency overrides afterwards
    """
    original = _install(backend, store)

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as client:
        yield client

    for client in (gateway.catalog, gateway.auth, gateway.images):
        await client.aclose()
    _restore(original)


@pytest.fixture
def ws_client(backend, store, monkeypatch):
    """Synchronous test client for WebSocket endpoints, with a short debounce."""
    from app.config import settings

    monkeypatch.setattr(settings, "slug_check_debounce_ms", 10)
    original = _install(backend, store)

    yield TestClient(app)

    _restore(original)
