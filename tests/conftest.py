"""Pytest configuration and shared fixtures.

Provides an in-memory content engine that behaves like the real one at the
router's seams:
1. Collections "posts" and "users" with seeded documents
2. Validation, not-found and 401 errors shaped like the engine's
3. Bearer tokens signed with the engine's derived key
4. Custom endpoints registered through ``config.endpoints``
"""

import inspect
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any

import pytest
from fastapi.testclient import TestClient

from cms_router.core.config import Settings
from cms_router.core.enums import Environment
from cms_router.infrastructure.security import TokenVerifier
from cms_router.main import create_app

# Configure pytest-asyncio
pytest_plugins = ("pytest_asyncio",)

ENGINE_SECRET = "test-engine-secret-with-enough-entropy"


# =============================================================================
# Engine-shaped errors
# =============================================================================


class EngineValidationError(Exception):
    """Raised by the fake engine when a document fails field validation."""

    def __init__(self, collection: str, errors: list[dict[str, str]]) -> None:
        super().__init__("The following field is invalid: title")
        self.name = "ValidationError"
        self.status = 400
        self.data = {"collection": collection, "errors": errors}


class EngineNotFound(Exception):
    def __init__(self) -> None:
        super().__init__("Not Found")
        self.status = 404


class EngineAuthenticationError(Exception):
    def __init__(self) -> None:
        super().__init__("The email or password provided is incorrect.")
        self.status = 401


# =============================================================================
# Fake engine
# =============================================================================


@dataclass
class FakeEndpoint:
    path: str
    method: str
    handler: Any


@dataclass
class FakeEndpointResult:
    status: int = 200
    headers: dict[str, str] = field(default_factory=dict)
    body: Any = None

    def json(self) -> Any:
        return self.body


@dataclass
class FakeEngineConfig:
    secret: str = ENGINE_SECRET
    endpoints: list[FakeEndpoint] = field(default_factory=list)


class FakeContentEngine:
    """In-memory content engine recording every call it receives.

    ``calls`` holds (operation, kwargs) tuples with ``req``/``res`` removed,
    so tests can assert exactly what the router forwarded.
    """

    def __init__(self, secret: str = ENGINE_SECRET) -> None:
        self.collections = {"posts": {"slug": "posts"}, "users": {"slug": "users"}}
        self.config = FakeEngineConfig(secret=secret)
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.documents: dict[str, dict[str, dict[str, Any]]] = {
            "posts": {
                "1": {"id": "1", "title": "Hello", "author": "u1"},
                "2": {"id": "2", "title": "World", "author": "u1"},
            },
            "users": {
                "u1": {
                    "id": "u1",
                    "email": "editor@example.com",
                    "password": "secret",
                    "sessions": [{"id": "s1"}],
                },
            },
        }

    def _record(self, operation: str, kwargs: dict[str, Any]) -> None:
        self.calls.append(
            (
                operation,
                {k: v for k, v in kwargs.items() if k not in ("req", "res")},
            )
        )

    def last_call(self, operation: str) -> dict[str, Any]:
        """Return the kwargs of the most recent call to ``operation``."""
        for name, kwargs in reversed(self.calls):
            if name == operation:
                return kwargs
        raise AssertionError(f"{operation} was never called")

    async def find(self, **kwargs: Any) -> dict[str, Any]:
        self._record("find", kwargs)
        docs = list(self.documents[kwargs["collection"]].values())
        return {
            "docs": docs,
            "totalDocs": len(docs),
            "limit": 10,
            "page": 1,
            "totalPages": 1,
            "hasNextPage": False,
            "hasPrevPage": False,
        }

    async def count(self, **kwargs: Any) -> dict[str, int]:
        self._record("count", kwargs)
        return {"totalDocs": len(self.documents[kwargs["collection"]])}

    async def find_by_id(self, **kwargs: Any) -> dict[str, Any] | None:
        self._record("find_by_id", kwargs)
        document = self.documents[kwargs["collection"]].get(str(kwargs["id"]))
        return dict(document) if document else None

    async def create(self, **kwargs: Any) -> dict[str, Any]:
        self._record("create", kwargs)
        collection, data = kwargs["collection"], kwargs["data"]
        if collection == "posts" and not data.get("title"):
            raise EngineValidationError(
                collection, [{"field": "title", "message": "This field is required."}]
            )
        document_id = str(len(self.documents[collection]) + 1)
        document = {"id": document_id, **data}
        self.documents[collection][document_id] = document
        return {"message": "Post successfully created.", "doc": document}

    def update(self, **kwargs: Any) -> dict[str, Any]:
        # Synchronous on purpose: the router accepts plain return values too
        self._record("update", kwargs)
        documents = self.documents[kwargs["collection"]]
        if kwargs["id"] not in documents:
            raise EngineNotFound()
        documents[kwargs["id"]].update(kwargs["data"])
        return {"message": "Updated successfully.", "doc": documents[kwargs["id"]]}

    async def delete(self, **kwargs: Any) -> dict[str, Any]:
        self._record("delete", kwargs)
        documents = self.documents[kwargs["collection"]]
        if kwargs["id"] not in documents:
            raise EngineNotFound()
        return documents.pop(kwargs["id"])

    async def login(self, **kwargs: Any) -> dict[str, Any]:
        self._record("login", kwargs)
        data = kwargs["data"]
        for user in self.documents[kwargs["collection"]].values():
            if user.get("email") == data.get("email") and user.get(
                "password"
            ) == data.get("password"):
                token = issue_token(self.config.secret, id=user["id"])
                kwargs["res"].set_cookie("payload-token", token, httponly=True)
                return {"message": "Auth Passed", "user": {"id": user["id"]}, "token": token}
        raise EngineAuthenticationError()

    async def logout(self, **kwargs: Any) -> dict[str, str]:
        self._record("logout", kwargs)
        kwargs["res"].delete_cookie("payload-token")
        return {"message": "You have been logged out successfully."}


def issue_token(
    secret: str = ENGINE_SECRET,
    expires_in: timedelta = timedelta(hours=2),
    **claims: Any,
) -> str:
    """Sign a bearer token the way the engine does."""
    claims.setdefault("collection", "users")
    return TokenVerifier(secret=secret).issue(claims, expires_in=expires_in)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def test_settings() -> Settings:
    """Settings isolated from the process environment."""
    return Settings(environment=Environment.TESTING)


@pytest.fixture
def engine() -> FakeContentEngine:
    """Fresh in-memory engine per test."""
    return FakeContentEngine()


@pytest.fixture
def client(engine: FakeContentEngine, test_settings: Settings) -> TestClient:
    """TestClient for a standalone app serving ``engine``."""
    return TestClient(create_app(engine, settings=test_settings))


@pytest.fixture
def auth_token() -> str:
    """Valid bearer token for user "u1"."""
    return issue_token(id="u1")


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Authorization header carrying ``auth_token``."""
    return {"Authorization": f"Bearer {auth_token}"}


# Pytest markers for different test types
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line("markers", "api: API tests through TestClient")
    config.addinivalue_line("markers", "asyncio: Async test that requires event loop")


# Test execution configuration
def pytest_collection_modifyitems(config, items):
    """Automatically add asyncio marker to async test functions.

    This ensures all async tests are properly marked even if
    the developer forgets to add @pytest.mark.asyncio.
    """
    for item in items:
        if inspect.iscoroutinefunction(item.function):
            item.add_marker(pytest.mark.asyncio)
