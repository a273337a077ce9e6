"""Route metadata types for the content router's route registry.

The registry is the single source of truth for the router's endpoints.
Each entry is a RouteMetadata describing method, path, handler, auth policy
and the route class that matches and error-translates it.

Core types:
    RouteMetadata: Complete route description
    HTTPMethod: HTTP method enum
    AuthLevel / AuthPolicy: Who may call the route

Usage:
    metadata = RouteMetadata(
        method=HTTPMethod.POST,
        path="/api/{collection}",
        handler=create_document,
        summary="Create a document",
        status_code=201,
        auth_policy=AuthPolicy(level=AuthLevel.AUTHENTICATED),
    )
"""

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from cms_router.presentation.routers.api.routes.route_classes import (
    ContentEngineRoute,
)


class HTTPMethod(str, Enum):
    """HTTP methods for content router routes."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"


class AuthLevel(str, Enum):
    """Authentication levels for routes.

    Attributes:
        PUBLIC: No token resolution (login, logout)
        OPTIONAL: Token resolved when present, anonymous otherwise
        AUTHENTICATED: Resolved user required, 401 otherwise
    """

    PUBLIC = "public"
    OPTIONAL = "optional"
    AUTHENTICATED = "authenticated"


@dataclass(frozen=True, kw_only=True)
class AuthPolicy:
    """Authentication policy for a route.

    Attributes:
        level: Authentication level.
        rationale: Optional explanation, e.g. why a route is PUBLIC.
    """

    level: AuthLevel
    rationale: str | None = None


@dataclass(frozen=True, kw_only=True)
class RouteMetadata:
    """Complete description of one content router route.

    Identity fields:
        method(s): HTTP method, or several for catch-all routes
        path: URL path with placeholders (e.g. "/api/{collection}/{id}")
        handler: Async function implementing the endpoint

    Documentation:
        summary, description, tags

    Behavior:
        status_code: Documented success status
        auth_policy: Authentication policy
        route_class: Route class that matches and error-translates the route
    """

    # Identity
    method: HTTPMethod | None = None
    methods: Sequence[HTTPMethod] | None = None
    path: str
    handler: Callable[..., Awaitable[Any]]

    # Documentation
    summary: str
    description: str | None = None
    tags: Sequence[str] = ("Content",)

    # Behavior
    status_code: int = 200
    auth_policy: AuthPolicy
    route_class: type[ContentEngineRoute] = ContentEngineRoute
    include_in_schema: bool = True

    @property
    def method_names(self) -> list[str]:
        """HTTP method names this route is registered for."""
        if self.methods:
            return [method.value for method in self.methods]
        if self.method is None:
            msg = f"Route {self.path} declares no HTTP method"
            raise ValueError(msg)
        return [self.method.value]
