"""ContentEngine protocol - the data API the router forwards to.

Port (interface) for the external content engine. The router never
implements query planning, access control, validation or persistence; it
only calls these operations and reshapes what they return.

This is a Protocol (not ABC) for structural typing. Engine adapters don't
need to inherit from it. Every operation may be a coroutine function or a
plain function; the router awaits results that are awaitable.

Operation keyword conventions:
    collection: Collection name (a key of ``collections``)
    id: Document identifier taken from the URL path
    depth: Relationship population depth
    req: The live request, so the engine applies its own access rules
    res: The live response, so login/logout can set or clear cookies
    override_access: Skip the engine's access rules (internal lookups only)
    **options: Query parameters passed through (where, sort, limit, page, ...)

Example Implementation:
    >>> class MyEngine:
    ...     collections = {"posts": ...}
    ...     config = EngineConfig(secret="...", endpoints=[])
    ...     async def find(self, *, collection, depth=0, req=None, **options):
    ...         ...
"""

from collections.abc import Awaitable, Callable, Mapping, Sequence
from typing import Any, Protocol


class EndpointResult(Protocol):
    """Response returned by a custom endpoint handler.

    Attributes:
        status: HTTP status code. 3xx statuses redirect to ``Location``.
        headers: Header mapping supporting ``get(name)``.
    """

    status: int
    headers: Any

    def json(self) -> Any | Awaitable[Any]:
        """Return the JSON-serializable response body."""
        ...


class EndpointDefinition(Protocol):
    """A custom endpoint registered with the engine.

    Attributes:
        path: Path relative to the API prefix, e.g. "/special".
        method: HTTP method name, compared case-insensitively.
        handler: Called with an EndpointRequest, returns an EndpointResult.
    """

    path: str
    method: str
    handler: Callable[..., EndpointResult | Awaitable[EndpointResult]] | None


class EngineConfig(Protocol):
    """Engine configuration consumed by the router.

    Attributes:
        secret: Shared secret the engine signs bearer tokens with.
        endpoints: Registered custom endpoints.
    """

    secret: str
    endpoints: Sequence[EndpointDefinition]


class ContentEngine(Protocol):
    """Content engine protocol (port).

    Attributes:
        collections: Mapping whose keys are the registered collection names.
        config: Engine configuration (secret, custom endpoints).
    """

    collections: Mapping[str, Any]
    config: EngineConfig

    def find(
        self, *, collection: str, depth: int = 0, req: Any = None, **options: Any
    ) -> Any:
        """Find many documents.

        Returns:
            Paginated envelope with ``docs`` plus pagination metadata
            (totalDocs, limit, page, totalPages, hasNextPage, ...).
        """
        ...

    def count(
        self, *, collection: str, depth: int = 0, req: Any = None, **options: Any
    ) -> Any:
        """Count documents matching ``options`` (e.g. ``where``).

        Returns:
            Mapping like ``{"totalDocs": 3}``.
        """
        ...

    def find_by_id(
        self,
        *,
        collection: str,
        id: Any,
        depth: int = 2,
        req: Any = None,
        override_access: bool = False,
        **options: Any,
    ) -> Any:
        """Find one document by id.

        Returns:
            The document, or None when it does not exist.
        """
        ...

    def create(self, *, collection: str, data: Mapping[str, Any], req: Any = None) -> Any:
        """Create a document and return it."""
        ...

    def update(
        self, *, collection: str, id: Any, data: Mapping[str, Any], req: Any = None
    ) -> Any:
        """Apply a partial update and return the updated document."""
        ...

    def delete(self, *, collection: str, id: Any, req: Any = None) -> Any:
        """Delete a document and return it."""
        ...

    def login(
        self,
        *,
        collection: str,
        data: Mapping[str, Any],
        req: Any = None,
        res: Any = None,
    ) -> Any:
        """Authenticate credentials; may set session cookies on ``res``."""
        ...

    def logout(self, *, collection: str, req: Any = None, res: Any = None) -> Any:
        """End the session; may clear cookies on ``res``."""
        ...
