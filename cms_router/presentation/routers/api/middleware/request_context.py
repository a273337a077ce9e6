"""Per-request context dependency.

Collects what a handler needs from the request: the normalized query, the
resolved user, and the identifiers taken from the path. Built once per
request (FastAPI caches dependencies within a request) and discarded with it.
"""

from dataclasses import dataclass, field
from typing import Annotated, Any

from fastapi import Depends, Request

from cms_router.core.querystring import QueryValue, parse_query
from cms_router.presentation.routers.api.middleware.auth_dependencies import (
    resolve_user,
)


@dataclass(slots=True, kw_only=True)
class RequestContext:
    """Request-scoped context.

    Attributes:
        query: Normalized query parameters.
        user: Resolved user record, or None for anonymous requests.
        collection: Collection name from the path, if any.
        document_id: Document id from the path, if any.
    """

    query: dict[str, QueryValue] = field(default_factory=dict)
    user: Any | None = None
    collection: str | None = None
    document_id: str | None = None

    def passthrough_query(self, *exclude: str) -> dict[str, QueryValue]:
        """Return the query without the named keys."""
        return {key: value for key, value in self.query.items() if key not in exclude}


def get_query(request: Request) -> dict[str, QueryValue]:
    """Parse the raw query string and keep it on ``request.state.query``."""
    query = parse_query(request.url.query)
    request.state.query = query
    return query


async def get_request_context(
    request: Request,
    query: Annotated[dict[str, QueryValue], Depends(get_query)],
    user: Annotated[Any | None, Depends(resolve_user)],
) -> RequestContext:
    """Build the request context.

    Args:
        request: Current request.
        query: Normalized query parameters.
        user: Resolved user (fail-open).

    Returns:
        RequestContext for this request.
    """
    return RequestContext(
        query=query,
        user=user,
        collection=request.path_params.get("collection"),
        document_id=request.path_params.get("id"),
    )


Context = Annotated[RequestContext, Depends(get_request_context)]
