"""Collection CRUD handlers.

Handler functions forwarding generic collection operations to the content
engine. Routes are registered via the route registry (routes/registry.py);
every route here is gated on a resolved user, and every engine call gets
the live request so the engine applies its own access rules as well.

Handlers:
    find_documents   - GET    /{prefix}/{collection}
    count_documents  - GET    /{prefix}/{collection}/count
    get_document     - GET    /{prefix}/{collection}/{id}
    create_document  - POST   /{prefix}/{collection}
    update_document  - PATCH  /{prefix}/{collection}/{id}
    delete_document  - DELETE /{prefix}/{collection}/{id}
"""

import re
from collections.abc import Mapping
from typing import Annotated, Any

from fastapi import Body, Depends, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from cms_router.core.container import get_logger
from cms_router.presentation.routers.api.engine_binding import (
    EngineBinding,
    call_engine,
    get_binding,
)
from cms_router.presentation.routers.api.middleware.request_context import Context

_LEADING_INTEGER_RE = re.compile(r"\s*([+-]?\d+)")

# Engine keywords a query parameter must never override
RESERVED_QUERY_KEYS = (
    "depth",
    "collection",
    "id",
    "data",
    "req",
    "res",
    "override_access",
    "overrideAccess",
)

Binding = Annotated[EngineBinding, Depends(get_binding)]
Document = Annotated[dict[str, Any], Body()]


def parse_depth(value: Any, default: int) -> int:
    """Parse the ``depth`` query parameter.

    Numbers are truncated, strings are read up to their leading integer.
    Missing, boolean, negative or unparseable values use ``default``.

    Args:
        value: Normalized query value (or None).
        default: Route default depth.

    Returns:
        Non-negative depth.

    Example:
        >>> parse_depth(3, 0), parse_depth("2abc", 0), parse_depth(None, 2)
        (3, 2, 2)
    """
    if value is None or isinstance(value, bool):
        return default

    if isinstance(value, (int, float)):
        depth = int(value)
    else:
        match = _LEADING_INTEGER_RE.match(str(value))
        if match is None:
            return default
        depth = int(match.group(1))

    return depth if depth >= 0 else default


def not_found_response(collection: str, document_id: Any) -> JSONResponse:
    """404 response for a document the engine returned nothing for."""
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"error": f"{collection} with ID {document_id} not found."},
    )


def _docs(result: Any) -> Any:
    if isinstance(result, Mapping):
        return result.get("docs", [])
    return getattr(result, "docs", [])


async def find_documents(
    request: Request,
    collection: str,
    context: Context,
    binding: Binding,
) -> JSONResponse:
    """Find documents in a collection.

    GET /{prefix}/{collection} → 200 OK

    ``depth`` defaults to ``settings.default_find_depth``; every other query
    parameter (where, sort, limit, page, ...) is passed through.

    Returns:
        The paginated envelope, or only its ``docs`` list in simple mode.
    """
    depth = parse_depth(context.query.get("depth"), binding.settings.default_find_depth)
    get_logger().debug("Finding documents", collection=collection, depth=depth)

    result = await call_engine(
        binding.engine.find,
        collection=collection,
        depth=depth,
        req=request,
        **context.passthrough_query(*RESERVED_QUERY_KEYS),
    )

    content = _docs(result) if binding.simple_responses else result
    return JSONResponse(status_code=status.HTTP_200_OK, content=jsonable_encoder(content))


async def count_documents(
    request: Request,
    collection: str,
    context: Context,
    binding: Binding,
) -> JSONResponse:
    """Count documents in a collection.

    GET /{prefix}/{collection}/count → 200 OK
    """
    depth = parse_depth(context.query.get("depth"), binding.settings.default_find_depth)

    result = await call_engine(
        binding.engine.count,
        collection=collection,
        depth=depth,
        req=request,
        **context.passthrough_query(*RESERVED_QUERY_KEYS),
    )

    return JSONResponse(status_code=status.HTTP_200_OK, content=jsonable_encoder(result))


async def get_document(
    request: Request,
    collection: str,
    id: str,
    context: Context,
    binding: Binding,
) -> JSONResponse:
    """Get one document by id.

    GET /{prefix}/{collection}/{id} → 200 OK, 404 when absent
    """
    depth = parse_depth(
        context.query.get("depth"), binding.settings.default_find_by_id_depth
    )

    result = await call_engine(
        binding.engine.find_by_id,
        collection=collection,
        id=id,
        depth=depth,
        req=request,
        **context.passthrough_query(*RESERVED_QUERY_KEYS),
    )

    if not result:
        return not_found_response(collection, id)

    return JSONResponse(status_code=status.HTTP_200_OK, content=jsonable_encoder(result))


async def create_document(
    request: Request,
    collection: str,
    data: Document,
    binding: Binding,
) -> JSONResponse:
    """Create a document.

    POST /{prefix}/{collection} → 201 Created
    """
    result = await call_engine(
        binding.engine.create, collection=collection, data=data, req=request
    )
    get_logger().info("Document created", collection=collection)

    return JSONResponse(
        status_code=status.HTTP_201_CREATED, content=jsonable_encoder(result)
    )


async def update_document(
    request: Request,
    collection: str,
    id: str,
    data: Document,
    binding: Binding,
) -> JSONResponse:
    """Apply a partial update.

    PATCH /{prefix}/{collection}/{id} → 200 OK
    """
    result = await call_engine(
        binding.engine.update, collection=collection, id=id, data=data, req=request
    )
    get_logger().info("Document updated", collection=collection, document_id=id)

    return JSONResponse(status_code=status.HTTP_200_OK, content=jsonable_encoder(result))


async def delete_document(
    request: Request,
    collection: str,
    id: str,
    binding: Binding,
) -> JSONResponse:
    """Delete a document.

    DELETE /{prefix}/{collection}/{id} → 200 OK with the deleted document
    """
    result = await call_engine(
        binding.engine.delete, collection=collection, id=id, req=request
    )
    get_logger().info("Document deleted", collection=collection, document_id=id)

    return JSONResponse(status_code=status.HTTP_200_OK, content=jsonable_encoder(result))
