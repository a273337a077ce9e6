"""Authentication handlers.

Handler functions for the auth actions of an auth-enabled collection.
Login and logout hand the live request and response to the engine so it can
set or clear its session cookies; the engine's result is relayed as-is.

Handlers:
    login            - POST /{prefix}/{collection}/login
    logout           - POST /{prefix}/{collection}/logout
    get_current_user - GET  /{prefix}/{collection}/me
"""

from collections.abc import Mapping
from typing import Annotated, Any

from fastapi import Body, Depends, Request, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from cms_router.core.container import get_logger
from cms_router.presentation.routers.api.collections import not_found_response
from cms_router.presentation.routers.api.engine_binding import (
    EngineBinding,
    call_engine,
    get_binding,
)
from cms_router.presentation.routers.api.middleware.auth_dependencies import (
    AuthenticatedUser,
)

# Fields never returned from the "me" endpoint
PRIVATE_USER_FIELDS = ("sessions",)


def _record_id(record: Any) -> Any:
    if isinstance(record, Mapping):
        return record.get("id")
    return getattr(record, "id", None)


async def login(
    request: Request,
    response: Response,
    collection: str,
    credentials: Annotated[dict[str, Any], Body()],
    binding: Annotated[EngineBinding, Depends(get_binding)],
) -> Any:
    """Log in with credentials (typically email and password).

    POST /{prefix}/{collection}/login → 200 OK

    Cookies the engine sets on ``response`` are sent with the result.
    """
    result = await call_engine(
        binding.engine.login,
        collection=collection,
        data=credentials,
        req=request,
        res=response,
    )
    get_logger().info("Login succeeded", collection=collection)
    return jsonable_encoder(result)


async def logout(
    request: Request,
    response: Response,
    collection: str,
    binding: Annotated[EngineBinding, Depends(get_binding)],
) -> Any:
    """End the current session.

    POST /{prefix}/{collection}/logout → 200 OK
    """
    result = await call_engine(
        binding.engine.logout, collection=collection, req=request, res=response
    )
    return jsonable_encoder(result)


async def get_current_user(
    request: Request,
    collection: str,
    user: AuthenticatedUser,
    binding: Annotated[EngineBinding, Depends(get_binding)],
) -> JSONResponse:
    """Return the authenticated user's own record.

    GET /{prefix}/{collection}/me → 200 OK

    The record is re-read from the engine so it reflects the requested
    collection; private fields (sessions) are stripped.
    """
    user_id = _record_id(user)
    if user_id is None:
        return not_found_response(collection, user_id)

    result = await call_engine(
        binding.engine.find_by_id, collection=collection, id=user_id, req=request
    )
    if not result:
        return not_found_response(collection, user_id)

    data = jsonable_encoder(result)
    if isinstance(data, dict):
        for field in PRIVATE_USER_FIELDS:
            data.pop(field, None)

    return JSONResponse(status_code=status.HTTP_200_OK, content=data)
