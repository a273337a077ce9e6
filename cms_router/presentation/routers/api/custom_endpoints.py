"""Custom endpoint dispatch.

Requests under the API or auth prefix whose first segment is not a
collection are offered to the engine's registered custom endpoints. The
route class (CustomEndpointRoute) only matches when an endpoint's path and
method match exactly, so by the time ``dispatch_custom_endpoint`` runs the
endpoint is known and sits in the request scope.

The handler receives an EndpointRequest, the engine-shaped view of the
HTTP request, and returns an object with ``status``, ``headers`` and
``json()``. 3xx results become redirects; everything else is relayed.
"""

import inspect
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, RedirectResponse, Response
from starlette.datastructures import Headers

from cms_router.core.container import get_logger
from cms_router.domain.protocols import ContentEngine, EndpointDefinition
from cms_router.presentation.routers.api.middleware.request_context import Context
from cms_router.presentation.routers.api.engine_binding import get_binding
from cms_router.presentation.routers.api.routes.route_classes import (
    ENDPOINT_SCOPE_KEY,
)


@dataclass(frozen=True, slots=True)
class EndpointDataLoader:
    """Loader handed to custom endpoints; exposes the engine's ``find``."""

    find: Callable[..., Any]


@dataclass(kw_only=True)
class EndpointRequest:
    """Request object passed to custom endpoint handlers.

    Attributes:
        engine: The content engine.
        method: HTTP method.
        path: Request path.
        headers: Case-insensitive headers; ``get`` returns the first value or None.
        query: Normalized query parameters.
        user: Resolved user, or None for anonymous requests.
        context: Free-form per-request context for the handler.
        route_params: Route parameters (always empty for exact-path endpoints).
        fallback_locale: Locale used when none is negotiated.
        payload_api: API flavor marker, always "REST".
        data_loader: Loader exposing the engine's ``find``.
    """

    engine: ContentEngine
    method: str
    path: str
    headers: Headers
    query: dict[str, Any]
    user: Any | None = None
    context: dict[str, Any] = field(default_factory=dict)
    route_params: dict[str, Any] = field(default_factory=dict)
    fallback_locale: str = "en"
    payload_api: str = "REST"
    data_loader: EndpointDataLoader | None = None
    _request: Request | None = field(default=None, repr=False)

    def t(self, key: str, **_: Any) -> str:
        """Translate a message key; no translations are loaded, so it is returned."""
        return key

    async def json(self) -> Any:
        """Parse the request body as JSON."""
        if self._request is None:
            return None
        return await self._request.json()


async def _resolve(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


async def dispatch_custom_endpoint(request: Request, context: Context) -> Response:
    """Invoke the matched custom endpoint and relay its result.

    Any (method) /{prefix}/{endpoint_path} → endpoint status

    Returns:
        RedirectResponse for 3xx results (to the result's Location header),
        otherwise JSONResponse with the result's status and JSON body.

    Raises:
        ValueError: If a 3xx result carries no Location header.
    """
    binding = get_binding(request)
    endpoint: EndpointDefinition = request.scope[ENDPOINT_SCOPE_KEY]
    logger = get_logger()
    logger.info(
        "Dispatching custom endpoint", path=endpoint.path, method=request.method
    )

    endpoint_request = EndpointRequest(
        engine=binding.engine,
        method=request.method,
        path=request.url.path,
        headers=request.headers,
        query=context.query,
        user=context.user,
        fallback_locale=binding.settings.fallback_locale,
        data_loader=EndpointDataLoader(find=binding.engine.find),
        _request=request,
    )

    result = await _resolve(endpoint.handler(endpoint_request))
    result_status = getattr(result, "status", None) or status.HTTP_200_OK

    if 300 <= result_status < 400:
        location = result.headers.get("Location") if result.headers else None
        if not location:
            msg = f"Custom endpoint {endpoint.path} redirected without a Location header"
            raise ValueError(msg)
        logger.info("Custom endpoint redirect", path=endpoint.path, location=location)
        return RedirectResponse(url=location, status_code=result_status)

    data = await _resolve(result.json())
    return JSONResponse(status_code=result_status, content=jsonable_encoder(data))
