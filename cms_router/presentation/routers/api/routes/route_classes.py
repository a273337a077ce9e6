"""Route classes for content router endpoints.

Every content router route is an instance of a ``ContentEngineRoute``
subclass bound to one EngineBinding. The route class does three things
FastAPI's plain APIRoute does not:

- Classifies: a route with a ``collection`` path parameter only matches
  registered collection names, and a custom endpoint route only matches
  when the engine has an endpoint with that exact path and method. A route
  that does not match lets routing fall through to the host application.
- Exposes the binding to handlers by copying it into the matched scope.
- Terminates errors: anything the handler (or a dependency) raises is
  translated once, here, into the JSON error contract. Unparseable
  requests (FastAPI request validation) get the 400 validation shape.

Usage:
    route_class = bind_route_class(ContentEngineRoute, binding)
    router.add_api_route(path, handler, route_class_override=route_class)
"""

from collections.abc import Callable, Coroutine
from typing import Any, ClassVar

from fastapi import Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.routing import APIRoute
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.routing import Match
from starlette.types import Scope

from cms_router.core.container import get_logger
from cms_router.domain.protocols import EndpointDefinition
from cms_router.presentation.routers.api.engine_binding import (
    BINDING_SCOPE_KEY,
    EngineBinding,
)
from cms_router.presentation.routers.api.errors import (
    authentication_required_response,
    error_response,
    request_validation_response,
)
from cms_router.presentation.routers.api.middleware.auth_dependencies import (
    AuthenticationRequired,
)

ENDPOINT_SCOPE_KEY = "cms_router.endpoint"
ENDPOINT_PATH_PARAM = "endpoint_path"


class ContentEngineRoute(APIRoute):
    """APIRoute bound to a content engine.

    Subclasses are created per router by ``bind_route_class``; the binding
    lives on the class so FastAPI keeps it when ``include_router`` copies
    routes into an application.
    """

    binding: ClassVar[EngineBinding | None] = None

    def matches(self, scope: Scope) -> tuple[Match, Scope]:
        match, child_scope = super().matches(scope)
        if match == Match.NONE:
            return match, child_scope

        binding = self.binding
        if binding is None or not self.accepts(binding, scope, child_scope):
            return Match.NONE, {}

        child_scope[BINDING_SCOPE_KEY] = binding
        return match, child_scope

    def accepts(self, binding: EngineBinding, scope: Scope, child_scope: Scope) -> bool:
        """Decide whether a path-matched request belongs to this route.

        Args:
            binding: Engine binding of this route.
            scope: Incoming ASGI scope.
            child_scope: Scope additions from path matching (path_params).

        Returns:
            True if the ``collection`` path parameter (when present) names a
            registered collection.
        """
        collection = child_scope.get("path_params", {}).get("collection")
        return collection is None or binding.is_collection(collection)

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        original_route_handler = super().get_route_handler()

        async def content_route_handler(request: Request) -> Response:
            try:
                return await original_route_handler(request)
            except StarletteHTTPException:
                # Host application handlers render these
                raise
            except RequestValidationError as e:
                get_logger().info(
                    "Content router request rejected",
                    method=request.method,
                    path=request.url.path,
                    error_count=len(e.errors()),
                )
                return request_validation_response(e)
            except AuthenticationRequired as e:
                return authentication_required_response(e.message)
            except Exception as e:
                response = error_response(e)
                get_logger().error(
                    "Content router request failed",
                    error=e,
                    status_code=response.status_code,
                    method=request.method,
                    path=request.url.path,
                )
                return response

        return content_route_handler


class CustomEndpointRoute(ContentEngineRoute):
    """Catch-all route for the engine's registered custom endpoints.

    Matches only when the first path segment is not a collection name and
    an endpoint's path and method match the request exactly. The matched
    endpoint is placed in the scope for the handler.
    """

    def accepts(self, binding: EngineBinding, scope: Scope, child_scope: Scope) -> bool:
        endpoint_path = child_scope.get("path_params", {}).get(ENDPOINT_PATH_PARAM, "")
        first_segment = endpoint_path.split("/", 1)[0]
        if binding.is_collection(first_segment):
            return False

        endpoint = find_custom_endpoint(
            binding.engine.config.endpoints,
            path=f"/{endpoint_path}",
            method=scope.get("method", ""),
        )
        if endpoint is None:
            return False

        child_scope[ENDPOINT_SCOPE_KEY] = endpoint
        return True


def find_custom_endpoint(
    endpoints: Any, *, path: str, method: str
) -> EndpointDefinition | None:
    """Find the endpoint registered for an exact path and method.

    Args:
        endpoints: The engine's registered endpoints (may be None).
        path: Request path relative to the prefix, with leading slash.
        method: Request method.

    Returns:
        The first endpoint with a handler whose path equals ``path`` and
        whose method equals ``method`` (case-insensitive), else None.
    """
    for endpoint in endpoints or ():
        if endpoint.path != path or not getattr(endpoint, "handler", None):
            continue
        if str(endpoint.method).upper() == method.upper():
            return endpoint
    return None


def bind_route_class(
    route_class: type[ContentEngineRoute], binding: EngineBinding
) -> type[ContentEngineRoute]:
    """Create a subclass of ``route_class`` bound to ``binding``.

    Args:
        route_class: ContentEngineRoute or a subclass.
        binding: Engine binding the routes should use.

    Returns:
        New route class carrying the binding.
    """
    return type(route_class.__name__, (route_class,), {"binding": binding})
