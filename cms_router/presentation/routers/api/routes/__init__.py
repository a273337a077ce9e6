"""Route registry for the content router.

Exports:
    RouteMetadata, HTTPMethod, AuthLevel, AuthPolicy: Route description types
    ContentEngineRoute, CustomEndpointRoute: Engine-bound route classes
    build_route_registry: Ordered route registry for the configured prefixes
    register_routes_from_registry: Turn the registry into FastAPI routes
"""

from cms_router.presentation.routers.api.routes.generator import (
    register_routes_from_registry,
)
from cms_router.presentation.routers.api.routes.metadata import (
    AuthLevel,
    AuthPolicy,
    HTTPMethod,
    RouteMetadata,
)
from cms_router.presentation.routers.api.routes.registry import build_route_registry
from cms_router.presentation.routers.api.routes.route_classes import (
    ContentEngineRoute,
    CustomEndpointRoute,
)

__all__ = [
    "AuthLevel",
    "AuthPolicy",
    "ContentEngineRoute",
    "CustomEndpointRoute",
    "HTTPMethod",
    "RouteMetadata",
    "build_route_registry",
    "register_routes_from_registry",
]
