"""Route generator for the content router's route registry.

Converts declarative RouteMetadata entries into FastAPI routes bound to one
content engine.

Usage:
    router = APIRouter()
    register_routes_from_registry(router, build_route_registry(settings), binding)
"""

from typing import Any

from fastapi import APIRouter, Depends

from cms_router.presentation.routers.api.engine_binding import EngineBinding
from cms_router.presentation.routers.api.middleware.auth_dependencies import (
    require_user,
    resolve_user,
)
from cms_router.presentation.routers.api.routes.metadata import (
    AuthLevel,
    AuthPolicy,
    RouteMetadata,
)
from cms_router.presentation.routers.api.routes.route_classes import (
    bind_route_class,
)


def register_routes_from_registry(
    router: APIRouter,
    registry: list[RouteMetadata],
    binding: EngineBinding,
) -> None:
    """Generate FastAPI routes from registry metadata.

    Routes are added in registry order, which is also match order: static
    segments ("count", "me") must be registered before "{id}".

    Args:
        router: APIRouter to register routes on.
        registry: RouteMetadata entries to convert into routes.
        binding: Engine binding every generated route is bound to.
    """
    for metadata in registry:
        router.add_api_route(
            path=metadata.path,
            endpoint=metadata.handler,
            methods=metadata.method_names,
            status_code=metadata.status_code,
            tags=list(metadata.tags),
            summary=metadata.summary,
            description=metadata.description,
            dependencies=_build_dependencies(metadata.auth_policy),
            include_in_schema=metadata.include_in_schema,
            route_class_override=bind_route_class(metadata.route_class, binding),
        )


def _build_dependencies(auth_policy: AuthPolicy) -> list[Any]:
    """Build FastAPI dependencies from an auth policy.

    Auth policy mapping:
        PUBLIC: No dependencies
        OPTIONAL: Depends(resolve_user) - anonymous when unresolved
        AUTHENTICATED: Depends(require_user) - 401 when unresolved

    Raises:
        ValueError: For an unknown auth level (fail closed).
    """
    match auth_policy.level:
        case AuthLevel.PUBLIC:
            return []

        case AuthLevel.OPTIONAL:
            return [Depends(resolve_user)]

        case AuthLevel.AUTHENTICATED:
            return [Depends(require_user)]

        case _:
            msg = f"Unknown auth level: {auth_policy.level}"
            raise ValueError(msg)
