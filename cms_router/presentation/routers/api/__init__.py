"""Content router.

``create_content_router`` builds an APIRouter bound to one content engine.
Mount it on a host FastAPI application:

    app.include_router(create_content_router(engine, simple_responses=True))

Routes (under ``settings.api_prefix``, default "/api"):
    POST   /{collection}/login
    POST   /{collection}/logout
    GET    /{collection}/me
    GET    /{collection}
    GET    /{collection}/count
    GET    /{collection}/{id}
    POST   /{collection}
    PATCH  /{collection}/{id}
    DELETE /{collection}/{id}
    *      /{endpoint path}     custom engine endpoints (also under auth_prefix)
"""

from fastapi import APIRouter

from cms_router.core.config import Settings, get_settings
from cms_router.core.container import get_logger
from cms_router.domain.protocols import ContentEngine
from cms_router.presentation.routers.api.engine_binding import EngineBinding
from cms_router.presentation.routers.api.routes import (
    build_route_registry,
    register_routes_from_registry,
)


def create_content_router(
    engine: ContentEngine,
    *,
    simple_responses: bool | None = None,
    settings: Settings | None = None,
) -> APIRouter:
    """Build a router forwarding REST calls to ``engine``.

    Args:
        engine: Content engine implementing the ContentEngine protocol.
        simple_responses: Return only ``docs`` from find-many. Defaults to
            ``settings.simple_responses``.
        settings: Adapter settings. Defaults to the process settings.

    Returns:
        APIRouter with every route bound to ``engine``.
    """
    settings = settings or get_settings()
    if simple_responses is None:
        simple_responses = settings.simple_responses

    binding = EngineBinding(
        engine=engine, settings=settings, simple_responses=simple_responses
    )

    router = APIRouter()
    register_routes_from_registry(router, build_route_registry(settings), binding)

    get_logger().info(
        "Content router built",
        api_prefix=settings.api_prefix,
        auth_prefix=settings.auth_prefix,
        collections=sorted(engine.collections),
        custom_endpoints=len(engine.config.endpoints or ()),
        simple_responses=simple_responses,
    )
    return router


__all__ = ["EngineBinding", "create_content_router"]
