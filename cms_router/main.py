"""Standalone application factory.

``create_app`` wraps one content router in a FastAPI application for
running the adapter on its own (e.g. ``uvicorn --factory``). Hosts that
already have an application mount ``create_content_router`` instead.
"""

from fastapi import FastAPI

from cms_router.core.config import Settings, get_settings
from cms_router.domain.protocols import ContentEngine
from cms_router.presentation.routers.api import create_content_router
from cms_router.presentation.routers.api.middleware import TraceMiddleware


def create_app(engine: ContentEngine, settings: Settings | None = None) -> FastAPI:
    """Build a FastAPI application serving ``engine`` over REST.

    Args:
        engine: Content engine implementing the ContentEngine protocol.
        settings: Adapter settings. Defaults to the process settings.

    Returns:
        FastAPI application with trace middleware, the content router and
        a health endpoint.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="REST routing adapter for a content engine",
        version=settings.app_version,
        debug=settings.debug,
    )

    # Wire trace middleware (request correlation)
    app.add_middleware(TraceMiddleware)

    app.include_router(create_content_router(engine, settings=settings))

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Health check endpoint for monitoring and load balancers."""
        return {"status": "healthy"}

    return app
