"""REST routing adapter for a content engine.

Maps HTTP verbs and URL patterns onto a content engine's data API
(find, count, find_by_id, create, update, delete, login, logout) and onto
the engine's registered custom endpoints.

Usage:
    from fastapi import FastAPI
    from cms_router import create_content_router

    app = FastAPI()
    app.include_router(create_content_router(engine))
"""

from cms_router.main import create_app
from cms_router.presentation.routers.api import create_content_router

__all__ = ["create_app", "create_content_router"]

__version__ = "0.1.0"
