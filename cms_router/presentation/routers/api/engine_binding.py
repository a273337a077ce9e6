"""Engine binding shared by every route of one content router.

A router built by ``create_content_router`` is bound to exactly one content
engine. Its route classes carry the binding and copy it into the ASGI scope
when they match, so handlers and dependencies read it from the request
instead of from module globals. Several routers bound to different engines
can therefore live in one application.

Usage:
    async def handler(
        binding: Annotated[EngineBinding, Depends(get_binding)],
    ) -> JSONResponse:
        result = await call_engine(binding.engine.find, collection="posts")
"""

import inspect
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from fastapi import Request

from cms_router.core.config import Settings
from cms_router.domain.protocols import ContentEngine

BINDING_SCOPE_KEY = "cms_router.binding"


@dataclass(frozen=True, slots=True, kw_only=True)
class EngineBinding:
    """The engine and options a router was built with.

    Attributes:
        engine: Content engine the routes forward to.
        settings: Adapter settings (prefixes, defaults, auth collection).
        simple_responses: Whether find-many returns only the document list.
    """

    engine: ContentEngine
    settings: Settings
    simple_responses: bool = False

    def is_collection(self, name: str) -> bool:
        """Check whether ``name`` is a registered collection."""
        return name in self.engine.collections


def get_binding(request: Request) -> EngineBinding:
    """Return the engine binding of the matched route.

    Args:
        request: Current request.

    Returns:
        EngineBinding placed in the scope by the matching route.

    Raises:
        RuntimeError: If the route was not built by ``create_content_router``.
    """
    binding = request.scope.get(BINDING_SCOPE_KEY)
    if binding is None:
        msg = "Request was not routed through a content router"
        raise RuntimeError(msg)
    return binding


async def call_engine(operation: Callable[..., Any], /, **kwargs: Any) -> Any:
    """Invoke an engine operation and await its result when needed.

    Args:
        operation: Bound engine method (coroutine function or plain function).
        **kwargs: Keyword arguments for the operation.

    Returns:
        The operation's (awaited) result.
    """
    result = operation(**kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
