"""Request middleware and dependencies.

Exports:
    AuthenticatedUser, OptionalUser: Annotated user dependencies
    AuthenticationRequired: Raised by the authorization gate
    Context, RequestContext: Per-request context dependency
    TraceMiddleware, get_trace_id: Request tracing
"""

from cms_router.presentation.routers.api.middleware.auth_dependencies import (
    AuthenticatedUser,
    AuthenticationRequired,
    OptionalUser,
    require_user,
    resolve_user,
)
from cms_router.presentation.routers.api.middleware.request_context import (
    Context,
    RequestContext,
    get_request_context,
)
from cms_router.presentation.routers.api.middleware.trace_middleware import (
    TraceMiddleware,
    get_trace_id,
)

__all__ = [
    "AuthenticatedUser",
    "AuthenticationRequired",
    "Context",
    "OptionalUser",
    "RequestContext",
    "TraceMiddleware",
    "get_request_context",
    "get_trace_id",
    "require_user",
    "resolve_user",
]
