"""Content router route registry.

``build_route_registry`` returns the authoritative, ordered list of the
router's endpoints for the configured prefixes. Order is match order:
the fixed auth segments and "count" come before "{id}", and the custom
endpoint catch-alls come last.

Registry structure:
    - 3 auth routes (login, logout, me)
    - 6 collection CRUD routes
    - 1 custom endpoint catch-all per prefix (API prefix and auth prefix)
"""

from cms_router.core.config import Settings
from cms_router.presentation.routers.api.auth import (
    get_current_user,
    login,
    logout,
)
from cms_router.presentation.routers.api.collections import (
    count_documents,
    create_document,
    delete_document,
    find_documents,
    get_document,
    update_document,
)
from cms_router.presentation.routers.api.custom_endpoints import (
    dispatch_custom_endpoint,
)
from cms_router.presentation.routers.api.routes.metadata import (
    AuthLevel,
    AuthPolicy,
    HTTPMethod,
    RouteMetadata,
)
from cms_router.presentation.routers.api.routes.route_classes import (
    ENDPOINT_PATH_PARAM,
    CustomEndpointRoute,
)

_PUBLIC = AuthPolicy(
    level=AuthLevel.PUBLIC,
    rationale="Credentials are checked by the engine itself",
)
_OPTIONAL = AuthPolicy(
    level=AuthLevel.OPTIONAL,
    rationale="Custom endpoints apply their own access rules",
)
_AUTHENTICATED = AuthPolicy(level=AuthLevel.AUTHENTICATED)

CUSTOM_ENDPOINT_METHODS = (
    HTTPMethod.GET,
    HTTPMethod.POST,
    HTTPMethod.PUT,
    HTTPMethod.PATCH,
    HTTPMethod.DELETE,
    HTTPMethod.HEAD,
    HTTPMethod.OPTIONS,
)


def build_route_registry(settings: Settings) -> list[RouteMetadata]:
    """Build the ordered route registry for the configured prefixes.

    Args:
        settings: Adapter settings (``api_prefix``, ``auth_prefix``).

    Returns:
        RouteMetadata entries in match order.
    """
    prefix = settings.api_prefix

    registry = [
        # =====================================================================
        # Auth
        # =====================================================================
        RouteMetadata(
            method=HTTPMethod.POST,
            path=f"{prefix}/{{collection}}/login",
            handler=login,
            tags=["Auth"],
            summary="Log in",
            description="Forward credentials to the engine's login; session cookies are set by the engine.",
            auth_policy=_PUBLIC,
        ),
        RouteMetadata(
            method=HTTPMethod.POST,
            path=f"{prefix}/{{collection}}/logout",
            handler=logout,
            tags=["Auth"],
            summary="Log out",
            auth_policy=_PUBLIC,
        ),
        RouteMetadata(
            method=HTTPMethod.GET,
            path=f"{prefix}/{{collection}}/me",
            handler=get_current_user,
            tags=["Auth"],
            summary="Get current user",
            description="Return the bearer token's user record without its sessions.",
            auth_policy=_AUTHENTICATED,
        ),
        # =====================================================================
        # Collections
        # =====================================================================
        RouteMetadata(
            method=HTTPMethod.GET,
            path=f"{prefix}/{{collection}}",
            handler=find_documents,
            summary="Find documents",
            description="Filters, sorting and pagination come from the query string; depth defaults to 0.",
            auth_policy=_AUTHENTICATED,
        ),
        RouteMetadata(
            method=HTTPMethod.GET,
            path=f"{prefix}/{{collection}}/count",
            handler=count_documents,
            summary="Count documents",
            auth_policy=_AUTHENTICATED,
        ),
        RouteMetadata(
            method=HTTPMethod.GET,
            path=f"{prefix}/{{collection}}/{{id}}",
            handler=get_document,
            summary="Get document",
            description="Depth defaults to 2. Responds 404 when the engine returns nothing.",
            auth_policy=_AUTHENTICATED,
        ),
        RouteMetadata(
            method=HTTPMethod.POST,
            path=f"{prefix}/{{collection}}",
            handler=create_document,
            summary="Create document",
            status_code=201,
            auth_policy=_AUTHENTICATED,
        ),
        RouteMetadata(
            method=HTTPMethod.PATCH,
            path=f"{prefix}/{{collection}}/{{id}}",
            handler=update_document,
            summary="Update document",
            auth_policy=_AUTHENTICATED,
        ),
        RouteMetadata(
            method=HTTPMethod.DELETE,
            path=f"{prefix}/{{collection}}/{{id}}",
            handler=delete_document,
            summary="Delete document",
            auth_policy=_AUTHENTICATED,
        ),
    ]

    # =========================================================================
    # Custom endpoints (catch-all, matched by CustomEndpointRoute)
    # =========================================================================
    for custom_prefix in dict.fromkeys((prefix, settings.auth_prefix)):
        registry.append(
            RouteMetadata(
                methods=CUSTOM_ENDPOINT_METHODS,
                path=f"{custom_prefix}/{{{ENDPOINT_PATH_PARAM}:path}}",
                handler=dispatch_custom_endpoint,
                tags=["Custom endpoints"],
                summary="Custom endpoint",
                auth_policy=_OPTIONAL,
                route_class=CustomEndpointRoute,
                include_in_schema=False,
            )
        )

    return registry
