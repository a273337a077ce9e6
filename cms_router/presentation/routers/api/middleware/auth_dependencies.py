"""Bearer token authentication dependencies.

FastAPI dependencies that resolve the bearer token to a user record and gate
routes that require one.

Resolution fails open: a missing, malformed, expired or otherwise unusable
token (or a token whose user no longer exists) resolves to an anonymous
request instead of an error. Only the gate turns "no user" into a 401.

Usage:
    # Gated route (requires a resolved user)
    async def handler(user: AuthenticatedUser): ...

    # Optional auth (custom endpoints)
    async def handler(user: OptionalUser):
        if user is None:
            ...
"""

from typing import Annotated, Any

from fastapi import Depends, Request

from cms_router.core.container import get_logger, get_token_verifier
from cms_router.core.result import Failure, Success
from cms_router.domain.errors import AuthenticationError
from cms_router.presentation.routers.api.engine_binding import (
    EngineBinding,
    call_engine,
    get_binding,
)

BEARER_PREFIX = "Bearer "


class AuthenticationRequired(Exception):
    """Raised by the gate when a route needs a user and none was resolved.

    Rendered by the route class as a 401 with an ``error``/``message`` body.
    """

    def __init__(
        self, message: str = "Authentication required to perform actions."
    ) -> None:
        super().__init__(message)
        self.message = message


def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the token from an ``Authorization: Bearer <token>`` header.

    Args:
        authorization: Raw header value, or None when absent.

    Returns:
        The token, or None if the header is absent, uses another scheme,
        or carries no token.
    """
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    parts = authorization.split(" ")
    token = parts[1] if len(parts) > 1 else ""
    return token or None


async def resolve_user(
    request: Request,
    binding: Annotated[EngineBinding, Depends(get_binding)],
) -> Any | None:
    """Resolve the bearer token to a user record, or None.

    Flow:
        1. No token, or no engine secret -> anonymous
        2. Verify signature and expiry with the key derived from the secret
        3. Read the user id (``id`` claim) and collection (``collection``
           claim, falling back to ``settings.auth_collection``)
        4. Fetch the user with ``override_access=True``

    Any failure along the way is logged and resolves to None. The result is
    stored on ``request.state.user``.

    Args:
        request: Current request.
        binding: Engine binding of the matched route.

    Returns:
        The user record, or None for anonymous requests.
    """
    token = extract_bearer_token(request.headers.get("authorization"))
    secret = getattr(binding.engine.config, "secret", None)

    user = None
    if token is not None and not secret:
        get_logger().warning(
            "Bearer token ignored", reason=AuthenticationError.MISSING_SECRET
        )
    elif token is not None:
        match get_token_verifier(secret).verify(token):
            case Success(value=claims):
                user = await _load_user(request, binding, claims)
            case Failure(error=error):
                get_logger().warning("Bearer token rejected", reason=error)

    request.state.user = user
    return user


async def _load_user(
    request: Request, binding: EngineBinding, claims: dict[str, Any]
) -> Any | None:
    logger = get_logger()

    user_id = claims.get("id")
    if not user_id:
        logger.warning(
            "Bearer token rejected", reason=AuthenticationError.MISSING_SUBJECT
        )
        return None

    collection = claims.get("collection") or binding.settings.auth_collection
    try:
        user = await call_engine(
            binding.engine.find_by_id,
            collection=collection,
            id=user_id,
            override_access=True,
            req=request,
        )
    except Exception as e:
        # Fail open: the gate decides what an anonymous request may do
        logger.warning(
            "Bearer token user lookup failed",
            user_id=str(user_id),
            collection=collection,
            error_type=type(e).__name__,
            error_message=str(e),
        )
        return None

    if not user:
        logger.info(
            "Bearer token rejected",
            reason=AuthenticationError.USER_NOT_FOUND,
            user_id=str(user_id),
            collection=collection,
        )
        return None

    logger.debug("Bearer token accepted", user_id=str(user_id), collection=collection)
    return user


async def require_user(
    user: Annotated[Any | None, Depends(resolve_user)],
) -> Any:
    """Gate: return the resolved user or reject the request.

    Raises:
        AuthenticationRequired: If no user was resolved.
    """
    if user is None:
        raise AuthenticationRequired()
    return user


# Type aliases for cleaner handler signatures
OptionalUser = Annotated[Any | None, Depends(resolve_user)]
AuthenticatedUser = Annotated[Any, Depends(require_user)]
