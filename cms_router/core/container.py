"""Dependency factories.

Application-scoped singletons for the adapter's infrastructure:
- Logging (structlog console adapter)
- Bearer token verification (per engine secret)

Usage:
    from cms_router.core.container import get_logger

    logger = get_logger()
    logger.info("Router mounted", prefix=settings.api_prefix)
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from cms_router.core.config import get_settings

if TYPE_CHECKING:
    from cms_router.domain.protocols.logger_protocol import LoggerProtocol
    from cms_router.infrastructure.security import TokenVerifier


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    Renderer selection:
    - development: human-readable console output
    - testing/ci/production: JSON lines

    Returns:
        LoggerProtocol: Logger instance implementing the protocol.
    """
    from cms_router.infrastructure.logging import ConsoleAdapter

    settings = get_settings()
    use_json = not settings.is_development
    level = "DEBUG" if settings.debug else settings.log_level
    return ConsoleAdapter(use_json=use_json, level=level)


@lru_cache(maxsize=8)
def get_token_verifier(secret: str) -> "TokenVerifier":
    """Return a token verifier for an engine secret.

    Cached per secret so the signing key is derived once per engine.

    Args:
        secret: Engine shared secret.

    Returns:
        TokenVerifier bound to the derived key.
    """
    from cms_router.infrastructure.security import TokenVerifier

    return TokenVerifier(secret=secret)
