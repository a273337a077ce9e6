"""Domain errors package.

Usage:
    from cms_router.domain.errors import AuthenticationError
"""

from cms_router.domain.errors.authentication_error import AuthenticationError

__all__ = ["AuthenticationError"]
