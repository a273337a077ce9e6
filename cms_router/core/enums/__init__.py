"""Core enums package.

Usage:
    from cms_router.core.enums import Environment
"""

from cms_router.core.enums.environment import Environment

__all__ = ["Environment"]
