"""Logging adapters.

Usage:
    from cms_router.infrastructure.logging import ConsoleAdapter
"""

from cms_router.infrastructure.logging.console_adapter import ConsoleAdapter

__all__ = ["ConsoleAdapter"]
