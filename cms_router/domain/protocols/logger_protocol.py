"""LoggerProtocol definition for structured logging.

Implementations MUST emit structured logs (message + key-value context)
and MUST NOT log bearer tokens, passwords or engine secrets.

Usage:
    from cms_router.core.container import get_logger

    logger = get_logger()
    logger.info("Custom endpoint dispatched", path=path, method=method)

    request_logger = logger.bind(trace_id=trace_id)
    request_logger.warning("Bearer token rejected", reason=reason)
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters."""

    def debug(self, message: str, /, **context: Any) -> None:
        """Log a debug-level message."""
        ...

    def info(self, message: str, /, **context: Any) -> None:
        """Log an info-level message."""
        ...

    def warning(self, message: str, /, **context: Any) -> None:
        """Log a warning-level message."""
        ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error-level message with optional exception details.

        Args:
            message: Human-readable message.
            error: Optional exception; its type and message are added to context.
            **context: Structured key-value context fields.
        """
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a critical-level message with optional exception details."""
        ...

    def bind(self, **context: Any) -> LoggerProtocol:
        """Return a logger with context bound to every subsequent call."""
        ...
