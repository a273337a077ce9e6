"""Unit tests for ConsoleAdapter (structured console logging).

Tests cover:
- LoggerProtocol methods (debug, info, warning, error, critical)
- Exception details on error/critical
- Context binding
- Renderer selection and level filtering

Architecture:
- Unit tests with mocked structlog
- NO real logging output
"""

import logging
from unittest.mock import MagicMock, patch

import pytest

from cms_router.infrastructure.logging.console_adapter import ConsoleAdapter

STRUCTLOG = "cms_router.infrastructure.logging.console_adapter.structlog"


@pytest.mark.unit
class TestConsoleAdapterLogging:
    """Test ConsoleAdapter logging methods."""

    def test_info_logs_message_with_context(self):
        """Test info() logs message with structured context."""
        with patch(STRUCTLOG) as mock_structlog:
            mock_logger = MagicMock()
            mock_structlog.get_logger.return_value = mock_logger

            adapter = ConsoleAdapter()
            adapter.info("Document created", collection="posts", document_id="1")

            mock_logger.info.assert_called_once_with(
                "Document created",
                collection="posts",
                document_id="1",
            )

    def test_debug_and_warning_forward(self):
        with patch(STRUCTLOG) as mock_structlog:
            mock_logger = MagicMock()
            mock_structlog.get_logger.return_value = mock_logger

            adapter = ConsoleAdapter()
            adapter.debug("Finding documents", depth=0)
            adapter.warning("Bearer token rejected", reason="Token expired")

            mock_logger.debug.assert_called_once_with("Finding documents", depth=0)
            mock_logger.warning.assert_called_once_with(
                "Bearer token rejected", reason="Token expired"
            )

    def test_error_adds_exception_details(self):
        """Test error() flattens the exception into type and message."""
        with patch(STRUCTLOG) as mock_structlog:
            mock_logger = MagicMock()
            mock_structlog.get_logger.return_value = mock_logger

            adapter = ConsoleAdapter()
            adapter.error("Request failed", error=ValueError("bad"), status_code=500)

            mock_logger.error.assert_called_once_with(
                "Request failed",
                status_code=500,
                error_type="ValueError",
                error_message="bad",
            )

    def test_error_without_exception(self):
        with patch(STRUCTLOG) as mock_structlog:
            mock_logger = MagicMock()
            mock_structlog.get_logger.return_value = mock_logger

            adapter = ConsoleAdapter()
            adapter.error("Request failed")

            mock_logger.error.assert_called_once_with("Request failed")

    def test_critical_adds_exception_details(self):
        with patch(STRUCTLOG) as mock_structlog:
            mock_logger = MagicMock()
            mock_structlog.get_logger.return_value = mock_logger

            adapter = ConsoleAdapter()
            adapter.critical("Engine unavailable", error=RuntimeError("down"))

            mock_logger.critical.assert_called_once_with(
                "Engine unavailable",
                error_type="RuntimeError",
                error_message="down",
            )


@pytest.mark.unit
class TestConsoleAdapterContextBinding:
    """Test ConsoleAdapter context binding."""

    def test_bind_returns_new_adapter_with_bound_context(self):
        """Test bind() returns new adapter with additional context."""
        with patch(STRUCTLOG) as mock_structlog:
            mock_logger = MagicMock()
            mock_bound_logger = MagicMock()
            mock_structlog.get_logger.return_value = mock_logger
            mock_logger.bind.return_value = mock_bound_logger

            adapter = ConsoleAdapter()
            bound_adapter = adapter.bind(trace_id="trace-123")
            bound_adapter.info("Dispatching custom endpoint", path="/special")

            mock_logger.bind.assert_called_once_with(trace_id="trace-123")
            assert bound_adapter is not adapter
            mock_bound_logger.info.assert_called_once_with(
                "Dispatching custom endpoint", path="/special"
            )


@pytest.mark.unit
class TestConsoleAdapterConfiguration:
    """Test structlog pipeline configuration."""

    def test_json_renderer_when_requested(self):
        with patch(STRUCTLOG) as mock_structlog:
            ConsoleAdapter(use_json=True)

            processors = mock_structlog.configure.call_args.kwargs["processors"]
            assert processors[-1] is mock_structlog.processors.JSONRenderer.return_value

    def test_console_renderer_by_default(self):
        with patch(STRUCTLOG) as mock_structlog:
            ConsoleAdapter()

            processors = mock_structlog.configure.call_args.kwargs["processors"]
            assert processors[-1] is mock_structlog.dev.ConsoleRenderer.return_value

    def test_context_vars_merged_first(self):
        with patch(STRUCTLOG) as mock_structlog:
            ConsoleAdapter()

            processors = mock_structlog.configure.call_args.kwargs["processors"]
            assert processors[0] is mock_structlog.contextvars.merge_contextvars

    def test_level_filtering(self):
        with patch(STRUCTLOG) as mock_structlog:
            ConsoleAdapter(level="warning")

            mock_structlog.make_filtering_bound_logger.assert_called_once_with(
                logging.WARNING
            )
