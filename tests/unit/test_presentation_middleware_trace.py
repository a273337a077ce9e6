"""Unit tests for TraceMiddleware (request tracing).

Tests cover:
- Trace ID generation for new requests
- Trace ID reuse from the X-Trace-Id header
- Contextvars propagation (get_trace_id and structlog context)
- Cleanup after the request

Architecture:
- Unit tests with mocked Starlette Request/Response
"""

from unittest.mock import AsyncMock, MagicMock
from uuid import UUID

import pytest
import structlog

from cms_router.presentation.routers.api.middleware import (
    TraceMiddleware,
    get_trace_id,
)


def _mock_response():
    response = MagicMock()
    response.headers = {}
    return response


@pytest.mark.unit
class TestTraceMiddlewareTraceIdGeneration:
    """Test TraceMiddleware trace ID generation."""

    @pytest.mark.asyncio
    async def test_generates_new_trace_id_when_missing(self):
        """Test middleware generates new trace ID when not in headers."""
        mock_request = MagicMock()
        mock_request.headers = {}
        mock_call_next = AsyncMock(return_value=_mock_response())

        middleware = TraceMiddleware(app=MagicMock())
        response = await middleware.dispatch(mock_request, mock_call_next)

        # Trace ID should be valid UUID
        UUID(response.headers["X-Trace-Id"])

    @pytest.mark.asyncio
    async def test_uses_existing_trace_id_from_header(self):
        """Test middleware uses existing trace ID from request headers."""
        existing_trace_id = "12345678-1234-5678-1234-567812345678"
        mock_request = MagicMock()
        mock_request.headers = {"X-Trace-Id": existing_trace_id}
        mock_call_next = AsyncMock(return_value=_mock_response())

        middleware = TraceMiddleware(app=MagicMock())
        response = await middleware.dispatch(mock_request, mock_call_next)

        assert response.headers["X-Trace-Id"] == existing_trace_id


@pytest.mark.unit
class TestTraceMiddlewareContextPropagation:
    """Test TraceMiddleware contextvars propagation."""

    @pytest.mark.asyncio
    async def test_trace_id_available_during_request(self):
        """Test trace ID is visible to get_trace_id() and structlog."""
        mock_request = MagicMock()
        mock_request.headers = {"X-Trace-Id": "trace-abc"}
        captured = {}

        async def capture(request):
            captured["trace_id"] = get_trace_id()
            captured["log_context"] = structlog.contextvars.get_contextvars()
            return _mock_response()

        middleware = TraceMiddleware(app=MagicMock())
        await middleware.dispatch(mock_request, capture)

        assert captured["trace_id"] == "trace-abc"
        assert captured["log_context"]["trace_id"] == "trace-abc"

    @pytest.mark.asyncio
    async def test_trace_id_cleared_after_request(self):
        """Test trace ID is cleared after request completes."""
        mock_request = MagicMock()
        mock_request.headers = {}
        mock_call_next = AsyncMock(return_value=_mock_response())

        middleware = TraceMiddleware(app=MagicMock())
        await middleware.dispatch(mock_request, mock_call_next)

        assert get_trace_id() is None
        assert "trace_id" not in structlog.contextvars.get_contextvars()

    @pytest.mark.asyncio
    async def test_trace_id_cleared_when_handler_raises(self):
        mock_request = MagicMock()
        mock_request.headers = {}
        mock_call_next = AsyncMock(side_effect=RuntimeError("boom"))

        middleware = TraceMiddleware(app=MagicMock())
        with pytest.raises(RuntimeError):
            await middleware.dispatch(mock_request, mock_call_next)

        assert get_trace_id() is None
