"""Error translation for content engine failures.

Exports:
    translate_error: Classify an exception into (status, body)
    error_response: JSONResponse for an exception
    authentication_required_response: 401 response used by the gate
    request_validation_response: 400 response for unparseable requests
"""

from cms_router.presentation.routers.api.errors.error_translator import (
    NOT_FOUND_MARKERS,
    authentication_required_response,
    error_response,
    request_validation_response,
    translate_error,
)

__all__ = [
    "NOT_FOUND_MARKERS",
    "authentication_required_response",
    "error_response",
    "request_validation_response",
    "translate_error",
]
