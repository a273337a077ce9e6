"""Centralized translation of content engine errors into HTTP responses.

Engine errors are not a typed hierarchy, so they are classified by shape,
in this order (the order decides ambiguous errors):

    1. Validation-shaped (named ValidationError, or ``data.errors`` present)
       -> 400 {"error": "Validation Failed", "message", "data"}
    2. ``status == 401``
       -> 401 {"errors": {"message": [message]}}
    3. Message mentions a not-found or invalid-identifier marker
       -> 404 {"error": "Resource Not Found", "message"}
    4. Anything else
       -> 500 {"error": "Server Error", "message"}

Exports:
    translate_error: Classify an exception into (status, body)
    error_response: Build the JSONResponse for an exception
    authentication_required_response: 401 body used by the gate
    request_validation_response: 400 body for unparseable requests
"""

from collections.abc import Mapping
from typing import Any

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

NOT_FOUND_MARKERS: tuple[str, ...] = ("Not Found", "Cast to ObjectId failed")


def _error_message(exc: BaseException) -> str:
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(exc) or type(exc).__name__


def _error_status(exc: BaseException) -> Any:
    error_status = getattr(exc, "status", None)
    if error_status is None:
        error_status = getattr(exc, "status_code", None)
    return error_status


def _is_validation_error(exc: BaseException) -> bool:
    if getattr(exc, "name", None) == "ValidationError":
        return True
    if type(exc).__name__ == "ValidationError":
        return True

    data = getattr(exc, "data", None)
    if isinstance(data, Mapping):
        return bool(data.get("errors"))
    return bool(getattr(data, "errors", None))


def translate_error(exc: BaseException) -> tuple[int, dict[str, Any]]:
    """Classify an engine error into an HTTP status and JSON body.

    Args:
        exc: Exception raised while handling a request.

    Returns:
        Tuple of (status code, JSON-serializable body).

    Example:
        >>> translate_error(Exception("Not Found"))
        (404, {'error': 'Resource Not Found', 'message': 'Not Found'})
    """
    message = _error_message(exc)

    if _is_validation_error(exc):
        return status.HTTP_400_BAD_REQUEST, {
            "error": "Validation Failed",
            "message": message,
            "data": jsonable_encoder(getattr(exc, "data", None)),
        }

    if _error_status(exc) == status.HTTP_401_UNAUTHORIZED:
        return status.HTTP_401_UNAUTHORIZED, {"errors": {"message": [message]}}

    if any(marker in message for marker in NOT_FOUND_MARKERS):
        return status.HTTP_404_NOT_FOUND, {
            "error": "Resource Not Found",
            "message": message,
        }

    return status.HTTP_500_INTERNAL_SERVER_ERROR, {
        "error": "Server Error",
        "message": message,
    }


def error_response(exc: BaseException) -> JSONResponse:
    """Build the JSONResponse for an exception via translate_error."""
    status_code, body = translate_error(exc)
    return JSONResponse(status_code=status_code, content=body)


def authentication_required_response(message: str) -> JSONResponse:
    """Build the 401 response returned by the authorization gate.

    Args:
        message: Human-readable reason.

    Returns:
        JSONResponse with {"error": "Unauthorized", "message": message}.
    """
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"error": "Unauthorized", "message": message},
    )


def request_validation_response(exc: RequestValidationError) -> JSONResponse:
    """Build the 400 response for a request the router could not parse.

    Missing, malformed or non-object JSON bodies fail FastAPI's request
    validation before any engine call; they are reported in the same shape
    as engine validation failures.

    Args:
        exc: FastAPI's request validation error.

    Returns:
        JSONResponse with {"error": "Validation Failed", "message", "data"}.
    """
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "Validation Failed",
            "message": "The request body is invalid.",
            "data": {"errors": jsonable_encoder(exc.errors())},
        },
    )
