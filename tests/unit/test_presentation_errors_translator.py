"""Unit tests for engine error translation.

Tests cover:
- Each classification (validation, 401, not found, server error)
- Classification order for errors matching several shapes
- Message extraction
"""

import json

import pytest
from fastapi.exceptions import RequestValidationError

from cms_router.presentation.routers.api.errors import (
    authentication_required_response,
    error_response,
    request_validation_response,
    translate_error,
)


class ValidationError(Exception):
    """Engine-style validation error identified by class name."""

    def __init__(self, message: str, errors: list[dict[str, str]]) -> None:
        super().__init__(message)
        self.data = {"errors": errors}


class StatusError(Exception):
    def __init__(self, message: str, status: int) -> None:
        super().__init__(message)
        self.status = status


@pytest.mark.unit
class TestTranslateError:
    """Test error classification."""

    def test_validation_error_by_class_name(self):
        exc = ValidationError("Invalid", [{"field": "title", "message": "Required"}])

        status_code, body = translate_error(exc)

        assert status_code == 400
        assert body == {
            "error": "Validation Failed",
            "message": "Invalid",
            "data": {"errors": [{"field": "title", "message": "Required"}]},
        }

    def test_validation_error_by_name_attribute(self):
        exc = Exception("bad input")
        exc.name = "ValidationError"

        status_code, body = translate_error(exc)

        assert status_code == 400
        assert body["error"] == "Validation Failed"
        assert body["data"] is None

    def test_validation_error_by_data_errors(self):
        exc = Exception("bad input")
        exc.data = {"errors": [{"field": "slug"}]}

        status_code, _ = translate_error(exc)

        assert status_code == 400

    def test_empty_data_errors_is_not_validation(self):
        exc = Exception("boom")
        exc.data = {"errors": []}

        status_code, _ = translate_error(exc)

        assert status_code == 500

    def test_unauthorized_status(self):
        status_code, body = translate_error(StatusError("Not allowed", 401))

        assert status_code == 401
        assert body == {"errors": {"message": ["Not allowed"]}}

    def test_unauthorized_status_code_attribute(self):
        exc = Exception("Not allowed")
        exc.status_code = 401

        status_code, _ = translate_error(exc)

        assert status_code == 401

    def test_validation_wins_over_unauthorized(self):
        exc = ValidationError("Invalid", [{"field": "title"}])
        exc.status = 401

        status_code, _ = translate_error(exc)

        assert status_code == 400

    @pytest.mark.parametrize(
        "message",
        ["Not Found", "Cast to ObjectId failed for value \"abc\" at path \"_id\""],
    )
    def test_not_found_markers(self, message):
        status_code, body = translate_error(Exception(message))

        assert status_code == 404
        assert body == {"error": "Resource Not Found", "message": message}

    def test_unauthorized_wins_over_not_found_marker(self):
        status_code, _ = translate_error(StatusError("Not Found", 401))

        assert status_code == 401

    def test_other_errors_are_server_errors(self):
        status_code, body = translate_error(RuntimeError("database unavailable"))

        assert status_code == 500
        assert body == {"error": "Server Error", "message": "database unavailable"}

    def test_message_attribute_preferred(self):
        exc = Exception("generic")
        exc.message = "specific"

        _, body = translate_error(exc)

        assert body["message"] == "specific"

    def test_empty_message_falls_back_to_class_name(self):
        _, body = translate_error(KeyError())

        assert body["message"] == "KeyError"


@pytest.mark.unit
class TestErrorResponses:
    """Test JSONResponse builders."""

    def test_error_response(self):
        response = error_response(Exception("Not Found"))

        assert response.status_code == 404
        assert json.loads(response.body) == {
            "error": "Resource Not Found",
            "message": "Not Found",
        }

    def test_authentication_required_response(self):
        response = authentication_required_response("Authentication required")

        assert response.status_code == 401
        assert json.loads(response.body) == {
            "error": "Unauthorized",
            "message": "Authentication required",
        }

    def test_request_validation_response(self):
        exc = RequestValidationError(
            [
                {
                    "type": "dict_type",
                    "loc": ("body",),
                    "msg": "Input should be a valid dictionary",
                    "input": ["x"],
                }
            ]
        )

        response = request_validation_response(exc)

        assert response.status_code == 400
        body = json.loads(response.body)
        assert body["error"] == "Validation Failed"
        assert body["message"] == "The request body is invalid."
        assert body["data"]["errors"][0]["loc"] == ["body"]
