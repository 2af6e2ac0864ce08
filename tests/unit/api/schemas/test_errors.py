"""Unit tests for API error response schemas."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from src.api.schemas.errors import ApiErrorResponse, StatusErrorResponse
from src.core.exceptions import ApiError, ErrorCode


@pytest.mark.unit
class TestApiErrorResponse:
    """Test suite for the ApiError response body."""

    def test_from_error_mirrors_fields(self) -> None:
        """Verify every public field of the error is carried over."""
        error = ApiError(message="Out of tea", http_status=418, error_code="TEAPOT")

        response = ApiErrorResponse.from_error(error)

        assert response.message == "Out of tea"
        assert response.user_message == "Out of tea"
        assert response.http_status == 418
        assert response.error_code == "TEAPOT"

    def test_body_uses_camel_case(self) -> None:
        """Verify the wire body uses camelCase keys."""
        error = ApiError(message="Bad", http_status=400, error_code=ErrorCode.NOT_FOUND)

        assert ApiErrorResponse.from_error(error).to_body() == {
            "message": "Bad",
            "userMessage": "Bad",
            "httpStatus": 400,
            "errorCode": "NOT_FOUND",
        }

    def test_body_omits_missing_error_code(self) -> None:
        """Verify errorCode is absent rather than null."""
        body = ApiErrorResponse.from_error(ApiError()).to_body()

        assert "errorCode" not in body
        assert body["httpStatus"] == 500

    def test_accepts_aliases(self) -> None:
        """Verify the model can be built from camelCase input."""
        response = ApiErrorResponse.model_validate(
            {"message": "m", "userMessage": "u", "httpStatus": 409}
        )

        assert response.user_message == "u"
        assert response.http_status == 409

    def test_requires_status(self) -> None:
        """Verify the status code is mandatory."""
        with pytest.raises(PydanticValidationError):
            ApiErrorResponse.model_validate({"message": "m", "user_message": "u"})

    def test_openapi_schema_uses_aliases(self) -> None:
        """Verify the JSON schema documents the wire names."""
        schema = ApiErrorResponse.model_json_schema(by_alias=True)

        assert set(schema["properties"]) == {
            "message",
            "userMessage",
            "httpStatus",
            "errorCode",
        }
        assert schema["examples"][0]["errorCode"] == "ERROR_CODE"


@pytest.mark.unit
class TestStatusErrorResponse:
    """Test suite for the message/status body."""

    def test_dump(self) -> None:
        """Verify the body has exactly two keys."""
        body = StatusErrorResponse(message="Unkown Error", status=500).model_dump()

        assert body == {"message": "Unkown Error", "status": 500}

    def test_status_must_be_int(self) -> None:
        """Verify non-numeric statuses are rejected."""
        with pytest.raises(PydanticValidationError):
            StatusErrorResponse(message="x", status="teapot")  # type: ignore[arg-type]
