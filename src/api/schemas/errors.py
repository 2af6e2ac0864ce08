"""Error response schemas.

Two shapes are returned to clients:

- **ApiErrorResponse**: the public fields of a raised ApiError, with
  camelCase keys (``message``, ``userMessage``, ``httpStatus`` and, when
  set, ``errorCode``)
- **StatusErrorResponse**: ``{"message": ..., "status": ...}``, used for
  failures that are not ApiErrors; unexpected exceptions always get the
  same masked message
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.core.exceptions import ApiError


class ApiErrorResponse(BaseModel):
    """Response body for a raised ApiError."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "message": "This is an error",
                    "userMessage": "This is an error",
                    "httpStatus": 418,
                    "errorCode": "ERROR_CODE",
                }
            ]
        },
    )

    message: str = Field(
        ...,
        description="Internal/debug error message",
        examples=["This is an error"],
    )

    user_message: str = Field(
        ...,
        description="Human-readable message for display",
        examples=["This is an error"],
    )

    http_status: int = Field(
        ...,
        description="HTTP status code of the response",
        examples=[400, 418, 500],
    )

    error_code: str | None = Field(
        default=None,
        description="Stable error code for programmatic handling",
        examples=["ERROR_CODE", "NOT_FOUND"],
    )

    @classmethod
    def from_error(cls, error: ApiError) -> "ApiErrorResponse":
        """Build the response body for an ApiError.

        Args:
            error: The raised error

        Returns:
            ApiErrorResponse: Body mirroring the error's public fields
        """
        return cls.model_validate(error.to_dict())

    def to_body(self) -> dict[str, Any]:
        """Dump with wire (camelCase) keys, omitting an absent error code."""
        return self.model_dump(by_alias=True, exclude_none=True)


class StatusErrorResponse(BaseModel):
    """Response body carrying only a message and a status code."""

    message: str = Field(
        ...,
        description="Error message",
        examples=["Unkown Error", "Method Not Allowed"],
    )

    status: int = Field(
        ...,
        description="HTTP status code of the response",
        examples=[405, 500],
    )
