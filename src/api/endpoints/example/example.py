"""Example endpoints mounted under /example.

GET /example/example answers with a greeting; GET /example/error shows how
a handler reports a failure with an ApiError.
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from src.api.routing import path_from_file_name
from src.core.exceptions import ApiError

router = APIRouter(tags=["example"])


# The leaf path comes from this file's name: /example
@router.get(path_from_file_name(__file__), response_class=PlainTextResponse)
async def example() -> str:
    return "Hello World!"


@router.get("/error")
async def example_error() -> None:
    """Always fails with a 400 and the ERROR_CODE error code."""
    raise ApiError(
        message="This is an error",
        http_status=400,
        error_code="ERROR_CODE",
    )
