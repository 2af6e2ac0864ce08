"""Example error endpoint, served at GET /examples/error.

The response is a 418 whose body carries the error's message, user
message, status and error code.
"""

from fastapi import APIRouter

from src.api.routing import path_from_file_name
from src.core.exceptions import ApiError

router = APIRouter(tags=["examples"])


@router.get(path_from_file_name(__file__), include_in_schema=False)
async def error() -> None:
    raise ApiError(
        message="This is an error",
        http_status=418,
        error_code="ERROR_CODE",
    )
