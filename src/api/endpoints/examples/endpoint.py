"""Example JSON endpoint, served at GET /examples/endpoint."""

from fastapi import APIRouter

from src.api.routing import path_from_file_name

router = APIRouter(tags=["examples"])


@router.get(path_from_file_name(__file__))
async def endpoint() -> dict[str, str]:
    """Return a fixed JSON greeting.

    Returns:
        dict[str, str]: ``{"hello": "world"}``
    """
    return {"hello": "world"}
