"""Terminal fallback for requests that match no route."""

from functools import lru_cache
from pathlib import Path

from fastapi import Request
from fastapi.responses import HTMLResponse

from src.api.constants import HTTP_404_NOT_FOUND

NOT_FOUND_PAGE = Path(__file__).resolve().parent.parent / "templates" / "404.html"


@lru_cache(maxsize=1)
def load_not_found_page() -> str:
    """Read the not-found page once and keep it in memory.

    Returns:
        str: HTML of the not-found page.
    """
    return NOT_FOUND_PAGE.read_text(encoding="utf-8")


async def not_found_handler(request: Request) -> HTMLResponse:
    """Answer an unmatched request with the fixed 404 page.

    Args:
        request: The request that matched no route.

    Returns:
        HTMLResponse: The not-found page with status 404.
    """
    _ = request
    return HTMLResponse(content=load_not_found_page(), status_code=HTTP_404_NOT_FOUND)
