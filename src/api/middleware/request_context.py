"""Correlation ID middleware.

Every request gets a correlation ID, taken from the ``X-Correlation-ID``
request header when the client sends one and generated otherwise. The ID
is current while the request is handled, so it appears on every log line,
and it is echoed back in the response headers.
"""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from src.api.constants import CORRELATION_ID_HEADER
from src.core.context import correlation_scope, generate_correlation_id


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Outermost middleware: assigns and echoes the correlation ID."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Handle the request inside a correlation scope.

        Args:
            request: The incoming request.
            call_next: The next middleware/endpoint.

        Returns:
            Response: The response, with the ``X-Correlation-ID`` header set.
        """
        incoming = request.headers.get(CORRELATION_ID_HEADER)

        with correlation_scope(incoming or generate_correlation_id()) as correlation_id:
            response = await call_next(request)

        response.headers[CORRELATION_ID_HEADER] = correlation_id
        return response
