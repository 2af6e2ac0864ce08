"""HTTP request logging for debug mode.

When the application runs in debug mode every request is logged at the
custom API level with its method, path, status code and duration. Requests
slower than the configured threshold are also logged as warnings.
"""

import time

from fastapi import Request, Response
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from src.core.config import LogConfig
from src.core.constants import MILLISECONDS_PER_SECOND
from src.core.logging import API_LEVEL


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for logging HTTP requests and responses.

    Args:
        app: The ASGI application.
        log_config: Logging configuration.
    """

    def __init__(self, app: ASGIApp, *, log_config: LogConfig) -> None:
        super().__init__(app)
        self.log_config = log_config
        self.excluded_paths = set(log_config.excluded_paths)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Process the request and log details.

        Args:
            request: The incoming request.
            call_next: The next middleware/endpoint.

        Returns:
            Response: The response from the application.
        """
        if request.url.path in self.excluded_paths:
            return await call_next(request)

        with logger.contextualize(method=request.method, path=request.url.path):
            logger.log(API_LEVEL, "{} {}", request.method, request.url.path)

            start_time = time.perf_counter()
            response = await call_next(request)
            duration_ms = round(
                (time.perf_counter() - start_time) * MILLISECONDS_PER_SECOND, 2
            )

            logger.log(
                API_LEVEL,
                "Request completed",
                status_code=response.status_code,
                duration_ms=duration_ms,
            )

            if duration_ms > self.log_config.slow_request_threshold_ms:
                logger.warning(
                    "Slow request detected",
                    duration_ms=duration_ms,
                    threshold_ms=self.log_config.slow_request_threshold_ms,
                )

            return response
