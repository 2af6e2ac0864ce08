"""Centralized error translation for the FastAPI application.

Every failure raised while handling a request ends up here and is turned
into a JSON response:

- an ApiError becomes its own status code and a body with its public fields
- anything else becomes a 500 with a fixed body that reveals nothing about
  the original exception

ApiErrors are already logged when they are constructed, so only untyped
failures are logged here, with their traceback.
"""

from typing import NamedTuple

from fastapi import FastAPI, Request
from fastapi.responses import Response
from loguru import logger
from starlette.exceptions import HTTPException
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from src.api.constants import (
    HTTP_404_NOT_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
    UNKNOWN_ERROR_RESPONSE_MESSAGE,
)
from src.api.middleware.not_found import not_found_handler
from src.api.schemas.errors import ApiErrorResponse, StatusErrorResponse
from src.api.utils.responses import ORJSONResponse
from src.core.context import RequestContext
from src.core.exceptions import ApiError
from src.core.types import JsonObject


class ErrorTranslation(NamedTuple):
    """Status code and JSON body produced for a failure."""

    status_code: int
    body: JsonObject


def translate_error(exc: BaseException) -> ErrorTranslation:
    """Map a failure to the status code and body sent to the client.

    Args:
        exc: The exception raised while handling the request

    Returns:
        ErrorTranslation: Status code and JSON body
    """
    match exc:
        case ApiError(http_status=status_code):
            return ErrorTranslation(
                status_code, ApiErrorResponse.from_error(exc).to_body()
            )
        case _:
            body = StatusErrorResponse(
                message=UNKNOWN_ERROR_RESPONSE_MESSAGE,
                status=HTTP_500_INTERNAL_SERVER_ERROR,
            )
            return ErrorTranslation(HTTP_500_INTERNAL_SERVER_ERROR, body.model_dump())


def error_response(exc: BaseException) -> ORJSONResponse:
    """Render the translated failure as a JSON response.

    Args:
        exc: The exception raised while handling the request

    Returns:
        ORJSONResponse: Response carrying the translated status and body
    """
    translation = translate_error(exc)
    return ORJSONResponse(
        status_code=translation.status_code,
        content=translation.body,
    )


async def api_error_handler(request: Request, exc: Exception) -> Response:
    """Handle ApiError exceptions raised by route handlers.

    Args:
        request: The FastAPI request that caused the exception
        exc: The ApiError exception to handle

    Returns:
        Response: ORJSONResponse with the error's fields

    Raises:
        TypeError: If exc is not an ApiError instance
    """
    _ = request
    if not isinstance(exc, ApiError):
        raise TypeError(f"Expected ApiError, got {type(exc).__name__}")

    return error_response(exc)


async def http_exception_handler(request: Request, exc: Exception) -> Response:
    """Handle Starlette HTTPException.

    Unmatched routes (404) are answered by the not-found handler; other
    statuses, such as 405 for a wrong method, get a message/status body.

    Args:
        request: The FastAPI request that caused the exception
        exc: The HTTPException to handle

    Returns:
        Response: The not-found page or an ORJSONResponse

    Raises:
        TypeError: If exc is not an HTTPException instance
    """
    if not isinstance(exc, HTTPException):
        raise TypeError(f"Expected HTTPException, got {type(exc).__name__}")

    if exc.status_code == HTTP_404_NOT_FOUND:
        return await not_found_handler(request)

    body = StatusErrorResponse(message=str(exc.detail), status=exc.status_code)
    return ORJSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(),
        headers=exc.headers,
    )


class ErrorTranslationMiddleware(BaseHTTPMiddleware):
    """Terminal middleware that turns escaping exceptions into responses.

    It sits directly outside the routing layer, so any exception not already
    handled there is translated and the response still passes through the
    outer middleware (timing, correlation ID).
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Process the request, translating any exception it raises.

        Args:
            request: The incoming request.
            call_next: The next middleware/endpoint.

        Returns:
            Response: The endpoint's response or the translated error.
        """
        try:
            return await call_next(request)
        except ApiError as exc:
            return error_response(exc)
        except Exception as exc:
            logger.opt(exception=exc).error(
                "Unhandled exception: {}",
                type(exc).__name__,
                correlation_id=RequestContext.get_correlation_id(),
                request_method=request.method,
                request_path=request.url.path,
            )
            return error_response(exc)


def register_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with the FastAPI application.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)

    logger.debug("Exception handlers registered")
