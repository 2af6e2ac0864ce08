"""FastAPI application initialization and configuration module.

This module builds the application:
- Exception handler registration
- Middleware registration in the correct order
- Built-in routes (hello world and health check)
- Route discovery and mounting of the endpoint modules

The module follows a layered middleware approach where middleware are
executed in reverse order of registration, ensuring proper request/response
processing flow.
"""

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse
from loguru import logger

from src.api.middleware.error_handler import (
    ErrorTranslationMiddleware,
    register_exception_handlers,
)
from src.api.middleware.request_context import RequestContextMiddleware
from src.api.middleware.request_logging import RequestLoggingMiddleware
from src.api.middleware.timing import TimingMiddleware
from src.api.routing import discover_routes, mount_routes
from src.api.utils.responses import ORJSONResponse
from src.core.config import Settings, get_settings
from src.core.logging import setup_logging


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Optional settings instance. If not provided, will use get_settings().

    Returns:
        FastAPI: Configured FastAPI application instance.

    Raises:
        RouteDiscoveryError: If the endpoints directory cannot be scanned.
    """
    if settings is None:
        settings = get_settings()

    setup_logging(settings)

    application = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description=settings.app_description,
        debug=settings.debug,
        docs_url=settings.docs_url,
        redoc_url=settings.redoc_url,
        openapi_url=settings.openapi_url,
        default_response_class=ORJSONResponse,
    )

    register_exception_handlers(application)

    # Order is important: middleware are executed in reverse order of registration
    # So the last middleware added is the first to process requests

    # 4. Error translation (innermost, catches whatever the routes raise)
    application.add_middleware(ErrorTranslationMiddleware)

    # 3. Request logging, debug mode only
    if settings.debug:
        logger.info("Debugging enabled")
        application.add_middleware(
            RequestLoggingMiddleware, log_config=settings.log_config
        )

    # 2. Timing fields for every JSON response, error responses included
    application.add_middleware(TimingMiddleware)

    # 1. Request context (creates correlation ID)
    application.add_middleware(RequestContextMiddleware)

    @application.get("/", response_class=PlainTextResponse)
    async def root() -> str:
        """Root endpoint returning a hello world message.

        Returns:
            str: Plain text greeting.
        """
        return "Hello World!"

    @application.get("/healthz")
    async def healthz() -> dict[str, str]:
        """Health check endpoint for monitoring and container orchestration.

        Returns:
            dict[str, str]: Always ``{"healthz": "OK"}`` while serving.
        """
        return {"healthz": "OK"}

    entries = discover_routes(
        settings.endpoints_dir, ignored_names=settings.ignored_endpoint_names
    )
    mount_routes(application, entries)

    logger.info(
        "Application created - {} v{} ({})",
        application.title,
        application.version,
        settings.environment,
    )

    return application
