"""Main entry point for running the TS-API FastAPI application."""

import sys

import uvicorn
from loguru import logger

from src.api.main import create_app
from src.core.config import get_settings
from src.core.exceptions import RouteDiscoveryError
from src.core.logging import setup_logging


def main() -> None:
    """Main entry point for the TS-API application."""
    settings = get_settings()

    # Setup logging first
    setup_logging(settings)

    # Configure uvicorn to use our logging
    log_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "handlers": {
            "default": {
                "class": "src.core.logging.InterceptHandler",
            },
        },
        "loggers": {
            "uvicorn": {"handlers": ["default"], "level": "INFO", "propagate": False},
            "uvicorn.error": {
                "handlers": ["default"],
                "level": "INFO",
                "propagate": False,
            },
            "uvicorn.access": {
                "handlers": ["default"],
                "level": "INFO",
                "propagate": False,
            },
        },
    }

    # Build the app once here so a missing endpoints directory stops startup
    try:
        app = create_app(settings)
    except RouteDiscoveryError as exc:
        logger.critical("Server cannot start: {}", exc)
        sys.exit(1)

    # When reload is enabled, we must pass the app factory as an import string
    if settings.debug:
        logger.info(
            f"Server running at http://{settings.host}:{settings.port} "
            "(development mode with auto-reload)"
        )
        uvicorn.run(
            "src.api.main:create_app",
            factory=True,
            host=settings.host,
            port=settings.port,
            reload=True,
            log_config=log_config,
        )
    else:
        logger.info(
            f"Server running at http://{settings.host}:{settings.port} "
            f"({settings.environment} mode)"
        )
        uvicorn.run(
            app,
            host=settings.host,
            port=settings.port,
            reload=False,
            log_config=log_config,
        )


if __name__ == "__main__":
    main()
