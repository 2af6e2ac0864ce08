"""Root conftest.py for the TS-API test suite.

This file contains project-wide fixtures and pytest configuration.
"""

import textwrap
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
from loguru import logger

from src.core.config import get_settings
from src.core.logging import register_log_levels, setup_logging

EndpointTreeFactory = Callable[[dict[str, str]], Path]


@pytest.fixture
def valid_endpoint_source() -> str:
    """Source of an endpoint module exporting a router with GET /ping."""
    return """
from fastapi import APIRouter

router = APIRouter()


@router.get("/ping")
async def ping() -> dict[str, str]:
    return {"pong": "ok"}
"""


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests that test individual components in isolation"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests that test multiple components"
    )


@pytest.fixture(scope="session", autouse=True)
def configure_logging() -> None:
    """Configure Loguru once so later setup_logging calls are no-ops."""
    setup_logging(get_settings())
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None]:
    """Clear the settings cache before and after each test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def log_records() -> Generator[list[dict[str, Any]]]:
    """Capture Loguru records emitted during the test.

    Yields:
        list[dict[str, Any]]: Raw Loguru records, in emission order.
    """
    register_log_levels()
    records: list[dict[str, Any]] = []
    handler_id = logger.add(
        lambda message: records.append(message.record), level="DEBUG"
    )
    yield records
    logger.remove(handler_id)


@pytest.fixture
def endpoint_tree(tmp_path: Path) -> EndpointTreeFactory:
    """Factory writing an endpoints directory from a mapping of files.

    Keys are paths relative to the endpoints root, values are file contents
    (dedented). The root is created even when the mapping is empty.

    Usage:
        def test_something(endpoint_tree):
            root = endpoint_tree({"examples/endpoint.py": VALID_ENDPOINT})
    """

    def _create(files: dict[str, str]) -> Path:
        root = tmp_path / "endpoints"
        root.mkdir(exist_ok=True)
        for relative, content in files.items():
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(content), encoding="utf-8")
        return root

    return _create
