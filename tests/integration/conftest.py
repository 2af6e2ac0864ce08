"""Shared fixtures for integration tests.

Applications are built with create_app and explicit Settings, so each test
controls its own endpoints tree and debug flag without touching the
environment.
"""

from collections.abc import AsyncGenerator, Awaitable, Callable
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from src.api.main import create_app
from src.core.config import Settings

SettingsClientFactoryType = Callable[[Settings], Awaitable[AsyncClient]]


def build_settings(**overrides: object) -> Settings:
    """Settings for tests, ignoring any local .env file."""
    return Settings(_env_file=None, **overrides)  # type: ignore[arg-type,call-arg]


@pytest.fixture
async def client_with_settings() -> AsyncGenerator[SettingsClientFactoryType]:
    """Factory fixture for creating test clients with custom settings.

    Usage:
        async def test_something(client_with_settings):
            settings = Settings(endpoints_dir=tmp_path, debug=False)
            client = await client_with_settings(settings)
    """
    clients = []

    async def _create_client(settings: Settings) -> AsyncClient:
        app = create_app(settings)
        transport = ASGITransport(app=app)
        client = AsyncClient(transport=transport, base_url="http://test")
        clients.append(client)
        return client

    yield _create_client

    # Cleanup all created clients
    for client in clients:
        await client.aclose()


@pytest.fixture
async def client(
    client_with_settings: SettingsClientFactoryType,
) -> AsyncClient:
    """Client for the application serving the bundled endpoints."""
    return await client_with_settings(build_settings())


@pytest.fixture
async def debug_client(
    client_with_settings: SettingsClientFactoryType,
) -> AsyncClient:
    """Client for the bundled application running in debug mode."""
    return await client_with_settings(build_settings(debug=True))


@pytest.fixture
def tree_settings() -> Callable[[Path], Settings]:
    """Build settings serving a custom endpoints tree."""

    def _create(root: Path) -> Settings:
        return build_settings(endpoints_dir=root)

    return _create
