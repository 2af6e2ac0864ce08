"""Unit tests for main.py module."""

from pathlib import Path

import pytest
from pytest_mock import MockType

import main
from src.core.config import Settings
from src.core.exceptions import RouteDiscoveryError


@pytest.mark.unit
class TestMainFunction:
    """Test class for main() function and module execution."""

    def test_main_loads_settings_and_sets_up_logging(
        self,
        mock_main_dependencies: dict[str, MockType],
        mock_settings: Settings,
    ) -> None:
        """Verify that main() loads settings, logging and builds the app."""
        main.main()

        mock_main_dependencies["get_settings"].assert_called_once()
        mock_main_dependencies["setup_logging"].assert_called_once_with(mock_settings)
        mock_main_dependencies["create_app"].assert_called_once_with(mock_settings)

    @pytest.mark.parametrize(("host", "port"), [("127.0.0.1", 3000), ("0.0.0.0", 8080)])  # noqa: S104
    def test_host_and_port_come_from_settings(
        self,
        mock_main_dependencies: dict[str, MockType],
        mock_settings: Settings,
        host: str,
        port: int,
    ) -> None:
        """Verify uvicorn binds to the configured host and port."""
        mock_settings.host = host
        mock_settings.port = port

        main.main()

        call_kwargs = mock_main_dependencies["uvicorn_run"].call_args.kwargs
        assert call_kwargs["host"] == host
        assert call_kwargs["port"] == port

    def test_main_configures_uvicorn_logging_correctly(
        self,
        mock_main_dependencies: dict[str, MockType],
    ) -> None:
        """Verify uvicorn logs are routed through the intercept handler."""
        main.main()

        log_config = mock_main_dependencies["uvicorn_run"].call_args.kwargs[
            "log_config"
        ]

        assert log_config["version"] == 1
        assert log_config["disable_existing_loggers"] is False
        assert (
            log_config["handlers"]["default"]["class"]
            == "src.core.logging.InterceptHandler"
        )
        for logger_name in ["uvicorn", "uvicorn.error", "uvicorn.access"]:
            logger_config = log_config["loggers"][logger_name]
            assert logger_config["handlers"] == ["default"]
            assert logger_config["level"] == "INFO"
            assert logger_config["propagate"] is False

    def test_production_mode_serves_built_app(
        self,
        mock_main_dependencies: dict[str, MockType],
        mock_settings: Settings,
    ) -> None:
        """Verify the app built at startup is handed to uvicorn."""
        mock_settings.debug = False

        main.main()

        call_args = mock_main_dependencies["uvicorn_run"].call_args
        assert call_args.args[0] is mock_main_dependencies["create_app"].return_value
        assert call_args.kwargs["reload"] is False
        log_message = mock_main_dependencies["logger"].info.call_args.args[0]
        assert "development mode" in log_message

    def test_debug_mode_uses_factory_with_reload(
        self,
        mock_main_dependencies: dict[str, MockType],
        mock_settings: Settings,
    ) -> None:
        """Verify debug mode reloads through the application factory."""
        mock_settings.debug = True

        main.main()

        call_args = mock_main_dependencies["uvicorn_run"].call_args
        assert call_args.args[0] == "src.api.main:create_app"
        assert call_args.kwargs["factory"] is True
        assert call_args.kwargs["reload"] is True
        log_message = mock_main_dependencies["logger"].info.call_args.args[0]
        assert "auto-reload" in log_message

    def test_route_discovery_failure_exits(
        self,
        mock_main_dependencies: dict[str, MockType],
    ) -> None:
        """Verify the server does not start without a route table."""
        mock_main_dependencies["create_app"].side_effect = RouteDiscoveryError(
            Path("/missing"), "directory does not exist"
        )

        with pytest.raises(SystemExit) as exc_info:
            main.main()

        assert exc_info.value.code == 1
        mock_main_dependencies["logger"].critical.assert_called_once()
        mock_main_dependencies["uvicorn_run"].assert_not_called()

    def test_main_module_execution(self) -> None:
        """Verify the if __name__ == '__main__' block calls main()."""
        content = Path(main.__file__).read_text(encoding="utf-8")

        guard, _, body = content.partition('if __name__ == "__main__":')

        assert guard
        assert body.strip() == "main()"
