"""Structured logging built on Loguru.

This module configures the process-wide Loguru logger used by every layer
of the application.

Features:
- **API level**: Custom level between DEBUG and INFO for request logs
- **Context propagation**: Automatic inclusion of correlation IDs
- **Console output**: Development-friendly formatting with inline context
- **JSON output**: One JSON document per line for log collectors
- **File sinks**: Optional per-level files with daily rotation
- **Standard library integration**: Captures logs from all Python modules

Sinks are added with ``enqueue=True`` so that writing a log line never
blocks request handling.
"""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Callable
from typing import Any, Final, Protocol, cast

from loguru import logger

from src.core.config import get_settings


class _LoggingState:
    """Simple state holder to track if logging has been configured."""

    def __init__(self) -> None:
        self.configured = False


_state = _LoggingState()


class SettingsProtocol(Protocol):
    """Protocol for settings objects that setup_logging can accept."""

    @property
    def debug(self) -> bool:
        """Debug mode flag."""
        ...

    @property
    def log_config(self) -> Any:  # noqa: ANN401 - LogConfig or a stand-in
        """Log configuration."""
        ...


# Constants
API_LEVEL: Final[str] = "API"
API_LEVEL_NO: Final[int] = 15
DEFAULT_LOG_FORMAT: Final[str] = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "{message}"
)
CORRELATION_ID_DISPLAY_LENGTH: Final[int] = 8
MAX_FIELD_VALUE_LENGTH: Final[int] = 100
REDACTED: Final[str] = "[REDACTED]"


def register_log_levels() -> None:
    """Register the custom API level with Loguru if it is missing."""
    try:
        logger.level(API_LEVEL)
    except ValueError:
        logger.level(API_LEVEL, no=API_LEVEL_NO, color="<white><bg blue>")


# Context keys shown first, in this order, on console lines
PRIORITY_FIELDS: Final[tuple[str, ...]] = (
    "correlation_id",
    "method",
    "path",
    "status_code",
    "duration_ms",
)


def _escape(value: object) -> str:
    """Escape text so Loguru reads it as neither a format field nor a color tag."""
    return str(value).replace("{", "{{").replace("}", "}}").replace("<", r"\<")


def _display_value(key: str, value: object) -> str:
    """Shorten, suffix or redact a context value for the console.

    Args:
        key: Name of the context field.
        value: Its value.

    Returns:
        str: The text shown on the console line (unescaped).
    """
    text = str(value)
    if key == "correlation_id":
        return text[:CORRELATION_ID_DISPLAY_LENGTH]
    if key == "duration_ms":
        return f"{text}ms"
    if key in get_settings().log_config.sensitive_fields:
        return REDACTED
    if len(text) > MAX_FIELD_VALUE_LENGTH:
        return text[: MAX_FIELD_VALUE_LENGTH - 3] + "..."
    return text


def _context_parts(extra: dict[str, Any]) -> list[str]:
    """Render the record's context: priority fields first, then the rest."""
    visible = {
        key: value
        for key, value in extra.items()
        if value is not None and not key.startswith("_")
    }
    parts = [
        f"<yellow>{_escape(_display_value(key, visible[key]))}</yellow>"
        for key in PRIORITY_FIELDS
        if key in visible
    ]
    parts.extend(
        f"<dim>{_escape(key)}={_escape(_display_value(key, value))}</dim>"
        for key, value in visible.items()
        if key not in PRIORITY_FIELDS
    )
    return parts


def format_console_with_context(record: dict[str, Any]) -> str:
    """Build the Loguru format string for one console line.

    The line reads ``time | level | location | [context] | message``, with
    the traceback underneath when the record carries an exception.

    Args:
        record: Loguru record to format.

    Returns:
        str: Loguru format string for this record.
    """
    try:
        timestamp = record["time"].strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
        location = f"{record['name']}:{record['function']}:{record['line']}"
        parts = [
            f"<green>{timestamp}</green>",
            f"<level>{record['level'].name: <8}</level>",
            f"<cyan>{_escape(location)}</cyan>",
        ]
        if context := _context_parts(record.get("extra", {})):
            parts.append(" ".join(f"[{part}]" for part in context))
        parts.append("{message}")
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        logger.trace(f"Failed to format log record: {e}")
        return DEFAULT_LOG_FORMAT + "\n{exception}"

    line = " | ".join(parts)
    if record.get("exception"):
        line += "\n{exception}"
    return line + "\n"


def serialize_for_json(record: dict[str, Any]) -> str:
    """Format log record as a single JSON line.

    Args:
        record: Loguru record to format.

    Returns:
        str: JSON-formatted log entry with newline.
    """
    log_entry: dict[str, Any] = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "message": record["message"],
        "logger": record["name"],
        "function": record["function"],
        "module": record["module"],
        "line": record["line"],
    }

    sensitive_fields = set(get_settings().log_config.sensitive_fields)
    if extra := record.get("extra", {}):
        for key, value in extra.items():
            if key.startswith("_") or key in log_entry:
                continue
            log_entry[key] = REDACTED if key in sensitive_fields else value

    if exc := record.get("exception"):
        log_entry["exception"] = {
            "type": exc.type.__name__ if exc.type else None,
            "value": str(exc.value) if exc.value else None,
        }

    return json.dumps(log_entry, default=str) + "\n"


class InterceptHandler(logging.Handler):
    """Intercept standard logging and redirect to Loguru.

    This handler captures logs from libraries using standard logging
    (uvicorn, asyncio) and forwards them to Loguru for consistent formatting.
    """

    def emit(self, record: logging.LogRecord) -> None:
        """Forward log record to Loguru.

        Args:
            record: Standard library LogRecord to forward.
        """
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def _level_filter(*levels: str) -> Callable[[dict[str, Any]], bool]:
    """Build a sink filter that only lets the given level names through."""
    allowed = set(levels)

    def _filter(record: dict[str, Any]) -> bool:
        return record["level"].name in allowed

    return _filter


def _add_file_sinks(settings: SettingsProtocol) -> None:
    """Add the per-level log files.

    Errors go to a single file; informational, API and debug records each
    get their own daily file, plus one daily file with everything.
    """
    log_config = settings.log_config
    log_dir = log_config.log_dir
    log_dir.mkdir(parents=True, exist_ok=True)

    common: dict[str, Any] = {
        "enqueue": True,
        "serialize": True,
        "backtrace": False,
        "diagnose": False,
    }

    logger.add(log_dir / "errors.log", level="ERROR", **common)

    daily_files = {
        "warn-info": ("INFO", _level_filter("INFO", "WARNING")),
        "api": (API_LEVEL, _level_filter(API_LEVEL)),
        "debug": ("DEBUG", _level_filter("DEBUG")),
    }
    for suffix, (level, level_filter) in daily_files.items():
        logger.add(
            log_dir / f"{{time:YYYY-MM-DD}} - {suffix}.log",
            level=level,
            filter=cast("Any", level_filter),
            rotation="00:00",
            retention=log_config.retention,
            **common,
        )

    logger.add(
        log_dir / "{time:YYYY-MM-DD} - general.log",
        level="DEBUG",
        rotation="00:00",
        retention=log_config.retention,
        **common,
    )


def console_level(settings: SettingsProtocol) -> str:
    """Return the level for the stdout sink.

    Debug mode lowers the configured level to API so request lines are
    printed; a more verbose configured level is kept as is.
    """
    level: str = settings.log_config.log_level
    if settings.debug and logger.level(level).no > API_LEVEL_NO:
        return API_LEVEL
    return level


def setup_logging(settings: SettingsProtocol) -> None:
    """Configure Loguru sinks for the application.

    Args:
        settings: Application settings containing log configuration.

    Note:
        This function ensures it's only called once using module state.
    """
    register_log_levels()

    if _state.configured:
        return

    logger.remove()

    formatter_type = settings.log_config.log_formatter_type or "console"
    level = console_level(settings)

    if formatter_type == "json":

        def structured_sink(message: object) -> None:
            """Write one JSON line per record to stdout."""
            record = getattr(message, "record", None)
            if record is not None:
                sys.stdout.write(serialize_for_json(record))
                sys.stdout.flush()

        logger.add(
            structured_sink,
            level=level,
            enqueue=True,
            diagnose=False,
            backtrace=False,
        )
    else:
        logger.add(
            sys.stdout,
            format=cast("Any", format_console_with_context),
            level=level,
            enqueue=True,
            colorize=True,
            diagnose=settings.debug,
            backtrace=settings.debug,
        )

    if settings.log_config.enable_file_logging:
        _add_file_sinks(settings)

    # Configure standard library logging to use Loguru
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    logger.info(
        "Logging configured with {} formatter",
        formatter_type,
        formatter_type=formatter_type,
        log_level=level,
    )

    _state.configured = True
