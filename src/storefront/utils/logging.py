"""Logging for the storefront.

The standard library routes records (stdout, plus rotating files when
``LOG_DIR`` is set) and structlog renders them: a coloured console renderer
with Rich tracebacks during development, one JSON object per line in
production and staging.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path

import structlog

_LEVELS_BY_ENVIRONMENT = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}

_MACHINE_READABLE = {"production", "staging"}

# Chatty libraries that only matter when something is badly wrong
_QUIET_LOGGERS = ("asyncio", "httpx", "protean", "uvicorn.access")

_MAX_LOG_BYTES = 10 * 1024 * 1024
_LOG_BACKUPS = 5


def get_environment() -> str:
    """Name of the running environment, lower-cased."""
    return (os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()


def get_log_level() -> str:
    """``LOG_LEVEL`` if set, otherwise the default for the environment."""
    default = _LEVELS_BY_ENVIRONMENT.get(get_environment(), "INFO")
    return os.getenv("LOG_LEVEL", default).upper()


def _rotating_handler(path: Path, level: int | str) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=_MAX_LOG_BYTES,
        backupCount=_LOG_BACKUPS,
        encoding="utf-8",
    )
    handler.setLevel(level)
    return handler


def _route_records(level: str, log_dir: str | None) -> None:
    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [logging.StreamHandler(sys.stdout)]

    if log_dir:
        directory = Path(log_dir)
        directory.mkdir(parents=True, exist_ok=True)
        root.addHandler(_rotating_handler(directory / "storefront.log", level))
        root.addHandler(_rotating_handler(directory / "storefront_error.log", logging.ERROR))

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def _renderer(environment: str):
    if environment in _MACHINE_READABLE:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=sys.stdout.isatty(),
        exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=False, max_frames=4),
    )


def configure_logging(level: str | None = None, log_dir: str | None = None) -> None:
    """Configure record routing and structured rendering for the process."""
    _route_records(level or get_log_level(), log_dir or os.getenv("LOG_DIR"))

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            _renderer(get_environment()),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
