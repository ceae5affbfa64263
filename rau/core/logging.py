"""
Centralized Logging Configuration.

All modules log through structlog loggers from get_logger(). setup_logging()
wires them to the stdlib root logger using the validated logging.yaml
settings (AppConfig.logging).

Console output goes to stderr; stdout is reserved for command output,
which completion scripts parse.

Structured fields in every JSON log record:
    timestamp   - ISO 8601 UTC timestamp
    level       - Log level (debug, info, warning, error, critical)
    logger      - Module path (e.g., rau.cli.client)
    event       - Log message
    func_name   - Function that emitted the log
    lineno      - Line number in source file
    source      - Entry command, bound by it as a context variable (cli, tools, shell)

Usage:
    from rau.core.logging import get_logger, setup_logging

    setup_logging(level="DEBUG")
    structlog.contextvars.bind_contextvars(source="cli")

    logger = get_logger(__name__)
    logger.debug("API request", method="GET", path="/appX/Clients")
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

import structlog
from structlog.typing import Processor

from rau.core.config import find_config_root, get_app_config
from rau.core.config_schema import FileHandlerSchema, LoggingSchema

QUIET_LOGGERS = ("httpx", "httpcore")


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ],
        ),
    ]


def _formatter(format_type: str, pre_chain: list[Processor]) -> structlog.stdlib.ProcessorFormatter:
    """Build a stdlib formatter rendering either JSON lines or console text."""
    if format_type == "json":
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    return structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=pre_chain)


def _resolve_log_path(configured_path: str) -> Path:
    """Resolve the log file path relative to the configuration root."""
    path = Path(configured_path).expanduser()
    if path.is_absolute():
        return path
    return find_config_root() / path


def _file_handler(settings: FileHandlerSchema) -> RotatingFileHandler:
    log_path = _resolve_log_path(settings.path)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    return RotatingFileHandler(
        filename=str(log_path),
        maxBytes=settings.max_bytes,
        backupCount=settings.backup_count,
        encoding="utf-8",
    )


def setup_logging(
    level: str | None = None,
    format_type: str | None = None,
    enable_console: bool | None = None,
    enable_file_logging: bool | None = None,
    config: LoggingSchema | None = None,
) -> None:
    """
    Configure structured logging for the application.

    Keyword overrides take precedence over the settings; None keeps the
    configured value.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_type: Console format ('json' or 'console')
        enable_console: Whether to log to stderr
        enable_file_logging: Whether to write the rotating JSONL file
        config: Logging settings; defaults to get_app_config().logging

    Raises:
        ConfigurationError: If the settings cannot be loaded
    """
    if config is None:
        config = get_app_config().logging

    console_format = format_type or config.format
    console_enabled = config.handlers.console.enabled if enable_console is None else enable_console
    file_enabled = config.handlers.file.enabled if enable_file_logging is None else enable_file_logging

    shared = _shared_processors()
    structlog.configure(
        processors=shared + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, (level or config.level).upper()))
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if console_enabled:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(_formatter(console_format, shared))
        root_logger.addHandler(console_handler)

    if file_enabled:
        file_handler = _file_handler(config.handlers.file)
        file_handler.setFormatter(_formatter("json", shared))
        root_logger.addHandler(file_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> Any:
    """
    Get a logger instance for the given name.

    Args:
        name: Logger name, typically __name__

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)
