import json
import logging
import os
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from typing import Dict, List, Optional, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from .settings import FormFileSettings

LOGGER_NAME = "formfile"

# ANSI color codes
COLOR_CODES = {
    "DEBUG": "\033[36m",     # Cyan
    "INFO": "\033[32m",      # Green
    "WARNING": "\033[33m",   # Yellow
    "ERROR": "\033[31m",     # Red
    "CRITICAL": "\033[41m",  # Red background
    "RESET": "\033[0m",      # Reset
}

# Extras attached by the conversion helpers, rendered as context
CONTEXT_FIELDS = ("upload_name", "content_type", "path", "size")


def _record_context(record: logging.LogRecord) -> List[Tuple[str, str]]:
    return [
        (field, str(getattr(record, field)))
        for field in CONTEXT_FIELDS
        if hasattr(record, field)
    ]


# ------------------ FORMATTERS ------------------

class JSONFormatter(logging.Formatter):
    """Custom formatter for structured (JSON) logs."""
    def __init__(self, default_context: Optional[Dict[str, str]] = None, show_environment: bool = True):
        super().__init__()
        self.default_context = default_context or {}
        self.show_environment = show_environment

    def format(self, record):
        log_record = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
            "logger": record.name,
            "level": record.levelname,
            "message": record.getMessage(),
        }

        # Merge default and dynamic context
        context = {**self.default_context}
        context.update(_record_context(record))
        if self.show_environment and hasattr(record, "environment"):
            context["environment"] = record.environment

        if context:
            log_record["context"] = context

        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_record)


class TextFormatter(logging.Formatter):
    """Human-readable text formatter."""
    def __init__(self, default_context: Optional[Dict[str, str]] = None, show_environment: bool = False, colored: bool = True):
        super().__init__(
            fmt="%(asctime)s %(levelname)s [%(name)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        self.default_context = default_context or {}
        self.show_environment = show_environment
        self.colored = colored

    def format(self, record):
        levelname = record.levelname
        if self.colored and levelname in COLOR_CODES:
            color = COLOR_CODES[levelname]
            record.levelname = f"\u001b[1m{color}{levelname}{COLOR_CODES['RESET']}\u001b[0m"

        try:
            base = super().format(record)
        finally:
            # other handlers share the record
            record.levelname = levelname

        context = [f"{key}={value}" for key, value in _record_context(record)]
        if self.show_environment and hasattr(record, "environment"):
            context.append(f"env={record.environment}")

        for key, value in self.default_context.items():
            context.append(f"{key}={value}")

        if context:
            base += " " + " ".join(context)
        return base


# ------------------ LOGGER CLASS ------------------

class EnvironmentFilter(logging.Filter):
    """
    A Filter that stamps the configured 'environment' on every log record.

    Attached to the logger a record is created on, so every handler sees it,
    including handlers further up the hierarchy.
    """
    environment = "production"

    def filter(self, record):
        if not hasattr(record, "environment"):
            record.environment = EnvironmentFilter.environment
        return True


def get_logger(name: str) -> logging.Logger:
    """logging.getLogger() with the environment filter attached once."""
    logger = logging.getLogger(name)
    if not any(isinstance(f, EnvironmentFilter) for f in logger.filters):
        logger.addFilter(EnvironmentFilter())
    return logger


class Logger:
    """
    Configurable logger factory that supports JSON or text output,
    file or console handlers, and contextual metadata.
    """

    def __new__(
        cls,
        name: str = LOGGER_NAME,
        log_file: Optional[str] = None,
        level: int = logging.INFO,
        max_bytes: int = 5_000_000,
        backup_count: int = 3,
        json_logs: bool = True,
        to_console: bool = True,
        environment: str = "production",
        default_context: Optional[Dict[str, str]] = None,
        show_environment: bool = False,
        colored_console: bool = True,
    ) -> logging.Logger:
        """
        Returns a configured logger instance directly.

        The environment applies to every logger obtained through get_logger().
        """
        EnvironmentFilter.environment = environment

        instance = super(Logger, cls).__new__(cls)
        return instance._create_logger(
            name=name,
            log_file=log_file,
            level=level,
            max_bytes=max_bytes,
            backup_count=backup_count,
            json_logs=json_logs,
            to_console=to_console,
            default_context=default_context,
            show_environment=show_environment,
            colored_console=colored_console,
        )

    def _create_logger(
        self,
        name: str,
        log_file: Optional[str],
        level: int,
        max_bytes: int,
        backup_count: int,
        json_logs: bool,
        to_console: bool,
        default_context: Optional[Dict[str, str]],
        show_environment: bool,
        colored_console: bool,
    ) -> logging.Logger:
        """Internal method to configure and return the base logger."""
        logger = get_logger(name)
        logger.setLevel(level)
        logger.propagate = False
        _remove_handlers(logger)

        default_context = default_context or {}

        # File handler, never colored
        if log_file:
            os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
            file_handler = RotatingFileHandler(
                log_file, maxBytes=max_bytes, backupCount=backup_count
            )
            file_handler.setFormatter(
                JSONFormatter(default_context, show_environment)
                if json_logs
                else TextFormatter(default_context, show_environment, colored=False)
            )
            logger.addHandler(file_handler)

        # Console handler
        if to_console:
            console_handler = logging.StreamHandler()
            console_handler.setFormatter(
                JSONFormatter(default_context, show_environment)
                if json_logs
                else TextFormatter(default_context, show_environment, colored_console)
            )
            logger.addHandler(console_handler)

        return logger


def _remove_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def configure_logging(settings: "FormFileSettings") -> logging.Logger:
    """Wire the package logger from settings. Child loggers propagate to it."""
    return Logger(
        name=LOGGER_NAME,
        log_file=settings.log_file,
        level=logging.getLevelName(settings.log_level),
        json_logs=settings.json_logs,
        environment=settings.environment,
        show_environment=settings.show_environment,
    )


def reset_logging() -> logging.Logger:
    """Put the package logger back in its unconfigured state: no handlers, propagating to root."""
    EnvironmentFilter.environment = "production"
    logger = get_logger(LOGGER_NAME)
    _remove_handlers(logger)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    return logger
