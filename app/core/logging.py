"""
Structured logging configuration.
Every module logs through ``get_logger`` so extra fields render the same way.
"""

import logging
import sys
from typing import Optional

from app.core.config import settings


# Atributos padrão de um LogRecord; tudo fora disso veio via ``extra``
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "timestamp"}


class StructuredLogger:
    """Structured logger with consistent formatting and levels."""

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def debug(self, message: str, **kwargs):
        self.logger.debug(message, extra=kwargs)

    def info(self, message: str, **kwargs):
        self.logger.info(message, extra=kwargs)

    def warning(self, message: str, **kwargs):
        self.logger.warning(message, extra=kwargs)

    def error(self, message: str, exc: Optional[BaseException] = None, **kwargs):
        """Log error message; ``exc`` attaches the traceback."""
        self.logger.error(message, exc_info=exc, extra=kwargs)


class StructuredFormatter(logging.Formatter):
    """Renders ``[time] LEVEL name: message | key=value | ...``."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = self.formatTime(record, self.default_time_format)
        base = f"[{timestamp}] {record.levelname} {record.name}: {record.getMessage()}"

        extra_fields = [
            f"{key}={value}"
            for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRS
        ]
        if extra_fields:
            base = f"{base} | {' | '.join(extra_fields)}"

        if record.exc_info:
            base = f"{base}\n{self.formatException(record.exc_info)}"
        return base


def configure_logging(
    level: str = "INFO",
    format_type: str = "structured",
    enable_console: bool = True,
    enable_file: bool = False,
    log_file: Optional[str] = None,
) -> None:
    """
    Configure application-wide logging.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_type: Format type ('structured' or 'simple')
        enable_console: Enable console logging
        enable_file: Enable file logging
        log_file: Log file path (required if enable_file=True)
    """
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root_logger.setLevel(numeric_level)

    if format_type == "structured":
        formatter: logging.Formatter = StructuredFormatter()
    else:
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

    if enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    if enable_file and log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    # Bibliotecas barulhentas
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name: str) -> StructuredLogger:
    """Get a structured logger instance for the given name."""
    return StructuredLogger(name)


app_logger = get_logger("app")
db_logger = get_logger("db")
api_logger = get_logger("api")
revenue_logger = get_logger("revenue")


def init_app_logging():
    """Initialize application logging based on settings."""
    log_config = {
        "level": settings.LOG_LEVEL,
        "format_type": "structured",
        "enable_console": True,
        "enable_file": settings.LOG_TO_FILE,
        "log_file": settings.LOG_FILE_PATH,
    }

    configure_logging(**log_config)
    app_logger.info("Application logging initialized", **log_config)
