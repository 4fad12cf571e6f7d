"""
Structured Logging
==================

Structured JSON logging for the client built on structlog.

Library modules obtain loggers through :func:`get_logger`; those loggers wrap
the standard library logger of the same name, so they honour whatever levels
and handlers the host application configured. Applications that want the
full JSON pipeline with rotating log files call :meth:`LogManager.setup`.
"""

import logging
import os
import threading
from logging.handlers import RotatingFileHandler
from pathlib import Path

import structlog

_VALID_LEVELS = {"DEBUG", "INFO", "WARNING", "WARN", "ERROR", "CRITICAL", "FATAL"}

# Processor chain shared by get_logger() and LogManager.setup()
_PROCESSORS = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
    structlog.processors.JSONRenderer(),
]


def _validate_log_level(log_level: str) -> int:
    """
    Validate and convert log level string to numeric value.

    Raises:
        ValueError: If log_level is not a valid logging level name
    """
    level_name = str(log_level).upper()

    if level_name not in _VALID_LEVELS:
        raise ValueError(
            f"Invalid log level: '{log_level}'. "
            f"Must be one of: {', '.join(sorted(_VALID_LEVELS))}"
        )

    return getattr(logging, level_name)


def _resolve_log_directory(log_dir: str | Path | None) -> Path | None:
    """Return a writable log directory, or None when file logging is off."""
    candidate = log_dir or os.environ.get("ARANGO_LOG_DIR")
    if not candidate:
        return None

    path = Path(candidate)
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError:
        return None
    return path if os.access(path, os.W_OK) else None


# Global flag and lock for thread-safe initialization
_logging_initialized = False
_init_lock = threading.Lock()


class LogManager:
    """
    Process-wide logging configuration.

    Features:
    - Structured JSON logging
    - Optional log files with rotation
    - Bound context per client (endpoint, component)
    """

    @staticmethod
    def setup(log_level: str = "INFO", log_dir: str | Path | None = None) -> None:
        """
        Setup logging configuration. Later calls are no-ops.

        Args:
            log_level: Root log level
            log_dir: Directory for rotating log files; falls back to the
                ARANGO_LOG_DIR environment variable, no files when neither is set
        """
        global _logging_initialized

        if _logging_initialized:
            return

        with _init_lock:
            if _logging_initialized:
                return

            numeric_level = _validate_log_level(log_level)
            directory = _resolve_log_directory(log_dir)

            logging.basicConfig(level=numeric_level, format='%(message)s')
            root_logger = logging.getLogger()
            root_logger.setLevel(numeric_level)

            if directory is not None:
                # Main log file with rotation (10MB, keep 5 backups)
                main_handler = RotatingFileHandler(
                    directory / "arangodb_http.log",
                    maxBytes=10_485_760,
                    backupCount=5
                )
                main_handler.setLevel(numeric_level)
                root_logger.addHandler(main_handler)

                # Error log file (10MB, keep 3 backups)
                error_handler = RotatingFileHandler(
                    directory / "errors.log",
                    maxBytes=10_485_760,
                    backupCount=3
                )
                error_handler.setLevel(logging.ERROR)
                root_logger.addHandler(error_handler)

            structlog.configure(
                processors=_PROCESSORS,
                context_class=dict,
                logger_factory=structlog.stdlib.LoggerFactory(),
                wrapper_class=structlog.stdlib.BoundLogger,
                cache_logger_on_first_use=True,
            )

            _logging_initialized = True

            get_logger(__name__).info(
                "logging_initialized",
                log_dir=str(directory) if directory else None,
                level=log_level,
            )

    @staticmethod
    def is_initialized() -> bool:
        return _logging_initialized


def get_logger(name: str, **context):
    """
    Get a structured logger bound to ``context``.

    Args:
        name: Standard library logger name (usually ``__name__``)
        **context: Key/value pairs attached to every event

    Returns:
        structlog BoundLogger writing through ``logging.getLogger(name)``
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
    ).bind(**context)
