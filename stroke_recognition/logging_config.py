"""Logging setup for applications embedding the recognition engine.

Library modules only create loggers with logging.getLogger(__name__); the
host application calls configure_logging() once at startup.
"""

from __future__ import annotations

import logging

LOG_FORMAT = '%(asctime)s %(levelname)-8s [%(name)s] %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def configure_logging(level: str = 'INFO', log_file: str | None = None) -> None:
    """Configure application-wide logging.

    Args:
        level: Log level string ('DEBUG', 'INFO', 'WARNING', 'ERROR').
            Unknown names fall back to INFO.
        log_file: Optional path to log file. If None, logs to stderr only.

    Example:
        Configure at startup::

            from stroke_recognition.logging_config import configure_logging
            configure_logging(level='DEBUG', log_file='recognition.log')
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    logging.getLogger(__name__).debug("Logging configured at level %s", level.upper())
