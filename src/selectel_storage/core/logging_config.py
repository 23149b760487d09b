"""
Centralized structlog configuration for the storage client.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import structlog


LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def _shared_processors(utc: bool) -> list:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S.%f", utc=utc),
        structlog.processors.CallsiteParameterAdder(
            [
                structlog.processors.CallsiteParameter.MODULE,
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
                structlog.processors.CallsiteParameter.THREAD_NAME,
            ]
        ),
    ]


def configure_structlog(log_level: str = "INFO", enable_file_logging: bool = False,
                        log_dir: str = "logs") -> None:
    """
    Configure structlog with color-coded console output or JSON file logging.

    Args:
        log_level: Log level (DEBUG, INFO, WARN, ERROR, CRITICAL)
        enable_file_logging: Write JSON lines to a dated file instead of the console
        log_dir: Directory for log files
    """
    log_level_int = LEVEL_MAP.get(log_level.upper(), logging.INFO)

    if not enable_file_logging:
        logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level_int)
        structlog.configure(
            processors=_shared_processors(utc=False) + [structlog.dev.ConsoleRenderer(colors=True)],
            wrapper_class=structlog.make_filtering_bound_logger(log_level_int),
            context_class=dict,
            logger_factory=structlog.PrintLoggerFactory(),
            cache_logger_on_first_use=True,
        )
        return

    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)
    log_file = log_path / f"selectel_storage_{datetime.now().strftime('%Y%m%d')}.log"

    file_handler = logging.FileHandler(log_file)
    file_handler.setLevel(log_level_int)
    file_handler.setFormatter(logging.Formatter("%(message)s"))
    root = logging.getLogger()
    root.setLevel(log_level_int)
    root.addHandler(file_handler)

    structlog.configure(
        processors=_shared_processors(utc=True) + [structlog.processors.JSONRenderer()],
        wrapper_class=structlog.make_filtering_bound_logger(log_level_int),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def mask_secret(value: Optional[str]) -> str:
    """Mask a credential for log output, keeping the first four characters."""
    if not value:
        return "***"
    return f"{value[:4]}***" if len(value) > 4 else "***"
