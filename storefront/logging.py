"""
Logging setup shared by every storefront module.

The root logger gets one stdout handler the first time this module is
imported. LOG_LEVEL picks the level, LOG_FORMAT=simple drops timestamps.
"""

import logging
import os
import sys
from functools import cache

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FORMAT_SIMPLE = "%(levelname)s - %(name)s - %(message)s"

ID_LOG_LENGTH = 16


def _level_from_env() -> int:
    name = os.environ.get("LOG_LEVEL", "INFO").upper()
    return getattr(logging, name, logging.INFO)


def _configure_root_logger() -> None:
    root = logging.getLogger()
    if root.handlers:
        # Host (uvicorn, pytest) already set logging up
        return

    level = _level_from_env()
    root.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    simple = os.environ.get("LOG_FORMAT", "").lower() == "simple"
    handler.setFormatter(logging.Formatter(LOG_FORMAT_SIMPLE if simple else LOG_FORMAT))
    root.addHandler(handler)

    # One line per catalog request is noise at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


_configure_root_logger()


@cache
def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def _escape_log_injection(value: str) -> str:
    return (
        value.replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
        .replace("\x00", "")
    )


def sanitize_id_for_logging(id_value: str | int | None) -> str:
    """Product id as it may appear in a log line; ids arrive in request paths."""
    if id_value is None or id_value == "":
        return "N/A"
    return _escape_log_injection(str(id_value))[:ID_LOG_LENGTH]


def sanitize_string_for_logging(value: str | None, max_length: int = 50) -> str:
    """Free text (error messages, titles) escaped and cut to max_length."""
    if not value:
        return "N/A"
    safe_value = _escape_log_injection(str(value))
    if len(safe_value) <= max_length:
        return safe_value
    return safe_value[:max_length] + "..."


__all__ = [
    "LOG_FORMAT",
    "LOG_FORMAT_SIMPLE",
    "get_logger",
    "sanitize_id_for_logging",
    "sanitize_string_for_logging",
]
