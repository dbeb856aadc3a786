"""
Logging for the back-office stock services.

Every module logs through a named logger from get_logger(). The root
handler is installed once, on first import, and writes to stdout so the
API process and operator scripts share one format.

Request values (size codes, product names) reach log lines only through
sanitize_string_for_logging().
"""

import logging
import os
import sys
from functools import cache

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
# Vercel adds its own timestamps
LOG_FORMAT_SIMPLE = "%(levelname)s - %(name)s - %(message)s"


def _get_log_level() -> int:
    """LOG_LEVEL by name; unknown names fall back to INFO."""
    level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
    return getattr(logging, level_name, logging.INFO)


def _configure_root_logger() -> None:
    """Attach the stdout handler unless the host (pytest, uvicorn) already did."""
    root = logging.getLogger()
    if root.handlers:
        return

    level = _get_log_level()
    root.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    deployed = os.environ.get("VERCEL") == "1"
    handler.setFormatter(logging.Formatter(LOG_FORMAT_SIMPLE if deployed else LOG_FORMAT))
    root.addHandler(handler)

    # One request line per ledger page otherwise
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


_configure_root_logger()


@cache
def get_logger(name: str) -> logging.Logger:
    """Logger for a stock module, e.g. get_logger(__name__)."""
    return logging.getLogger(name)


def _escape_log_injection(value: str) -> str:
    # CWE-117: a size code like "M\nERROR ..." must not start a new log line
    return (
        value.replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
        .replace("\x00", "")
    )


def sanitize_string_for_logging(value: str | None, max_length: int = 50) -> str:
    """
    Make a request value safe to embed in a log message.

    Control characters are escaped and the result is cut to max_length
    (with a trailing "..."). Empty or missing values log as "N/A", which
    is how an unfiltered size shows up in stock lookup failures.
    """
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
    "sanitize_string_for_logging",
]
