"""Logging setup shared by the API process and scripts."""

import logging
import sys


LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO") -> None:
    """Attach a single stdout handler to the ``pawsocial`` logger tree."""
    logger = logging.getLogger("pawsocial")
    logger.setLevel(level.upper())

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)


def format_operation(operation: str, status: str = "success", **details) -> str:
    """Render ``operation=... | status=... | key=value`` log lines."""
    parts = [f"operation={operation}", f"status={status}"]
    if details:
        parts.append(" ".join(f"{k}={v}" for k, v in details.items()))
    return " | ".join(parts)
