"""Observability logger utilities."""

from __future__ import annotations

import logging
from typing import Optional


def get_logger(name: str = "doc-ingest", log_level: Optional[str] = None) -> logging.Logger:
    """Get a configured logger.

    Args:
        name: Logger name.
        log_level: Optional log level string (e.g., "INFO"). Unknown
            level names fall back to INFO.

    Returns:
        Configured logger instance.
    """

    if log_level:
        level = getattr(logging, log_level.upper(), logging.INFO)
    else:
        level = logging.INFO

    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    logger = logging.getLogger(name)
    logger.setLevel(level)
    return logger
