"""Logging setup shared by the app factory and scripts.

Usage:
    from choir_attendance.common.logging_config import configure_logging

    configure_logging("INFO")
    logger = logging.getLogger(__name__)
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: Optional[str] = None) -> None:
    """Configure the root logger with a single console handler.

    Calling it again only adjusts the level.
    """
    log_level = getattr(logging, (level or "INFO").upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    if any(getattr(h, "_choir_attendance", False) for h in root_logger.handlers):
        for handler in root_logger.handlers:
            handler.setLevel(log_level)
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    handler._choir_attendance = True
    root_logger.addHandler(handler)

    # mysql-connector is chatty at DEBUG.
    logging.getLogger("mysql.connector").setLevel(logging.WARNING)
