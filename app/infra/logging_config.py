"""
Logging setup shared by the API process and Celery workers.

Call LoggingConfig() once at startup; modules get loggers via get_logger().
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from app.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
ROOT_LOGGER_NAME = "billing_gateway"


class LoggingConfig:
    """Configure the root logger from settings. Safe to instantiate more than once."""

    _configured = False

    def __init__(self, level: Optional[str] = None) -> None:
        settings = get_settings()
        self.level = (level or settings.log_level or "INFO").upper()
        self._configure()

    def _configure(self) -> None:
        root = logging.getLogger()
        root.setLevel(self.level)
        if LoggingConfig._configured:
            return
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        # urllib3 logs every request at DEBUG; keep billing calls readable
        logging.getLogger("urllib3").setLevel(logging.WARNING)
        LoggingConfig._configured = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger under the service namespace."""
    if not name:
        return logging.getLogger(ROOT_LOGGER_NAME)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
