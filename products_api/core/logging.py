from __future__ import annotations

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"

# Driver loggers that are chatty at INFO/DEBUG (server selection, heartbeats).
_NOISY_LOGGERS = ("pymongo", "motor")


def configure_logging(level: str = "INFO") -> None:
    """Send service logs to stdout at `level`; no-op if handlers already exist."""
    root = logging.getLogger()
    if root.handlers:
        return

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT, stream=sys.stdout)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(name or "products_api")
