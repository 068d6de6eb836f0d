import logging
import sys

from core.config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

_configured = False


def setup_logger(name: str = None) -> logging.Logger:
    """Configure the root handler once and hand back a named logger."""
    global _configured
    if not _configured:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root = logging.getLogger()
        root.addHandler(handler)
        root.setLevel(LOG_LEVEL.upper())

        # httpx logs every request URL at INFO, and Bot API URLs carry the token
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)
        _configured = True

    return logging.getLogger(name)
