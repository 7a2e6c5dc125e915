"""
Logging setup for the shop core.

Usage:
    from shop.logging import get_logger
    logger = get_logger(__name__)

LOG_LEVEL picks the level (default INFO). Production deployments
(ENVIRONMENT=production) drop the timestamp since the platform adds its own.
"""

import logging
import os
import sys
from functools import cache

_FORMATS = {
    "production": "%(levelname)s - %(name)s - %(message)s",
    "default": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
}

# Characters that could forge extra log lines (CWE-117)
_LOG_ESCAPES = str.maketrans({"\n": "\\n", "\r": "\\r", "\t": "\\t", "\x00": ""})


def _configure_root_logger() -> None:
    root = logging.getLogger()
    if root.handlers:
        return

    level = getattr(logging, os.environ.get("LOG_LEVEL", "INFO").upper(), logging.INFO)
    environment = os.environ.get("ENVIRONMENT", "").lower()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_FORMATS.get(environment, _FORMATS["default"])))
    root.setLevel(level)
    root.addHandler(handler)

    # Every cart call goes through httpx; keep its request lines out of INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


_configure_root_logger()


@cache
def get_logger(name: str) -> logging.Logger:
    """Module logger; call with __name__."""
    return logging.getLogger(name)


def sanitize_id_for_logging(id_value: str | None) -> str:
    """
    Escape control characters in a cart/item id and keep its first 8 chars.

    Returns:
        Shortened id, or "N/A" if empty
    """
    if not id_value:
        return "N/A"
    return str(id_value).translate(_LOG_ESCAPES)[:8]


__all__ = ["get_logger", "sanitize_id_for_logging"]
