"""Process-wide logging setup."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Attach a stream handler to the root logger. No-op if one is already set."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
