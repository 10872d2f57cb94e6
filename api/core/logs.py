"""
Process-wide logging setup.
"""

from __future__ import annotations

import logging

from . import settings

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def configure_logging(level: str | None = None) -> None:
    """
    Install a stream handler on the root logger (no-op if one is already set).
    """
    logging.basicConfig(level=level or settings.log_level(), format=LOG_FORMAT)
