"""Logging helpers."""

from __future__ import annotations

import logging
from typing import Optional

_LOGGING_CONFIGURED = False


def get_logger(name: Optional[str] = None) -> logging.Logger:
    global _LOGGING_CONFIGURED
    if not _LOGGING_CONFIGURED:
        configure_logging()
    return logging.getLogger(name)


def configure_logging(level: str = "INFO") -> None:
    """Install the root handler once and (re)apply ``level``."""
    global _LOGGING_CONFIGURED
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        resolved = logging.INFO
    if not _LOGGING_CONFIGURED:
        logging.basicConfig(
            level=resolved,
            format="[%(asctime)s] %(levelname)s %(name)s - %(message)s",
        )
        _LOGGING_CONFIGURED = True
    logging.getLogger().setLevel(resolved)
