"""Centralised logging configuration for the acquisition pipeline."""

from __future__ import annotations

import logging
import sys
from typing import Optional, Union

LOGGER_NAME = "profile_acquisition"

_configured: Optional[logging.Logger] = None


def setup_logging(level: Union[int, str] = logging.INFO, name: str = LOGGER_NAME) -> logging.Logger:
    """Install a single stdout handler on the package logger.

    Calling this more than once only adjusts the level; handlers are never
    duplicated.  Modules obtain their own loggers with
    ``logging.getLogger(__name__)`` and inherit this configuration.
    """
    global _configured

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    if _configured is not None:
        _configured.setLevel(level)
        for handler in _configured.handlers:
            handler.setLevel(level)
        return _configured

    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    # Format: [TIME] [LEVEL] [MODULE] Message
    handler.setFormatter(
        logging.Formatter(
            fmt="[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logger.addHandler(handler)

    _configured = logger
    return logger
