from __future__ import annotations

import logging
from typing import Optional

from .config import EngineConfig, load_config

_LOGGER_NAME = "wellpulse"
_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(config: Optional[EngineConfig] = None) -> logging.Logger:
    """Apply WELLPULSE_LOG_LEVEL to the package logger.

    Adds a stream handler only when the host application has not configured
    one, so embedding services keep control of their own handlers.
    """
    resolved = config or load_config()
    level = logging.getLevelName(resolved.WELLPULSE_LOG_LEVEL)
    if not isinstance(level, int):
        level = logging.INFO

    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    if not logger.handlers and not logging.getLogger().handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
    return logger
