"""Logging setup for tbgen."""

from __future__ import annotations

import logging

from tbgen.core.config import Settings, get_settings

ROOT_LOGGER = "tbgen"


def configure_logging(settings: Settings | None = None) -> logging.Logger:
    """
    Attach a single stream handler to the "tbgen" logger.

    Safe to call repeatedly; the level is refreshed but no extra handler is added.
    """
    settings = settings or get_settings()
    logger = logging.getLogger(ROOT_LOGGER)
    level = logging.DEBUG if settings.DEBUG else settings.LOG_LEVEL.upper()
    logger.setLevel(level)

    if not any(getattr(h, "_tbgen", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(settings.LOG_FORMAT))
        handler._tbgen = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    return logger
