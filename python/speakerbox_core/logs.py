"""Logging setup for command-line and service entry points."""

from __future__ import annotations

import logging
from pathlib import Path

LOGGER_NAME = "speakerbox_core"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_HANDLER_MARKER = "_speakerbox_handler"


def configure_logging(level: str | int = "INFO", log_file: str | Path | None = None) -> logging.Logger:
    """Attach a single stream or file handler to the package logger.

    Calling this again replaces the handler installed by a previous call, so
    entry points can reconfigure without duplicating output.
    """

    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            logger.removeHandler(handler)
            handler.close()

    handler: logging.Handler
    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, encoding="utf-8")
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    setattr(handler, _HANDLER_MARKER, True)

    logger.addHandler(handler)
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    return logger


__all__ = ["configure_logging", "LOGGER_NAME"]
