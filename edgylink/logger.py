# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

import logging

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from edgylink.config import LinkManySettings


ROOT_LOGGER_NAME = "edgylink"


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    TEXT = "text"
    TEXT_LIGHT = "text_light"


LOG_FORMATS = {
    LogFormat.TEXT: "%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
    LogFormat.TEXT_LIGHT: "%(levelname)s: %(message)s",
}


def setup_logging(settings: "LinkManySettings") -> logging.Logger:
    """
    Configure the ``edgylink`` logger tree from settings.

    A custom format string can be given instead of a ``LogFormat`` value.
    Calling it again replaces the handler installed by the previous call.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(LogLevel(settings.log_level).value)

    log_format = settings.log_format
    fmt = LOG_FORMATS[log_format] if isinstance(log_format, LogFormat) else log_format

    for handler in list(logger.handlers):
        if getattr(handler, "_edgylink_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt))
    handler._edgylink_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)

    return logger


__all__ = [
    "LogLevel",
    "LogFormat",
    "setup_logging",
]
