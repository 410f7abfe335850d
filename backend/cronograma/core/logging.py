from __future__ import annotations

import logging

from cronograma.core.config import Settings

ROOT_LOGGER_NAME = "cronograma"
_HANDLER_NAME = "cronograma-stream"


def configure_logging(settings: Settings) -> logging.Logger:
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(settings.log_level)
    for handler in logger.handlers:
        if handler.get_name() == _HANDLER_NAME:
            handler.setFormatter(logging.Formatter(settings.log_format))
            return logger

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(settings.log_format))
    logger.addHandler(handler)
    return logger
