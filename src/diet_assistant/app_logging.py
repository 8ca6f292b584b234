"""Logging setup for the diet assistant service."""

import logging

LOGGER_NAME = "diet_assistant"
LOG_FORMAT = "%(levelname)s: %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Install one stream handler on the package logger.

    Repeated calls only update the level. Unknown level names mean ``INFO``.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.getLevelNamesMapping().get(level.upper(), logging.INFO))
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
