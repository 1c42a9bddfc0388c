"""Logging setup for the membership package."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "info") -> logging.Logger:
    """Configure the package logger.

    Args:
        level: Level name ('debug', 'info', 'warning', ...), case-insensitive

    Returns:
        The 'membership' logger

    Raises:
        ValueError: If level is not a known logging level name
    """
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level}")

    logger = logging.getLogger("membership")
    logger.setLevel(numeric)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger
