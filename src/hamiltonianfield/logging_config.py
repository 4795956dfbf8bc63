"""
Logging Configuration
Console (and optionally file) output for everything under the 'hamiltonianfield' logger.
"""
import logging
import sys
from typing import Optional, Union

PACKAGE_LOGGER = "hamiltonianfield"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%H:%M:%S"


def _resolve_level(level: Union[int, str]) -> int:
    """Accept logging.DEBUG as well as "debug" / "DEBUG" from the command line."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown logging level: {level}")
    return resolved


def setup_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Attach handlers to the package logger. Safe to call repeatedly: previous
    handlers are dropped, so a second call never duplicates lines.

    Args:
        level: Logging level (e.g. logging.DEBUG, "INFO")
        log_file: Optional path; the file is truncated on every start.

    Returns:
        The configured package logger.
    """
    level = _resolve_level(level)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    logger.handlers.clear()

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.info(f"Logging initialized at {logging.getLevelName(level)}.")
    return logger
