"""Centralized logging configuration."""

import logging
import sys
from typing import Optional

ROOT_LOGGER_NAME = "templar"
DEFAULT_LEVEL = "INFO"
FORMAT_STYLES = ("plain", "standard", "json")


def resolve_log_level(options: dict) -> str:
    """
    Work out the log level from the "options" settings and CLI flags.

    Flags win over an explicit level: verbose, then quiet, then info.
    With nothing set the level is INFO.

    Raises:
        ValueError: If log_level isn't a known level name
    """
    if options.get("verbose"):
        return "DEBUG"
    if options.get("quiet"):
        return "WARNING"
    if options.get("info"):
        return "INFO"

    level = options.get("log_level")
    if not level:
        return DEFAULT_LEVEL

    level = str(level).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"Invalid log level provided: {level}")
    return level


def setup_logging(
    level: str = DEFAULT_LEVEL, format_style: str = "plain", log_file: Optional[str] = None
) -> logging.Logger:
    """
    Configure logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        format_style: 'plain' for terminal output, 'standard' with timestamps,
            'json' for log collectors
        log_file: Optional file path to write logs

    Returns:
        The templar logger
    """
    if format_style == "json":
        fmt = '{"time": "%(asctime)s", "level": "%(levelname)s", "module": "%(name)s", "message": "%(message)s"}'
    elif format_style == "standard":
        fmt = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    else:
        # Command output - just the message
        fmt = "%(message)s"

    handlers = [logging.StreamHandler(sys.stdout)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=logging.WARNING,
        format=fmt,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,  # Override any existing config
    )

    # Third-party loggers stay at WARNING; only ours follow the option
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper()))
    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a module.

    Usage:
        from templar.utils.logging import get_logger
        logger = get_logger(__name__)
        logger.info("Something happened")
    """
    return logging.getLogger(name)
