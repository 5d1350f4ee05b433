"""Logging setup for the narration service (loguru sinks plus bound context loggers)."""

import sys
from pathlib import Path
from typing import Any, Optional

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message} | {extra}"


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[Path] = None,
    log_format: str = "text",
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> None:
    """
    Configure console and optional file sinks.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional path to a rotating log file
        log_format: "text" for human-readable lines, "json" for one JSON record per line
        rotation: Log rotation size
        retention: Log retention period
    """
    serialize = log_format.lower() == "json"

    logger.remove()

    if serialize:
        logger.add(sys.stderr, level=log_level, serialize=True)
    else:
        logger.add(sys.stderr, format=CONSOLE_FORMAT, level=log_level, colorize=True)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            format=FILE_FORMAT,
            level=log_level,
            rotation=rotation,
            retention=retention,
            compression="zip",
            serialize=serialize,
        )


def setup_logging_from_settings(settings: Any) -> None:
    """Apply the logging fields of a Settings instance."""
    log_file = Path(settings.log_file) if settings.log_file else None
    setup_logging(log_level=settings.log_level, log_file=log_file, log_format=settings.log_format)


def get_logger(name: str, **context: Any) -> Any:
    """
    Get a logger bound to a name and optional context.

    Args:
        name: Logger name (typically __name__)
        **context: Extra fields such as narration_id or voice_id

    Returns:
        Logger instance with bound context
    """
    return logger.bind(name=name, **context)


setup_logging()
