"""Logging setup for docrender.

Renderers log through per-class loggers below the ``docrender`` package
logger: unsupported blocks at DEBUG, unresolved image references at WARNING.
Nothing is printed until an application calls ``setup_logging`` (directly or
through ``RenderConfig.configure_logging``).
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

PACKAGE_LOGGER = "docrender"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _resolve_level(level: Union[str, int]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


def _build_handlers(
    log_file: Optional[Union[str, Path]], formatter: logging.Formatter
) -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def setup_logging(
    level: Union[str, int] = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    format_string: Optional[str] = None,
    force: bool = False,
) -> logging.Logger:
    """
    Attach console and optional file handlers to the ``docrender`` logger.

    Calling it again without ``force`` keeps the existing handlers and only
    changes their level.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL) or number
        log_file: Optional file that also receives log records
        format_string: Optional format for log records
        force: Replace handlers installed by an earlier call

    Returns:
        The package logger

    Raises:
        ValueError: If the level name is unknown
    """
    numeric_level = _resolve_level(level)
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(numeric_level)

    if logger.handlers and not force:
        for handler in logger.handlers:
            handler.setLevel(numeric_level)
        return logger

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)
    for handler in _build_handlers(log_file, formatter):
        handler.setLevel(numeric_level)
        logger.addHandler(handler)

    logger.propagate = False

    return logger
