"""
CFSlab Logging Configuration

Every module logs through a child of the ``cfslab`` logger obtained with
``get_logger``. Hyperslab reads and alignment decisions are logged at
DEBUG level; nothing is printed unless the application attaches a handler
or calls ``setup_logging``.
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional, TextIO, Union

from .config import LOGGER_NAME

LevelLike = Union[int, str]

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DEFAULT_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def _coerce_level(level: LevelLike, fallback: int) -> int:
    """Accept 'debug', 'DEBUG' or logging.DEBUG alike."""
    if isinstance(level, str):
        return getattr(logging, level.upper(), fallback)
    return level


def _build_handlers(
    stream: TextIO,
    log_file: Optional[Path],
    formatter: logging.Formatter,
    level: int,
) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(stream)]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
    return handlers


def get_logger(name: str) -> logging.Logger:
    """
    Logger for a package module.

    Args:
        name: Dotted module path below the package, e.g. "io.source"

    Returns:
        logging.Logger: The ``cfslab.<name>`` logger
    """
    return logging.getLogger(f'{LOGGER_NAME}.{name}')


def setup_logging(
    level: LevelLike = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    format_string: Optional[str] = None,
    date_format: Optional[str] = None,
    stream: TextIO = sys.stdout,
) -> logging.Logger:
    """
    Send CFSlab log records to a stream and, optionally, a file.

    Replaces any handlers previously attached to the ``cfslab`` logger and
    stops propagation to the root logger.

    Args:
        level: Logging level name or constant
        log_file: Optional log file; parent directories are created
        format_string: Record format (default: time, logger, level, message)
        date_format: Timestamp format
        stream: Console stream (default: stdout)

    Returns:
        logging.Logger: The configured ``cfslab`` logger

    Examples:
        >>> from cfslab import setup_logging
        >>> setup_logging(level='DEBUG')
        >>> setup_logging(log_file='/tmp/cfslab.log')
    """
    level = _coerce_level(level, logging.INFO)
    formatter = logging.Formatter(
        format_string or DEFAULT_FORMAT, datefmt=date_format or DEFAULT_DATE_FORMAT
    )
    log_path = Path(log_file) if log_file else None

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()
    for handler in _build_handlers(stream, log_path, formatter, level):
        logger.addHandler(handler)
    logger.propagate = False

    if log_path is not None:
        logger.info("Logging to file: %s", log_path)
    return logger


def set_log_level(level: LevelLike) -> None:
    """Change the level of the ``cfslab`` logger and of its handlers."""
    level = _coerce_level(level, logging.WARNING)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)


# Silent until configured
_package_logger = logging.getLogger(LOGGER_NAME)
if not _package_logger.handlers:
    _package_logger.addHandler(logging.NullHandler())
_package_logger.setLevel(logging.WARNING)
