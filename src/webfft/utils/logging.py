"""
Logging utilities for the FFT engine.

The engine only logs through module loggers under ``webfft``; hosts call
``setup_logging`` once to route those records to the console and a file.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union


DEFAULT_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s'


def close_logging(name: str = 'webfft') -> None:
    """Detach and close every handler of the named logger."""
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def setup_logging(
    log_file: Optional[str] = None,
    level: Union[int, str] = logging.INFO,
    format_string: str = None,
    name: str = 'webfft',
    console_level: Union[int, str] = logging.WARNING
) -> logging.Logger:
    """
    Route the engine's log records to the console and, optionally, a file.

    Args:
        log_file: Path to log file (if None, only console output)
        level: Level of the ``name`` logger and of the file handler;
            ``EngineConfig.level`` or a level name such as ``'DEBUG'``
        format_string: Custom format string
        name: Logger name (defaults to the package logger)
        console_level: Level of the console handler

    Returns:
        Configured logger
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    if format_string is None:
        format_string = DEFAULT_FORMAT

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Calling twice must not duplicate output
    close_logging(name)

    formatter = logging.Formatter(format_string, datefmt='%Y-%m-%d %H:%M:%S')

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path, mode='a', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = None) -> logging.Logger:
    """Get a logger by name."""
    return logging.getLogger(name)
