"""
Logging configuration for the exporter.

Usage:
    from jungle_export.log import get_logger, setup_logging

    logger = get_logger(__name__)
    setup_logging(level="INFO", log_file="/path/to/export.log")
"""

import logging
import sys
from pathlib import Path

DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

_loggers = {}


def get_logger(name):
    """Return the (cached) logger for a module name."""
    if name not in _loggers:
        _loggers[name] = logging.getLogger(name)
    return _loggers[name]


def setup_logging(level="INFO", log_file=None, console=True, format_string=None):
    """
    Configure the root logger.

    Parameters
    ----------
    level : str or int
        Logging level name or number.
    log_file : str or Path, optional
        Also append log records to this file.
    console : bool
        Emit records on stdout.
    format_string : str, optional
        Overrides ``DEFAULT_FORMAT``.

    Returns
    -------
    logging.Logger
        The root logger.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    if console:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, mode="a")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
        root_logger.info("Logging to file: %s", log_path)

    return root_logger
