# tether_scene/logging_config.py
"""
Console/file logging for demos and notebooks.

Package modules log through ``logging.getLogger(__name__)`` and stay silent
until an entry point calls ``setup_logging()``.
"""
import logging
import sys
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Route the 'tether_scene' log records to stdout and, optionally, a file.

    Parameters:
    -----------
    level : int
        Threshold for the package logger and its handlers
        (e.g. logging.DEBUG shows every driver sub-step count).
    log_file : Optional[str]
        Also write the records here, overwriting any previous run.

    Returns:
    --------
    logging.Logger
        The 'tether_scene' logger.
    """
    logger = logging.getLogger("tether_scene")
    logger.setLevel(level)

    # re-running a demo cell must not stack handlers
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S')

    stream = logging.StreamHandler(sys.stdout)
    stream.setLevel(level)
    stream.setFormatter(formatter)
    logger.addHandler(stream)

    if log_file:
        to_file = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        to_file.setLevel(level)
        to_file.setFormatter(formatter)
        logger.addHandler(to_file)

    logger.info("Logging to stdout%s at level %s",
                f" and {log_file}" if log_file else "", logging.getLevelName(level))
    return logger
