"""
Logging setup for the ``gramframe`` package logger.
"""
import logging
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Attach console (and optionally file) handlers to the package logger.

    Calling it again replaces the handlers, so hot reload does not
    duplicate output.
    """
    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    logger = logging.getLogger("gramframe")
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()
    fmt = logging.Formatter(LOG_FORMAT)
    for handler in handlers:
        handler.setFormatter(fmt)
        logger.addHandler(handler)
    logger.setLevel(level)

    logger.info(f"Logging at {logging.getLevelName(level)}")
    return logger
