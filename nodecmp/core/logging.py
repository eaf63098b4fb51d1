"""
Logging for Node Compare

Records from every ``nodecmp.*`` module propagate to the ``nodecmp`` logger,
which writes them to stderr. Stdout is left to result lines.
"""

import logging
import sys

LOGGER_NAME = 'nodecmp'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logging(verbose: bool = False) -> logging.Logger:
    """
    Attach a stderr handler to the package logger.

    Calling it again only changes the level; no second handler is added.

    Args:
        verbose: Log at DEBUG instead of WARNING
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    if not any(getattr(h, '_nodecmp', False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        handler._nodecmp = True
        logger.addHandler(handler)
    return logger


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    return logging.getLogger(name)
