"""
Logging helpers.

Library modules only ask for named loggers. Output handlers belong to the
application, which calls ``configure_logging`` once at startup.
"""

import logging

LOG_FORMAT = '[%(asctime)s] %(levelname)s %(name)s: %(message)s'


def get_logger(name=None):
    """Return the named logger; no handlers are attached here."""
    return logging.getLogger(name)


def configure_logging(level=logging.INFO):
    """Send ``starregistry`` logs to stderr in the standard format."""
    logger = logging.getLogger('starregistry')
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger
