"""
Tests for the logging helpers.
"""

import logging

from starregistry.log import LOG_FORMAT, configure_logging, get_logger


class TestLogging:

    def test_get_logger_attaches_no_handler(self):
        logger = get_logger('starregistry.blockchain.ledger')
        assert logger.handlers == []

    def test_configure_logging_once(self):
        root = logging.getLogger('starregistry')
        saved = list(root.handlers), root.level
        try:
            root.handlers.clear()
            configure_logging(logging.DEBUG)
            configure_logging(logging.DEBUG)

            assert len(root.handlers) == 1
            assert root.handlers[0].formatter._fmt == LOG_FORMAT
            assert root.level == logging.DEBUG
        finally:
            root.handlers[:] = saved[0]
            root.setLevel(saved[1])
