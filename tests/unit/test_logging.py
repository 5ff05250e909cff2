"""Tests for logging module."""
import logging

import pytest

from tusupload import setup_logging
from tusupload.core.logging import get_logger


class TestGetLogger:
    """Test suite for get_logger."""

    @pytest.fixture(autouse=True)
    def reset_root(self):
        """Detach root handlers for the duration of a test."""
        root = logging.getLogger()
        saved = root.handlers[:]
        root.handlers = []
        yield
        root.handlers = saved

    def test_returns_named_logger(self):
        logger = get_logger('tusupload.test.named')

        assert isinstance(logger, logging.Logger)
        assert logger.name == 'tusupload.test.named'

    def test_propagates(self):
        """Test records reach the root logger."""
        assert get_logger('tusupload.test.propagate').propagate is True

    def test_quiet_without_root_handlers(self):
        """Test default level is WARNING before basicConfig."""
        logger = get_logger('tusupload.test.quiet')

        assert logger.level == logging.WARNING

    def test_level_untouched_with_root_handlers(self):
        """Test level is inherited once the root logger is configured."""
        logging.getLogger().addHandler(logging.NullHandler())
        logger = logging.getLogger('tusupload.test.configured')
        logger.setLevel(logging.NOTSET)

        logger = get_logger('tusupload.test.configured')

        assert logger.level == logging.NOTSET


class TestSetupLogging:
    """Test suite for setup_logging."""

    def test_sets_package_level(self):
        """Test package loggers follow the requested level."""
        setup_logging(logging.DEBUG)

        assert logging.getLogger('tusupload.upload.session').level == logging.DEBUG

        setup_logging(logging.WARNING)
        assert logging.getLogger('tusupload.upload.session').level == logging.WARNING
