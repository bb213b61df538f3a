"""Tests for logging setup."""

import logging

import pytest
from pydantic import ValidationError as PydanticValidationError

from college_events.config import Settings
from college_events.logging_config import resolve_level, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    passlib_level = logging.getLogger("passlib").level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("passlib").setLevel(passlib_level)


class TestResolveLevel:
    """Test cases for resolve_level."""

    def test_default_is_info(self):
        assert resolve_level(Settings(debug=False, log_level=None)) == logging.INFO

    def test_debug_mode(self):
        assert resolve_level(Settings(debug=True, log_level=None)) == logging.DEBUG

    def test_explicit_level_wins(self):
        assert resolve_level(Settings(debug=True, log_level="warning")) == logging.WARNING

    def test_unknown_level_is_rejected(self):
        with pytest.raises(PydanticValidationError):
            Settings(log_level="chatty")


class TestSetupLogging:
    """Test cases for setup_logging."""

    def test_configures_root_and_quiets_passlib(self, restore_root_logger):
        setup_logging(Settings(debug=False, log_level="ERROR"))

        assert logging.getLogger().level == logging.ERROR
        assert logging.getLogger("passlib").level == logging.ERROR
