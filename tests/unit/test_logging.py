"""Tests for logging setup."""

import logging

import pytest

from templar.utils.logging import get_logger, resolve_log_level, setup_logging


class TestResolveLogLevel:
    """Tests for resolve_log_level."""

    def test_flags_in_priority_order(self):
        """verbose beats quiet, quiet beats info."""
        assert resolve_log_level({"verbose": True, "quiet": True}) == "DEBUG"
        assert resolve_log_level({"quiet": True, "info": True}) == "WARNING"
        assert resolve_log_level({"info": True, "log_level": "ERROR"}) == "INFO"

    def test_explicit_level(self):
        """log_level should be used when no flag is set."""
        assert resolve_log_level({"verbose": False, "log_level": "error"}) == "ERROR"

    def test_default_level(self):
        """No options should give INFO."""
        assert resolve_log_level({}) == "INFO"

    def test_quiet_lowers_output(self):
        """quiet should differ from the default level."""
        assert resolve_log_level({"quiet": True}) != resolve_log_level({})

    def test_invalid_level(self):
        """Unknown level names should raise."""
        with pytest.raises(ValueError) as exc_info:
            resolve_log_level({"log_level": "chatty"})

        assert "CHATTY" in str(exc_info.value)


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_sets_templar_level(self):
        """Should set the level on the templar logger only."""
        try:
            logger = setup_logging(level="debug")

            assert logger.name == "templar"
            assert logger.level == logging.DEBUG
            assert get_logger("templar.config.loader").getEffectiveLevel() == logging.DEBUG
        finally:
            logging.getLogger("templar").setLevel(logging.NOTSET)
            for handler in logging.root.handlers[:]:
                logging.root.removeHandler(handler)

    def test_writes_log_file(self, tmp_path):
        """Should also write to a log file when given."""
        log_file = tmp_path / "templar.log"
        try:
            setup_logging(level="INFO", log_file=str(log_file))
            get_logger("templar.test").info("hello")

            for handler in logging.root.handlers:
                handler.flush()
            assert "hello" in log_file.read_text()
        finally:
            logging.getLogger("templar").setLevel(logging.NOTSET)
            for handler in logging.root.handlers[:]:
                logging.root.removeHandler(handler)
                handler.close()
