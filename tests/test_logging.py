"""Tests for logging setup."""

import logging

import pytest
import structlog

from sqlseed.core.logging import get_logger, level_number, setup_logging


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


class TestLogging:
    """Test structlog configuration."""

    def test_coerce_known_level(self):
        assert level_number("debug") == logging.DEBUG
        assert level_number("WARNING") == logging.WARNING

    def test_coerce_unknown_level(self):
        """Unknown names fall back to INFO."""
        assert level_number("chatty") == logging.INFO

    def test_logger_after_setup(self, capsys):
        setup_logging("INFO")
        logger = get_logger("sqlseed.tests")

        logger.info("seed.setup_done", operations=2)
        logger.debug("seed.script_ran")

        output = capsys.readouterr().out
        assert "seed.setup_done" in output
        assert "operations=2" in output
        assert "seed.script_ran" not in output
