"""Tests for inkvault.core.utils.logging."""

import os
import sys

import pytest
from loguru import logger

from inkvault.core.exceptions import ConfigurationError
from inkvault.core.utils.logging import setup_logging


@pytest.fixture(autouse=True)
def _restore_logger():
    yield
    logger.remove()
    logger.add(sys.stderr)


def _unlock(password):
    return {"stored": password}["missing"]


class TestSetupLogging:
    def test_writes_to_nested_log_file(self, tmp_dir):
        log_file = os.path.join(tmp_dir, "logs", "deep", "inkvault.log")
        setup_logging(level="info", log_file=log_file)

        logger.info("store opened")
        logger.debug("not at this level")
        logger.remove()

        with open(log_file) as f:
            text = f.read()
        assert "INFO" in text
        assert "store opened" in text
        assert "not at this level" not in text

    def test_unknown_level(self):
        with pytest.raises(ConfigurationError, match="LOUD"):
            setup_logging(level="loud")

    def test_unknown_level_keeps_existing_sinks(self, tmp_dir):
        log_file = os.path.join(tmp_dir, "inkvault.log")
        setup_logging(level="INFO", log_file=log_file)
        with pytest.raises(ConfigurationError):
            setup_logging(level="nope")

        logger.info("still logging")
        logger.remove()
        with open(log_file) as f:
            assert "still logging" in f.read()

    def test_tracebacks_do_not_show_local_values(self, tmp_dir):
        log_file = os.path.join(tmp_dir, "inkvault.log")
        setup_logging(level="DEBUG", log_file=log_file)

        secret = "hunter2" + "-very-secret"
        try:
            _unlock(secret)
        except KeyError:
            logger.exception("unlock failed")
        logger.remove()

        with open(log_file) as f:
            text = f.read()
        assert "unlock failed" in text
        assert "KeyError" in text
        assert "hunter2-very-secret" not in text
