"""Tests for logging setup."""

import logging

from rich.logging import RichHandler

from depscope.logging_config import get_logger, setup_logging


class TestSetupLogging:
    def test_levels(self):
        assert setup_logging(verbose=True).getEffectiveLevel() == logging.DEBUG
        assert setup_logging(quiet=True).getEffectiveLevel() == logging.ERROR
        assert setup_logging().getEffectiveLevel() == logging.WARNING

    def test_rich_handler_installed(self):
        setup_logging()
        assert any(isinstance(h, RichHandler) for h in logging.getLogger().handlers)

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "depscope.log"
        logger = setup_logging(verbose=True, log_file=str(log_file))
        logger.debug("written to file")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "written to file" in log_file.read_text()

    def test_get_logger_namespaced(self):
        assert get_logger("depscope.graph").name == "depscope.graph"
        assert get_logger("graph").name == "depscope.graph"
