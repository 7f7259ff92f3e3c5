"""
Unit tests for logging setup.
"""

import logging

from audiolake.logger import LOGGER_NAME, configure_logging, get_default_logger, setup_logger


class TestSetupLogger:
    """Test setup_logger."""

    def test_level_and_console_handler(self):
        logger = setup_logger("audiolake.test.console", level="DEBUG")

        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert logger.propagate is False

    def test_reconfigure_does_not_stack_handlers(self):
        setup_logger("audiolake.test.stack")
        logger = setup_logger("audiolake.test.stack")

        assert len(logger.handlers) == 1

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "logs" / "audiolake.log"
        logger = setup_logger("audiolake.test.file", log_file=log_file, console_output=False)

        logger.info("materialized 3 files")
        for handler in logger.handlers:
            handler.flush()

        assert "materialized 3 files" in log_file.read_text()
        assert " - audiolake.test.file - INFO - " in log_file.read_text()

    def test_unknown_level_defaults_to_info(self):
        logger = setup_logger("audiolake.test.level", level="LOUD")

        assert logger.level == logging.INFO


class TestConfigureLogging:
    """Test configure_logging on the shared logger."""

    def test_updates_shared_logger(self):
        shared = get_default_logger()

        configure_logging(level="ERROR")

        assert shared.name == LOGGER_NAME
        assert logging.getLogger(LOGGER_NAME).level == logging.ERROR

        configure_logging(level="INFO")
        assert shared.level == logging.INFO
