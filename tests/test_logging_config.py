"""Tests for logging setup."""

import logging

import pytest

from subtiming.logging_config import LOGGER_NAME, ColoredFormatter, get_logger, setup_logging


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_console_handler(self):
        logger = setup_logging(logging.DEBUG, use_colors=False)

        assert logger.name == LOGGER_NAME
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_no_duplicate_handlers(self):
        setup_logging()
        logger = setup_logging()
        assert len(logger.handlers) == 1

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "logs" / "timing.log"
        logger = setup_logging(logging.INFO, log_file=log_file, use_colors=False)

        get_logger("subtiming.timing").info("shifted lines")
        for handler in logger.handlers:
            handler.flush()

        assert "shifted lines" in log_file.read_text(encoding="utf-8")

    def test_module_logger_namespace(self):
        package_logger = get_logger()
        assert get_logger("subtiming.timing").parent is package_logger


class TestColoredFormatter:
    """Tests for the coloured formatter."""

    def test_record_not_mutated(self):
        formatter = ColoredFormatter("%(levelname)s %(message)s")
        record = logging.LogRecord("subtiming", logging.WARNING, __file__, 1, "careful", None, None)

        output = formatter.format(record)

        assert "\033[33m" in output
        assert record.levelname == "WARNING"
