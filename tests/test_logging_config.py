"""
Unit tests for the logging configuration module.
"""

import logging
import logging.handlers

from uploadhandler.configs.logging_config import setup_logging


def test_setup_logging_console_only():
    setup_logging(log_level="WARNING")
    logger = logging.getLogger("uploadhandler")
    assert logger.level == logging.WARNING
    assert logger.propagate is False
    assert not any(
        isinstance(h, logging.handlers.RotatingFileHandler) for h in logger.handlers
    )


def test_setup_logging_with_file(tmp_path):
    setup_logging(
        log_level="DEBUG",
        enable_file_logging=True,
        log_file="test.log",
        log_dir=str(tmp_path),
    )
    logger = logging.getLogger("uploadhandler")
    file_handlers = [
        h for h in logger.handlers if isinstance(h, logging.handlers.RotatingFileHandler)
    ]
    assert len(file_handlers) == 1
    assert file_handlers[0].baseFilename == str(tmp_path / "test.log")

    logging.getLogger("uploadhandler.tests").debug("hello file")
    file_handlers[0].flush()
    assert "hello file" in (tmp_path / "test.log").read_text()
