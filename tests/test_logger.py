"""Tests for the shared logging setup."""

import logging
from logging.handlers import RotatingFileHandler

from parking_app.utils.logger import QUIET_LOGGERS, build_handlers, get_logger


class TestLogger:
    def test_file_handler_writes_to_given_dir(self, tmp_path):
        handlers = build_handlers("DEBUG", log_dir=str(tmp_path / "logs"), filename="test.log")
        try:
            file_handler = next(h for h in handlers if isinstance(h, RotatingFileHandler))
            assert file_handler.level == logging.DEBUG
            assert file_handler.baseFilename == str(tmp_path / "logs" / "test.log")
            assert (tmp_path / "logs").is_dir()
        finally:
            for handler in handlers:
                handler.close()

    def test_noisy_libraries_are_quieted(self):
        get_logger("parking_app.tests")
        for name in QUIET_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING

    def test_get_logger_is_named(self):
        assert get_logger("parking_app.services.x").name == "parking_app.services.x"
