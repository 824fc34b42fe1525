"""Tests for the logging configuration module."""

import logging
from logging.handlers import RotatingFileHandler

import pytest
from structlog.stdlib import ProcessorFormatter

import screenlines.config as config_module
from screenlines.config import ScreenLinesSettings, configure_logging, get_logger


@pytest.fixture(autouse=True)
def reset_logging_state():
    """Reset logging state before each test to ensure isolation."""
    root_logger = logging.getLogger()
    original_level = root_logger.level
    original_handlers = root_logger.handlers.copy()

    yield

    for handler in root_logger.handlers.copy():
        root_logger.removeHandler(handler)
        if handler not in original_handlers:
            handler.close()
    root_logger.setLevel(original_level)
    for handler in original_handlers:
        root_logger.addHandler(handler)


class TestConfigureLogging:
    """Test the configure_logging function."""

    def test_default_configuration(self):
        """Test default logging configuration."""
        configure_logging(ScreenLinesSettings())

        root_logger = logging.getLogger()
        assert root_logger.level == logging.WARNING
        assert len(root_logger.handlers) == 1
        assert isinstance(root_logger.handlers[0].formatter, ProcessorFormatter)

    @pytest.mark.parametrize(
        ("level_str", "level_const"),
        [
            ("debug", logging.DEBUG),
            ("INFO", logging.INFO),
            ("Error", logging.ERROR),
            ("CRITICAL", logging.CRITICAL),
        ],
    )
    def test_log_levels(self, level_str, level_const):
        """Test log levels are applied case-insensitively."""
        configure_logging(ScreenLinesSettings(log_level=level_str))
        assert logging.getLogger().level == level_const

    def test_invalid_level(self):
        """Test that an unknown level raises ValueError."""
        settings = ScreenLinesSettings().model_copy(update={"log_level": "LOUD"})

        with pytest.raises(ValueError, match="Invalid log level"):
            configure_logging(settings)

    def test_log_file(self, tmp_path):
        """Test that a rotating file handler is added for log_file."""
        log_file = tmp_path / "logs" / "screenlines.log"
        configure_logging(ScreenLinesSettings(log_file=log_file, log_level="INFO"))

        handlers = logging.getLogger().handlers
        file_handlers = [h for h in handlers if isinstance(h, RotatingFileHandler)]

        assert len(file_handlers) == 1
        assert file_handlers[0].maxBytes == 10 * 1024 * 1024
        assert file_handlers[0].backupCount == 5
        assert log_file.parent.exists()

    @pytest.mark.parametrize("log_format", ["console", "json", "structured"])
    def test_formats(self, log_format):
        """Test every log format configures a working logger."""
        configure_logging(ScreenLinesSettings(log_format=log_format, debug=True))

        logger = get_logger("screenlines.test")
        logger.info("configured", log_format=log_format)


class TestGetLogger:
    """Test the cached get_logger helper."""

    def test_logger_cached(self):
        """Test the same logger is returned for the same name."""
        first = get_logger("screenlines.parser.example")
        assert get_logger("screenlines.parser.example") is first

    def test_reset_clears_cache(self):
        """Test reset_settings forgets cached loggers."""
        get_logger("screenlines.parser.example")
        assert "screenlines.parser.example" in config_module._logger_cache

        config_module.reset_settings()

        assert config_module._logger_cache == {}
        assert config_module._logging_initialized is False

    def test_first_logger_configures_logging(self):
        """Test the first logger request configures logging from settings."""
        config_module.reset_settings()
        config_module.set_settings(
            ScreenLinesSettings(_env_file=None, log_level="ERROR")
        )
        assert config_module._logging_initialized is False

        get_logger("screenlines.parser.example")

        assert config_module._logging_initialized is True
        assert logging.getLogger().level == logging.ERROR

    def test_cached_logger_does_not_reconfigure(self):
        """Test later settings changes wait for the next reset."""
        config_module.reset_settings()
        config_module.set_settings(
            ScreenLinesSettings(_env_file=None, log_level="ERROR")
        )
        get_logger("screenlines.parser.example")

        config_module.set_settings(
            ScreenLinesSettings(_env_file=None, log_level="DEBUG")
        )
        get_logger("screenlines.parser.other")

        assert logging.getLogger().level == logging.ERROR
