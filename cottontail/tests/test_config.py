"""Tests for configuration loading and logging setup."""

import logging
import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from cottontail.config import LOGGER_NAME, Settings, configure_logging, load_settings


class TestConfigurationLoading:
    """Test configuration loading and validation."""

    def test_load_settings_with_defaults(self) -> None:
        """Load settings with default values."""
        settings = load_settings()
        assert settings.random_seed is None
        assert settings.string_length == 12
        assert settings.int_min == 0
        assert settings.int_max == 1000
        assert settings.collection_size == 2
        assert settings.max_depth == 4
        assert settings.log_level == "INFO"
        assert settings.log_format == "text"

    def test_load_settings_from_env(self) -> None:
        """Load settings from prefixed environment variables."""
        with patch.dict(
            os.environ,
            {
                "COTTONTAIL_RANDOM_SEED": "42",
                "COTTONTAIL_STRING_LENGTH": "5",
                "COTTONTAIL_LOG_LEVEL": "DEBUG",
            },
        ):
            settings = load_settings()
            assert settings.random_seed == 42
            assert settings.string_length == 5
            assert settings.log_level == "DEBUG"

    def test_load_settings_from_env_file(self, tmp_path: Path) -> None:
        """Load settings from an explicit .env file."""
        env_file = tmp_path / "test.env"
        env_file.write_text("COTTONTAIL_MAX_DEPTH=1\nUNRELATED=value\n")
        settings = load_settings(str(env_file))
        assert settings.max_depth == 1

    @pytest.mark.parametrize(
        "variable,value",
        [
            ("COTTONTAIL_STRING_LENGTH", "0"),
            ("COTTONTAIL_COLLECTION_SIZE", "-1"),
            ("COTTONTAIL_MAX_DEPTH", "-1"),
            ("COTTONTAIL_LOG_LEVEL", "LOUD"),
        ],
    )
    def test_load_settings_rejects_invalid_values(self, variable: str, value: str) -> None:
        with patch.dict(os.environ, {variable: value}):
            with pytest.raises(ValidationError):
                load_settings()

    def test_rejects_inverted_int_range(self) -> None:
        with pytest.raises(ValidationError, match="int_min"):
            Settings(int_min=10, int_max=5)


class TestConfigureLogging:
    """Test package logger configuration."""

    def teardown_method(self) -> None:
        package_logger = logging.getLogger(LOGGER_NAME)
        for handler in list(package_logger.handlers):
            package_logger.removeHandler(handler)
        package_logger.setLevel(logging.NOTSET)
        package_logger.propagate = True

    def test_text_format(self) -> None:
        package_logger = configure_logging("DEBUG", "text")
        assert package_logger is logging.getLogger("cottontail")
        assert package_logger.level == logging.DEBUG
        (handler,) = package_logger.handlers
        assert "[%(name)s]" in handler.formatter._fmt

    def test_json_format(self) -> None:
        package_logger = configure_logging("ERROR", "json")
        assert package_logger.level == logging.ERROR
        assert package_logger.handlers[0].formatter._fmt.startswith("{")

    def test_unknown_level_falls_back_to_info(self) -> None:
        assert configure_logging("CHATTY", "text").level == logging.INFO

    def test_leaves_root_logger_alone(self) -> None:
        root = logging.getLogger()
        handlers_before = list(root.handlers)
        level_before = root.level
        configure_logging("DEBUG", "text")
        assert root.handlers == handlers_before
        assert root.level == level_before

    def test_reconfiguring_replaces_handler(self) -> None:
        configure_logging("DEBUG", "text")
        package_logger = configure_logging("WARNING", "json")
        assert len(package_logger.handlers) == 1
        assert package_logger.level == logging.WARNING
        assert not package_logger.propagate
