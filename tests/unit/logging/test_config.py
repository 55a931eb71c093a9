"""Tests for logging configuration."""

import pytest
from pydantic import ValidationError

from rakshak.logging.config import LogFormat, LoggingConfig, LogLevel, get_logging_config


class TestLoggingConfig:
    def setup_method(self):
        get_logging_config.cache_clear()

    def test_defaults(self):
        config = LoggingConfig()
        assert config.log_level == LogLevel.INFO
        assert config.log_format == LogFormat.HUMAN
        assert config.service_name == "rakshak-ground-station"
        assert config.include_timestamp is True
        assert config.include_location is False

    def test_format_from_env(self, monkeypatch):
        monkeypatch.setenv("RAKSHAK_LOG_FORMAT", "json")
        config = LoggingConfig()
        assert config.log_format == LogFormat.JSON

    def test_level_from_env(self, monkeypatch):
        monkeypatch.setenv("RAKSHAK_LOG_LEVEL", "WARNING")
        config = LoggingConfig()
        assert config.log_level == LogLevel.WARNING

    def test_invalid_format_raises(self):
        with pytest.raises(ValidationError):
            LoggingConfig(log_format="xml")

    def test_ignores_unrelated_settings(self, monkeypatch):
        monkeypatch.setenv("RAKSHAK_DRONE_HOST", "10.0.0.1")
        config = LoggingConfig()
        assert not hasattr(config, "drone_host")

    def test_get_logging_config_is_cached(self):
        assert get_logging_config() is get_logging_config()
