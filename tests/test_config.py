"""Tests for config: environment-driven settings."""

import logging

import pytest

from stubsmith.config import MockerConfig, configure_logging


class TestMockerConfig:
    def test_defaults(self):
        c = MockerConfig()
        assert c.log_level == "WARNING"
        assert c.strict_returns is True
        assert c.describe_width == 80
        assert c.auto_check is True

    def test_log_level_normalised(self):
        assert MockerConfig(log_level="debug").log_level == "DEBUG"

    def test_invalid_width(self):
        with pytest.raises(ValueError, match="describe_width must be positive"):
            MockerConfig(describe_width=0)

    def test_from_env_defaults(self, monkeypatch):
        for name in (
            "STUBSMITH_LOG_LEVEL",
            "STUBSMITH_STRICT_RETURNS",
            "STUBSMITH_DESCRIBE_WIDTH",
            "STUBSMITH_AUTO_CHECK",
        ):
            monkeypatch.delenv(name, raising=False)
        assert MockerConfig.from_env() == MockerConfig()

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("STUBSMITH_LOG_LEVEL", "info")
        monkeypatch.setenv("STUBSMITH_STRICT_RETURNS", "no")
        monkeypatch.setenv("STUBSMITH_DESCRIBE_WIDTH", "120")
        monkeypatch.setenv("STUBSMITH_AUTO_CHECK", "0")
        c = MockerConfig.from_env()
        assert c.log_level == "INFO"
        assert c.strict_returns is False
        assert c.describe_width == 120
        assert c.auto_check is False

    @pytest.mark.parametrize("raw", ["", "   "])
    def test_blank_width_uses_default(self, monkeypatch, raw):
        monkeypatch.setenv("STUBSMITH_DESCRIBE_WIDTH", raw)
        assert MockerConfig.from_env().describe_width == 80

    def test_invalid_width_from_env(self, monkeypatch):
        monkeypatch.setenv("STUBSMITH_DESCRIBE_WIDTH", "wide")
        with pytest.raises(ValueError):
            MockerConfig.from_env()

    @pytest.mark.parametrize("raw,expected", [("1", True), ("TRUE", True), ("on", True), ("off", False), ("", True)])
    def test_flag_parsing(self, monkeypatch, raw, expected):
        monkeypatch.setenv("STUBSMITH_STRICT_RETURNS", raw)
        assert MockerConfig.from_env().strict_returns is expected


class TestConfigureLogging:
    def test_sets_package_logger_level(self):
        logger = logging.getLogger("stubsmith")
        previous = logger.level
        try:
            configure_logging(MockerConfig(log_level="DEBUG"))
            assert logger.level == logging.DEBUG
            assert logging.getLogger("stubsmith.engine.stub").getEffectiveLevel() == logging.DEBUG
        finally:
            logger.setLevel(previous)

    def test_unknown_level_falls_back_to_warning(self):
        logger = logging.getLogger("stubsmith")
        previous = logger.level
        try:
            configure_logging(MockerConfig(log_level="chatty"))
            assert logger.level == logging.WARNING
        finally:
            logger.setLevel(previous)
