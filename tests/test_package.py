"""
Tests for the pmcontract package surface and configuration
"""
import logging

import pmcontract
from pmcontract import config


class TestExports:
    """Test top-level re-exports"""

    def test_version_and_package_info(self):
        assert pmcontract.__version__ == "1.0.0"
        assert pmcontract.PACKAGE_INFO["name"] == "pmcontract"
        assert pmcontract.PACKAGE_INFO["version"] == pmcontract.__version__

    def test_all_names_resolve(self):
        for name in pmcontract.__all__:
            assert hasattr(pmcontract, name), name

    def test_working_exports(self, valid_feature):
        assert pmcontract.is_feature(valid_feature)
        assert pmcontract.create_story_points(3) == 3
        assert pmcontract.create_hours(0) == 0
        assert pmcontract.validate_project_item(valid_feature) is True
        assert pmcontract.can_transition_status(valid_feature, "planning")
        assert issubclass(pmcontract.ValidationError, Exception)


class TestConfig:
    """Test environment-driven settings"""

    def test_strict_defaults_off(self, monkeypatch):
        monkeypatch.delenv(config.STRICT_ENV_VAR, raising=False)
        assert config.strict_mode_enabled() is False

    def test_strict_enabled(self, monkeypatch):
        monkeypatch.setenv(config.STRICT_ENV_VAR, "TRUE")
        assert config.strict_mode_enabled() is True

    def test_log_level(self, monkeypatch):
        monkeypatch.setenv(config.LOG_LEVEL_ENV_VAR, "debug")
        assert config.get_log_level() == logging.DEBUG
        monkeypatch.setenv(config.LOG_LEVEL_ENV_VAR, "chatty")
        assert config.get_log_level() == logging.WARNING

    def test_configure_logging_is_idempotent(self, monkeypatch):
        monkeypatch.setenv(config.LOG_LEVEL_ENV_VAR, "INFO")
        logger = config.configure_logging()
        handlers = list(logger.handlers)
        assert config.configure_logging() is logger
        assert logger.handlers == handlers
        assert logger.level == logging.INFO
