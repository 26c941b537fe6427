"""
Unit tests for bridge configuration.
"""

import json

import pytest

from folio.bootstrap import config as config_module
from folio.bootstrap.config import BridgeConfig, LoggingConfig, load_config, get_config


class TestBridgeConfigDefaults:
    """Test default values."""

    def test_defaults(self):
        config = BridgeConfig()
        assert config.enable_validation is True
        assert config.enable_error_recovery is True
        assert config.debug_mode is False
        assert config.success_reset_ms == 3000
        assert config.failure_reset_ms == 5000
        assert config.refresh_debounce_ms == 100
        assert config.transfer_timeout_ms == 10000
        assert isinstance(config.logging, LoggingConfig)


class TestBridgeConfigSources:
    """Test env / file / dict loading."""

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("FOLIO_DEBUG", "true")
        monkeypatch.setenv("FOLIO_SUCCESS_RESET_MS", "10")
        monkeypatch.setenv("FOLIO_LOG_LEVEL", "DEBUG")

        config = BridgeConfig.from_env()
        assert config.debug_mode is True
        assert config.success_reset_ms == 10
        assert config.logging.level == "DEBUG"

    def test_from_dict_camel_case(self):
        config = BridgeConfig.from_dict({
            "enableValidation": False,
            "enableErrorRecovery": False,
            "debugMode": True,
            "unknownOption": 1,
        })
        assert config.enable_validation is False
        assert config.enable_error_recovery is False
        assert config.debug_mode is True
        assert not hasattr(config, "unknownOption")

    def test_from_dict_nested_logging(self):
        config = BridgeConfig.from_dict({"logging": {"level": "WARNING", "json_logs": True}})
        assert config.logging.level == "WARNING"
        assert config.logging.json_logs is True

    def test_from_file(self, tmp_path):
        path = tmp_path / "folio.json"
        path.write_text(json.dumps({"failure_reset_ms": 42, "refreshDebounceMs": 5}))

        config = BridgeConfig.from_file(str(path))
        assert config.failure_reset_ms == 42
        assert config.refresh_debounce_ms == 5

    def test_from_missing_file(self, tmp_path):
        config = BridgeConfig.from_file(str(tmp_path / "missing.json"))
        assert config.success_reset_ms == BridgeConfig().success_reset_ms

    def test_to_dict(self):
        data = BridgeConfig().to_dict()
        assert data["transfer_timeout_ms"] == 10000
        assert data["logging"]["level"] == "INFO"


class TestGlobalConfig:
    """Test load_config / get_config."""

    @pytest.fixture(autouse=True)
    def _reset_global(self, monkeypatch):
        monkeypatch.setattr(config_module, "_config", None)

    def test_load_config_from_path(self, tmp_path):
        path = tmp_path / "bridge.json"
        path.write_text(json.dumps({"debug_mode": True}))

        config = load_config(str(path))
        assert config.debug_mode is True
        assert get_config() is config

    def test_get_config_loads_once(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        first = get_config()
        assert get_config() is first
