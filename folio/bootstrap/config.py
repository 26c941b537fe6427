"""
bootstrap/config.py - Bridge configuration

Provides configuration loading from files, environment variables, and defaults.

enable_validation and enable_error_recovery are accepted and reported but
currently have no effect on behaviour. debug_mode turns on the transfer
orchestrator's structured diagnostic records.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional
from pathlib import Path
import os
import json
import logging

logger = logging.getLogger("bootstrap.config")


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_file: Optional[str] = None
    json_logs: bool = False

    @classmethod
    def from_env(cls) -> "LoggingConfig":
        return cls(
            level=os.getenv("FOLIO_LOG_LEVEL", "INFO"),
            format=os.getenv("FOLIO_LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
            log_file=os.getenv("FOLIO_LOG_FILE"),
            json_logs=_env_flag("FOLIO_JSON_LOGS", "false"),
        )


# camelCase spellings used by the editor's persisted options
_ALIASES = {
    "enableValidation": "enable_validation",
    "enableErrorRecovery": "enable_error_recovery",
    "debugMode": "debug_mode",
    "successResetMs": "success_reset_ms",
    "failureResetMs": "failure_reset_ms",
    "refreshDebounceMs": "refresh_debounce_ms",
    "transferTimeoutMs": "transfer_timeout_ms",
}


@dataclass
class BridgeConfig:
    """Root configuration for the content bridge."""

    # Feature flags
    enable_validation: bool = True
    enable_error_recovery: bool = True
    debug_mode: bool = False

    # Transfer timing
    success_reset_ms: int = 3000
    failure_reset_ms: int = 5000
    refresh_debounce_ms: int = 100
    transfer_timeout_ms: int = 10000

    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls) -> "BridgeConfig":
        """Create configuration from environment variables."""
        return cls(
            enable_validation=_env_flag("FOLIO_ENABLE_VALIDATION", "true"),
            enable_error_recovery=_env_flag("FOLIO_ENABLE_ERROR_RECOVERY", "true"),
            debug_mode=_env_flag("FOLIO_DEBUG", "false"),
            success_reset_ms=int(os.getenv("FOLIO_SUCCESS_RESET_MS", "3000")),
            failure_reset_ms=int(os.getenv("FOLIO_FAILURE_RESET_MS", "5000")),
            refresh_debounce_ms=int(os.getenv("FOLIO_REFRESH_DEBOUNCE_MS", "100")),
            transfer_timeout_ms=int(os.getenv("FOLIO_TRANSFER_TIMEOUT_MS", "10000")),
            logging=LoggingConfig.from_env(),
        )

    @classmethod
    def from_file(cls, filepath: str) -> "BridgeConfig":
        """Load configuration from JSON file."""
        path = Path(filepath)
        if not path.exists():
            logger.warning(f"Config file not found: {filepath}, using defaults")
            return cls.from_env()

        with open(path) as f:
            data = json.load(f)

        return cls.from_dict(data, base=cls.from_env())

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], base: Optional["BridgeConfig"] = None) -> "BridgeConfig":
        """
        Create config from a mapping, on top of base (defaults when omitted).

        Accepts snake_case and camelCase keys. Unknown keys are ignored.
        """
        config = base if base is not None else cls()

        for key, value in data.items():
            attr = _ALIASES.get(key, key)
            if attr == "logging":
                if isinstance(value, Mapping):
                    for log_key, log_value in value.items():
                        if hasattr(config.logging, log_key):
                            setattr(config.logging, log_key, log_value)
                continue
            if hasattr(config, attr):
                setattr(config, attr, value)
            else:
                logger.debug(f"Ignoring unknown config key: {key}")

        return config

    def to_dict(self) -> Dict[str, Any]:
        """Serialize config to dictionary."""
        return {
            "enable_validation": self.enable_validation,
            "enable_error_recovery": self.enable_error_recovery,
            "debug_mode": self.debug_mode,
            "success_reset_ms": self.success_reset_ms,
            "failure_reset_ms": self.failure_reset_ms,
            "refresh_debounce_ms": self.refresh_debounce_ms,
            "transfer_timeout_ms": self.transfer_timeout_ms,
            "logging": {
                "level": self.logging.level,
                "log_file": self.logging.log_file,
                "json_logs": self.logging.json_logs,
            },
        }


# Global config instance
_config: Optional[BridgeConfig] = None


def load_config(filepath: str = None) -> BridgeConfig:
    """
    Load configuration from file or environment.

    Args:
        filepath: Optional path to JSON config file

    Returns:
        BridgeConfig instance
    """
    global _config

    if filepath:
        _config = BridgeConfig.from_file(filepath)
    else:
        # Try default locations
        default_paths = [
            "./folio.json",
            "./config/folio.json",
            os.path.expanduser("~/.folio/config.json"),
        ]

        for path in default_paths:
            if Path(path).exists():
                logger.info(f"Loading config from: {path}")
                _config = BridgeConfig.from_file(path)
                return _config

        # Fall back to environment
        _config = BridgeConfig.from_env()

    logger.info(f"Configuration loaded: debug_mode={_config.debug_mode}")
    return _config


def get_config() -> BridgeConfig:
    """Get current configuration, loading if needed."""
    global _config
    if _config is None:
        _config = load_config()
    return _config
