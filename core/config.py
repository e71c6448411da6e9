# webunit/core/config.py

import yaml
import os
from typing import Any, Dict, List, Optional
import logging

from pydantic import ValidationError

from schemas.settings import WebunitSettings

logger = logging.getLogger(f"webunit.{__name__}")

DEFAULT_CONFIG_PATH = "config/config.yaml"


class ConfigError(Exception):
    """Raised when the configuration cannot be loaded or turned into settings."""


class ValidationResult:
    def __init__(self, valid: bool, errors: List[str] = None):
        self.valid = valid
        self.errors = errors or []

    def __bool__(self):
        return self.valid

class ConfigValidator:
    """
    Validate the top-level structure of the configuration.
    Field-level checks of the `webunit` section are done by WebunitSettings.
    """
    def __init__(self):
        self._schemas: Dict[str, Any] = {
            "server": dict,
            "webunit": dict,
        }

    def validate(self, config: Dict) -> ValidationResult:
        errors = []
        if not isinstance(config, dict):
            return ValidationResult(False, [f"Configuration root must be a mapping, got {type(config)}"])

        for key, expected_type in self._schemas.items():
            if key not in config:
                errors.append(f"Configuration is missing the key: '{key}'")
            elif not isinstance(config[key], expected_type):
                errors.append(f"Configuration part '{key}' has the wrong type, expected {expected_type}, got {type(config[key])}")

        webunit = config.get("webunit")
        if isinstance(webunit, dict) and "password" not in webunit:
            # an absent password must be an explicit decision, not an accident
            errors.append("Configuration 'webunit' is missing 'password' (use false to disable it)")

        if errors:
            return ValidationResult(False, errors)
        return ValidationResult(True)


class ConfigLoader:
    """
    Configuration loading interface.
    """
    def load(self) -> Dict:
        raise NotImplementedError


class DictConfigLoader(ConfigLoader):
    """Serves an in-memory configuration, used by tests and embedding hosts."""
    def __init__(self, data: Dict):
        self._data = data

    def load(self) -> Dict:
        return self._data


class FileConfigLoader(ConfigLoader):
    """
    Load configuration from a configuration file (YAML/JSON).
    """
    def __init__(self, file_path: str, file_format: str = "yaml"):
        self._file_path = file_path
        self._format = file_format.lower()
        if not os.path.exists(self._file_path):
            raise FileNotFoundError(f"Configuration file not found: {self._file_path}")

    def load(self) -> Dict:
        """Load configuration from a file"""
        try:
            with open(self._file_path, 'r', encoding='utf-8') as f:
                if self._format == "yaml":
                    return yaml.safe_load(f)
                elif self._format == "json":
                    import json
                    return json.load(f)
                else:
                    raise ValueError(f"Unsupported configuration file format: {self._format}")
        except Exception as e:
            logger.error(f"Failed to load configuration file '{self._file_path}': {e}")
            raise


class ConfigManager:
    """
    Loads and validates the configuration once, then serves read-only lookups.
    """
    def __init__(self, loader: ConfigLoader, validator: Optional[ConfigValidator] = None):
        self._config_data: Dict = {}
        self._loader = loader
        self._validator = validator or ConfigValidator()
        self.load_config()

    def load_config(self) -> None:
        new_config = self._loader.load()
        validation_result = self._validator.validate(new_config)
        if not validation_result:
            logger.error(f"Configuration validation failed: {validation_result.errors}")
            raise ConfigError("; ".join(validation_result.errors))
        self._config_data = new_config
        logger.info("Configuration loaded and validated successfully.")

    def get_config(self, path: str, default: Any = None) -> Any:
        """
        Get a configuration item by path, e.g. "server.port".
        """
        keys = path.split('.')
        value = self._config_data
        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default
        return value

    def build_settings(self) -> WebunitSettings:
        """
        Turn the `webunit` section into the immutable settings value shared by the guard and services.
        """
        section = self.get_config("webunit", {}) or {}
        try:
            return WebunitSettings(**section)
        except ValidationError as e:
            logger.error(f"Invalid 'webunit' configuration: {e}")
            raise ConfigError(f"Invalid 'webunit' configuration: {e}") from e


DEFAULT_CONFIG_CONTENT = {
    "server": {"host": "127.0.0.1", "port": 8000, "workers": 1, "log_level": "info"},
    "webunit": {
        "module_id": "webunit",
        "password": "change-me",
        "ip_filters": ["127.0.0.1", "::1"],
        "path_unit_tests": "tests/unit",
        "path_web_tests": "tests/functional",
        "runner": {"use_built_in_runner": True, "base_path": ".", "timeout_seconds": 600, "environment": {}},
    },
    "logging": {"file": {"path": "data/logs/webunit.log"}},
}

_config_manager: Optional[ConfigManager] = None

def get_config_manager(config_file_path: str = None) -> ConfigManager:
    """
    Get the process-wide ConfigManager, loading it on first call.
    The file path defaults to $WEBUNIT_CONFIG_PATH or config/config.yaml.
    """
    global _config_manager
    if _config_manager is not None:
        return _config_manager

    if config_file_path is None:
        config_file_path = os.getenv("WEBUNIT_CONFIG_PATH", DEFAULT_CONFIG_PATH)

    if not os.path.exists(config_file_path):
        default_config_dir = os.path.dirname(config_file_path)
        if default_config_dir:
            os.makedirs(default_config_dir, exist_ok=True)

        logger.warning(f"Configuration file '{config_file_path}' not found. Writing a minimal default configuration.")
        try:
            with open(config_file_path, 'w', encoding='utf-8') as f_default:
                yaml.safe_dump(DEFAULT_CONFIG_CONTENT, f_default, default_flow_style=False)
        except OSError as e_create:
            raise ConfigError(f"Failed to load or create configuration file: {config_file_path}") from e_create
        logger.warning("The default configuration uses the password 'change-me'. Set webunit.password before exposing the module.")

    _config_manager = ConfigManager(loader=FileConfigLoader(file_path=config_file_path))
    return _config_manager
