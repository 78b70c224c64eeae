"""
Configuration Loader
Loads and validates YAML configuration files
"""

from pathlib import Path
from typing import Any, Dict, Optional
import yaml

from .app_config import AppConfig

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
NAME_SOURCES = ("display", "tvg-name")


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""
    pass


class ConfigLoader:
    """
    Loads and validates configuration from YAML files.

    Responsibilities:
    - Read YAML configuration file
    - Validate every section, falling back to defaults for absent ones
    - Validate types and value ranges
    - Return validated AppConfig instance
    """

    def __init__(self, config_path: Path):
        """
        Initialize ConfigLoader with path to config file.

        Args:
            config_path: Path to YAML configuration file
        """
        self._config_path = Path(config_path)

    def load(self) -> AppConfig:
        """
        Load and validate configuration from YAML file.

        Returns:
            AppConfig: Validated configuration object

        Raises:
            ConfigValidationError: If configuration is invalid
            FileNotFoundError: If config file doesn't exist
        """
        config_data = self._load_yaml()

        catalog = self._validate_catalog_config(config_data)
        logging_meta = self._validate_logging_config(config_data)
        add_defaults = self._validate_add_config(config_data)
        name_source = self._validate_playlist_config(config_data)

        return AppConfig(
            catalog_path=catalog["path"],
            lock_timeout=catalog["lock_timeout"],
            log_level=logging_meta["level"],
            log_dir=logging_meta["log_dir"],
            default_country=add_defaults["default_country"],
            default_language=add_defaults["default_language"],
            playlist_name_source=name_source
        )

    def _load_yaml(self) -> Dict[str, Any]:
        """Load YAML file and return parsed data."""
        if not self._config_path.exists():
            raise FileNotFoundError(
                f"Configuration file not found: {self._config_path}"
            )

        try:
            with open(self._config_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigValidationError(f"Invalid YAML syntax: {e}")

        # An empty file means "all defaults"
        if data is None:
            return {}

        if not isinstance(data, dict):
            raise ConfigValidationError(
                "Configuration must be a YAML mapping/dictionary"
            )

        return data

    @staticmethod
    def _section(config: Dict[str, Any], name: str) -> Dict[str, Any]:
        section = config.get(name)
        if section is None:
            return {}
        if not isinstance(section, dict):
            raise ConfigValidationError(
                f"Section '{name}' must be a mapping, got {type(section).__name__}"
            )
        return section

    def _validate_catalog_config(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Validate catalog section."""
        catalog = self._section(config, "catalog")

        path = catalog.get("path", "channels.json")
        lock_timeout = catalog.get("lock_timeout", 10)

        if not isinstance(path, str):
            raise ConfigValidationError(f"catalog.path must be string, got {type(path).__name__}")
        if not path.strip():
            raise ConfigValidationError("catalog.path cannot be empty")

        # bool is an int subclass; reject it explicitly
        if isinstance(lock_timeout, bool) or not isinstance(lock_timeout, (int, float)):
            raise ConfigValidationError(
                f"catalog.lock_timeout must be a number, got {type(lock_timeout).__name__}"
            )
        if lock_timeout <= 0:
            raise ConfigValidationError(
                f"catalog.lock_timeout must be greater than 0, got {lock_timeout}"
            )

        return {"path": path.strip(), "lock_timeout": float(lock_timeout)}

    def _validate_logging_config(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Validate logging section."""
        section = self._section(config, "logging")

        level = section.get("level", "INFO")
        log_dir: Optional[str] = section.get("log_dir", "logs")

        if not isinstance(level, str) or level.strip().upper() not in LOG_LEVELS:
            raise ConfigValidationError(
                f"logging.level must be one of {', '.join(LOG_LEVELS)}, got {level!r}"
            )
        if log_dir is not None and not isinstance(log_dir, str):
            raise ConfigValidationError(
                f"logging.log_dir must be string or null, got {type(log_dir).__name__}"
            )

        if log_dir is not None and not log_dir.strip():
            log_dir = None

        return {"level": level.strip().upper(), "log_dir": log_dir.strip() if log_dir else None}

    def _validate_add_config(self, config: Dict[str, Any]) -> Dict[str, str]:
        """Validate add section (defaults for manually added channels)."""
        section = self._section(config, "add")

        result = {}
        for key, default in (("default_country", "US"), ("default_language", "English")):
            value = section.get(key, default)
            if not isinstance(value, str):
                raise ConfigValidationError(
                    f"add.{key} must be string, got {type(value).__name__}"
                )
            if not value.strip():
                raise ConfigValidationError(f"add.{key} cannot be empty")
            result[key] = value.strip()

        return result

    def _validate_playlist_config(self, config: Dict[str, Any]) -> str:
        """Validate playlist section."""
        section = self._section(config, "playlist")

        name_source = section.get("name_source", "display")
        if name_source not in NAME_SOURCES:
            raise ConfigValidationError(
                f"playlist.name_source must be one of {', '.join(NAME_SOURCES)}, got {name_source!r}"
            )

        return name_source
