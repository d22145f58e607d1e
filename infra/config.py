"""
Configuration Manager
---------------------
Loads palette configuration from YAML with environment variable overrides.

Keys (dot notation):
    catalogue.path      command catalogue YAML (default: bundled command_map.yaml)
    logging.level       DEBUG / INFO / WARNING / ERROR
    logging.dir         directory for JSON log files
    logging.file        enable JSON file logging
    search.limit        max results printed by the CLI (0 = all)
    vocabulary.verbs    extra verb synonyms {canonical: [synonym, ...]}
    vocabulary.targets  extra target synonyms

Environment overrides use the PALETTE_ prefix: search.limit -> PALETTE_SEARCH_LIMIT.
"""

from pathlib import Path
from typing import Any, Dict, Optional
import os

import yaml

from core.errors import ConfigError
from infra.logging import get_logger


ENV_PREFIX = "PALETTE_"

DEFAULTS: Dict[str, Any] = {
    "catalogue": {"path": None},
    "logging": {"level": "WARNING", "dir": "logs", "file": False},
    "search": {"limit": 0},
    "vocabulary": {"verbs": {}, "targets": {}},
}

_TRUE = {"1", "true", "yes", "on"}


class ConfigManager:
    """
    Centralized configuration management.

    A missing file is not an error: defaults apply. A file that exists but
    is not a YAML mapping raises ConfigError.
    """

    def __init__(self, config_path: Optional[str] = "config.yaml"):
        self._config_path = Path(config_path) if config_path else None
        self._config: Dict[str, Any] = {}
        self._logger = get_logger("infra.config")

        self._load_config()

    @property
    def path(self) -> Optional[Path]:
        return self._config_path

    def _load_config(self) -> None:
        """Load configuration from file."""
        self._config = {}
        if self._config_path is None:
            return
        if not self._config_path.exists():
            self._logger.warning(f"Config file not found: {self._config_path}")
            return

        try:
            with open(self._config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(
                f"Cannot parse {self._config_path}: {e}",
                details={"path": str(self._config_path)},
            ) from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(
                f"{self._config_path} must contain a mapping, got {type(data).__name__}",
                details={"path": str(self._config_path)},
            )
        self._config = data
        self._logger.info(f"Loaded config from {self._config_path}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.
        Supports dot notation: 'section.key'
        Environment variables override file config, file overrides DEFAULTS.
        """
        env_key = f"{ENV_PREFIX}{key.upper().replace('.', '_')}"
        env_value = os.getenv(env_key)
        if env_value is not None:
            return env_value

        for source in (self._config, DEFAULTS):
            found, value = _lookup(source, key)
            if found and value is not None:
                return value

        return default

    def get_int(self, key: str, default: int = 0) -> int:
        value = self.get(key, default)
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ConfigError(f"{key} must be an integer, got {value!r}")

    def get_bool(self, key: str, default: bool = False) -> bool:
        value = self.get(key, default)
        if isinstance(value, str):
            return value.strip().lower() in _TRUE
        return bool(value)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value (runtime only, not persisted)."""
        parts = key.split(".")
        config = self._config

        for part in parts[:-1]:
            if not isinstance(config.get(part), dict):
                config[part] = {}
            config = config[part]

        config[parts[-1]] = value

    def get_section(self, section: str) -> Dict[str, Any]:
        """Get an entire configuration section."""
        value = self._config.get(section)
        if isinstance(value, dict):
            return value
        return dict(DEFAULTS.get(section, {}))

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()


def _lookup(source: Dict[str, Any], key: str):
    value: Any = source
    for part in key.split("."):
        if isinstance(value, dict) and part in value:
            value = value[part]
        else:
            return False, None
    return True, value
