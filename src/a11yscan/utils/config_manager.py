# src/a11yscan/utils/config_manager.py
import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS: Dict[str, Any] = {
    "server": {
        "host": "0.0.0.0",
        "port": 3200,
        "max_upload_bytes": 5 * 1024 * 1024,
    },
    "logging": {
        "level": "INFO",
        "modules": {},
        "silenced": {"werkzeug": "WARNING"},
    },
}


def get_package_root() -> Path:
    """Returns the directory of the a11yscan package (where settings.json lives)."""
    return Path(__file__).resolve().parent.parent


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class ConfigManager:
    """
    A singleton that holds the service and CLI configuration.
    Loads settings.json over the built-in defaults and allows in-memory changes.
    The scanning engine itself reads no configuration.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ConfigManager, cls).__new__(cls)
            cls._instance._initialize()
        return cls._instance

    def _initialize(self):
        self._config: Dict[str, Any] = {}
        self.reset()
        logger.debug("ConfigManager initialized.")

    def get_all(self) -> Dict[str, Any]:
        """Returns the entire current configuration dictionary."""
        return self._config

    def get_nested(self, key_path: str, default: Optional[Any] = None) -> Any:
        """
        Safely retrieves a nested value from the configuration.
        e.g., 'server.max_upload_bytes'.
        """
        value = self._config
        for key in key_path.split('.'):
            if isinstance(value, dict):
                value = value.get(key)
            else:
                return default
        return value if value is not None else default

    def set_nested(self, key_path: str, value: Any) -> bool:
        """
        Sets a nested value in the in-memory configuration.
        The value is cast to the type of the value it replaces when possible.
        """
        keys = key_path.split('.')
        d = self._config
        for key in keys[:-1]:
            d = d.setdefault(key, {})
            if not isinstance(d, dict):
                logger.error("Cannot set value: '%s' is not a dictionary.", key)
                return False

        original_value = d.get(keys[-1])
        if isinstance(original_value, bool) and isinstance(value, str):
            value = value.strip().lower() in ("1", "true", "yes", "on")
        elif original_value is not None:
            try:
                value = type(original_value)(value)
            except (ValueError, TypeError):
                logger.warning(
                    "Could not cast new value for '%s' to type %s. Storing as given.",
                    key_path, type(original_value).__name__
                )

        d[keys[-1]] = value
        logger.info("Configuration updated: %s = %s", key_path, value)
        return True

    def apply_overrides(self, assignments: Iterable[str]):
        """
        Applies 'key.path=value' assignments given on the command line.

        Raises:
            ValueError: If an assignment has no '=' or an empty key.
        """
        for assignment in assignments:
            key_path, sep, value = assignment.partition('=')
            key_path = key_path.strip()
            if not sep or not key_path:
                raise ValueError(f"Invalid setting '{assignment}', expected KEY=VALUE")
            if not self.set_nested(key_path, value.strip()):
                raise ValueError(f"Cannot set '{key_path}': a parent key is not a section")

    def reset(self):
        """Reloads the configuration: defaults overlaid with settings.json."""
        config_path = get_package_root() / "settings.json"
        try:
            if not config_path.exists():
                logger.warning("settings.json not found at %s. Using defaults.", config_path)
                self._config = copy.deepcopy(DEFAULT_SETTINGS)
                return
            with open(config_path, "r", encoding="utf-8") as f:
                self._config = _deep_merge(DEFAULT_SETTINGS, json.load(f))
            logger.debug("Configuration has been (re)loaded from %s.", config_path)
        except Exception as e:
            logger.error("Failed to load settings.json: %s", e, exc_info=True)
            self._config = copy.deepcopy(DEFAULT_SETTINGS)


config_manager = ConfigManager()
