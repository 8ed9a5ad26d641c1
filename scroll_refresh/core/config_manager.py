"""
Unified Configuration Manager

This module provides a centralized configuration management system for the
refresh coordinator.

Configuration Priority (highest to lowest):
1. Runtime configuration (temporary overrides)
2. User settings (QSettings persistent storage)
3. Default configuration (from scroll_refresh.config)
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError
from PyQt6.QtCore import QSettings

from scroll_refresh import config
from scroll_refresh.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class RefreshSettings(BaseModel):
    """Validated view of the ``refresh`` configuration section."""

    debounce_ms: int = Field(100, ge=0)
    max_debounce_ms: int = Field(5000, ge=0)


def validate_refresh_settings(raw: Dict[str, Any]) -> RefreshSettings:
    """
    Build ``RefreshSettings`` from raw values (strings allowed).

    Raises:
        ConfigurationError: If a value has the wrong type or is out of range
    """
    try:
        settings = RefreshSettings(**raw)
    except PydanticValidationError as e:
        bad_key = None
        errors = e.errors()
        if errors and errors[0].get("loc"):
            bad_key = f"refresh.{errors[0]['loc'][0]}"
        raise ConfigurationError(
            f"Invalid refresh configuration: {raw}",
            config_key=bad_key,
        ) from e

    if settings.debounce_ms > settings.max_debounce_ms:
        raise ConfigurationError(
            f"Debounce delay {settings.debounce_ms}ms exceeds maximum "
            f"{settings.max_debounce_ms}ms",
            config_key="refresh.debounce_ms",
        )
    return settings


class ConfigManager:
    """
    Layered configuration access with change notification.

    One instance is created by the application's composition root and handed
    to whoever needs it; tests pass their own ``QSettings`` so nothing leaks
    into the user's persistent settings.
    """

    def __init__(self, settings: Optional[QSettings] = None):
        """Initialize configuration manager with its three layers."""
        # Configuration storage layers (priority order)
        self._settings = settings if settings is not None else QSettings(config.APP_NAME, "Settings")
        self._default_config = self._load_defaults()
        self._runtime_config: Dict[str, Any] = {}

        # Observer pattern for configuration changes
        self._observers: List[Callable[[str, Any], None]] = []

        logger.info(f"ConfigManager initialized (settings file: '{self._settings.fileName()}')")

    def _load_defaults(self) -> Dict[str, Any]:
        """Load default configuration from the config module."""
        return {
            "app": {
                "name": getattr(config, "APP_NAME", "Scroll Refresh"),
                "version": getattr(config, "APP_VERSION", "0.1.0"),
            },
            "refresh": dict(getattr(config, "REFRESH_SETTINGS", {})),
            "signals": dict(getattr(config, "READINESS_SIGNALS", {})),
            "logging": dict(getattr(config, "LOGGING", {})),
        }

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value with hierarchical precedence.

        Priority: runtime > user_settings > default_config > provided_default

        Args:
            key: Dot-separated configuration key (e.g., 'refresh.debounce_ms')
            default: Fallback value if key not found

        Returns:
            Configuration value from highest priority source
        """
        if key in self._runtime_config:
            return self._runtime_config[key]

        if self._settings.contains(key):
            return self._settings.value(key)

        default_value = self._get_nested_value(self._default_config, key)
        if default_value is not None:
            return default_value

        return default

    def set(self, key: str, value: Any, persist: bool = False) -> None:
        """
        Set configuration value with optional persistence.

        Args:
            key: Configuration key to set
            value: Value to set
            persist: If True, save to QSettings; if False, store in runtime only
        """
        if persist:
            self._settings.setValue(key, value)
            self._settings.sync()
            logger.debug(f"Persisted config: {key} = {value}")
        else:
            self._runtime_config[key] = value
            logger.debug(f"Runtime config: {key} = {value}")

        self._notify_observers(key, value)

    def _get_nested_value(self, config_dict: Dict[str, Any], key: str) -> Any:
        """Get value from nested dictionary using dot notation."""
        current: Any = config_dict
        for k in key.split("."):
            if isinstance(current, dict) and k in current:
                current = current[k]
            else:
                return None
        return current

    def get_refresh_settings(self) -> RefreshSettings:
        """
        Get the effective refresh settings, validated.

        QSettings hands values back as strings for INI-backed stores, and the
        environment default is a string too, so the pydantic model also takes
        care of coercion.

        Raises:
            ConfigurationError: If a value has the wrong type or is out of range
        """
        return validate_refresh_settings({
            "debounce_ms": self.get("refresh.debounce_ms", 100),
            "max_debounce_ms": self.get("refresh.max_debounce_ms", 5000),
        })

    def validate_config(self) -> RefreshSettings:
        """
        Validate the effective configuration before anything depends on it.

        Raises:
            ConfigurationError: If the refresh settings are invalid
        """
        settings = self.get_refresh_settings()
        logger.info(
            f"Configuration valid: debounce {settings.debounce_ms}ms "
            f"(max {settings.max_debounce_ms}ms)"
        )
        return settings

    def subscribe(self, callback: Callable[[str, Any], None]) -> None:
        """
        Subscribe to configuration changes.

        Args:
            callback: Function to call when configuration changes (key, value)
        """
        self._observers.append(callback)
        logger.debug(f"Added configuration observer: {getattr(callback, '__name__', callback)}")

    def unsubscribe(self, callback: Callable[[str, Any], None]) -> None:
        """Unsubscribe from configuration changes."""
        if callback in self._observers:
            self._observers.remove(callback)
            logger.debug(f"Removed configuration observer: {getattr(callback, '__name__', callback)}")

    def _notify_observers(self, key: str, value: Any) -> None:
        for observer in list(self._observers):
            try:
                observer(key, value)
            except Exception as e:
                logger.error(f"Error notifying observer {getattr(observer, '__name__', observer)}: {e}")

    def get_all_keys(self) -> List[str]:
        """Get all available configuration keys from all sources."""
        keys = set(self._runtime_config.keys())
        keys.update(self._settings.allKeys())

        def flatten_keys(d, prefix=""):
            for key, value in d.items():
                full_key = f"{prefix}.{key}" if prefix else key
                if isinstance(value, dict):
                    flatten_keys(value, full_key)
                else:
                    keys.add(full_key)

        flatten_keys(self._default_config)
        return sorted(keys)

    def reset_to_defaults(self) -> None:
        """Drop runtime overrides and persisted user settings."""
        self._runtime_config.clear()
        self._settings.clear()
        self._settings.sync()
        logger.info("Configuration reset to defaults")
        self._notify_observers("__reset__", None)

    def export_config(self) -> Dict[str, Any]:
        """Export current effective configuration for debugging."""
        exported = {key: self.get(key) for key in self.get_all_keys()}
        logger.debug(f"Exported {len(exported)} configuration keys")
        return exported
