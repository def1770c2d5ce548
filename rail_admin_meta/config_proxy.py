"""
Configuration management for rail-admin-meta.

This module provides a settings proxy that resolves library settings from
the Django ``RAIL_ADMIN_META`` setting first and the library defaults second.
"""

from typing import Any, Optional

from django.conf import settings

from .defaults import LIBRARY_DEFAULTS, SETTINGS_NAME


class SettingsProxy:
    """
    Proxy for accessing rail-admin-meta settings with hierarchical resolution.

    Settings are resolved in the following order:
    1. Global Django settings (RAIL_ADMIN_META)
    2. Library defaults (LIBRARY_DEFAULTS)
    """

    def __init__(self):
        self._cache: dict[str, Any] = {}

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a setting value with hierarchical resolution and caching.

        Args:
            key: Setting key to retrieve (dot notation for nested access)
            default: Default value if setting is not found

        Returns:
            The setting value from the highest priority source
        """
        if key in self._cache:
            return self._cache[key]

        django_value = self._get_django_setting(key)
        if django_value is not None:
            self._cache[key] = django_value
            return django_value

        library_value = self._get_nested_value(LIBRARY_DEFAULTS, key)
        if library_value is not None:
            self._cache[key] = library_value
            return library_value

        return default

    def _get_django_setting(self, key: str) -> Any:
        """Get setting from the global Django RAIL_ADMIN_META dict."""
        return self._get_nested_value(getattr(settings, SETTINGS_NAME, {}) or {}, key)

    def _get_nested_value(self, data: dict[str, Any], key: str) -> Any:
        """
        Get nested value from dictionary using dot notation.

        Args:
            data: Dictionary to search in
            key: Key to retrieve (supports dot notation for nested access)

        Returns:
            The value or None if not found
        """
        if not isinstance(data, dict):
            return None

        current = data
        for k in key.split("."):
            if not isinstance(current, dict) or k not in current:
                return None
            current = current[k]

        return current

    def clear_cache(self) -> None:
        """Clear the settings cache."""
        self._cache.clear()


# Global settings proxy instance
settings_proxy = SettingsProxy()


def get_setting(key: str, default: Any = None) -> Any:
    """
    Get a rail-admin-meta setting value.

    Args:
        key: Setting key (supports dot notation)
        default: Value returned when neither Django settings nor the
            library defaults define the key

    Returns:
        The resolved setting value
    """
    return settings_proxy.get(key, default)


def get_setting_set(key: str) -> frozenset[str]:
    """Get a list-valued setting as a frozenset of strings."""
    value = settings_proxy.get(key) or ()
    if isinstance(value, str):
        value = (value,)
    return frozenset(str(item) for item in value)


def clear_settings_cache(setting: Optional[str] = None, **kwargs) -> None:
    """
    Drop resolved settings so the next lookup re-reads Django settings.

    Connected to Django's ``setting_changed`` signal; ``setting`` is the name
    of the Django setting that changed.
    """
    if setting is None or setting == SETTINGS_NAME:
        settings_proxy.clear_cache()


__all__ = [
    "SettingsProxy",
    "settings_proxy",
    "get_setting",
    "get_setting_set",
    "clear_settings_cache",
]
