"""
Pixie Settings - Public API
===========================
"""

from core.settings_store.constants import (
    INSTALLED_KEY,
    SENSITIVE_SETTING_KEYS,
    SettingLocation,
    is_sensitive,
    location_for,
)
from core.settings_store.errors import (
    SettingsBackendUnavailable,
    SettingsPermissionError,
)

__all__ = [
    "INSTALLED_KEY",
    "SENSITIVE_SETTING_KEYS",
    "SettingLocation",
    "SettingsBackendUnavailable",
    "SettingsPermissionError",
    "is_sensitive",
    "location_for",
]
