"""
Pixie Settings - Constants
==========================
Key routing policy between the settings table and the configuration
resource. Routing is decided by key membership only, never per row.
"""

from __future__ import annotations

from enum import Enum


class SettingLocation(str, Enum):
    DATABASE = "DATABASE"
    CONFIG_RESOURCE = "CONFIG_RESOURCE"


INSTALLED_KEY = "installed"

# OAuth client secrets, payment and mail provider keys live in the
# configuration resource only.
SENSITIVE_SETTING_KEYS: tuple[str, ...] = (
    "google_id",
    "google_secret",
    "facebook_id",
    "facebook_secret",
    "twitter_id",
    "twitter_secret",
    "mandrill_api_key",
    "stripe_secret_key",
)

_SENSITIVE_LOOKUP = frozenset(SENSITIVE_SETTING_KEYS)

_FALSY_FLAG_VALUES = frozenset({"", "0", "false", "null"})


def normalize_setting_key(key: str) -> str:
    if not isinstance(key, str) or not key.strip():
        raise ValueError("setting key must be a non-empty string.")
    return key.strip()


def is_sensitive(key: str) -> bool:
    return normalize_setting_key(key).lower() in _SENSITIVE_LOOKUP


def location_for(key: str) -> SettingLocation:
    if is_sensitive(key):
        return SettingLocation.CONFIG_RESOURCE
    return SettingLocation.DATABASE


def is_truthy_flag(value) -> bool:
    if value is None:
        return False
    return str(value).strip().lower() not in _FALSY_FLAG_VALUES
