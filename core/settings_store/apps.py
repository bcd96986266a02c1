"""
Pixie Settings - App Configuration
==================================
Structured settings table for non-sensitive application settings.
"""

from django.apps import AppConfig


class SettingsStoreConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "core.settings_store"
    label = "settings_store"
    verbose_name = "Pixie Settings"
