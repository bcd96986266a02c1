"""
Pixie Accounts - App Configuration
==================================
Accounts and their root folders.
"""

from django.apps import AppConfig


class AccountsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "core.accounts"
    label = "accounts"
    verbose_name = "Pixie Accounts"
