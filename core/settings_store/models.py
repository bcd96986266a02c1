"""
Pixie Settings - Settings Table
===============================
One row per non-sensitive setting, unique by name.
"""

from __future__ import annotations

from django.db import models


class Setting(models.Model):
    name = models.CharField(max_length=255, unique=True)
    value = models.TextField(blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "pixie_settings"
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name
