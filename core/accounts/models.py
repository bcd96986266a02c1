"""
Pixie Accounts - Account and Folder Records
===========================================
Plain records. Behavior lives in core.accounts.service.
"""

from __future__ import annotations

import uuid

from django.db import models

SHARE_ID_LENGTH = 15


class Account(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(max_length=255, unique=True)
    password_hash = models.CharField(max_length=255)
    permissions = models.JSONField(default=list)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "pixie_accounts"
        ordering = ["created_at", "id"]

    def __str__(self) -> str:
        return self.email


class Folder(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    share_id = models.CharField(max_length=SHARE_ID_LENGTH, unique=True)
    owner = models.ForeignKey(
        Account,
        on_delete=models.CASCADE,
        related_name="folders",
        db_column="owner_id",
    )
    description = models.TextField(blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "pixie_folders"
        ordering = ["created_at", "id"]

    def __str__(self) -> str:
        return f"{self.name} ({self.share_id})"
