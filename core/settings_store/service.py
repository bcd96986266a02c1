"""
Pixie Settings - Unified Settings Store
=======================================
One view over two physically different backends:

- the settings table (every non-sensitive key)
- the configuration resource (the fixed sensitive key set)

The merged map is a snapshot taken at construction time. Build a new
store (or call refresh()) when fresh values are needed; there is no
process-wide instance.

Once the ``installed`` flag is set, only an admin actor may write.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from core.context.actor_context import ActorContext, actor_is_admin
from core.envfile.editor import ConfigFileEditor, plain_value
from core.envfile.records import canonical_key
from core.settings_store.constants import (
    INSTALLED_KEY,
    SENSITIVE_SETTING_KEYS,
    SettingLocation,
    is_sensitive,
    is_truthy_flag,
    location_for,
    normalize_setting_key,
)
from core.settings_store.environment import EnvironmentReader
from core.settings_store.errors import (
    SettingsBackendUnavailable,
    SettingsPermissionError,
)
from core.settings_store.repository import SettingRepository

logger = logging.getLogger("pixie.settings")


def _snapshot_key(key: Any) -> Any:
    # sensitive keys are held lowercase whatever casing the caller used
    if isinstance(key, str) and key.strip().lower() in SENSITIVE_SETTING_KEYS:
        return key.strip().lower()
    return key


def _stored_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


class SettingsStore:
    def __init__(
        self,
        repository: SettingRepository,
        environment: EnvironmentReader,
        editor: ConfigFileEditor,
        resource_id,
    ):
        self._repository = repository
        self._environment = environment
        self._editor = editor
        self._resource_id = resource_id
        self._all: dict[str, Optional[str]] = self._load()

    def _load(self) -> dict[str, Optional[str]]:
        try:
            merged: dict[str, Optional[str]] = dict(self._repository.all_values())
        except SettingsBackendUnavailable as exc:
            # pre-migration: installation must work without a schema
            logger.info("Settings table unavailable, starting empty: %s", exc)
            return {}

        for key in SENSITIVE_SETTING_KEYS:
            merged.pop(key, None)
            merged[key] = self._environment.get(canonical_key(key))
        return merged

    def refresh(self) -> None:
        self._all = self._load()

    # ── Reads ─────────────────────────────────────────────────

    def get_all(self) -> dict[str, Optional[str]]:
        return dict(self._all)

    def get_all_safe(self, actor: ActorContext | None) -> dict[str, Optional[str]]:
        """
        Settings safe to expose to ``actor``.

        Admins get the full snapshot; everybody else never sees a
        sensitive key, whatever the snapshot holds.
        """
        if actor_is_admin(actor):
            return self.get_all()
        return {
            key: value
            for key, value in self._all.items()
            if not is_sensitive(key)
        }

    def get(self, key: str, default: Any = None) -> Any:
        value = self._all.get(_snapshot_key(key))
        if value is None:
            return default
        return value

    def is_installed(self) -> bool:
        return is_truthy_flag(self.get(INSTALLED_KEY))

    # ── Writes ────────────────────────────────────────────────

    def set(self, key: str, value: Any, actor: ActorContext | None) -> None:
        name = normalize_setting_key(key)

        if self.is_installed() and not actor_is_admin(actor):
            raise SettingsPermissionError(name)

        if location_for(name) is SettingLocation.CONFIG_RESOURCE:
            self._editor.patch(self._resource_id, canonical_key(name), value)
            self._all[name.lower()] = plain_value(value) if value else None
            logger.info("Setting %s written to configuration resource.", name.lower())
            return

        stored = _stored_value(value)
        self._repository.upsert(name, stored)
        self._all[name] = stored
        logger.info("Setting %s written to settings table.", name)
