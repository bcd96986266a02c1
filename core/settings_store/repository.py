"""
Pixie Settings - Repositories
=============================
Storage contract for the settings table plus a DB-backed and an
in-memory implementation.
"""

from __future__ import annotations

from typing import Mapping, Protocol

from django.core.exceptions import ImproperlyConfigured
from django.db import DatabaseError

from core.settings_store.errors import SettingsBackendUnavailable


class SettingRepository(Protocol):
    def all_values(self) -> Mapping[str, str]:
        ...

    def upsert(self, name: str, value: str) -> None:
        ...


class InMemorySettingRepository:
    """
    Dict-backed repository used for bootstrap/tests.

    ``available=False`` simulates a settings table that does not exist yet.
    """

    def __init__(
        self,
        values: Mapping[str, str] | None = None,
        *,
        available: bool = True,
    ):
        self._values: dict[str, str] = dict(values or {})
        self._available = available

    def all_values(self) -> dict[str, str]:
        if not self._available:
            raise SettingsBackendUnavailable("in-memory settings table is offline.")
        return dict(sorted(self._values.items()))

    def upsert(self, name: str, value: str) -> None:
        self._values[name] = value

    @property
    def rows(self) -> dict[str, str]:
        return dict(self._values)


class DbSettingRepository:
    def all_values(self) -> dict[str, str]:
        from core.settings_store.models import Setting

        try:
            return dict(Setting.objects.order_by("name").values_list("name", "value"))
        except (DatabaseError, ImproperlyConfigured) as exc:
            raise SettingsBackendUnavailable(str(exc)) from exc

    def upsert(self, name: str, value: str) -> None:
        from core.settings_store.models import Setting

        Setting.objects.update_or_create(name=name, defaults={"value": value})
