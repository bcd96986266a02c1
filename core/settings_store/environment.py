"""
Pixie Settings - Environment Accessor
=====================================
Read-by-name access to values sourced outside the database.
"""

from __future__ import annotations

import os
from typing import Mapping, Optional, Protocol

from dotenv import dotenv_values

from core.envfile.records import NULL_SENTINEL, canonical_key


class EnvironmentReader(Protocol):
    def get(self, name: str) -> Optional[str]:
        ...


class DotenvEnvironment:
    """
    Reads the configuration resource once per instance.

    Keys missing from the resource fall back to the process environment.
    The ``null`` sentinel reads back as None. No ``${VAR}`` expansion:
    values come back exactly as ConfigFileEditor wrote them.
    """

    def __init__(self, path, fallback: Mapping[str, str] | None = None):
        self._path = path
        self._fallback = os.environ if fallback is None else fallback
        self._values: dict[str, Optional[str]] | None = None

    def _load(self) -> dict[str, Optional[str]]:
        if self._values is None:
            if os.path.exists(self._path):
                raw = dotenv_values(self._path, interpolate=False)
                self._values = {canonical_key(key): value for key, value in raw.items()}
            else:
                self._values = {}
        return self._values

    def get(self, name: str) -> Optional[str]:
        key = canonical_key(name)
        values = self._load()
        value = values[key] if key in values else self._fallback.get(key)
        if value is None or value.strip().lower() == NULL_SENTINEL:
            return None
        return value
