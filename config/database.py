"""
Pixie Database Configuration
Maps configuration-resource database keys onto Django DATABASES entries.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

DATABASE_ENGINES = {
    "sqlite": "django.db.backends.sqlite3",
    "mysql": "django.db.backends.mysql",
    "pgsql": "django.db.backends.postgresql",
    "postgresql": "django.db.backends.postgresql",
}

# credential name → DATABASES key
DATABASE_FIELDS = {
    "connection": "ENGINE",
    "host": "HOST",
    "port": "PORT",
    "name": "NAME",
    "user": "USER",
    "password": "PASSWORD",
}


def database_engine(connection: Optional[str]) -> str:
    if not connection:
        return DATABASE_ENGINES["sqlite"]
    key = str(connection).strip().lower()
    if key not in DATABASE_ENGINES:
        raise ValueError(
            f"connection '{connection}' not valid. "
            f"Must be one of: {sorted(DATABASE_ENGINES)}"
        )
    return DATABASE_ENGINES[key]


def database_settings_updates(credentials: Mapping[str, Any]) -> dict[str, Any]:
    updates: dict[str, Any] = {}
    for name, value in credentials.items():
        field = DATABASE_FIELDS[name]
        if name == "connection":
            value = database_engine(value)
        updates[field] = "" if value is None else value
    return updates
