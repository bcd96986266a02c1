"""
Pixie Bootstrap - Django Runtime Collaborators
=============================================
Migration/seed invoker and in-process configuration view used by the
installation orchestrator when running inside Django.
"""

from __future__ import annotations

import io
import logging
import os
from collections.abc import Mapping, Sequence
from typing import Any

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.core.management import call_command
from django.core.management.base import CommandError
from django.db import DEFAULT_DB_ALIAS, DatabaseError, connections
from dotenv import load_dotenv

from config.database import database_settings_updates
from core.bootstrap.contracts import CommandResult

logger = logging.getLogger("pixie.install")


class DjangoMigrationRunner:
    """
    ``migrate`` then ``loaddata`` over the configured seed fixtures.

    Both calls block. A raised command error is turned into a failed
    CommandResult; nothing is retried here.
    """

    def __init__(
        self,
        seed_fixtures: Sequence[str] = (),
        *,
        database: str = DEFAULT_DB_ALIAS,
    ):
        self._seed_fixtures = tuple(seed_fixtures)
        self._database = database

    def run_migrations(self) -> CommandResult:
        return self._call("migrate", interactive=False)

    def run_seed(self) -> CommandResult:
        if not self._seed_fixtures:
            return CommandResult(ok=True, command="loaddata", detail="no seed fixtures configured")
        return self._call("loaddata", *self._seed_fixtures)

    def _call(self, command: str, *args: Any, **options: Any) -> CommandResult:
        output = io.StringIO()
        try:
            call_command(
                command,
                *args,
                database=self._database,
                verbosity=1,
                stdout=output,
                stderr=output,
                **options,
            )
        except (CommandError, DatabaseError, ImproperlyConfigured) as exc:
            return CommandResult(ok=False, command=command, detail=str(exc))
        return CommandResult(ok=True, command=command, detail=output.getvalue().strip())


class DjangoConfigurationView:
    def __init__(self, database: str = DEFAULT_DB_ALIAS):
        self._database = database

    def reload(self, resource_id) -> None:
        if not load_dotenv(resource_id, override=True, interpolate=False):
            logger.warning("Configuration resource %s not loaded.", os.fspath(resource_id))

    def force_environment(self, name: str) -> None:
        os.environ["APP_ENV"] = name
        settings.APP_ENV = name

    def set_database_credentials(self, credentials: Mapping[str, Any]) -> None:
        updates = database_settings_updates(credentials)
        connection = connections[self._database]
        connection.close()
        connection.settings_dict.update(updates)
        settings.DATABASES[self._database].update(updates)
