"""
Tests - Django Runtime Collaborators
====================================
"""

from __future__ import annotations

import os

import pytest

from config.database import database_engine, database_settings_updates
from core.bootstrap.runtime import DjangoConfigurationView, DjangoMigrationRunner


class TestDatabaseMapping:
    def test_default_engine_is_sqlite(self):
        assert database_engine(None) == "django.db.backends.sqlite3"
        assert database_engine("") == "django.db.backends.sqlite3"

    def test_pgsql_alias(self):
        assert database_engine("PGSQL") == "django.db.backends.postgresql"

    def test_unknown_engine(self):
        with pytest.raises(ValueError):
            database_engine("oracle")

    def test_credentials_to_settings(self):
        assert database_settings_updates(
            {"connection": "mysql", "host": "db", "password": None}
        ) == {
            "ENGINE": "django.db.backends.mysql",
            "HOST": "db",
            "PASSWORD": "",
        }


@pytest.mark.django_db(transaction=True)
class TestMigrationRunner:
    def test_migrate_succeeds_on_test_database(self):
        result = DjangoMigrationRunner().run_migrations()
        assert result.ok is True
        assert result.command == "migrate"

    def test_no_fixtures_is_a_successful_seed(self):
        result = DjangoMigrationRunner().run_seed()
        assert result.ok is True
        assert result.command == "loaddata"

    def test_missing_fixture_is_reported_not_raised(self):
        result = DjangoMigrationRunner(("does_not_exist_fixture",)).run_seed()
        assert result.ok is False
        assert "does_not_exist_fixture" in result.detail


class TestConfigurationView:
    def test_force_environment(self, settings, monkeypatch):
        monkeypatch.setenv("APP_ENV", "production")

        DjangoConfigurationView().force_environment("local")

        assert os.environ["APP_ENV"] == "local"
        assert settings.APP_ENV == "local"

    def test_reload_reads_resource_into_process(self, tmp_path, monkeypatch):
        monkeypatch.setenv("PIXIE_TEST_RELOAD", "old")
        resource = tmp_path / ".env"
        resource.write_text("PIXIE_TEST_RELOAD=new\n", encoding="utf-8")

        DjangoConfigurationView().reload(resource)

        assert os.environ["PIXIE_TEST_RELOAD"] == "new"
