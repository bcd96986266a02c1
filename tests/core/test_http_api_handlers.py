"""
Tests - HTTP API Handlers
=========================
Handlers run against in-memory stores and fake installer collaborators.
"""

from __future__ import annotations

import pytest

from core.bootstrap.compatibility import CompatibilityChecker, ExtensionRequirement
from core.bootstrap.contracts import AdminAccount, CommandResult, RootContainer
from core.bootstrap.orchestrator import (
    InstallationOrchestrator,
    InstallationRun,
    InstallationState,
)
from core.context.actor_context import ACTOR_TYPE_HUMAN, PERMISSION_ADMIN, ActorContext
from core.envfile.editor import ConfigFileEditor
from core.http_api import (
    AdminInstallHttpRequest,
    DatabaseInstallHttpRequest,
    HttpApiDependencies,
    SettingsUpdateHttpRequest,
    get_compatibility,
    get_settings,
    post_install_admin,
    post_install_database,
    post_settings,
    status_for,
)
from core.settings_store.environment import DotenvEnvironment
from core.settings_store.repository import InMemorySettingRepository
from core.settings_store.service import SettingsStore


ADMIN = ActorContext(
    actor_type=ACTOR_TYPE_HUMAN,
    actor_id="admin-1",
    permissions=(PERMISSION_ADMIN,),
)
VISITOR = ActorContext(actor_type=ACTOR_TYPE_HUMAN, actor_id="visitor-1")


class _ConfigView:
    def reload(self, resource_id):
        pass

    def force_environment(self, name):
        pass

    def set_database_credentials(self, credentials):
        pass


class _Runner:
    def __init__(self, ok=True):
        self.ok = ok

    def run_migrations(self):
        return CommandResult(ok=self.ok, command="migrate", detail="no such host")

    def run_seed(self):
        return CommandResult(ok=True, command="loaddata")


class _Accounts:
    def create_account(self, *, email, password, permissions):
        return AdminAccount(account_id="acc-1", email=email, permissions=tuple(permissions))

    def authenticate(self, email, password):
        return None

    def login(self, account, session):
        session["account"] = account.account_id


class _Containers:
    def create_root_container(self, *, owner_id, description):
        return RootContainer(
            container_id="folder-1",
            name="root",
            share_token="A" * 15,
            owner_id=owner_id,
            description=description,
        )


@pytest.fixture
def env_file(tmp_path):
    path = tmp_path / ".env"
    path.write_text("APP_ENV=local\nGOOGLE_SECRET=g-secret\n", encoding="utf-8")
    (tmp_path / ".env.example").write_text("APP_ENV=local\nDB_HOST=\n", encoding="utf-8")
    return path


def _dependencies(env_file, repository, *, runner=None):
    def store():
        return SettingsStore(
            repository=repository,
            environment=DotenvEnvironment(env_file, fallback={}),
            editor=ConfigFileEditor(),
            resource_id=env_file,
        )

    def checker():
        return CompatibilityChecker(
            env_file.parent,
            extensions=(ExtensionRequirement("definitely_not_a_module_xyz"),),
            folders=(),
        )

    def orchestrator():
        return InstallationOrchestrator(
            checker=checker(),
            editor=ConfigFileEditor(),
            config_view=_ConfigView(),
            migration_runner=runner or _Runner(),
            settings_store_factory=store,
            accounts=_Accounts(),
            containers=_Containers(),
            resource_id=env_file,
            template_id=env_file.parent / ".env.example",
        )

    return HttpApiDependencies(
        settings_store_factory=store,
        orchestrator_factory=orchestrator,
        checker_factory=checker,
    )


class TestSettingsHandlers:
    def test_visitor_never_sees_sensitive_keys(self, env_file):
        deps = _dependencies(env_file, InMemorySettingRepository({"site_name": "Pixie"}))

        payload = get_settings(VISITOR, deps)

        assert payload["ok"] is True
        assert payload["data"] == {"site_name": "Pixie"}

    def test_admin_sees_everything(self, env_file):
        deps = _dependencies(env_file, InMemorySettingRepository({"site_name": "Pixie"}))

        data = get_settings(ADMIN, deps)["data"]

        assert data["google_secret"] == "g-secret"
        assert data["stripe_secret_key"] is None
        assert data["site_name"] == "Pixie"

    def test_batch_reports_applied_and_rejected(self, env_file):
        repository = InMemorySettingRepository()
        deps = _dependencies(env_file, repository)

        payload = post_settings(
            SettingsUpdateHttpRequest(values={"installed": "1", "site_name": "x"}),
            None,
            deps,
        )

        assert payload["ok"] is False
        assert status_for(payload) == 403
        assert payload["error"]["details"] == {
            "applied": ["installed"],
            "rejected": ["site_name"],
        }
        assert "site_name" not in repository.rows

    def test_admin_batch_succeeds(self, env_file):
        repository = InMemorySettingRepository({"installed": "1"})
        deps = _dependencies(env_file, repository)

        payload = post_settings(
            SettingsUpdateHttpRequest(values={"site_name": "x", "google_id": "gid"}),
            ADMIN,
            deps,
        )

        assert payload["ok"] is True
        assert payload["data"] == {"applied": ["site_name", "google_id"]}
        assert repository.rows == {"installed": "1", "site_name": "x"}
        assert "GOOGLE_ID=gid" in env_file.read_text(encoding="utf-8")

    def test_line_break_value_is_invalid_and_batch_continues(self, env_file):
        repository = InMemorySettingRepository()
        deps = _dependencies(env_file, repository)

        payload = post_settings(
            SettingsUpdateHttpRequest(
                values={
                    "site_name": "x",
                    "google_secret": "line1\nline2",
                    "footer": "y",
                }
            ),
            ADMIN,
            deps,
        )

        assert payload["ok"] is False
        assert status_for(payload) == 400
        details = payload["error"]["details"]
        assert details["applied"] == ["site_name", "footer"]
        assert details["rejected"] == []
        assert list(details["invalid"]) == ["google_secret"]
        assert repository.rows == {"site_name": "x", "footer": "y"}
        assert "GOOGLE_SECRET=g-secret\n" in env_file.read_text(encoding="utf-8")

    def test_request_rejects_non_object(self):
        with pytest.raises(ValueError):
            SettingsUpdateHttpRequest(values=["site_name"])


class TestInstallerHandlers:
    def test_compatibility_advances_fresh_run(self, env_file):
        deps = _dependencies(env_file, InMemorySettingRepository())
        run = InstallationRun()

        payload = get_compatibility(run, deps)

        assert payload["ok"] is True
        assert payload["data"]["problem"] is True
        assert payload["data"]["extensions"] == [
            {"name": "definitely_not_a_module_xyz", "expected": True, "actual": False}
        ]
        assert payload["meta"]["state"] == InstallationState.COMPATIBILITY_CHECKED.value

    def test_compatibility_later_does_not_move_state(self, env_file):
        deps = _dependencies(env_file, InMemorySettingRepository())
        run = InstallationRun(state=InstallationState.PRODUCTION_CONFIGURED)

        payload = get_compatibility(run, deps)

        assert payload["ok"] is True
        assert run.state is InstallationState.PRODUCTION_CONFIGURED

    def test_database_install_from_fresh_run(self, env_file):
        deps = _dependencies(env_file, InMemorySettingRepository())
        run = InstallationRun()

        payload = post_install_database(
            DatabaseInstallHttpRequest(
                credentials={"host": "db", "name": "pixie"},
                base_url="https://photos.example.com",
            ),
            run,
            deps,
        )

        assert payload["ok"] is True
        assert payload["data"]["state"] == InstallationState.PRODUCTION_CONFIGURED.value
        text = env_file.read_text(encoding="utf-8")
        assert "DB_HOST=db" in text
        assert "APP_ENV=production" in text

    def test_migration_failure_maps_to_installation_failed(self, env_file):
        deps = _dependencies(env_file, InMemorySettingRepository(), runner=_Runner(ok=False))
        run = InstallationRun()

        payload = post_install_database(
            DatabaseInstallHttpRequest(credentials={"host": "db"}, base_url="http://x"),
            run,
            deps,
        )

        assert payload["error"]["code"] == "INSTALLATION_FAILED"
        assert status_for(payload) == 500
        assert payload["error"]["details"]["step"] == "SCHEMA_MIGRATED"
        assert run.state is InstallationState.CREDENTIALS_PREPARED

    def test_unknown_credential_is_invalid_request(self, env_file):
        deps = _dependencies(env_file, InMemorySettingRepository())

        payload = post_install_database(
            DatabaseInstallHttpRequest(credentials={"socket": "/tmp/x"}, base_url="http://x"),
            InstallationRun(),
            deps,
        )

        assert payload["error"]["code"] == "INVALID_REQUEST"
        assert status_for(payload) == 400

    def test_admin_before_database_is_state_error(self, env_file):
        deps = _dependencies(env_file, InMemorySettingRepository())

        payload = post_install_admin(
            AdminInstallHttpRequest(email="admin@example.com", password="pw"),
            InstallationRun(),
            {},
            deps,
        )

        assert payload["error"]["code"] == "INSTALLATION_STATE"
        assert status_for(payload) == 409

    def test_admin_install_completes(self, env_file):
        repository = InMemorySettingRepository()
        deps = _dependencies(env_file, repository)
        run = InstallationRun(state=InstallationState.PRODUCTION_CONFIGURED)
        session: dict = {}

        payload = post_install_admin(
            AdminInstallHttpRequest(email="admin@example.com", password="pw"),
            run,
            session,
            deps,
        )

        assert payload["ok"] is True
        assert payload["data"]["root_folder"]["share_id"] == "A" * 15
        assert payload["meta"]["state"] == InstallationState.DONE.value
        assert session == {"account": "acc-1"}
        assert repository.rows["installed"] == "1"

    def test_installed_application_refuses_installer(self, env_file):
        deps = _dependencies(env_file, InMemorySettingRepository({"installed": "1"}))

        payload = post_install_database(
            DatabaseInstallHttpRequest(credentials={}, base_url="http://x"),
            InstallationRun(),
            deps,
        )

        assert payload["error"]["code"] == "ALREADY_INSTALLED"
        assert status_for(payload) == 409

    def test_already_filled_must_be_boolean(self):
        with pytest.raises(ValueError):
            DatabaseInstallHttpRequest(
                credentials={}, base_url="http://x", already_filled="false"
            )
