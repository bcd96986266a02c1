"""
Pixie Bootstrap - Installation Orchestrator
===========================================
One-time setup sequence, linear, no back-edges:

    NOT_STARTED
      → COMPATIBILITY_CHECKED   (advisory, never blocks)
      → CREDENTIALS_PREPARED    (DB credentials patched from the template)
      → SCHEMA_MIGRATED         (migrate + seed, fatal on failure)
      → PRODUCTION_CONFIGURED   (production flags, base URL, app key)
      → ADMIN_CREATED           (admin account, root folder, session)
      → DONE                    (installed flag set by the new admin)

No step is retried and nothing is rolled back. Whether the configuration
resource may be touched at all is decided once, in CREDENTIALS_PREPARED,
and carried on the InstallationRun.

Single actor, single process. Not safe for concurrent runs.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from django.core.management.utils import get_random_secret_key

from core.bootstrap.compatibility import CompatibilityChecker, CompatibilityReport
from core.bootstrap.contracts import (
    AccountRepository,
    AdminAccount,
    ConfigurationView,
    ContainerRepository,
    MigrationRunner,
    RootContainer,
)
from core.bootstrap.errors import InstallationError, InstallationStateError
from core.context.actor_context import PERMISSION_ADMIN
from core.envfile.editor import ConfigFileEditor
from core.envfile.records import NULL_SENTINEL
from core.settings_store.constants import INSTALLED_KEY
from core.settings_store.service import SettingsStore

logger = logging.getLogger("pixie.install")

MIGRATION_ENVIRONMENT = "local"
PRODUCTION_ENVIRONMENT = "production"

CREDENTIAL_KEYS = ("connection", "host", "port", "name", "user", "password")

DEFAULT_ROOT_CONTAINER_DESCRIPTION = "Root album for your photos and folders."


class InstallationState(str, Enum):
    NOT_STARTED = "NOT_STARTED"
    COMPATIBILITY_CHECKED = "COMPATIBILITY_CHECKED"
    CREDENTIALS_PREPARED = "CREDENTIALS_PREPARED"
    SCHEMA_MIGRATED = "SCHEMA_MIGRATED"
    PRODUCTION_CONFIGURED = "PRODUCTION_CONFIGURED"
    ADMIN_CREATED = "ADMIN_CREATED"
    DONE = "DONE"


@dataclass
class InstallationRun:
    """
    Explicit context threaded through every step.

    manage_config_resource is False when the operator filled the
    configuration resource by hand; later steps must then leave it alone.
    """

    state: InstallationState = InstallationState.NOT_STARTED
    manage_config_resource: bool = True
    report: Optional[CompatibilityReport] = None
    admin_id: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "state": self.state.value,
            "manage_config_resource": self.manage_config_resource,
            "admin_id": self.admin_id,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "InstallationRun":
        if not data:
            return cls()
        return cls(
            state=InstallationState(data.get("state", InstallationState.NOT_STARTED.value)),
            manage_config_resource=bool(data.get("manage_config_resource", True)),
            admin_id=data.get("admin_id"),
        )


@dataclass(frozen=True)
class AdminSetup:
    account: AdminAccount
    container: RootContainer


def normalize_credentials(credentials: Mapping[str, Any]) -> dict[str, Any]:
    if not isinstance(credentials, Mapping):
        raise ValueError("credentials must be an object.")
    normalized: dict[str, Any] = {}
    for key, value in credentials.items():
        name = str(key).strip().lower()
        if name not in CREDENTIAL_KEYS:
            raise ValueError(
                f"credential '{key}' not valid. Must be one of: {list(CREDENTIAL_KEYS)}"
            )
        normalized[name] = value
    return normalized


def credential_env_values(credentials: Mapping[str, Any]) -> dict[str, Any]:
    """``{"host": "x"}`` → ``{"DB_HOST": "x"}``"""
    return {
        f"DB_{name.upper()}": value
        for name, value in normalize_credentials(credentials).items()
    }


class InstallationOrchestrator:
    def __init__(
        self,
        *,
        checker: CompatibilityChecker,
        editor: ConfigFileEditor,
        config_view: ConfigurationView,
        migration_runner: MigrationRunner,
        settings_store_factory: Callable[[], SettingsStore],
        accounts: AccountRepository,
        containers: ContainerRepository,
        resource_id,
        template_id,
        root_container_description: str = DEFAULT_ROOT_CONTAINER_DESCRIPTION,
    ):
        self._checker = checker
        self._editor = editor
        self._config_view = config_view
        self._migration_runner = migration_runner
        self._settings_store_factory = settings_store_factory
        self._accounts = accounts
        self._containers = containers
        self._resource_id = resource_id
        self._template_id = template_id
        self._root_container_description = root_container_description

    @staticmethod
    def _require(
        run: InstallationRun,
        step: InstallationState,
        *allowed: InstallationState,
    ) -> None:
        if run.state not in allowed:
            raise InstallationStateError(
                step=step.value,
                detail=(
                    f"cannot run from state {run.state.value}; "
                    f"expected one of {[state.value for state in allowed]}."
                ),
            )

    # ── Step 1 ────────────────────────────────────────────────

    def check_compatibility(self, run: InstallationRun) -> CompatibilityReport:
        self._require(
            run,
            InstallationState.COMPATIBILITY_CHECKED,
            InstallationState.NOT_STARTED,
            InstallationState.COMPATIBILITY_CHECKED,
        )
        report = self._checker.check()
        run.report = report
        run.state = InstallationState.COMPATIBILITY_CHECKED
        if report.problem:
            logger.warning("⚠ Compatibility check reported problems.")
        else:
            logger.info("✓ Compatibility check passed.")
        return report

    # ── Step 2 ────────────────────────────────────────────────

    def prepare_credentials(
        self,
        run: InstallationRun,
        credentials: Mapping[str, Any],
        *,
        already_filled: bool = False,
    ) -> None:
        step = InstallationState.CREDENTIALS_PREPARED
        self._require(run, step, InstallationState.COMPATIBILITY_CHECKED)

        normalized = normalize_credentials(credentials)
        run.manage_config_resource = not already_filled

        if run.manage_config_resource:
            try:
                self._editor.seed_from_template(
                    self._template_id,
                    self._resource_id,
                    credential_env_values(normalized),
                )
            except OSError as exc:
                raise InstallationError(
                    step=step.value,
                    detail=f"configuration resource could not be written: {exc}",
                ) from exc
        else:
            logger.info("Configuration resource filled by hand; not rewritten.")

        # migrations must not run in production mode
        self._config_view.reload(self._resource_id)
        self._config_view.force_environment(MIGRATION_ENVIRONMENT)
        self._config_view.set_database_credentials(
            {name: value or "" for name, value in normalized.items()}
        )

        run.state = step
        logger.info("✓ Database credentials prepared.")

    # ── Step 3 ────────────────────────────────────────────────

    def migrate_schema(self, run: InstallationRun) -> None:
        step = InstallationState.SCHEMA_MIGRATED
        self._require(run, step, InstallationState.CREDENTIALS_PREPARED)

        for invoke in (
            self._migration_runner.run_migrations,
            self._migration_runner.run_seed,
        ):
            result = invoke()
            if not result.ok:
                logger.error("✗ %s failed: %s", result.command, result.detail)
                raise InstallationError(
                    step=step.value,
                    detail=f"'{result.command}' failed: {result.detail}",
                )
            logger.info("✓ %s completed.", result.command)

        run.state = step

    # ── Step 4 ────────────────────────────────────────────────

    def configure_production(self, run: InstallationRun, *, base_url: str) -> None:
        step = InstallationState.PRODUCTION_CONFIGURED
        self._require(run, step, InstallationState.SCHEMA_MIGRATED)

        if not run.manage_config_resource:
            logger.info("Production configuration skipped (resource managed by hand).")
            run.state = step
            return

        if not isinstance(base_url, str) or not base_url.strip():
            raise ValueError("base_url must be a non-empty string.")

        values: dict[str, Any] = {
            "APP_ENV": PRODUCTION_ENVIRONMENT,
            "APP_DEBUG": "false",
            "BASE_URL": base_url.strip(),
        }
        try:
            current_key = self._editor.get(self._resource_id, "APP_KEY")
            if not current_key or current_key.strip().lower() == NULL_SENTINEL:
                values["APP_KEY"] = get_random_secret_key()
            self._editor.patch_many(self._resource_id, values)
        except OSError as exc:
            raise InstallationError(
                step=step.value,
                detail=f"configuration resource could not be written: {exc}",
            ) from exc

        run.state = step
        logger.info("✓ Production configuration written.")

    def create_db(
        self,
        run: InstallationRun,
        credentials: Mapping[str, Any],
        *,
        base_url: str,
        already_filled: bool = False,
    ) -> None:
        """Steps 2-4 in one call."""
        self.prepare_credentials(run, credentials, already_filled=already_filled)
        self.migrate_schema(run)
        self.configure_production(run, base_url=base_url)

    # ── Step 5 ────────────────────────────────────────────────

    def create_admin(
        self,
        run: InstallationRun,
        *,
        email: str,
        password: str,
        session: MutableMapping[str, Any],
    ) -> AdminSetup:
        self._require(
            run,
            InstallationState.ADMIN_CREATED,
            InstallationState.PRODUCTION_CONFIGURED,
        )

        account = self._accounts.create_account(
            email=email,
            password=password,
            permissions=(PERMISSION_ADMIN,),
        )
        container = self._containers.create_root_container(
            owner_id=account.account_id,
            description=self._root_container_description,
        )
        self._accounts.login(account, session)
        run.admin_id = account.account_id
        run.state = InstallationState.ADMIN_CREATED
        logger.info("✓ Administrator account %s created.", account.account_id)

        store = self._settings_store_factory()
        store.set(INSTALLED_KEY, "1", actor=account.to_actor())

        run.state = InstallationState.DONE
        logger.info("✓ Installation complete.")
        return AdminSetup(account=account, container=container)

    def install(
        self,
        credentials: Mapping[str, Any],
        *,
        base_url: str,
        email: str,
        password: str,
        session: MutableMapping[str, Any],
        already_filled: bool = False,
    ) -> tuple[InstallationRun, AdminSetup]:
        run = InstallationRun()
        self.check_compatibility(run)
        self.create_db(
            run,
            credentials,
            base_url=base_url,
            already_filled=already_filled,
        )
        setup = self.create_admin(run, email=email, password=password, session=session)
        return run, setup
