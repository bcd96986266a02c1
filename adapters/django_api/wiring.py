"""
Pixie Django Adapter Wiring
===========================
Builds the core objects from Django settings.

Adapter-only glue. Every factory returns a new object: the settings
store in particular is a per-request snapshot, never a shared instance.
"""

from __future__ import annotations

from django.conf import settings

from core.accounts.service import DjangoAccountRepository, DjangoContainerRepository
from core.bootstrap.compatibility import CompatibilityChecker, FolderRequirement
from core.bootstrap.orchestrator import InstallationOrchestrator
from core.bootstrap.runtime import DjangoConfigurationView, DjangoMigrationRunner
from core.envfile.editor import ConfigFileEditor
from core.http_api.dependencies import HttpApiDependencies
from core.settings_store.environment import DotenvEnvironment
from core.settings_store.repository import DbSettingRepository
from core.settings_store.service import SettingsStore


def build_settings_store() -> SettingsStore:
    return SettingsStore(
        repository=DbSettingRepository(),
        environment=DotenvEnvironment(settings.PIXIE_ENV_FILE),
        editor=ConfigFileEditor(),
        resource_id=settings.PIXIE_ENV_FILE,
    )


def build_checker() -> CompatibilityChecker:
    return CompatibilityChecker(
        settings.BASE_DIR,
        folders=tuple(
            FolderRequirement(path) for path in settings.PIXIE_REQUIRED_WRITABLE_DIRS
        ),
        min_version=tuple(settings.PIXIE_MIN_PYTHON),
    )


def build_orchestrator() -> InstallationOrchestrator:
    return InstallationOrchestrator(
        checker=build_checker(),
        editor=ConfigFileEditor(),
        config_view=DjangoConfigurationView(),
        migration_runner=DjangoMigrationRunner(settings.PIXIE_INSTALL_SEED_FIXTURES),
        settings_store_factory=build_settings_store,
        accounts=DjangoAccountRepository(),
        containers=DjangoContainerRepository(),
        resource_id=settings.PIXIE_ENV_FILE,
        template_id=settings.PIXIE_ENV_TEMPLATE,
    )


def build_dependencies() -> HttpApiDependencies:
    return HttpApiDependencies(
        settings_store_factory=build_settings_store,
        orchestrator_factory=build_orchestrator,
        checker_factory=build_checker,
    )
