"""
Pixie HTTP API - Dependencies
=============================
Factories injected into the handlers. Every call builds fresh objects so
that no settings snapshot outlives the request that took it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from core.bootstrap.compatibility import CompatibilityChecker
from core.bootstrap.orchestrator import InstallationOrchestrator
from core.settings_store.service import SettingsStore


@dataclass(frozen=True)
class HttpApiDependencies:
    settings_store_factory: Callable[[], SettingsStore]
    orchestrator_factory: Callable[[], InstallationOrchestrator]
    checker_factory: Callable[[], CompatibilityChecker]
