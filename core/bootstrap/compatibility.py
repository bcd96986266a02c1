"""
Pixie Bootstrap - Compatibility Check
=====================================
Read-only probe of the host before installation:

1. Runtime version against a minimum
2. Optional modules that must (or must not) be importable
3. Directories that must be writable

Purely diagnostic. Nothing here raises; every problem is reported as
data and the caller decides whether to continue.
"""

from __future__ import annotations

import importlib.util
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Iterable, Optional

MIN_RUNTIME_VERSION: tuple[int, ...] = (3, 10)


# ══════════════════════════════════════════════════════════════
# REQUIREMENT TABLES
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ExtensionRequirement:
    name: str
    expected: bool = True


@dataclass(frozen=True)
class FolderRequirement:
    path: str  # relative to the application root


REQUIRED_EXTENSIONS: tuple[ExtensionRequirement, ...] = (
    ExtensionRequirement("sqlite3"),
    ExtensionRequirement("ssl"),
    ExtensionRequirement("zlib"),
    ExtensionRequirement("hashlib"),
    ExtensionRequirement("unicodedata"),
    ExtensionRequirement("PIL"),
)

REQUIRED_WRITABLE_DIRS: tuple[FolderRequirement, ...] = (
    FolderRequirement("../assets/avatars"),
    FolderRequirement("storage"),
    FolderRequirement("storage/app"),
    FolderRequirement("storage/framework"),
    FolderRequirement("storage/logs"),
    FolderRequirement("storage/uploads"),
    FolderRequirement("storage/zips"),
)


# ══════════════════════════════════════════════════════════════
# REPORT
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ExtensionCheck:
    name: str
    expected: bool
    actual: bool

    @property
    def ok(self) -> bool:
        return self.expected == self.actual


@dataclass(frozen=True)
class FolderCheck:
    path: str
    writable: bool


@dataclass(frozen=True)
class CompatibilityReport:
    problem: bool
    extensions: tuple[ExtensionCheck, ...]
    folders: tuple[FolderCheck, ...]
    runtime_version_ok: bool

    def extension(self, name: str) -> Optional[ExtensionCheck]:
        for check in self.extensions:
            if check.name == name:
                return check
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "problem": self.problem,
            "extensions": [
                {"name": c.name, "expected": c.expected, "actual": c.actual}
                for c in self.extensions
            ],
            "folders": [
                {"path": c.path, "writable": c.writable} for c in self.folders
            ],
            "runtime_version_ok": self.runtime_version_ok,
        }


# ══════════════════════════════════════════════════════════════
# PROBES
# ══════════════════════════════════════════════════════════════

def module_available(name: str) -> bool:
    try:
        return importlib.util.find_spec(name) is not None
    except (ImportError, ValueError):
        return False


def _absolute(path: Path) -> Path:
    try:
        return path.resolve()
    except (OSError, RuntimeError):
        return Path(os.path.abspath(path))


def _is_writable(path: Path) -> bool:
    try:
        return path.is_dir() and os.access(path, os.W_OK)
    except OSError:
        return False


class CompatibilityChecker:
    def __init__(
        self,
        base_dir,
        *,
        extensions: Iterable[ExtensionRequirement] = REQUIRED_EXTENSIONS,
        folders: Iterable[FolderRequirement] = REQUIRED_WRITABLE_DIRS,
        min_version: tuple[int, ...] = MIN_RUNTIME_VERSION,
        runtime_version: Optional[tuple[int, ...]] = None,
        module_probe: Callable[[str], bool] = module_available,
    ):
        self._base_dir = Path(base_dir)
        self._extensions = tuple(extensions)
        self._folders = tuple(folders)
        self._min_version = tuple(min_version)
        self._runtime_version = (
            tuple(sys.version_info[:3]) if runtime_version is None else tuple(runtime_version)
        )
        self._module_probe = module_probe

    def check(self) -> CompatibilityReport:
        extensions = self.check_extensions()
        folders = self.check_folders()
        problem = any(not c.ok for c in extensions) or any(
            not c.writable for c in folders
        )
        return CompatibilityReport(
            problem=problem,
            extensions=extensions,
            folders=folders,
            runtime_version_ok=self.check_runtime_version(),
        )

    def check_runtime_version(self) -> bool:
        return self._runtime_version >= self._min_version

    def check_extensions(self) -> tuple[ExtensionCheck, ...]:
        checked = []
        for requirement in self._extensions:
            try:
                actual = bool(self._module_probe(requirement.name))
            except Exception:
                # a misbehaving probe counts as "not loaded"
                actual = False
            checked.append(
                ExtensionCheck(
                    name=requirement.name,
                    expected=requirement.expected,
                    actual=actual,
                )
            )
        return tuple(checked)

    def check_folders(self) -> tuple[FolderCheck, ...]:
        checked = []
        for requirement in self._folders:
            path = _absolute(self._base_dir / requirement.path)
            checked.append(FolderCheck(path=str(path), writable=_is_writable(path)))
        return tuple(checked)
