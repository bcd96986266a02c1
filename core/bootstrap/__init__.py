"""
Pixie Bootstrap - Host Check and Installation
=============================================
Verifies the host, then runs the one-time installation sequence.
"""

from core.bootstrap.compatibility import (
    CompatibilityChecker,
    CompatibilityReport,
    ExtensionRequirement,
    FolderRequirement,
)
from core.bootstrap.errors import InstallationError, InstallationStateError

__all__ = [
    "CompatibilityChecker",
    "CompatibilityReport",
    "ExtensionRequirement",
    "FolderRequirement",
    "InstallationError",
    "InstallationStateError",
]
