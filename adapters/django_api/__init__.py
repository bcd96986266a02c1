"""
Pixie Django HTTP adapter.
Thin framework glue over core/http_api handlers.
"""

from adapters.django_api.wiring import (
    build_checker,
    build_dependencies,
    build_orchestrator,
    build_settings_store,
)

__all__ = [
    "build_checker",
    "build_dependencies",
    "build_orchestrator",
    "build_settings_store",
]
