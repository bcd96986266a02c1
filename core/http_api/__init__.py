"""
Pixie HTTP API - Public API
===========================
"""

from core.http_api.contracts import (
    AdminInstallHttpRequest,
    DatabaseInstallHttpRequest,
    HttpApiErrorBody,
    HttpApiResponse,
    SettingsUpdateHttpRequest,
)
from core.http_api.dependencies import HttpApiDependencies
from core.http_api.errors import (
    error_response,
    status_for,
    success_response,
)
from core.http_api.handlers import (
    get_compatibility,
    get_settings,
    post_install_admin,
    post_install_database,
    post_settings,
)

__all__ = [
    "AdminInstallHttpRequest",
    "DatabaseInstallHttpRequest",
    "SettingsUpdateHttpRequest",
    "HttpApiErrorBody",
    "HttpApiResponse",
    "HttpApiDependencies",
    "error_response",
    "success_response",
    "status_for",
    "get_settings",
    "post_settings",
    "get_compatibility",
    "post_install_database",
    "post_install_admin",
]
