"""
Pixie HTTP API - Error Mapping
==============================
Stable transport envelopes and the HTTP status each error code maps to.
"""

from __future__ import annotations

from typing import Any, Optional

from core.http_api.contracts import HttpApiErrorBody, HttpApiResponse

INVALID_REQUEST = "INVALID_REQUEST"
PERMISSION_DENIED = "PERMISSION_DENIED"
INSTALLATION_FAILED = "INSTALLATION_FAILED"
INSTALLATION_STATE = "INSTALLATION_STATE"
ALREADY_INSTALLED = "ALREADY_INSTALLED"
METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"

STATUS_BY_CODE = {
    INVALID_REQUEST: 400,
    PERMISSION_DENIED: 403,
    METHOD_NOT_ALLOWED: 405,
    INSTALLATION_STATE: 409,
    ALREADY_INSTALLED: 409,
    INSTALLATION_FAILED: 500,
}


def error_response(
    *,
    code: str,
    message: str,
    details: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    return HttpApiResponse(
        ok=False,
        error=HttpApiErrorBody(
            code=code,
            message=message,
            details=details or {},
        ),
    ).to_dict()


def success_response(
    data: Any,
    *,
    meta: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    return HttpApiResponse(ok=True, data=data, meta=meta).to_dict()


def status_for(payload: dict[str, Any]) -> int:
    if payload.get("ok"):
        return 200
    code = payload.get("error", {}).get("code")
    return STATUS_BY_CODE.get(code, 400)
