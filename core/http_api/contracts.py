"""
Pixie HTTP API - Contracts
==========================
Framework-agnostic request/response DTOs for the settings and
installer endpoints.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class SettingsUpdateHttpRequest:
    values: dict[str, Any]

    def __post_init__(self):
        if not isinstance(self.values, dict):
            raise ValueError("values must be an object.")
        for key in self.values:
            if not isinstance(key, str) or not key.strip():
                raise ValueError("setting names must be non-empty strings.")


@dataclass(frozen=True)
class DatabaseInstallHttpRequest:
    credentials: dict[str, Any]
    base_url: str
    already_filled: bool = False

    def __post_init__(self):
        if not isinstance(self.credentials, dict):
            raise ValueError("credentials must be an object.")
        if not self.base_url or not isinstance(self.base_url, str):
            raise ValueError("base_url must be a non-empty string.")
        if not isinstance(self.already_filled, bool):
            raise ValueError("already_filled must be a boolean.")


@dataclass(frozen=True)
class AdminInstallHttpRequest:
    email: str
    password: str = field(repr=False)

    def __post_init__(self):
        if not self.email or not isinstance(self.email, str):
            raise ValueError("email must be a non-empty string.")
        if not self.password or not isinstance(self.password, str):
            raise ValueError("password must be a non-empty string.")


@dataclass(frozen=True)
class HttpApiErrorBody:
    code: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": dict(self.details),
        }


@dataclass(frozen=True)
class HttpApiResponse:
    ok: bool
    data: Any = None
    error: Optional[HttpApiErrorBody] = None
    meta: Optional[dict[str, Any]] = None

    def to_dict(self) -> dict[str, Any]:
        if self.ok:
            payload: dict[str, Any] = {"ok": True, "data": self.data}
            if self.meta:
                payload["meta"] = dict(self.meta)
            return payload
        if self.error is None:
            raise ValueError("error must be set when ok is False.")
        return {"ok": False, "error": self.error.to_dict()}
