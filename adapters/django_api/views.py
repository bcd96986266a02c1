"""
Pixie Django Adapter Views
==========================
Pass-through HTTP views over core/http_api handlers.
"""

from __future__ import annotations

import json
from typing import Any

from django.db import DatabaseError
from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt

from adapters.django_api.wiring import build_dependencies
from core.accounts.service import DjangoAccountRepository
from core.bootstrap.orchestrator import InstallationRun
from core.context.actor_context import ActorContext
from core.http_api.contracts import (
    AdminInstallHttpRequest,
    DatabaseInstallHttpRequest,
    SettingsUpdateHttpRequest,
)
from core.http_api.errors import (
    INVALID_REQUEST,
    METHOD_NOT_ALLOWED,
    error_response,
    status_for,
)
from core.http_api.handlers import (
    get_compatibility,
    get_settings,
    post_install_admin,
    post_install_database,
    post_settings,
)

SESSION_INSTALL_RUN_KEY = "pixie_install_run"


def _json(payload: dict[str, Any]) -> JsonResponse:
    return JsonResponse(payload, status=status_for(payload))


def _json_error(code: str, message: str) -> JsonResponse:
    return _json(error_response(code=code, message=message, details={}))


def _method_not_allowed() -> JsonResponse:
    return _json_error(METHOD_NOT_ALLOWED, "Method not allowed for this endpoint.")


def _parse_json_body(request: HttpRequest) -> dict[str, Any]:
    if not request.body:
        return {}
    try:
        parsed = json.loads(request.body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ValueError("Request body must be valid JSON.") from exc
    if not isinstance(parsed, dict):
        raise ValueError("Request body must be a JSON object.")
    return parsed


def _actor_from_request(request: HttpRequest) -> ActorContext | None:
    try:
        return DjangoAccountRepository().actor_for_session(request.session)
    except DatabaseError:
        # accounts table not migrated yet
        return None


def _load_run(request: HttpRequest) -> InstallationRun:
    return InstallationRun.from_dict(request.session.get(SESSION_INSTALL_RUN_KEY))


def _store_run(request: HttpRequest, run: InstallationRun) -> None:
    request.session[SESSION_INSTALL_RUN_KEY] = run.to_dict()


def _base_url(request: HttpRequest, body: dict[str, Any]) -> str:
    base_url = body.get("base_url")
    if base_url:
        return str(base_url)
    return request.build_absolute_uri("/").rstrip("/")


@csrf_exempt
def settings_view(request: HttpRequest) -> JsonResponse:
    dependencies = build_dependencies()
    actor = _actor_from_request(request)

    if request.method == "GET":
        return _json(get_settings(actor, dependencies))

    if request.method == "POST":
        try:
            contract = SettingsUpdateHttpRequest(values=_parse_json_body(request))
        except ValueError as exc:
            return _json_error(INVALID_REQUEST, str(exc))
        return _json(post_settings(contract, actor, dependencies))

    return _method_not_allowed()


def install_compatibility_view(request: HttpRequest) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    run = _load_run(request)
    payload = get_compatibility(run, build_dependencies())
    _store_run(request, run)
    return _json(payload)


@csrf_exempt
def install_database_view(request: HttpRequest) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    try:
        body = _parse_json_body(request)
        already_filled = body.pop("already_filled", False)
        base_url = _base_url(request, body)
        body.pop("base_url", None)
        contract = DatabaseInstallHttpRequest(
            credentials=body,
            base_url=base_url,
            already_filled=already_filled,
        )
    except ValueError as exc:
        return _json_error(INVALID_REQUEST, str(exc))

    run = _load_run(request)
    payload = post_install_database(contract, run, build_dependencies())
    _store_run(request, run)
    return _json(payload)


@csrf_exempt
def install_admin_view(request: HttpRequest) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    try:
        body = _parse_json_body(request)
        contract = AdminInstallHttpRequest(
            email=body.get("email", ""),
            password=body.get("password", ""),
        )
    except ValueError as exc:
        return _json_error(INVALID_REQUEST, str(exc))

    run = _load_run(request)
    payload = post_install_admin(contract, run, request.session, build_dependencies())
    _store_run(request, run)
    return _json(payload)
