"""
Pixie HTTP API - Framework-Agnostic Handlers
============================================
Pure handler functions over contracts and injected dependencies.
Every handler returns a transport envelope; none of them raise for
expected failures.
"""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from typing import Any

from core.bootstrap.errors import InstallationError, InstallationStateError
from core.bootstrap.orchestrator import InstallationRun, InstallationState
from core.context.actor_context import ActorContext
from core.http_api.contracts import (
    AdminInstallHttpRequest,
    DatabaseInstallHttpRequest,
    SettingsUpdateHttpRequest,
)
from core.http_api.errors import (
    ALREADY_INSTALLED,
    INSTALLATION_FAILED,
    INSTALLATION_STATE,
    INVALID_REQUEST,
    PERMISSION_DENIED,
    error_response,
    success_response,
)
from core.settings_store.errors import SettingsPermissionError

logger = logging.getLogger("pixie.http_api")


def _run_payload(run: InstallationRun) -> dict[str, Any]:
    return {
        "state": run.state.value,
        "manage_config_resource": run.manage_config_resource,
    }


def _installation_error(exc: InstallationError) -> dict[str, Any]:
    code = INSTALLATION_STATE if isinstance(exc, InstallationStateError) else INSTALLATION_FAILED
    return error_response(
        code=code,
        message=str(exc),
        details={"step": exc.step, "detail": exc.detail},
    )


def _already_installed() -> dict[str, Any]:
    return error_response(
        code=ALREADY_INSTALLED,
        message="The application is already installed.",
    )


# ══════════════════════════════════════════════════════════════
# SETTINGS
# ══════════════════════════════════════════════════════════════

def get_settings(actor: ActorContext | None, dependencies) -> dict[str, Any]:
    store = dependencies.settings_store_factory()
    return success_response(store.get_all_safe(actor))


def post_settings(
    request: SettingsUpdateHttpRequest,
    actor: ActorContext | None,
    dependencies,
) -> dict[str, Any]:
    """
    Apply every pair independently.

    A failing key never stops the remaining keys from being attempted;
    the response lists what was applied, what the actor may not write
    (``rejected``) and what could not be stored as given (``invalid``,
    e.g. a line break in a configuration-resource value).
    """
    store = dependencies.settings_store_factory()
    applied: list[str] = []
    rejected: list[str] = []
    invalid: dict[str, str] = {}

    for key, value in request.values.items():
        try:
            store.set(key, value, actor)
        except SettingsPermissionError:
            rejected.append(key)
            continue
        except ValueError as exc:
            invalid[key] = str(exc)
            continue
        applied.append(key)

    if invalid:
        return error_response(
            code=INVALID_REQUEST,
            message="Some settings could not be stored.",
            details={"applied": applied, "rejected": rejected, "invalid": invalid},
        )
    if rejected:
        return error_response(
            code=PERMISSION_DENIED,
            message="Only administrators can change settings.",
            details={"applied": applied, "rejected": rejected},
        )
    return success_response(
        {"applied": applied},
        meta={"message": "Settings updated."},
    )


# ══════════════════════════════════════════════════════════════
# INSTALLER
# ══════════════════════════════════════════════════════════════

def get_compatibility(run: InstallationRun, dependencies) -> dict[str, Any]:
    if run.state in (
        InstallationState.NOT_STARTED,
        InstallationState.COMPATIBILITY_CHECKED,
    ):
        report = dependencies.orchestrator_factory().check_compatibility(run)
    else:
        report = dependencies.checker_factory().check()
    return success_response(report.to_dict(), meta=_run_payload(run))


def post_install_database(
    request: DatabaseInstallHttpRequest,
    run: InstallationRun,
    dependencies,
) -> dict[str, Any]:
    if dependencies.settings_store_factory().is_installed():
        return _already_installed()

    orchestrator = dependencies.orchestrator_factory()
    try:
        if run.state is InstallationState.NOT_STARTED:
            orchestrator.check_compatibility(run)
        orchestrator.create_db(
            run,
            request.credentials,
            base_url=request.base_url,
            already_filled=request.already_filled,
        )
    except InstallationError as exc:
        logger.error("Database installation stopped: %s", exc)
        return _installation_error(exc)
    except ValueError as exc:
        return error_response(code=INVALID_REQUEST, message=str(exc))

    return success_response(_run_payload(run))


def post_install_admin(
    request: AdminInstallHttpRequest,
    run: InstallationRun,
    session: MutableMapping[str, Any],
    dependencies,
) -> dict[str, Any]:
    if dependencies.settings_store_factory().is_installed():
        return _already_installed()

    orchestrator = dependencies.orchestrator_factory()
    try:
        setup = orchestrator.create_admin(
            run,
            email=request.email,
            password=request.password,
            session=session,
        )
    except InstallationError as exc:
        logger.error("Administrator setup stopped: %s", exc)
        return _installation_error(exc)
    except ValueError as exc:
        return error_response(code=INVALID_REQUEST, message=str(exc))

    return success_response(
        {
            "account_id": setup.account.account_id,
            "email": setup.account.email,
            "root_folder": {
                "id": setup.container.container_id,
                "name": setup.container.name,
                "share_id": setup.container.share_token,
            },
        },
        meta=_run_payload(run),
    )
