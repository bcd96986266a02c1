"""
Pixie Bootstrap - Collaborator Contracts
========================================
What the installation orchestrator needs from the outside world.
Implementations live with their framework (core.accounts.service,
core.bootstrap.runtime); tests use in-memory fakes.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass, field
from typing import Any, Optional, Protocol

from core.context.actor_context import ACTOR_TYPE_HUMAN, ActorContext


@dataclass(frozen=True)
class AdminAccount:
    account_id: str
    email: str
    permissions: tuple[str, ...] = field(default_factory=tuple)

    def to_actor(self) -> ActorContext:
        return ActorContext(
            actor_type=ACTOR_TYPE_HUMAN,
            actor_id=self.account_id,
            permissions=tuple(self.permissions),
        )


@dataclass(frozen=True)
class RootContainer:
    container_id: str
    name: str
    share_token: str
    owner_id: str
    description: str = ""


@dataclass(frozen=True)
class CommandResult:
    ok: bool
    command: str
    detail: str = ""


class AccountRepository(Protocol):
    def create_account(
        self,
        *,
        email: str,
        password: str,
        permissions: tuple[str, ...],
    ) -> AdminAccount:
        ...

    def authenticate(self, email: str, password: str) -> Optional[AdminAccount]:
        ...

    def login(self, account: AdminAccount, session: MutableMapping[str, Any]) -> None:
        ...


class ContainerRepository(Protocol):
    def create_root_container(
        self,
        *,
        owner_id: str,
        description: str,
    ) -> RootContainer:
        ...


class MigrationRunner(Protocol):
    def run_migrations(self) -> CommandResult:
        ...

    def run_seed(self) -> CommandResult:
        ...


class ConfigurationView(Protocol):
    """In-process configuration that must follow the configuration resource."""

    def reload(self, resource_id) -> None:
        ...

    def force_environment(self, name: str) -> None:
        ...

    def set_database_credentials(self, credentials: Mapping[str, Any]) -> None:
        ...
