"""
Pixie Context - ActorContext
============================
Immutable identity of whoever is driving a settings or install call.
"""

from __future__ import annotations

from dataclasses import dataclass, field

PERMISSION_ADMIN = "admin"

ACTOR_TYPE_HUMAN = "HUMAN"


@dataclass(frozen=True)
class ActorContext:
    """
    Canonical actor identity context.

    permissions is an immutable hint resolved by the account repository.
    An unauthenticated caller is represented by ``None``, not by an
    ActorContext with empty fields.
    """

    actor_type: str
    actor_id: str
    permissions: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not self.actor_type or not isinstance(self.actor_type, str):
            raise ValueError("actor_type must be a non-empty string.")

        if not self.actor_id or not isinstance(self.actor_id, str):
            raise ValueError("actor_id must be a non-empty string.")

        if not isinstance(self.permissions, tuple):
            raise ValueError("permissions must be a tuple.")

        object.__setattr__(self, "permissions", tuple(sorted(set(self.permissions))))

    def has_permission(self, permission: str) -> bool:
        return permission in self.permissions

    @property
    def is_admin(self) -> bool:
        return self.has_permission(PERMISSION_ADMIN)


def actor_is_admin(actor: ActorContext | None) -> bool:
    return actor is not None and actor.is_admin
