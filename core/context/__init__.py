"""
Pixie Context - Public API
==========================
Canonical actor context and permission constants.
"""

from core.context.actor_context import (
    ACTOR_TYPE_HUMAN,
    PERMISSION_ADMIN,
    ActorContext,
    actor_is_admin,
)

__all__ = [
    "ACTOR_TYPE_HUMAN",
    "PERMISSION_ADMIN",
    "ActorContext",
    "actor_is_admin",
]
