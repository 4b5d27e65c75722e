"""
ShopGate Primitives — Actor and Resource Snapshots
===================================================
Immutable input snapshots the caller assembles before evaluation.

This package contains NO persistence logic.
"""

from shopgate.primitives.actor import (
    Actor,
    CustomerActor,
    Identifier,
    StaffActor,
    actor_from_dict,
)
from shopgate.primitives.resource import Resource, ResourceShape

__all__ = [
    # ── Actors ────────────────────────────────────────────────
    "Actor",
    "CustomerActor",
    "Identifier",
    "StaffActor",
    "actor_from_dict",
    # ── Resources ─────────────────────────────────────────────
    "Resource",
    "ResourceShape",
]
