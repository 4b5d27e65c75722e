"""
ShopGate Actor Primitive — Who Is Asking
==========================================
The Actor captures WHO attempts an operation. It is passed explicitly
into every evaluation; the engine never looks up a "current user".

Actor kinds:
    StaffActor     — tenant staff member with a role and shop assignments
    CustomerActor  — storefront customer of one tenant

RULES (NON-NEGOTIABLE):
- Exactly one tenant_id per actor
- Shop assignments are a set (possibly empty), never a single value
- Role level is NOT stored on the actor; it is read from the
  RoleHierarchy so a deployment override can never disagree with it
- Snapshots are immutable for the duration of a request

This file contains NO persistence logic.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import FrozenSet, Union

from shopgate.roles.models import Role

Identifier = Union[int, str, uuid.UUID]


def check_identifier(value, name: str) -> None:
    if value is None or isinstance(value, bool):
        raise ValueError(f"{name} must be an int, str or UUID.")
    if not isinstance(value, (int, str, uuid.UUID)):
        raise ValueError(f"{name} must be an int, str or UUID.")
    if isinstance(value, str) and not value:
        raise ValueError(f"{name} must be non-empty.")


def dump_identifier(value):
    if isinstance(value, uuid.UUID):
        return str(value)
    return value


# ══════════════════════════════════════════════════════════════
# STAFF ACTOR
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class StaffActor:
    """
    Fields:
        id:               User identifier
        tenant_id:        Tenant boundary
        role:             Role enum member
        shop_ids:         Assigned shops (empty set means none)
        is_tenant_owner:  Set by tenant provisioning, never by staff management
    """
    id: Identifier
    tenant_id: Identifier
    role: Role
    shop_ids: FrozenSet = field(default_factory=frozenset)
    is_tenant_owner: bool = False

    def __post_init__(self):
        check_identifier(self.id, "id")
        check_identifier(self.tenant_id, "tenant_id")
        if not isinstance(self.role, Role):
            raise ValueError("role must be Role enum.")
        if isinstance(self.shop_ids, (str, bytes)):
            raise TypeError("shop_ids must be a collection, not a string.")
        object.__setattr__(self, "shop_ids", frozenset(self.shop_ids or ()))
        if not isinstance(self.is_tenant_owner, bool):
            raise ValueError("is_tenant_owner must be bool.")

    @property
    def is_staff(self) -> bool:
        return True

    @property
    def is_customer(self) -> bool:
        return False

    def to_dict(self) -> dict:
        return {
            "kind": "staff",
            "id": dump_identifier(self.id),
            "tenant_id": dump_identifier(self.tenant_id),
            "role": self.role.value,
            "shop_ids": sorted(
                (dump_identifier(s) for s in self.shop_ids), key=str
            ),
            "is_tenant_owner": self.is_tenant_owner,
        }

    @classmethod
    def from_dict(cls, data: dict) -> StaffActor:
        return cls(
            id=data["id"],
            tenant_id=data["tenant_id"],
            role=Role(data["role"]),
            shop_ids=data.get("shop_ids") or (),
            is_tenant_owner=bool(data.get("is_tenant_owner", False)),
        )


# ══════════════════════════════════════════════════════════════
# CUSTOMER ACTOR
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class CustomerActor:
    """A storefront customer. Holds no role and no shop assignments."""
    id: Identifier
    tenant_id: Identifier

    def __post_init__(self):
        check_identifier(self.id, "id")
        check_identifier(self.tenant_id, "tenant_id")

    @property
    def is_staff(self) -> bool:
        return False

    @property
    def is_customer(self) -> bool:
        return True

    def to_dict(self) -> dict:
        return {
            "kind": "customer",
            "id": dump_identifier(self.id),
            "tenant_id": dump_identifier(self.tenant_id),
        }

    @classmethod
    def from_dict(cls, data: dict) -> CustomerActor:
        return cls(id=data["id"], tenant_id=data["tenant_id"])


Actor = Union[StaffActor, CustomerActor]


def actor_from_dict(data: dict) -> Actor:
    """Rebuild either actor kind from its to_dict() payload."""
    kind = data.get("kind", "staff")
    if kind == "staff":
        return StaffActor.from_dict(data)
    if kind == "customer":
        return CustomerActor.from_dict(data)
    raise ValueError(f"Unknown actor kind '{kind}'.")
