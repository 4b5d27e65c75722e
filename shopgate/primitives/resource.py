"""
ShopGate Resource Primitive — What Is Being Acted Upon
=======================================================
A Resource is an immutable snapshot of one tenant-owned entity,
assembled by the caller from its own storage for a single evaluation.

Every resource type declares a ResourceShape at registration time:
which optional fields it always carries (required) and which it may
carry (optional). The engine checks the snapshot against the shape
instead of probing attributes at runtime; a required field that is
absent is a configuration error, not a denial.

This file contains NO persistence logic.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from types import MappingProxyType
from typing import Any, FrozenSet, Mapping, Optional

from shopgate.exceptions import MissingResourceFieldError
from shopgate.primitives.actor import Identifier, check_identifier, dump_identifier
from shopgate.roles.models import Role
from shopgate.scope.resolver import as_shop_set


# ══════════════════════════════════════════════════════════════
# RESOURCE SNAPSHOT
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Resource:
    """
    Fields:
        resource_type:          Registered resource type name
        tenant_id:              Owning tenant (buyer side for bilateral types)
        id:                     Resource identifier (optional)
        shop_id:                Single shop the resource is tied to
        shop_ids:               Shop set (staff records, multi-shop resources)
        owner_user_id:          User the resource belongs to (requester,
                                preparer, the staff member themself)
        owner_role:             Role of that user, for seniority checks
        status:                 Lifecycle status
        customer_id:            Storefront customer the resource belongs to
        counterparty_tenant_id: Supplier side of a bilateral resource
        attributes:             Resource-specific flags (read-only)
    """
    resource_type: str
    tenant_id: Identifier
    id: Optional[Identifier] = None
    shop_id: Optional[Identifier] = None
    shop_ids: FrozenSet = field(default_factory=frozenset)
    owner_user_id: Optional[Identifier] = None
    owner_role: Optional[Role] = None
    status: Optional[str] = None
    customer_id: Optional[Identifier] = None
    counterparty_tenant_id: Optional[Identifier] = None
    attributes: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not self.resource_type or not isinstance(self.resource_type, str):
            raise ValueError("resource_type must be a non-empty string.")
        check_identifier(self.tenant_id, "tenant_id")
        if self.owner_role is not None and not isinstance(self.owner_role, Role):
            raise ValueError("owner_role must be Role enum or None.")
        if self.status is not None and not isinstance(self.status, str):
            raise ValueError("status must be a string or None.")
        if isinstance(self.shop_ids, (str, bytes)):
            raise TypeError("shop_ids must be a collection, not a string.")
        object.__setattr__(self, "shop_ids", frozenset(self.shop_ids or ()))
        object.__setattr__(
            self, "attributes", MappingProxyType(dict(self.attributes or {}))
        )

    @property
    def shops(self) -> FrozenSet:
        """Every shop this resource is tied to."""
        return self.shop_ids | as_shop_set(self.shop_id)

    @property
    def tenant_ids(self) -> FrozenSet:
        """Tenants party to this resource (two for bilateral resources)."""
        parties = {self.tenant_id}
        if self.counterparty_tenant_id is not None:
            parties.add(self.counterparty_tenant_id)
        return frozenset(parties)

    def attribute(self, name: str, default: Any = None) -> Any:
        return self.attributes.get(name, default)

    def require(self, name: str, ability: str = "") -> Any:
        """
        Value of a field or attribute that must be present.
        Raises MissingResourceFieldError instead of returning None.
        """
        if name in _FIELD_NAMES:
            value = getattr(self, name)
            if name == "shop_ids":
                value = value or None
        else:
            value = self.attributes.get(name)
        if value is None:
            raise MissingResourceFieldError(self.resource_type, name, ability)
        return value

    def with_status(self, status: str) -> Resource:
        """Copy of this snapshot in another status."""
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["status"] = status
        data["attributes"] = dict(self.attributes)
        return Resource(**data)

    def to_dict(self) -> dict:
        return {
            "resource_type": self.resource_type,
            "tenant_id": dump_identifier(self.tenant_id),
            "id": dump_identifier(self.id),
            "shop_id": dump_identifier(self.shop_id),
            "shop_ids": sorted(
                (dump_identifier(s) for s in self.shop_ids), key=str
            ),
            "owner_user_id": dump_identifier(self.owner_user_id),
            "owner_role": self.owner_role.value if self.owner_role else None,
            "status": self.status,
            "customer_id": dump_identifier(self.customer_id),
            "counterparty_tenant_id": dump_identifier(
                self.counterparty_tenant_id
            ),
            "attributes": dict(self.attributes),
        }

    @classmethod
    def from_dict(cls, data: dict) -> Resource:
        return cls(
            resource_type=data["resource_type"],
            tenant_id=data["tenant_id"],
            id=data.get("id"),
            shop_id=data.get("shop_id"),
            shop_ids=data.get("shop_ids") or (),
            owner_user_id=data.get("owner_user_id"),
            owner_role=Role(data["owner_role"]) if data.get("owner_role") else None,
            status=data.get("status"),
            customer_id=data.get("customer_id"),
            counterparty_tenant_id=data.get("counterparty_tenant_id"),
            attributes=data.get("attributes") or {},
        )


_FIELD_NAMES = frozenset(
    f.name for f in fields(Resource) if f.name != "attributes"
)


# ══════════════════════════════════════════════════════════════
# RESOURCE SHAPE
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ResourceShape:
    """
    Declares which snapshot fields a resource type carries.

    Fields:
        required:  Fields/attributes every snapshot must supply
        optional:  Fields/attributes a snapshot may supply

    Field names are Resource field names; any other name refers to
    a key of Resource.attributes.
    """
    required: FrozenSet[str] = frozenset()
    optional: FrozenSet[str] = frozenset()

    def __post_init__(self):
        object.__setattr__(self, "required", frozenset(self.required))
        object.__setattr__(self, "optional", frozenset(self.optional))
        overlap = self.required & self.optional
        if overlap:
            raise ValueError(
                f"Fields {sorted(overlap)} cannot be both required and optional."
            )
        if "resource_type" in self.optional or "tenant_id" in self.optional:
            raise ValueError("resource_type and tenant_id are always required.")

    @property
    def has_status(self) -> bool:
        return "status" in self.required or "status" in self.optional

    @property
    def has_shops(self) -> bool:
        names = self.required | self.optional
        return "shop_id" in names or "shop_ids" in names

    def carries(self, name: str) -> bool:
        return name in self.required or name in self.optional

    def validate(self, resource: Resource, ability: str = "") -> None:
        for name in sorted(self.required):
            resource.require(name, ability)
