"""
ShopGate Resources — Supplier Connection
==========================================
A trading link requested by a buyer tenant (tenant_id) of a
supplier tenant (counterparty_tenant_id). The supplier decides on the
request and manages the connection afterwards.
"""

from __future__ import annotations

from shopgate.policy.ability import Ability, Side, Target
from shopgate.policy.contracts import ResourcePolicy
from shopgate.policy.predicates import has_any_capability, has_capability
from shopgate.primitives.resource import ResourceShape
from shopgate.roles.models import Capability as C

_CATALOG = has_capability(C.MANAGE_SUPPLIER_CATALOG)


def _supplier(name: str) -> Ability:
    return Ability(name, sides={Side.SUPPLIER: _CATALOG}, transition=name)


class SupplierConnectionPolicy(ResourcePolicy):
    resource_type = "supplier_connection"
    shape = ResourceShape(
        required={"status", "counterparty_tenant_id"},
        optional={"id"},
    )
    description = "Buyer to supplier trading connections."

    def declare_abilities(self):
        return (
            Ability(
                "view_any",
                role=has_any_capability(
                    C.MANAGE_PURCHASE_ORDERS,
                    C.VIEW_PURCHASE_ORDERS,
                    C.MANAGE_SUPPLIER_CATALOG,
                    C.PROCESS_SUPPLIER_ORDERS,
                ),
                target=Target.NONE,
            ),
            Ability(
                "view",
                sides={
                    Side.BUYER: has_any_capability(
                        C.MANAGE_PURCHASE_ORDERS, C.VIEW_PURCHASE_ORDERS
                    ),
                    Side.SUPPLIER: has_any_capability(
                        C.MANAGE_SUPPLIER_CATALOG, C.PROCESS_SUPPLIER_ORDERS
                    ),
                },
            ),
            Ability(
                "request",
                role=has_capability(C.MANAGE_PURCHASE_ORDERS),
                target=Target.NONE,
            ),
            _supplier("approve"),
            _supplier("reject"),
            _supplier("suspend"),
            _supplier("activate"),
            _supplier("update_terms"),
        )
