"""
ShopGate Resources — Purchase Order
=====================================
Bilateral resource between a buyer tenant (tenant_id) and a
supplier tenant (counterparty_tenant_id). The actor's tenant decides
which side's predicate applies; a tenant that is neither party is
denied with tenant_mismatch.

Shop scope applies to the buyer side only. The supplier's staff are
not assigned to the buyer's shops.
"""

from __future__ import annotations

from shopgate.policy.ability import Ability, Side, Target, context_resource
from shopgate.policy.contracts import ResourcePolicy
from shopgate.policy.predicates import has_any_capability, has_capability
from shopgate.primitives.resource import ResourceShape
from shopgate.roles.models import Capability as C

_BUYER_VIEWS = has_any_capability(C.MANAGE_PURCHASE_ORDERS, C.VIEW_PURCHASE_ORDERS)
_BUYER_MANAGES = has_capability(C.MANAGE_PURCHASE_ORDERS)
_SUPPLIER_VIEWS = has_any_capability(
    C.PROCESS_SUPPLIER_ORDERS, C.MANAGE_SUPPLIER_CATALOG
)
_SUPPLIER_PROCESSES = has_capability(C.PROCESS_SUPPLIER_ORDERS)


def _buyer(name: str, predicate=_BUYER_MANAGES) -> Ability:
    return Ability(
        name, sides={Side.BUYER: predicate}, scoped=True, transition=name
    )


def _supplier(name: str) -> Ability:
    return Ability(name, sides={Side.SUPPLIER: _SUPPLIER_PROCESSES}, transition=name)


class PurchaseOrderPolicy(ResourcePolicy):
    resource_type = "purchase_order"
    shape = ResourceShape(
        required={"status", "counterparty_tenant_id"},
        optional={"id", "shop_id", "owner_user_id"},
    )
    description = "Purchase orders between a buyer and a supplier tenant."

    def declare_abilities(self):
        return (
            Ability(
                "view_any",
                role=has_any_capability(
                    C.MANAGE_PURCHASE_ORDERS,
                    C.VIEW_PURCHASE_ORDERS,
                    C.PROCESS_SUPPLIER_ORDERS,
                ),
                target=Target.NONE,
            ),
            Ability(
                "view",
                sides={Side.BUYER: _BUYER_VIEWS, Side.SUPPLIER: _SUPPLIER_VIEWS},
                scoped=True,
            ),
            Ability(
                "create",
                role=_BUYER_MANAGES,
                target=Target.NONE,
                subject="shop",
                context=(context_resource("shop"),),
                scoped=True,
                description="Raise a purchase order for a shop.",
            ),
            _buyer("update"),
            _buyer("submit"),
            _buyer("delete"),
            _supplier("approve"),
            _supplier("ship"),
            _buyer("receive", has_capability(C.RECEIVE_STOCK)),
            _buyer("complete"),
            Ability(
                "cancel",
                sides={
                    Side.BUYER: _BUYER_MANAGES,
                    Side.SUPPLIER: _SUPPLIER_PROCESSES,
                },
                scoped=True,
                transition="cancel",
            ),
            _buyer("record_payment"),
        )
