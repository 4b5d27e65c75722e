"""
ShopGate Resources — Order
============================
Orders are raised by staff at the till or by customers on the
storefront. customer_id identifies the storefront customer; a
customer may view their own orders and cancel them while pending.
"""

from __future__ import annotations

from shopgate.policy.ability import Ability, Target
from shopgate.policy.contracts import ResourcePolicy
from shopgate.policy.predicates import (
    has_any_capability,
    has_capability,
    is_customer,
    is_customer_owner,
    role_at_least,
    status_in,
)
from shopgate.primitives.resource import ResourceShape
from shopgate.roles.models import Capability as C
from shopgate.roles.models import Role

_SELLS = has_any_capability(C.PROCESS_ORDERS, C.PROCESS_SALES)
_PROCESSES = has_capability(C.PROCESS_ORDERS)
_OWN_ORDER = is_customer_owner(required=False)


def _fulfilment(name: str) -> Ability:
    return Ability(name, role=_PROCESSES, scoped=True, transition=name)


class OrderPolicy(ResourcePolicy):
    resource_type = "order"
    shape = ResourceShape(
        required={"status"},
        optional={"id", "shop_id", "customer_id", "owner_user_id"},
    )
    description = "Sales and storefront orders."

    def declare_abilities(self):
        return (
            Ability("view_any", role=_SELLS, target=Target.NONE),
            Ability("view", self_service=_OWN_ORDER, role=_SELLS, scoped=True),
            Ability("create", role=_SELLS | is_customer(), target=Target.NONE),
            _fulfilment("update"),
            _fulfilment("confirm"),
            _fulfilment("process"),
            _fulfilment("pack"),
            _fulfilment("ship"),
            _fulfilment("deliver"),
            Ability(
                "cancel",
                self_service=_OWN_ORDER & status_in("pending"),
                role=_PROCESSES,
                scoped=True,
                transition="cancel",
            ),
            Ability(
                "refund",
                role=_PROCESSES & role_at_least(Role.STORE_MANAGER),
                scoped=True,
                transition="refund",
            ),
            Ability(
                "delete",
                role=role_at_least(Role.STORE_MANAGER),
                scoped=True,
                transition="delete",
            ),
        )
