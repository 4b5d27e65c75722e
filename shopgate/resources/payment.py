"""
ShopGate Resources — Payment
==============================
Recording a payment acts on the order it settles: the order is
passed as context["order"] and tenant, scope and lifecycle are all
checked against it.
"""

from __future__ import annotations

from shopgate.policy.ability import Ability, Target, context_resource
from shopgate.policy.contracts import ResourcePolicy
from shopgate.policy.predicates import (
    has_any_capability,
    is_customer_owner,
    role_at_least,
)
from shopgate.primitives.resource import ResourceShape
from shopgate.roles.models import Capability as C
from shopgate.roles.models import Role

_SELLS = has_any_capability(C.PROCESS_ORDERS, C.PROCESS_SALES)


class PaymentPolicy(ResourcePolicy):
    resource_type = "payment"
    shape = ResourceShape(optional={"id", "shop_id", "customer_id"})

    def declare_abilities(self):
        return (
            Ability("view_any", role=_SELLS, target=Target.NONE),
            Ability(
                "view",
                self_service=is_customer_owner(required=False),
                role=_SELLS,
                scoped=True,
            ),
            Ability(
                "create",
                role=_SELLS,
                target=Target.NONE,
                subject="order",
                context=(context_resource("order"),),
                scoped=True,
                transition="record_payment",
                description="Record a payment against an order.",
            ),
            Ability(
                "refund",
                role=role_at_least(Role.STORE_MANAGER),
                scoped=True,
            ),
        )
