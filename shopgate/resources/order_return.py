"""
ShopGate Resources — Order Return
===================================
Returns are opened against a delivered order (context["order"]).
Customers may open and cancel returns on their own orders; staff
review, approve and process them. The staff member who logged a
return (owner_user_id) may not approve or reject it.
"""

from __future__ import annotations

from shopgate.policy.ability import Ability, Target, context_resource
from shopgate.policy.contracts import ResourcePolicy
from shopgate.policy.predicates import (
    has_any_capability,
    has_capability,
    is_customer_owner,
    role_at_least,
)
from shopgate.primitives.resource import ResourceShape
from shopgate.resources.common import NOT_SELF_IF_OWNED
from shopgate.roles.models import Capability as C
from shopgate.roles.models import Role

_HANDLES = has_any_capability(C.MANAGE_RETURNS, C.PROCESS_ORDERS)
_MANAGES = has_capability(C.MANAGE_RETURNS)
_DECIDES = _MANAGES & role_at_least(Role.ASSISTANT_MANAGER)
_OWN = is_customer_owner(required=False)


class OrderReturnPolicy(ResourcePolicy):
    resource_type = "order_return"
    shape = ResourceShape(
        required={"status"},
        optional={"id", "shop_id", "customer_id", "owner_user_id"},
    )
    description = "Returns against delivered orders."

    def declare_abilities(self):
        return (
            Ability("view_any", role=_HANDLES, target=Target.NONE),
            Ability("view", self_service=_OWN, role=_HANDLES, scoped=True),
            Ability(
                "create",
                self_service=_OWN,
                role=_HANDLES,
                target=Target.NONE,
                subject="order",
                context=(context_resource("order"),),
                scoped=True,
                transition="create_return",
                description="Open a return against an order.",
            ),
            Ability("review", role=_MANAGES, scoped=True, transition="review"),
            Ability(
                "approve",
                role=_DECIDES,
                rules=(NOT_SELF_IF_OWNED,),
                scoped=True,
                transition="approve",
            ),
            Ability(
                "reject",
                role=_DECIDES,
                rules=(NOT_SELF_IF_OWNED,),
                scoped=True,
                transition="reject",
            ),
            Ability("process", role=_MANAGES, scoped=True, transition="process"),
            Ability(
                "cancel",
                self_service=_OWN,
                role=_MANAGES,
                scoped=True,
                transition="cancel",
            ),
        )
