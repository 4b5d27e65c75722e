"""
ShopGate Resources — Payslip
==============================
Everyone may read their own payslip. Reading another person's needs
view_payroll, strict seniority over that person, and shop scope.
"""

from __future__ import annotations

from shopgate.policy.ability import Ability, Target
from shopgate.policy.contracts import ResourcePolicy
from shopgate.policy.predicates import (
    has_capability,
    is_owner,
    is_staff,
    outranks_owner,
)
from shopgate.primitives.resource import ResourceShape
from shopgate.roles.models import Capability as C


class PayslipPolicy(ResourcePolicy):
    resource_type = "payslip"
    shape = ResourceShape(
        required={"owner_user_id", "owner_role"},
        optional={"id", "shop_id"},
    )

    def declare_abilities(self):
        return (
            Ability(
                "view",
                self_service=is_owner(),
                role=has_capability(C.VIEW_PAYROLL) & outranks_owner(),
                scoped=True,
            ),
            Ability("view_own", role=is_staff(), target=Target.NONE),
        )
