"""
ShopGate Resources — Payroll Period
=====================================
Canonical vocabulary: draft / processing / processed / approved /
paid / cancelled. A period with requires_owner_approval set can only
be approved by the tenant owner.
"""

from __future__ import annotations

from shopgate.policy.ability import Ability, Rule, Target
from shopgate.policy.contracts import ResourcePolicy
from shopgate.policy.predicates import (
    attribute_true,
    has_any_capability,
    has_capability,
    is_global_role,
    is_tenant_owner,
    role_at_least,
)
from shopgate.policy.result import ReasonCode
from shopgate.primitives.resource import ResourceShape
from shopgate.resources.common import NOT_SELF_IF_OWNED
from shopgate.roles.models import Capability as C
from shopgate.roles.models import Role

_MANAGES = has_capability(C.MANAGE_PAYROLL)

OWNER_APPROVAL = Rule(
    ~attribute_true("requires_owner_approval") | is_tenant_owner(),
    ReasonCode.ROLE_INSUFFICIENT,
)


class PayrollPeriodPolicy(ResourcePolicy):
    resource_type = "payroll_period"
    shape = ResourceShape(
        required={"status"},
        optional={"id", "shop_id", "owner_user_id", "requires_owner_approval"},
    )
    description = "Payroll periods."

    def declare_abilities(self):
        return (
            Ability(
                "view_any",
                role=role_at_least(Role.STORE_MANAGER),
                target=Target.NONE,
            ),
            Ability(
                "view",
                role=role_at_least(Role.STORE_MANAGER)
                & has_any_capability(C.VIEW_PAYROLL, C.MANAGE_PAYROLL),
                scoped=True,
            ),
            Ability(
                "create",
                role=is_global_role() & _MANAGES,
                target=Target.NONE,
            ),
            Ability("update", role=_MANAGES, scoped=True, transition="update"),
            Ability("process", role=_MANAGES, scoped=True, transition="process"),
            Ability(
                "approve",
                role=_MANAGES,
                rules=(NOT_SELF_IF_OWNED, OWNER_APPROVAL),
                scoped=True,
                transition="approve",
            ),
            Ability("mark_paid", role=_MANAGES, scoped=True, transition="mark_paid"),
            Ability("cancel", role=_MANAGES, scoped=True, transition="cancel"),
            Ability("delete", role=is_tenant_owner(), transition="delete"),
            Ability("reopen", role=_MANAGES, transition="reopen"),
        )
