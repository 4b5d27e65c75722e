"""
ShopGate Resources — Pay Run
==============================
A pay run moves draft → pending_review → pending_approval →
approved → paid. owner_user_id, when supplied, is the preparer, who
may never approve or reject their own run.

Approval needs the approve_payroll capability AND general-manager
seniority. Regenerating a rejected or cancelled run is an override
reserved for the top role.
"""

from __future__ import annotations

from shopgate.policy.ability import Ability, Target
from shopgate.policy.contracts import ResourcePolicy
from shopgate.policy.predicates import (
    has_any_capability,
    has_capability,
    is_tenant_owner,
    role_at_least,
)
from shopgate.primitives.resource import ResourceShape
from shopgate.resources.common import NOT_SELF_IF_OWNED
from shopgate.roles.models import Capability as C
from shopgate.roles.models import Role

_VIEWS = has_any_capability(C.VIEW_PAYROLL, C.MANAGE_PAYROLL)
_MANAGES = has_capability(C.MANAGE_PAYROLL)
_APPROVES = has_capability(C.APPROVE_PAYROLL) & role_at_least(Role.GENERAL_MANAGER)


def _managed(name: str) -> Ability:
    return Ability(name, role=_MANAGES, scoped=True, transition=name)


class PayRunPolicy(ResourcePolicy):
    resource_type = "pay_run"
    shape = ResourceShape(
        required={"status"},
        optional={"id", "shop_id", "owner_user_id", "owner_role"},
    )
    description = "Payroll pay runs."

    def declare_abilities(self):
        return (
            Ability("view_any", role=_VIEWS, target=Target.NONE),
            Ability("view", role=_VIEWS, scoped=True),
            Ability("create", role=_MANAGES, target=Target.NONE),
            _managed("calculate"),
            _managed("submit"),
            Ability(
                "approve",
                role=_APPROVES,
                rules=(NOT_SELF_IF_OWNED,),
                scoped=True,
                transition="approve",
            ),
            Ability(
                "reject",
                role=_APPROVES,
                rules=(NOT_SELF_IF_OWNED,),
                scoped=True,
                transition="reject",
            ),
            _managed("complete"),
            _managed("cancel"),
            Ability(
                "regenerate",
                role=_MANAGES & role_at_least(Role.GENERAL_MANAGER),
                scoped=True,
                transition="regenerate",
            ),
            _managed("exclude_employee"),
            _managed("include_employee"),
            Ability(
                "view_reports",
                role=has_any_capability(
                    C.VIEW_PAYROLL_REPORTS, C.VIEW_PAYROLL, C.MANAGE_PAYROLL
                ),
                target=Target.NONE,
            ),
            Ability(
                "export_reports",
                role=has_any_capability(C.EXPORT_PAYROLL_REPORTS, C.MANAGE_PAYROLL),
                target=Target.NONE,
            ),
            Ability(
                "manage_settings",
                role=has_capability(C.MANAGE_PAYROLL_SETTINGS) | is_tenant_owner(),
                target=Target.NONE,
            ),
        )
