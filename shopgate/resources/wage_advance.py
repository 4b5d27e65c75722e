"""
ShopGate Resources — Wage Advance
===================================
Staff request advances against their wages. The requester
(owner_user_id) may cancel or edit while pending; approval and
disbursement need strict seniority over the requester and are never
available to the requester.

Once disbursed the advance is immutable apart from recording
repayments against it.
"""

from __future__ import annotations

from shopgate.policy.ability import Ability, Target, context_flag_field
from shopgate.policy.contracts import ResourcePolicy
from shopgate.policy.predicates import (
    context_flag,
    has_capability,
    is_owner,
    is_staff,
    is_tenant_owner,
    outranks_owner,
    role_at_least,
)
from shopgate.primitives.resource import ResourceShape
from shopgate.resources.common import NOT_SELF, OWNER_ONLY
from shopgate.roles.models import Capability as C
from shopgate.roles.models import Role

_APPROVER = has_capability(C.APPROVE_WAGE_ADVANCES) & outranks_owner()


class WageAdvancePolicy(ResourcePolicy):
    resource_type = "wage_advance"
    shape = ResourceShape(
        required={"status", "owner_user_id", "owner_role"},
        optional={"id", "shop_id"},
    )
    description = "Wage advance requests."

    def declare_abilities(self):
        return (
            Ability("view_any", role=is_staff(), target=Target.NONE),
            Ability(
                "view",
                self_service=is_owner(),
                role=role_at_least(Role.STORE_MANAGER),
                scoped=True,
            ),
            Ability(
                "create",
                role=is_staff() & context_flag("payroll_enrolled"),
                target=Target.NONE,
                context=(context_flag_field("payroll_enrolled"),),
                description="Request an advance; needs an active payroll profile.",
            ),
            Ability("update", rules=(OWNER_ONLY,), transition="update"),
            Ability(
                "approve",
                role=_APPROVER,
                rules=(NOT_SELF,),
                scoped=True,
                transition="approve",
            ),
            Ability(
                "reject",
                role=_APPROVER,
                rules=(NOT_SELF,),
                scoped=True,
                transition="reject",
            ),
            Ability(
                "disburse",
                role=has_capability(C.DISBURSE_FUNDS) & outranks_owner(),
                rules=(NOT_SELF,),
                scoped=True,
                transition="disburse",
            ),
            Ability(
                "cancel",
                self_service=is_owner(),
                role=has_capability(C.APPROVE_WAGE_ADVANCES)
                & role_at_least(Role.STORE_MANAGER),
                scoped=True,
                transition="cancel",
            ),
            Ability(
                "record_repayment",
                role=role_at_least(Role.GENERAL_MANAGER),
                scoped=True,
                transition="record_repayment",
            ),
            Ability(
                "delete",
                self_service=is_owner(),
                role=is_tenant_owner(),
                transition="delete",
            ),
            Ability("force_delete", role=is_tenant_owner(), transition="force_delete"),
        )
