"""
ShopGate Resources — Fund Request
===================================
Requests for store funds. Same approval discipline as wage advances:
the requester never approves, rejects or disburses their own request.
"""

from __future__ import annotations

from shopgate.policy.ability import Ability, Target
from shopgate.policy.contracts import ResourcePolicy
from shopgate.policy.predicates import (
    has_capability,
    is_owner,
    is_tenant_owner,
    outranks_owner,
    role_at_least,
)
from shopgate.primitives.resource import ResourceShape
from shopgate.resources.common import NOT_SELF, OWNER_ONLY
from shopgate.roles.models import Capability as C
from shopgate.roles.models import Role

_APPROVER = has_capability(C.APPROVE_FUND_REQUESTS) & outranks_owner()


class FundRequestPolicy(ResourcePolicy):
    resource_type = "fund_request"
    shape = ResourceShape(
        required={"status", "owner_user_id", "owner_role"},
        optional={"id", "shop_id"},
    )
    description = "Fund requests raised by staff."

    def declare_abilities(self):
        return (
            Ability(
                "view_any",
                role=has_capability(C.VIEW_FUND_REQUESTS)
                | role_at_least(Role.ASSISTANT_MANAGER),
                target=Target.NONE,
            ),
            Ability(
                "view",
                self_service=is_owner(),
                role=role_at_least(Role.ASSISTANT_MANAGER),
                scoped=True,
            ),
            Ability(
                "create",
                role=has_capability(C.CREATE_FUND_REQUESTS),
                target=Target.NONE,
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
                role=_APPROVER,
                scoped=True,
                transition="cancel",
            ),
            Ability(
                "delete",
                self_service=is_owner(),
                role=is_tenant_owner(),
                transition="delete",
            ),
            Ability("force_delete", role=is_tenant_owner(), transition="force_delete"),
        )
