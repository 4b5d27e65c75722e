"""
ShopGate Resources — Staff
============================
Staff records. The snapshot describes the target staff member:
owner_user_id is that member's user id, owner_role their role,
shop_ids their shop assignments and the is_tenant_owner attribute
marks the tenant owner.

Role assignment evaluates can_assign before anything else; when a
target record is supplied it must also be updatable by the actor.
"""

from __future__ import annotations

from shopgate.policy.ability import Ability, Rule, Target, context_role
from shopgate.policy.contracts import ResourcePolicy
from shopgate.policy.predicates import (
    can_assign_candidate,
    candidate_is_tenant_role,
    has_any_capability,
    has_capability,
    is_global_role,
    is_staff,
)
from shopgate.policy.result import ReasonCode
from shopgate.primitives.resource import ResourceShape
from shopgate.resources.common import (
    NOT_SELF,
    NOT_TENANT_OWNER,
    OWNER_ONLY,
    SENIOR_TO_OWNER,
)
from shopgate.roles.models import Capability as C

_MANAGES_STAFF = has_any_capability(C.MANAGE_USERS, C.MANAGE_STORE_USERS)

_STAFF_EDIT_RULES = (NOT_SELF, NOT_TENANT_OWNER, SENIOR_TO_OWNER)


class StaffPolicy(ResourcePolicy):
    resource_type = "staff"
    shape = ResourceShape(
        required={"owner_user_id", "owner_role"},
        optional={"id", "shop_ids", "is_tenant_owner"},
    )
    description = "Staff members of a tenant."

    def declare_abilities(self):
        return (
            Ability("view_any", role=_MANAGES_STAFF, target=Target.NONE),
            Ability("view", role=_MANAGES_STAFF, scoped=True),
            Ability("create", role=_MANAGES_STAFF, target=Target.NONE),
            Ability(
                "update",
                role=_MANAGES_STAFF,
                rules=_STAFF_EDIT_RULES,
                scoped=True,
            ),
            Ability(
                "delete",
                role=is_global_role() & has_capability(C.MANAGE_USERS),
                rules=_STAFF_EDIT_RULES,
                scoped=True,
            ),
            Ability(
                "assign_role",
                role=_MANAGES_STAFF,
                target=Target.OPTIONAL,
                requires=(
                    Rule(can_assign_candidate("role"), ReasonCode.ROLE_INSUFFICIENT),
                    Rule(candidate_is_tenant_role("role"), ReasonCode.ROLE_INSUFFICIENT),
                ),
                rules=_STAFF_EDIT_RULES,
                scoped=True,
                context=(context_role("role"),),
                description="Give a staff member a candidate role.",
            ),
            Ability("view_own_profile", role=is_staff(), rules=(OWNER_ONLY,)),
            Ability("update_own_profile", role=is_staff(), rules=(OWNER_ONLY,)),
        )
