"""
ShopGate Resources — Timesheet
================================
Timesheets belong to the staff member who worked them. The owner
edits their own drafts; tenant-wide roles act anywhere; shop-scoped
managers act on timesheets of junior staff in their shops.

Approved and paid timesheets are terminal. Only the top role may
reopen or force-delete an approved one.
"""

from __future__ import annotations

from shopgate.policy.ability import Ability, Target
from shopgate.policy.contracts import ResourcePolicy
from shopgate.policy.predicates import (
    has_any_capability,
    has_capability,
    is_global_role,
    is_owner,
    is_tenant_owner,
    outranks_owner,
    role_at_least,
    status_in,
)
from shopgate.primitives.resource import ResourceShape
from shopgate.resources.common import NOT_SELF, OWNER_ONLY
from shopgate.roles.models import Capability as C
from shopgate.roles.models import Role

_OWN_DRAFT = is_owner() & status_in("draft")


def _senior(minimum: Role):
    return is_global_role() | (role_at_least(minimum) & outranks_owner())


class TimesheetPolicy(ResourcePolicy):
    resource_type = "timesheet"
    shape = ResourceShape(
        required={"status", "owner_user_id", "owner_role"},
        optional={"id", "shop_id"},
    )
    description = "Staff timesheets."

    def declare_abilities(self):
        return (
            Ability(
                "view_any",
                role=has_any_capability(C.VIEW_TIMESHEETS, C.MANAGE_TIMESHEETS),
                target=Target.NONE,
            ),
            Ability(
                "view",
                self_service=is_owner(),
                role=is_global_role()
                | (has_capability(C.VIEW_TIMESHEETS) & outranks_owner()),
                scoped=True,
            ),
            Ability(
                "create",
                role=has_capability(C.MANAGE_TIMESHEETS),
                target=Target.NONE,
            ),
            Ability(
                "clock_in_out",
                role=has_capability(C.MANAGE_TIMESHEETS),
                target=Target.NONE,
            ),
            Ability(
                "update",
                self_service=_OWN_DRAFT,
                role=_senior(Role.ASSISTANT_MANAGER),
                scoped=True,
                transition="update",
            ),
            Ability(
                "manage_breaks",
                self_service=_OWN_DRAFT,
                role=_senior(Role.ASSISTANT_MANAGER),
                scoped=True,
                transition="manage_breaks",
            ),
            Ability("submit", rules=(OWNER_ONLY,), transition="submit"),
            Ability(
                "approve",
                role=is_global_role()
                | (has_capability(C.APPROVE_TIMESHEETS) & outranks_owner()),
                rules=(NOT_SELF,),
                scoped=True,
                transition="approve",
            ),
            Ability(
                "reject",
                role=is_global_role()
                | (has_capability(C.APPROVE_TIMESHEETS) & outranks_owner()),
                rules=(NOT_SELF,),
                scoped=True,
                transition="reject",
            ),
            Ability(
                "delete",
                self_service=_OWN_DRAFT,
                role=_senior(Role.STORE_MANAGER),
                scoped=True,
                transition="delete",
            ),
            Ability("force_delete", role=is_tenant_owner(), transition="force_delete"),
            Ability(
                "reopen",
                role=has_capability(C.MANAGE_TIMESHEETS),
                transition="reopen",
            ),
        )
