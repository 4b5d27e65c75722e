"""
ShopGate Resources — Timesheet Policy Tests
"""

from __future__ import annotations

from shopgate.policy import ReasonCode
from shopgate.primitives import Resource, StaffActor
from shopgate.roles import Role

TENANT = "tenant-a"


def staff(role, id=1, shops=(7,), tenant_owner=False):
    return StaffActor(
        id=id,
        tenant_id=TENANT,
        role=role,
        shop_ids=shops,
        is_tenant_owner=tenant_owner,
    )


def timesheet(status="draft", owner_role=Role.CASHIER, owner_user_id=42):
    return Resource(
        resource_type="timesheet",
        tenant_id=TENANT,
        id=300,
        shop_id=7,
        owner_user_id=owner_user_id,
        owner_role=owner_role,
        status=status,
    )


EMPLOYEE = staff(Role.CASHIER, id=42, shops=(7,))


class TestEditing:

    def test_employee_edits_own_draft(self, registry):
        assert registry.can(EMPLOYEE, "update", "timesheet", timesheet())
        assert registry.can(EMPLOYEE, "manage_breaks", "timesheet", timesheet())

    def test_employee_cannot_edit_submitted(self, registry):
        decision = registry.can(EMPLOYEE, "update", "timesheet", timesheet("submitted"))
        assert decision.reason_code == ReasonCode.ROLE_INSUFFICIENT

    def test_assistant_manager_edits_junior(self, registry):
        assert registry.can(staff(Role.ASSISTANT_MANAGER), "update", "timesheet", timesheet())

    def test_assistant_manager_cannot_edit_senior(self, registry):
        senior = timesheet(owner_role=Role.STORE_MANAGER)
        decision = registry.can(staff(Role.ASSISTANT_MANAGER), "update", "timesheet", senior)
        assert decision.reason_code == ReasonCode.ROLE_INSUFFICIENT

    def test_global_role_edits_any(self, registry):
        senior = timesheet(owner_role=Role.STORE_MANAGER)
        assert registry.can(staff(Role.GENERAL_MANAGER, shops=()), "update", "timesheet", senior)

    def test_delete_needs_store_manager(self, registry):
        assert registry.can(EMPLOYEE, "delete", "timesheet", timesheet())
        decision = registry.can(staff(Role.ASSISTANT_MANAGER), "delete", "timesheet", timesheet())
        assert decision.reason_code == ReasonCode.ROLE_INSUFFICIENT
        assert registry.can(staff(Role.STORE_MANAGER), "delete", "timesheet", timesheet())


class TestSubmitAndApprove:

    def test_owner_submits(self, registry):
        assert registry.can(EMPLOYEE, "submit", "timesheet", timesheet())
        decision = registry.can(staff(Role.STORE_MANAGER), "submit", "timesheet", timesheet())
        assert decision.reason_code == ReasonCode.OWNERSHIP_REQUIRED

    def test_approved_cannot_be_resubmitted(self, registry):
        decision = registry.can(EMPLOYEE, "submit", "timesheet", timesheet("approved"))
        assert decision.reason_code == ReasonCode.LIFECYCLE_BLOCKED

    def test_assistant_manager_approves_submitted(self, registry):
        assert registry.can(
            staff(Role.ASSISTANT_MANAGER), "approve", "timesheet", timesheet("submitted")
        )

    def test_employee_cannot_approve_own(self, registry):
        decision = registry.can(EMPLOYEE, "approve", "timesheet", timesheet("submitted"))
        assert decision.reason_code == ReasonCode.SELF_ACTION_FORBIDDEN

    def test_draft_cannot_be_approved(self, registry):
        decision = registry.can(staff(Role.STORE_MANAGER), "approve", "timesheet", timesheet())
        assert decision.reason_code == ReasonCode.LIFECYCLE_BLOCKED


class TestOverrides:

    def test_reopen_approved_is_owner_override(self, registry):
        approved = timesheet("approved")
        decision = registry.can(staff(Role.GENERAL_MANAGER), "reopen", "timesheet", approved)
        assert decision.reason_code == ReasonCode.LIFECYCLE_BLOCKED
        assert registry.can(staff(Role.OWNER, id=100), "reopen", "timesheet", approved)

    def test_force_delete(self, registry):
        owner = staff(Role.OWNER, id=100, tenant_owner=True)
        assert registry.can(owner, "force_delete", "timesheet", timesheet("approved"))
        assert not registry.can(owner, "force_delete", "timesheet", timesheet("paid"))


class TestViewing:

    def test_owner_views_own(self, registry):
        assert registry.can(staff(Role.CASHIER, id=42, shops=()), "view", "timesheet", timesheet())

    def test_manager_views_junior_only(self, registry):
        assert registry.can(staff(Role.ASSISTANT_MANAGER), "view", "timesheet", timesheet())
        senior = timesheet(owner_role=Role.STORE_MANAGER)
        decision = registry.can(staff(Role.ASSISTANT_MANAGER), "view", "timesheet", senior)
        assert decision.reason_code == ReasonCode.ROLE_INSUFFICIENT

    def test_view_any(self, registry):
        assert registry.can(staff(Role.ASSISTANT_MANAGER), "view_any", "timesheet")
        assert not registry.can(staff(Role.CASHIER), "view_any", "timesheet")
