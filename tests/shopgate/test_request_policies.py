"""
ShopGate Resources — Wage Advance and Fund Request Tests
"""

from __future__ import annotations

import pytest

from shopgate.exceptions import MissingContextError
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


def request(resource_type, status="pending", owner_role=Role.SALES_REP, **overrides):
    data = dict(
        resource_type=resource_type,
        tenant_id=TENANT,
        id=900,
        shop_id=7,
        owner_user_id=42,
        owner_role=owner_role,
        status=status,
    )
    data.update(overrides)
    return Resource(**data)


def advance(status="pending", **overrides):
    return request("wage_advance", status, **overrides)


def fund_request(status="pending", **overrides):
    return request("fund_request", status, **overrides)


# ══════════════════════════════════════════════════════════════
# WAGE ADVANCE
# ══════════════════════════════════════════════════════════════


class TestWageAdvanceCreate:

    def test_enrolled_staff_may_request(self, registry):
        actor = staff(Role.CASHIER)
        assert registry.can(actor, "create", "wage_advance", context={"payroll_enrolled": True})

    def test_unenrolled_staff_refused(self, registry):
        decision = registry.can(
            staff(Role.CASHIER), "create", "wage_advance", context={"payroll_enrolled": False}
        )
        assert decision.reason_code == ReasonCode.ROLE_INSUFFICIENT

    def test_enrolment_flag_required(self, registry):
        with pytest.raises(MissingContextError):
            registry.can(staff(Role.CASHIER), "create", "wage_advance")


class TestWageAdvanceDecisions:

    def test_store_manager_approves_junior(self, registry):
        assert registry.can(staff(Role.STORE_MANAGER), "approve", "wage_advance", advance())

    def test_assistant_manager_lacks_capability(self, registry):
        decision = registry.can(
            staff(Role.ASSISTANT_MANAGER), "approve", "wage_advance", advance()
        )
        assert decision.reason_code == ReasonCode.ROLE_INSUFFICIENT

    def test_equal_role_cannot_approve(self, registry):
        peer = advance(owner_role=Role.STORE_MANAGER)
        decision = registry.can(staff(Role.STORE_MANAGER), "approve", "wage_advance", peer)
        assert decision.reason_code == ReasonCode.ROLE_INSUFFICIENT

    def test_requester_cannot_approve_own(self, registry):
        own = advance(owner_role=Role.STORE_MANAGER)
        actor = staff(Role.GENERAL_MANAGER, id=42)
        decision = registry.can(actor, "approve", "wage_advance", own)
        assert decision.reason_code == ReasonCode.SELF_ACTION_FORBIDDEN

    def test_disburse_after_approval(self, registry):
        actor = staff(Role.STORE_MANAGER)
        assert registry.can(actor, "disburse", "wage_advance", advance("approved"))
        decision = registry.can(actor, "disburse", "wage_advance", advance())
        assert decision.reason_code == ReasonCode.LIFECYCLE_BLOCKED

    def test_record_repayment_on_disbursed(self, registry):
        disbursed = advance("disbursed")
        assert registry.can(staff(Role.GENERAL_MANAGER), "record_repayment", "wage_advance", disbursed)
        decision = registry.can(
            staff(Role.STORE_MANAGER), "record_repayment", "wage_advance", disbursed
        )
        assert decision.reason_code == ReasonCode.ROLE_INSUFFICIENT
        decision = registry.can(
            staff(Role.GENERAL_MANAGER), "record_repayment", "wage_advance", advance()
        )
        assert decision.reason_code == ReasonCode.LIFECYCLE_BLOCKED


class TestWageAdvanceRequester:

    def test_requester_updates_pending(self, registry):
        assert registry.can(staff(Role.SALES_REP, id=42), "update", "wage_advance", advance())

    def test_others_cannot_update(self, registry):
        decision = registry.can(staff(Role.OWNER), "update", "wage_advance", advance())
        assert decision.reason_code == ReasonCode.OWNERSHIP_REQUIRED

    def test_requester_deletes_pending(self, registry):
        assert registry.can(staff(Role.SALES_REP, id=42), "delete", "wage_advance", advance())
        decision = registry.can(staff(Role.CASHIER), "delete", "wage_advance", advance())
        assert decision.reason_code == ReasonCode.ROLE_INSUFFICIENT

    def test_force_delete_needs_top_role(self, registry):
        rejected = advance("rejected")
        owner = staff(Role.OWNER, id=100, tenant_owner=True)
        assert registry.can(owner, "force_delete", "wage_advance", rejected)
        flagged_manager = staff(Role.GENERAL_MANAGER, tenant_owner=True)
        decision = registry.can(flagged_manager, "force_delete", "wage_advance", rejected)
        assert decision.reason_code == ReasonCode.LIFECYCLE_BLOCKED


# ══════════════════════════════════════════════════════════════
# FUND REQUEST
# ══════════════════════════════════════════════════════════════


class TestFundRequest:

    def test_view_any(self, registry):
        assert registry.can(staff(Role.ASSISTANT_MANAGER), "view_any", "fund_request")
        assert not registry.can(staff(Role.CASHIER), "view_any", "fund_request")

    def test_create_needs_capability(self, registry):
        assert registry.can(staff(Role.ASSISTANT_MANAGER), "create", "fund_request")
        assert not registry.can(staff(Role.SALES_REP), "create", "fund_request")

    def test_requester_views_own(self, registry):
        assert registry.can(staff(Role.SALES_REP, id=42), "view", "fund_request", fund_request())
        decision = registry.can(staff(Role.SALES_REP), "view", "fund_request", fund_request())
        assert decision.reason_code == ReasonCode.ROLE_INSUFFICIENT

    def test_assistant_manager_approves_cashier(self, registry):
        cashier_request = fund_request(owner_role=Role.CASHIER)
        assert registry.can(
            staff(Role.ASSISTANT_MANAGER), "approve", "fund_request", cashier_request
        )

    def test_assistant_manager_cannot_disburse(self, registry):
        decision = registry.can(
            staff(Role.ASSISTANT_MANAGER), "disburse", "fund_request", fund_request("approved")
        )
        assert decision.reason_code == ReasonCode.ROLE_INSUFFICIENT

    def test_requester_cancels_pending(self, registry):
        assert registry.can(staff(Role.SALES_REP, id=42), "cancel", "fund_request", fund_request())
        decision = registry.can(
            staff(Role.SALES_REP, id=42), "cancel", "fund_request", fund_request("approved")
        )
        assert decision.reason_code == ReasonCode.LIFECYCLE_BLOCKED

    def test_approver_in_other_shop(self, registry):
        decision = registry.can(
            staff(Role.STORE_MANAGER, shops={3}), "approve", "fund_request", fund_request()
        )
        assert decision.reason_code == ReasonCode.SCOPE_MISMATCH
