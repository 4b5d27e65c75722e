"""
ShopGate Lifecycle — Default Transition Tables
================================================
One table per status-bearing resource type. Deployments may replace
whole tables through shopgate.config.

Payroll period vocabulary is draft / processing / processed /
approved / paid / cancelled. The pay run keeps its own review-style
vocabulary; the two are separate resource types.
"""

from __future__ import annotations

from typing import Tuple

from shopgate.lifecycle.table import StatusTransitionTable


PAY_RUN_TABLE = StatusTransitionTable(
    resource_type="pay_run",
    statuses={
        "draft", "pending_review", "pending_approval",
        "approved", "paid", "rejected", "cancelled",
    },
    initial="draft",
    terminal={"paid", "rejected", "cancelled"},
    transitions={
        "draft": {
            "calculate", "cancel", "regenerate",
            "exclude_employee", "include_employee",
        },
        "pending_review": {
            "submit", "calculate", "cancel",
            "exclude_employee", "include_employee",
        },
        "pending_approval": {"approve", "reject", "cancel"},
        "approved": {"complete", "cancel"},
    },
    overrides={
        "rejected": {"regenerate"},
        "cancelled": {"regenerate"},
    },
)


PAYROLL_PERIOD_TABLE = StatusTransitionTable(
    resource_type="payroll_period",
    statuses={
        "draft", "processing", "processed",
        "approved", "paid", "cancelled",
    },
    initial="draft",
    terminal={"paid", "cancelled"},
    transitions={
        "draft": {"process", "update", "cancel", "delete"},
        "processing": {"cancel"},
        "processed": {"approve", "process", "cancel", "delete"},
        "approved": {"mark_paid"},
    },
    overrides={
        "cancelled": {"reopen"},
    },
)


WAGE_ADVANCE_TABLE = StatusTransitionTable(
    resource_type="wage_advance",
    statuses={
        "pending", "approved", "disbursed", "repaying",
        "repaid", "rejected", "cancelled",
    },
    initial="pending",
    terminal={"disbursed", "repaying", "repaid", "rejected", "cancelled"},
    transitions={
        "pending": {"approve", "reject", "cancel", "update", "delete"},
        "approved": {"disburse"},
    },
    overrides={
        "rejected": {"force_delete"},
        "cancelled": {"force_delete"},
    },
    settlements={
        "disbursed": {"record_repayment"},
        "repaying": {"record_repayment"},
    },
)


FUND_REQUEST_TABLE = StatusTransitionTable(
    resource_type="fund_request",
    statuses={"pending", "approved", "disbursed", "rejected", "cancelled"},
    initial="pending",
    terminal={"disbursed", "rejected", "cancelled"},
    transitions={
        "pending": {"approve", "reject", "cancel", "update", "delete"},
        "approved": {"disburse"},
    },
    overrides={
        "rejected": {"force_delete"},
        "cancelled": {"force_delete"},
    },
)


TIMESHEET_TABLE = StatusTransitionTable(
    resource_type="timesheet",
    statuses={"draft", "submitted", "pending", "rejected", "approved", "paid"},
    initial="draft",
    terminal={"approved", "paid"},
    transitions={
        "draft": {"submit", "update", "delete", "manage_breaks", "force_delete"},
        "submitted": {"approve", "reject", "manage_breaks", "force_delete"},
        "pending": {"approve", "reject", "manage_breaks", "force_delete"},
        "rejected": {"update", "submit", "delete", "force_delete"},
    },
    overrides={
        "approved": {"reopen", "force_delete"},
    },
)


ORDER_RETURN_TABLE = StatusTransitionTable(
    resource_type="order_return",
    statuses={
        "pending", "under_review", "approved",
        "completed", "cancelled", "rejected",
    },
    initial="pending",
    terminal={"completed", "cancelled", "rejected"},
    transitions={
        "pending": {"review", "approve", "reject", "cancel"},
        "under_review": {"approve", "reject"},
        "approved": {"process"},
    },
)


ORDER_TABLE = StatusTransitionTable(
    resource_type="order",
    statuses={
        "pending", "confirmed", "processing", "packed", "shipped",
        "delivered", "refunded", "cancelled",
    },
    initial="pending",
    terminal={"refunded", "cancelled"},
    transitions={
        "pending": {"update", "confirm", "cancel", "record_payment", "delete"},
        "confirmed": {"process", "cancel", "record_payment"},
        "processing": {"pack", "cancel", "record_payment"},
        "packed": {"ship", "record_payment"},
        "shipped": {"deliver", "record_payment"},
        "delivered": {"refund", "create_return", "record_payment"},
    },
)


PURCHASE_ORDER_TABLE = StatusTransitionTable(
    resource_type="purchase_order",
    statuses={
        "draft", "submitted", "approved", "shipped",
        "received", "completed", "cancelled",
    },
    initial="draft",
    terminal={"completed", "cancelled"},
    transitions={
        "draft": {"update", "submit", "delete", "cancel"},
        "submitted": {"approve", "cancel", "record_payment"},
        "approved": {"ship", "cancel", "record_payment"},
        "shipped": {"receive", "record_payment"},
        "received": {"complete", "record_payment"},
    },
    settlements={
        "completed": {"record_payment"},
    },
)


SUPPLIER_CONNECTION_TABLE = StatusTransitionTable(
    resource_type="supplier_connection",
    statuses={"pending", "active", "suspended", "rejected"},
    initial="pending",
    terminal={"rejected"},
    transitions={
        "pending": {"approve", "reject"},
        "active": {"suspend", "update_terms"},
        "suspended": {"activate", "update_terms"},
    },
)


DEFAULT_TRANSITION_TABLES: Tuple[StatusTransitionTable, ...] = (
    PAY_RUN_TABLE,
    PAYROLL_PERIOD_TABLE,
    WAGE_ADVANCE_TABLE,
    FUND_REQUEST_TABLE,
    TIMESHEET_TABLE,
    ORDER_RETURN_TABLE,
    ORDER_TABLE,
    PURCHASE_ORDER_TABLE,
    SUPPLIER_CONNECTION_TABLE,
)
