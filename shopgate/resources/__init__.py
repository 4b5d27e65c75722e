"""
ShopGate Resources — Per-Type Ability Sets
============================================
One ResourcePolicy subclass per resource type. default_policies()
returns fresh instances in registration order.
"""

from shopgate.resources.fund_request import FundRequestPolicy
from shopgate.resources.order import OrderPolicy
from shopgate.resources.order_return import OrderReturnPolicy
from shopgate.resources.pay_run import PayRunPolicy
from shopgate.resources.payment import PaymentPolicy
from shopgate.resources.payroll_period import PayrollPeriodPolicy
from shopgate.resources.payslip import PayslipPolicy
from shopgate.resources.purchase_order import PurchaseOrderPolicy
from shopgate.resources.shop import ShopPolicy
from shopgate.resources.staff import StaffPolicy
from shopgate.resources.supplier_connection import SupplierConnectionPolicy
from shopgate.resources.tenant import TenantPolicy
from shopgate.resources.timesheet import TimesheetPolicy
from shopgate.resources.wage_advance import WageAdvancePolicy


ALL_POLICIES = (
    TenantPolicy,
    ShopPolicy,
    StaffPolicy,
    PayRunPolicy,
    PayrollPeriodPolicy,
    PayslipPolicy,
    WageAdvancePolicy,
    FundRequestPolicy,
    TimesheetPolicy,
    OrderPolicy,
    PaymentPolicy,
    OrderReturnPolicy,
    PurchaseOrderPolicy,
    SupplierConnectionPolicy,
)


def default_policies():
    return tuple(cls() for cls in ALL_POLICIES)


__all__ = [
    # ── Policies ──
    "FundRequestPolicy",
    "OrderPolicy",
    "OrderReturnPolicy",
    "PayRunPolicy",
    "PaymentPolicy",
    "PayrollPeriodPolicy",
    "PayslipPolicy",
    "PurchaseOrderPolicy",
    "ShopPolicy",
    "StaffPolicy",
    "SupplierConnectionPolicy",
    "TenantPolicy",
    "TimesheetPolicy",
    "WageAdvancePolicy",
    # ── Collection ──
    "ALL_POLICIES",
    "default_policies",
]
