"""
ShopGate Roles — Closed Role and Capability Vocabulary
=======================================================
Roles and capabilities are closed enumerations. Free-form permission
strings are only accepted at the configuration boundary, where they
are resolved into Capability members or rejected at startup.

RoleDefinition is one row of the role table:
    role          — Role member
    level         — seniority (higher is more senior, unique per table)
    capabilities  — explicit capability set (no inheritance)
    is_global     — acts tenant-wide, exempt from shop scoping
    is_top        — the single top role (never assignable)
    cross_tenant  — platform role allowed on cross-tenant abilities
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Iterable

from shopgate.exceptions import UnknownCapabilityError


# ══════════════════════════════════════════════════════════════
# ROLES
# ══════════════════════════════════════════════════════════════

class Role(Enum):
    """Staff roles known to the engine."""
    OWNER = "owner"
    GENERAL_MANAGER = "general_manager"
    STORE_MANAGER = "store_manager"
    ASSISTANT_MANAGER = "assistant_manager"
    SALES_REP = "sales_rep"
    INVENTORY_CLERK = "inventory_clerk"
    CASHIER = "cashier"
    SUPER_ADMIN = "super_admin"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()


# ══════════════════════════════════════════════════════════════
# CAPABILITIES
# ══════════════════════════════════════════════════════════════

class Capability(Enum):
    """Closed set of capability keys a role may hold."""

    # ── Tenant, stores and users ──────────────────────────────
    MANAGE_TENANT = "manage_tenant"
    MANAGE_STORES = "manage_stores"
    MANAGE_USERS = "manage_users"
    MANAGE_STORE_USERS = "manage_store_users"

    # ── Reporting ─────────────────────────────────────────────
    VIEW_ALL_REPORTS = "view_all_reports"
    VIEW_REPORTS = "view_reports"
    VIEW_STORE_REPORTS = "view_store_reports"

    # ── Inventory and products ────────────────────────────────
    MANAGE_INVENTORY = "manage_inventory"
    MANAGE_STORE_INVENTORY = "manage_store_inventory"
    VIEW_INVENTORY = "view_inventory"
    STOCK_TRANSFERS = "stock_transfers"
    RECEIVE_STOCK = "receive_stock"
    MANAGE_PRODUCTS = "manage_products"
    VIEW_PRODUCTS = "view_products"

    # ── Orders, sales and customers ───────────────────────────
    PROCESS_ORDERS = "process_orders"
    PROCESS_SALES = "process_sales"
    MANAGE_CUSTOMERS = "manage_customers"
    BASIC_CUSTOMER_INFO = "basic_customer_info"
    MANAGE_RETURNS = "manage_returns"

    # ── Settings ──────────────────────────────────────────────
    MANAGE_SETTINGS = "manage_settings"

    # ── Payroll ───────────────────────────────────────────────
    VIEW_PAYROLL = "view_payroll"
    MANAGE_PAYROLL = "manage_payroll"
    APPROVE_PAYROLL = "approve_payroll"
    VIEW_PAYROLL_REPORTS = "view_payroll_reports"
    EXPORT_PAYROLL_REPORTS = "export_payroll_reports"
    MANAGE_PAYROLL_SETTINGS = "manage_payroll_settings"

    # ── Requests ──────────────────────────────────────────────
    CREATE_FUND_REQUESTS = "create_fund_requests"
    VIEW_FUND_REQUESTS = "view_fund_requests"
    APPROVE_FUND_REQUESTS = "approve_fund_requests"
    APPROVE_WAGE_ADVANCES = "approve_wage_advances"
    DISBURSE_FUNDS = "disburse_funds"

    # ── Timesheets ────────────────────────────────────────────
    VIEW_TIMESHEETS = "view_timesheets"
    MANAGE_TIMESHEETS = "manage_timesheets"
    APPROVE_TIMESHEETS = "approve_timesheets"

    # ── Purchasing ────────────────────────────────────────────
    VIEW_PURCHASE_ORDERS = "view_purchase_orders"
    MANAGE_PURCHASE_ORDERS = "manage_purchase_orders"
    PROCESS_SUPPLIER_ORDERS = "process_supplier_orders"
    MANAGE_SUPPLIER_CATALOG = "manage_supplier_catalog"

    # ── Platform ──────────────────────────────────────────────
    MANAGE_TENANTS = "manage_tenants"


def resolve_capability(key, role: str = "") -> Capability:
    """
    Resolve a capability key (string or member) into a Capability.

    Raises UnknownCapabilityError for anything outside the enum.
    """
    if isinstance(key, Capability):
        return key
    try:
        return Capability(key)
    except ValueError:
        raise UnknownCapabilityError(str(key), role) from None


def resolve_capabilities(
    keys: Iterable, role: str = ""
) -> FrozenSet[Capability]:
    return frozenset(resolve_capability(k, role) for k in keys)


# ══════════════════════════════════════════════════════════════
# ROLE DEFINITION (one row of the role table)
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class RoleDefinition:
    role: Role
    level: int
    capabilities: FrozenSet[Capability]
    is_global: bool = False
    is_top: bool = False
    cross_tenant: bool = False

    def __post_init__(self):
        if not isinstance(self.role, Role):
            raise ValueError("role must be Role enum.")

        if isinstance(self.level, bool) or not isinstance(self.level, int):
            raise ValueError("level must be an integer.")

        # Accept any iterable of members/keys, store a frozenset.
        object.__setattr__(
            self,
            "capabilities",
            resolve_capabilities(self.capabilities, self.role.value),
        )

        if self.is_top and self.cross_tenant:
            raise ValueError(
                "The top role is tenant-bound and cannot be cross-tenant."
            )

    def to_dict(self) -> dict:
        return {
            "role": self.role.value,
            "level": self.level,
            "capabilities": sorted(c.value for c in self.capabilities),
            "is_global": self.is_global,
            "is_top": self.is_top,
            "cross_tenant": self.cross_tenant,
        }

    @classmethod
    def from_dict(cls, data: dict) -> RoleDefinition:
        return cls(
            role=Role(data["role"]),
            level=data["level"],
            capabilities=data.get("capabilities", ()),
            is_global=bool(data.get("is_global", False)),
            is_top=bool(data.get("is_top", False)),
            cross_tenant=bool(data.get("cross_tenant", False)),
        )
