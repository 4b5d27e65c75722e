"""
ShopGate Roles — Default Role Table
=====================================
Shipped defaults. Deployments override through shopgate.config.
"""

from __future__ import annotations

from typing import Tuple

from shopgate.roles.models import Capability as C
from shopgate.roles.models import Role, RoleDefinition


_OWNER_CAPABILITIES = frozenset(c for c in C if c != C.MANAGE_TENANTS)

_GENERAL_MANAGER_CAPABILITIES = frozenset({
    C.MANAGE_STORES,
    C.MANAGE_USERS,
    C.VIEW_REPORTS,
    C.MANAGE_INVENTORY,
    C.VIEW_INVENTORY,
    C.STOCK_TRANSFERS,
    C.RECEIVE_STOCK,
    C.MANAGE_PRODUCTS,
    C.VIEW_PRODUCTS,
    C.PROCESS_ORDERS,
    C.MANAGE_CUSTOMERS,
    C.MANAGE_RETURNS,
    C.VIEW_PAYROLL,
    C.MANAGE_PAYROLL,
    C.APPROVE_PAYROLL,
    C.VIEW_PAYROLL_REPORTS,
    C.EXPORT_PAYROLL_REPORTS,
    C.CREATE_FUND_REQUESTS,
    C.VIEW_FUND_REQUESTS,
    C.APPROVE_FUND_REQUESTS,
    C.APPROVE_WAGE_ADVANCES,
    C.DISBURSE_FUNDS,
    C.VIEW_TIMESHEETS,
    C.MANAGE_TIMESHEETS,
    C.APPROVE_TIMESHEETS,
    C.VIEW_PURCHASE_ORDERS,
    C.MANAGE_PURCHASE_ORDERS,
    C.PROCESS_SUPPLIER_ORDERS,
    C.MANAGE_SUPPLIER_CATALOG,
})

_STORE_MANAGER_CAPABILITIES = frozenset({
    C.MANAGE_STORE_USERS,
    C.VIEW_STORE_REPORTS,
    C.MANAGE_STORE_INVENTORY,
    C.VIEW_INVENTORY,
    C.STOCK_TRANSFERS,
    C.RECEIVE_STOCK,
    C.MANAGE_PRODUCTS,
    C.VIEW_PRODUCTS,
    C.PROCESS_ORDERS,
    C.MANAGE_CUSTOMERS,
    C.MANAGE_RETURNS,
    C.VIEW_PAYROLL,
    C.MANAGE_PAYROLL,
    C.VIEW_PAYROLL_REPORTS,
    C.CREATE_FUND_REQUESTS,
    C.VIEW_FUND_REQUESTS,
    C.APPROVE_FUND_REQUESTS,
    C.APPROVE_WAGE_ADVANCES,
    C.DISBURSE_FUNDS,
    C.VIEW_TIMESHEETS,
    C.MANAGE_TIMESHEETS,
    C.APPROVE_TIMESHEETS,
    C.VIEW_PURCHASE_ORDERS,
    C.MANAGE_PURCHASE_ORDERS,
    C.PROCESS_SUPPLIER_ORDERS,
})

_ASSISTANT_MANAGER_CAPABILITIES = frozenset({
    C.VIEW_STORE_REPORTS,
    C.MANAGE_STORE_INVENTORY,
    C.VIEW_INVENTORY,
    C.RECEIVE_STOCK,
    C.VIEW_PRODUCTS,
    C.PROCESS_ORDERS,
    C.MANAGE_CUSTOMERS,
    C.MANAGE_RETURNS,
    C.CREATE_FUND_REQUESTS,
    C.VIEW_FUND_REQUESTS,
    C.APPROVE_FUND_REQUESTS,
    C.VIEW_TIMESHEETS,
    C.APPROVE_TIMESHEETS,
    C.VIEW_PURCHASE_ORDERS,
})

_SALES_REP_CAPABILITIES = frozenset({
    C.PROCESS_ORDERS,
    C.VIEW_PRODUCTS,
    C.MANAGE_CUSTOMERS,
    C.VIEW_INVENTORY,
})

_INVENTORY_CLERK_CAPABILITIES = frozenset({
    C.MANAGE_STORE_INVENTORY,
    C.VIEW_PRODUCTS,
    C.RECEIVE_STOCK,
    C.STOCK_TRANSFERS,
})

_CASHIER_CAPABILITIES = frozenset({
    C.PROCESS_SALES,
    C.VIEW_PRODUCTS,
    C.BASIC_CUSTOMER_INFO,
})


DEFAULT_ROLE_TABLE: Tuple[RoleDefinition, ...] = (
    RoleDefinition(
        role=Role.OWNER,
        level=100,
        capabilities=_OWNER_CAPABILITIES,
        is_global=True,
        is_top=True,
    ),
    RoleDefinition(
        role=Role.GENERAL_MANAGER,
        level=90,
        capabilities=_GENERAL_MANAGER_CAPABILITIES,
        is_global=True,
    ),
    RoleDefinition(
        role=Role.STORE_MANAGER,
        level=60,
        capabilities=_STORE_MANAGER_CAPABILITIES,
    ),
    RoleDefinition(
        role=Role.ASSISTANT_MANAGER,
        level=50,
        capabilities=_ASSISTANT_MANAGER_CAPABILITIES,
    ),
    RoleDefinition(
        role=Role.SALES_REP,
        level=40,
        capabilities=_SALES_REP_CAPABILITIES,
    ),
    RoleDefinition(
        role=Role.INVENTORY_CLERK,
        level=35,
        capabilities=_INVENTORY_CLERK_CAPABILITIES,
    ),
    RoleDefinition(
        role=Role.CASHIER,
        level=30,
        capabilities=_CASHIER_CAPABILITIES,
    ),
    # Platform operator. Lowest tenant level so it never outranks staff.
    RoleDefinition(
        role=Role.SUPER_ADMIN,
        level=0,
        capabilities=frozenset({C.MANAGE_TENANTS}),
        cross_tenant=True,
    ),
)
