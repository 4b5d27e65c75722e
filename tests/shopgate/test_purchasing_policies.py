"""
ShopGate Resources — Purchasing and Tenant Tests
==================================================
Purchase orders and supplier connections are bilateral: the buyer
tenant owns the record and the supplier tenant is the counterparty.
"""

from __future__ import annotations

from shopgate.policy import ReasonCode
from shopgate.primitives import Resource, StaffActor
from shopgate.roles import Role

BUYER = "buyer-co"
SUPPLIER = "supplier-co"
OUTSIDER = "outsider-co"


def staff(role, tenant_id=BUYER, id=1, shops=(7,)):
    return StaffActor(id=id, tenant_id=tenant_id, role=role, shop_ids=shops)


def purchase_order(status="draft", **overrides):
    data = dict(
        resource_type="purchase_order",
        tenant_id=BUYER,
        counterparty_tenant_id=SUPPLIER,
        id=4000,
        shop_id=7,
        status=status,
    )
    data.update(overrides)
    return Resource(**data)


def connection(status="pending"):
    return Resource(
        resource_type="supplier_connection",
        tenant_id=BUYER,
        counterparty_tenant_id=SUPPLIER,
        id=5000,
        status=status,
    )


def tenant(tenant_id=BUYER):
    return Resource(resource_type="tenant", tenant_id=tenant_id, id=tenant_id)


def shop(tenant_id=BUYER, shop_id=7):
    return Resource(resource_type="shop", tenant_id=tenant_id, shop_id=shop_id)


# ══════════════════════════════════════════════════════════════
# PURCHASE ORDER
# ══════════════════════════════════════════════════════════════


class TestPurchaseOrderBuyer:

    def test_create_for_own_shop(self, registry):
        decision = registry.can(
            staff(Role.STORE_MANAGER), "create", "purchase_order", context={"shop": shop()}
        )
        assert decision.allowed

    def test_create_for_foreign_shop(self, registry):
        decision = registry.can(
            staff(Role.STORE_MANAGER),
            "create",
            "purchase_order",
            context={"shop": shop(tenant_id=OUTSIDER)},
        )
        assert decision.reason_code == ReasonCode.TENANT_MISMATCH

    def test_buyer_submits_draft(self, registry):
        assert registry.can(staff(Role.STORE_MANAGER), "submit", "purchase_order", purchase_order())

    def test_buyer_scope_applies(self, registry):
        decision = registry.can(
            staff(Role.STORE_MANAGER, shops={9}), "submit", "purchase_order", purchase_order()
        )
        assert decision.reason_code == ReasonCode.SCOPE_MISMATCH

    def test_inventory_clerk_receives_shipment(self, registry):
        clerk = staff(Role.INVENTORY_CLERK)
        assert registry.can(clerk, "receive", "purchase_order", purchase_order("shipped"))
        decision = registry.can(clerk, "submit", "purchase_order", purchase_order())
        assert decision.reason_code == ReasonCode.ROLE_INSUFFICIENT

    def test_payment_recorded_after_completion(self, registry):
        completed = purchase_order("completed")
        assert registry.can(staff(Role.STORE_MANAGER), "record_payment", "purchase_order", completed)
        decision = registry.can(staff(Role.STORE_MANAGER), "cancel", "purchase_order", completed)
        assert decision.reason_code == ReasonCode.LIFECYCLE_BLOCKED

    def test_buyer_cannot_approve(self, registry):
        decision = registry.can(
            staff(Role.OWNER), "approve", "purchase_order", purchase_order("submitted")
        )
        assert decision.reason_code == ReasonCode.ROLE_INSUFFICIENT


class TestPurchaseOrderSupplier:

    def test_supplier_approves_submitted(self, registry):
        supplier = staff(Role.GENERAL_MANAGER, tenant_id=SUPPLIER, shops=())
        assert registry.can(supplier, "approve", "purchase_order", purchase_order("submitted"))

    def test_supplier_ignores_buyer_shops(self, registry):
        supplier = staff(Role.STORE_MANAGER, tenant_id=SUPPLIER, shops={99})
        assert registry.can(supplier, "ship", "purchase_order", purchase_order("approved"))

    def test_supplier_ship_follows_lifecycle(self, registry):
        supplier = staff(Role.STORE_MANAGER, tenant_id=SUPPLIER)
        decision = registry.can(supplier, "ship", "purchase_order", purchase_order())
        assert decision.reason_code == ReasonCode.LIFECYCLE_BLOCKED

    def test_supplier_cannot_edit(self, registry):
        supplier = staff(Role.OWNER, tenant_id=SUPPLIER)
        decision = registry.can(supplier, "update", "purchase_order", purchase_order())
        assert decision.reason_code == ReasonCode.ROLE_INSUFFICIENT

    def test_supplier_cancels_submitted(self, registry):
        supplier = staff(Role.STORE_MANAGER, tenant_id=SUPPLIER)
        assert registry.can(supplier, "cancel", "purchase_order", purchase_order("submitted"))

    def test_supplier_cashier_cannot_view(self, registry):
        decision = registry.can(
            staff(Role.CASHIER, tenant_id=SUPPLIER), "view", "purchase_order", purchase_order()
        )
        assert decision.reason_code == ReasonCode.ROLE_INSUFFICIENT

    def test_outsider_is_tenant_mismatch(self, registry):
        outsider = staff(Role.OWNER, tenant_id=OUTSIDER)
        for ability in ("view", "approve", "update", "cancel"):
            decision = registry.can(outsider, ability, "purchase_order", purchase_order("submitted"))
            assert decision.reason_code == ReasonCode.TENANT_MISMATCH


# ══════════════════════════════════════════════════════════════
# SUPPLIER CONNECTION
# ══════════════════════════════════════════════════════════════


class TestSupplierConnection:

    def test_buyer_requests(self, registry):
        assert registry.can(staff(Role.STORE_MANAGER), "request", "supplier_connection")
        assert not registry.can(staff(Role.CASHIER), "request", "supplier_connection")

    def test_supplier_approves(self, registry):
        supplier = staff(Role.GENERAL_MANAGER, tenant_id=SUPPLIER)
        assert registry.can(supplier, "approve", "supplier_connection", connection())

    def test_buyer_cannot_approve(self, registry):
        decision = registry.can(staff(Role.OWNER), "approve", "supplier_connection", connection())
        assert decision.reason_code == ReasonCode.ROLE_INSUFFICIENT

    def test_suspend_active_only(self, registry):
        supplier = staff(Role.OWNER, tenant_id=SUPPLIER)
        assert registry.can(supplier, "suspend", "supplier_connection", connection("active"))
        decision = registry.can(supplier, "suspend", "supplier_connection", connection())
        assert decision.reason_code == ReasonCode.LIFECYCLE_BLOCKED

    def test_both_sides_view(self, registry):
        assert registry.can(staff(Role.STORE_MANAGER), "view", "supplier_connection", connection())
        supplier = staff(Role.GENERAL_MANAGER, tenant_id=SUPPLIER)
        assert registry.can(supplier, "view", "supplier_connection", connection())


# ══════════════════════════════════════════════════════════════
# TENANT
# ══════════════════════════════════════════════════════════════


class TestTenant:

    def test_platform_admin_crosses_tenants(self, registry):
        admin = staff(Role.SUPER_ADMIN, tenant_id="platform", shops=())
        for ability in ("view", "update", "delete"):
            assert registry.can(admin, ability, "tenant", tenant())
        assert registry.can(admin, "view_any", "tenant")
        assert registry.can(admin, "create", "tenant")

    def test_owner_manages_own_tenant(self, registry):
        owner = staff(Role.OWNER)
        assert registry.can(owner, "view", "tenant", tenant())
        assert registry.can(owner, "update", "tenant", tenant())
        decision = registry.can(owner, "delete", "tenant", tenant())
        assert decision.reason_code == ReasonCode.ROLE_INSUFFICIENT

    def test_owner_cannot_cross_tenants(self, registry):
        decision = registry.can(staff(Role.OWNER), "view", "tenant", tenant(OUTSIDER))
        assert decision.reason_code == ReasonCode.TENANT_MISMATCH

    def test_general_manager_cannot_update_tenant(self, registry):
        decision = registry.can(staff(Role.GENERAL_MANAGER), "update", "tenant", tenant())
        assert decision.reason_code == ReasonCode.ROLE_INSUFFICIENT

    def test_tenant_listing_is_platform_only(self, registry):
        assert not registry.can(staff(Role.OWNER), "view_any", "tenant")

    def test_order_books(self, registry):
        assert registry.can(staff(Role.STORE_MANAGER), "view_as_supplier", "tenant", tenant())
        assert registry.can(staff(Role.ASSISTANT_MANAGER), "view_as_buyer", "tenant", tenant())
        assert not registry.can(staff(Role.CASHIER), "view_as_buyer", "tenant", tenant())
