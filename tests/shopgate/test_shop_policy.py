"""
ShopGate Resources — Shop Policy Tests
"""

from __future__ import annotations

import pytest

from shopgate.exceptions import MissingResourceFieldError
from shopgate.policy import ReasonCode
from shopgate.primitives import Resource, StaffActor
from shopgate.roles import Role

TENANT = "tenant-a"


def staff(role, shops=(7,)):
    return StaffActor(id=1, tenant_id=TENANT, role=role, shop_ids=shops)


def shop(shop_id=7, **attributes):
    return Resource(
        resource_type="shop",
        tenant_id=TENANT,
        id=shop_id,
        shop_id=shop_id,
        attributes=attributes,
    )


@pytest.mark.parametrize(
    "ability, allowed_role, refused_role",
    [
        ("toggle_storefront", Role.STORE_MANAGER, Role.ASSISTANT_MANAGER),
        ("configure_settings", Role.ASSISTANT_MANAGER, Role.SALES_REP),
        ("view_analytics", Role.SALES_REP, Role.INVENTORY_CLERK),
        ("manage_products", Role.STORE_MANAGER, Role.INVENTORY_CLERK),
        ("manage_orders", Role.SALES_REP, Role.CASHIER),
        ("view_customers", Role.SALES_REP, Role.INVENTORY_CLERK),
    ],
)
def test_scoped_shop_abilities(registry, ability, allowed_role, refused_role):
    assert registry.can(staff(allowed_role), ability, "shop", shop())
    refused = registry.can(staff(refused_role), ability, "shop", shop())
    assert refused.reason_code == ReasonCode.ROLE_INSUFFICIENT
    elsewhere = registry.can(staff(allowed_role), ability, "shop", shop(shop_id=9))
    assert elsewhere.reason_code == ReasonCode.SCOPE_MISMATCH


class TestGlobalSettings:

    def test_tax_and_currency_need_global_role(self, registry):
        for ability in ("configure_tax", "configure_currency"):
            assert registry.can(staff(Role.GENERAL_MANAGER, shops=()), ability, "shop", shop())
            assert not registry.can(staff(Role.STORE_MANAGER), ability, "shop", shop())

    def test_retail_toggle_on_wholesale_shop(self, registry):
        wholesale = shop(wholesale_only=True)
        assert registry.can(staff(Role.OWNER), "toggle_retail_sales", "shop", wholesale)

    def test_retail_toggle_on_retail_shop(self, registry):
        decision = registry.can(staff(Role.OWNER), "toggle_retail_sales", "shop", shop())
        assert decision.reason_code == ReasonCode.LIFECYCLE_BLOCKED

    def test_retail_toggle_needs_global_role(self, registry):
        wholesale = shop(wholesale_only=True)
        decision = registry.can(staff(Role.STORE_MANAGER), "toggle_retail_sales", "shop", wholesale)
        assert decision.reason_code == ReasonCode.ROLE_INSUFFICIENT

    def test_shop_snapshot_needs_shop_id(self, registry):
        bare = Resource(resource_type="shop", tenant_id=TENANT, id=7)
        with pytest.raises(MissingResourceFieldError):
            registry.can(staff(Role.OWNER), "configure_tax", "shop", bare)
