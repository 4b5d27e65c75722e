"""
ShopGate Resources — Shop
===========================
Shop and storefront settings. A shop snapshot carries its own id in
shop_id so the scope step sees the shop itself. The wholesale_only
attribute marks shops that sell to trade customers by default.
"""

from __future__ import annotations

from shopgate.policy.ability import Ability, Rule
from shopgate.policy.contracts import ResourcePolicy
from shopgate.policy.predicates import (
    attribute_true,
    has_capability,
    is_global_role,
    role_at_least,
)
from shopgate.policy.result import ReasonCode
from shopgate.primitives.resource import ResourceShape
from shopgate.roles.models import Capability as C
from shopgate.roles.models import Role


class ShopPolicy(ResourcePolicy):
    resource_type = "shop"
    shape = ResourceShape(required={"shop_id"}, optional={"id", "wholesale_only"})
    description = "Shops and their storefront settings."

    def declare_abilities(self):
        return (
            Ability(
                "toggle_storefront",
                role=role_at_least(Role.STORE_MANAGER),
                scoped=True,
            ),
            Ability(
                "configure_settings",
                role=role_at_least(Role.ASSISTANT_MANAGER),
                scoped=True,
            ),
            Ability(
                "view_analytics",
                role=role_at_least(Role.SALES_REP),
                scoped=True,
            ),
            Ability(
                "manage_products",
                role=has_capability(C.MANAGE_PRODUCTS),
                scoped=True,
            ),
            Ability(
                "manage_orders",
                role=has_capability(C.PROCESS_ORDERS),
                scoped=True,
            ),
            Ability(
                "view_customers",
                role=has_capability(C.MANAGE_CUSTOMERS),
                scoped=True,
            ),
            Ability(
                "toggle_retail_sales",
                role=is_global_role(),
                rules=(
                    Rule(attribute_true("wholesale_only"), ReasonCode.LIFECYCLE_BLOCKED),
                ),
            ),
            Ability("configure_tax", role=is_global_role()),
            Ability("configure_currency", role=is_global_role()),
        )
