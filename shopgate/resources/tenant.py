"""
ShopGate Resources — Tenant
=============================
The tenant record itself; tenant_id is the tenant's own id. Platform
administration is the only place cross-tenant roles act, and only
through abilities declared cross_tenant.
"""

from __future__ import annotations

from shopgate.policy.ability import Ability, Target
from shopgate.policy.contracts import ResourcePolicy
from shopgate.policy.predicates import has_any_capability, has_capability
from shopgate.primitives.resource import ResourceShape
from shopgate.roles.models import Capability as C

_PLATFORM = has_capability(C.MANAGE_TENANTS)
_ADMINISTERS = has_any_capability(C.MANAGE_TENANTS, C.MANAGE_TENANT)


class TenantPolicy(ResourcePolicy):
    resource_type = "tenant"
    shape = ResourceShape(optional={"id"})
    description = "Tenants (businesses) on the platform."

    def declare_abilities(self):
        return (
            Ability("view_any", role=_PLATFORM, target=Target.NONE),
            Ability("create", role=_PLATFORM, target=Target.NONE),
            Ability("view", role=_ADMINISTERS, cross_tenant=True),
            Ability("update", role=_ADMINISTERS, cross_tenant=True),
            Ability("delete", role=_PLATFORM, cross_tenant=True),
            Ability(
                "view_as_supplier",
                role=has_capability(C.PROCESS_SUPPLIER_ORDERS),
                description="Open the supplier-side order book.",
            ),
            Ability(
                "view_as_buyer",
                role=has_any_capability(
                    C.MANAGE_PURCHASE_ORDERS, C.VIEW_PURCHASE_ORDERS
                ),
                description="Open the buyer-side order book.",
            ),
        )
