"""
ShopGate — Multi-Tenant Policy Evaluation Engine
==================================================
Decides who may view, create, transition, approve, disburse or delete
a resource, given the actor's role, tenant and shop assignments and
the resource's lifecycle status.

Entry point:
    from shopgate.bootstrap import build_policy_registry

    registry = build_policy_registry()
    registry.can(actor, "approve", "pay_run", pay_run)
"""
