"""
ShopGate Bootstrap — Invariant Checks
=======================================
Each function verifies one law of an assembled PolicyRegistry.
If any check fails → SystemBootstrapError is raised.

These checks do NOT:
- Auto-fix anything
- Register missing policies
- Silence failures
"""

import logging

from shopgate.bootstrap.errors import SystemBootstrapError
from shopgate.roles import Role

logger = logging.getLogger("shopgate.bootstrap")


# ══════════════════════════════════════════════════════════════
# CHECK 1: Registry Locked
# ══════════════════════════════════════════════════════════════

def check_registry_locked(registry):
    """A registry that can still change is not ready to serve."""
    if not registry.is_locked:
        raise SystemBootstrapError(
            invariant="REGISTRY_UNLOCKED",
            detail="PolicyRegistry must be locked before use.",
        )
    logger.info(
        f"✓ Policy registry locked ({registry.policy_count()} resource types)."
    )


# ══════════════════════════════════════════════════════════════
# CHECK 2: Top Role Never Assignable
# ══════════════════════════════════════════════════════════════

def check_top_role_unassignable(registry):
    hierarchy = registry.hierarchy
    top = hierarchy.top_role
    offenders = [r.value for r in Role if hierarchy.can_assign(r, top)]
    if offenders:
        raise SystemBootstrapError(
            invariant="TOP_ROLE_ASSIGNABLE",
            detail=f"Roles {offenders} could assign '{top.value}'.",
        )
    if hierarchy.is_cross_tenant(top):
        raise SystemBootstrapError(
            invariant="TOP_ROLE_CROSS_TENANT",
            detail=f"Top role '{top.value}' must be tenant-bound.",
        )
    logger.info(f"✓ Top role '{top.value}' is unassignable.")


# ══════════════════════════════════════════════════════════════
# CHECK 3: Lifecycle Coverage
# ══════════════════════════════════════════════════════════════

def check_lifecycle_coverage(registry):
    """
    Every status-bearing resource type has a table. Tables no policy
    uses are logged, not rejected.
    """
    gate = registry.gate
    used = set()
    for resource_type in registry.resource_types():
        policy = registry.policy(resource_type)
        if policy.shape.has_status:
            if not gate.has_table(resource_type):
                raise SystemBootstrapError(
                    invariant="LIFECYCLE_TABLE_MISSING",
                    detail=(
                        f"'{resource_type}' carries a status but has no "
                        f"transition table."
                    ),
                )
            used.add(resource_type)
        for ability in policy.abilities():
            if ability.transition is not None:
                used.add(ability.subject_type or resource_type)

    unused = sorted(set(gate.resource_types()) - used)
    if unused:
        logger.warning(f"⚠ Lifecycle tables with no policy: {unused}")
    logger.info(f"✓ Lifecycle coverage OK ({len(used)} tables in use).")


# ══════════════════════════════════════════════════════════════
# CHECK 4: Transitions Declared
# ══════════════════════════════════════════════════════════════

def check_transitions_declared(registry):
    """
    Every transition reachable in a table in use is performed by at
    least one ability. An orphan transition means a table and its
    policy have drifted apart.
    """
    gate = registry.gate
    performed = {}
    for resource_type in registry.resource_types():
        for ability in registry.policy(resource_type).abilities():
            if ability.transition is None:
                continue
            lifecycle_type = ability.subject_type or resource_type
            performed.setdefault(lifecycle_type, set()).add(ability.transition)

    for lifecycle_type, transitions in sorted(performed.items()):
        orphans = gate.table(lifecycle_type).vocabulary() - transitions
        if orphans:
            raise SystemBootstrapError(
                invariant="ORPHAN_TRANSITION",
                detail=(
                    f"'{lifecycle_type}' table lists {sorted(orphans)} "
                    f"but no ability performs them."
                ),
            )
    logger.info("✓ Every table transition is performed by an ability.")
