"""
ShopGate Bootstrap — Self-Check Orchestrator
==============================================
Runs all invariant checks against an assembled registry.
If any check fails → SystemBootstrapError propagates → the registry
is never handed out.

Check order:
1. Registry locked
2. Top role never assignable
3. Lifecycle coverage
4. Every table transition performed by an ability

No auto-fix. No fallback. No silence.
"""

import logging

from shopgate.bootstrap.invariants import (
    check_lifecycle_coverage,
    check_registry_locked,
    check_top_role_unassignable,
    check_transitions_declared,
)

logger = logging.getLogger("shopgate.bootstrap")


def run_bootstrap_checks(registry):
    """
    Execute all invariant checks. Called once per built registry by
    build_policy_registry().
    """
    logger.info("═══ ShopGate Bootstrap Self-Check Starting ═══")

    check_registry_locked(registry)
    check_top_role_unassignable(registry)
    check_lifecycle_coverage(registry)
    check_transitions_declared(registry)

    logger.info("═══ ShopGate Bootstrap Self-Check PASSED ═══")
