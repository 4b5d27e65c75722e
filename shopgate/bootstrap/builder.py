"""
ShopGate Bootstrap — Registry Builder
=======================================
Assembles the process-wide PolicyRegistry: effective role table,
effective lifecycle tables, every resource policy, lock, self-check.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from shopgate.bootstrap.self_check import run_bootstrap_checks
from shopgate.config import PolicyConfig
from shopgate.policy import PolicyRegistry, ResourcePolicy
from shopgate.resources import default_policies

logger = logging.getLogger("shopgate.bootstrap")


def build_policy_registry(
    config: Optional[PolicyConfig] = None,
    policies: Optional[Iterable[ResourcePolicy]] = None,
) -> PolicyRegistry:
    """
    Build, lock and self-check a registry.

    config:    deployment overrides (None → shipped tables)
    policies:  policy instances (None → every shipped resource policy)
    """
    config = config or PolicyConfig()
    registry = PolicyRegistry(
        hierarchy=config.build_hierarchy(),
        gate=config.build_gate(),
    )
    for policy in default_policies() if policies is None else policies:
        registry.register(policy)
    registry.lock()

    run_bootstrap_checks(registry)
    logger.info(
        f"Policy registry ready — {registry.policy_count()} resource types"
        f"{' (overrides: ' + config.source + ')' if config.source else ''}"
    )
    return registry
