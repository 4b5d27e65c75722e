"""
ShopGate Config — Public API
===============================
Deployment overrides for the role and lifecycle tables.
"""

from shopgate.config.loader import (
    PolicyConfig,
    RoleOverride,
    dump_policy_config,
    load_policy_config,
    load_policy_config_file,
)

__all__ = [
    "PolicyConfig",
    "RoleOverride",
    "dump_policy_config",
    "load_policy_config",
    "load_policy_config_file",
]
