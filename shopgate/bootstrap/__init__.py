"""
ShopGate Bootstrap — Startup Self-Defense
===========================================
Ensures no decision is served from an inconsistent registry.
"""

from shopgate.bootstrap.builder import build_policy_registry
from shopgate.bootstrap.errors import SystemBootstrapError
from shopgate.bootstrap.self_check import run_bootstrap_checks

__all__ = [
    "SystemBootstrapError",
    "build_policy_registry",
    "run_bootstrap_checks",
]
