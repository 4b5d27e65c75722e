"""
ShopGate Django Adapter Wiring
================================
Builds the process-wide locked PolicyRegistry for the adapter.

This module is adapter-only glue:
- no engine contract changes
- one registry per process, built lazily under a lock
- SHOPGATE_POLICY_CONFIG (optional path) selects an override file
"""

from __future__ import annotations

import logging
import threading

from django.conf import settings

from shopgate.bootstrap import build_policy_registry
from shopgate.config import PolicyConfig, load_policy_config_file
from shopgate.policy import PolicyRegistry

logger = logging.getLogger("shopgate.adapters")

_REGISTRY_LOCK = threading.Lock()
_REGISTRY: PolicyRegistry | None = None


def _load_config() -> PolicyConfig:
    path = getattr(settings, "SHOPGATE_POLICY_CONFIG", None)
    if not path:
        return PolicyConfig()
    logger.info(f"Loading policy overrides from {path}")
    return load_policy_config_file(path)


def get_policy_registry() -> PolicyRegistry:
    """
    Lazy singleton wiring for adapter runtime.
    """
    global _REGISTRY
    with _REGISTRY_LOCK:
        if _REGISTRY is None:
            _REGISTRY = build_policy_registry(_load_config())
        return _REGISTRY


def reset_policy_registry() -> None:
    """Drop the cached registry; the next call rebuilds it from settings."""
    global _REGISTRY
    with _REGISTRY_LOCK:
        _REGISTRY = None
