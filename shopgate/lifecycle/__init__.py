"""
ShopGate Lifecycle — Status Tables, Gate, Transition Guards
"""

from shopgate.lifecycle.defaults import DEFAULT_TRANSITION_TABLES
from shopgate.lifecycle.gate import LifecycleGate, TransitionGuard
from shopgate.lifecycle.table import StatusTransitionTable


def default_lifecycle_gate() -> LifecycleGate:
    return LifecycleGate(DEFAULT_TRANSITION_TABLES)


__all__ = [
    "DEFAULT_TRANSITION_TABLES",
    "LifecycleGate",
    "StatusTransitionTable",
    "TransitionGuard",
    "default_lifecycle_gate",
]
