"""
ShopGate Lifecycle — Gate and Transition Guard
================================================
LifecycleGate answers, per resource type, which abstract transitions
are reachable from an observed status. It is actor-independent.

TransitionGuard packages the same precondition as a predicate the
storage layer evaluates inside its atomic commit:

    guard = registry.transition_guard("pay_run", "pending_approval", "approve")

    UPDATE pay_runs SET status = 'approved'
     WHERE id = :id AND status = :observed      -- guard.expected_status

or, for stores without conditional updates:

    with store.lock(pay_run_id):
        if not guard.holds(store.status(pay_run_id)):
            return conflict
        store.set_status(pay_run_id, "approved")

Only one of two concurrent commits observing the same status can
succeed; the loser re-evaluates against the new status and is denied.
This module does not lock, queue or retry.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, Optional, Tuple

from shopgate.exceptions import (
    InvalidTransitionTableError,
    UnregisteredResourceTypeError,
)
from shopgate.lifecycle.table import StatusTransitionTable

logger = logging.getLogger("shopgate.lifecycle")


# ══════════════════════════════════════════════════════════════
# TRANSITION GUARD (compare-and-swap predicate)
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class TransitionGuard:
    """
    Fields:
        resource_type:    Resource type the guard applies to
        expected_status:  Status observed when the decision was made
        transition:       Abstract transition being committed
        table:            Table used to re-check reachability
    """
    resource_type: str
    expected_status: str
    transition: str
    table: StatusTransitionTable

    def __post_init__(self):
        if not isinstance(self.table, StatusTransitionTable):
            raise TypeError("table must be StatusTransitionTable.")
        if self.table.resource_type != self.resource_type:
            raise ValueError(
                f"Table governs '{self.table.resource_type}', "
                f"not '{self.resource_type}'."
            )
        self.table.check_status(self.expected_status)
        if self.transition not in self.table.vocabulary():
            raise InvalidTransitionTableError(
                self.resource_type,
                f"unknown transition '{self.transition}'.",
            )

    def holds(self, current_status: Optional[str]) -> bool:
        """
        True only while the resource is still in the observed status
        and the transition is still reachable from it.
        """
        if current_status != self.expected_status:
            return False
        return self.transition in self.table.reachable(current_status)

    def __call__(self, current_status: Optional[str]) -> bool:
        return self.holds(current_status)


# ══════════════════════════════════════════════════════════════
# LIFECYCLE GATE
# ══════════════════════════════════════════════════════════════

class LifecycleGate:
    """
    Immutable set of StatusTransitionTables keyed by resource type.

    Usage:
        gate = LifecycleGate(DEFAULT_TRANSITION_TABLES)
        gate.reachable("wage_advance", "pending")
        # frozenset({'approve', 'reject', 'cancel', 'update', 'delete'})
    """

    def __init__(self, tables: Iterable[StatusTransitionTable] = ()):
        registry: Dict[str, StatusTransitionTable] = {}
        for table in tables:
            if not isinstance(table, StatusTransitionTable):
                raise TypeError(
                    f"Expected StatusTransitionTable, got "
                    f"{type(table).__name__}."
                )
            if table.resource_type in registry:
                raise InvalidTransitionTableError(
                    table.resource_type, "table defined twice."
                )
            registry[table.resource_type] = table
        self._tables = registry

        logger.info(
            f"Lifecycle gate built — {len(registry)} tables: "
            f"{sorted(registry)}"
        )

    def has_table(self, resource_type: str) -> bool:
        return resource_type in self._tables

    def table(self, resource_type: str) -> StatusTransitionTable:
        table = self._tables.get(resource_type)
        if table is None:
            raise UnregisteredResourceTypeError(resource_type)
        return table

    def resource_types(self) -> Tuple[str, ...]:
        return tuple(sorted(self._tables))

    def reachable(self, resource_type: str, status: str) -> FrozenSet[str]:
        return self.table(resource_type).reachable(status)

    def allows(self, resource_type: str, status: str, transition: str) -> bool:
        return transition in self.reachable(resource_type, status)

    def is_terminal(self, resource_type: str, status: str) -> bool:
        return self.table(resource_type).is_terminal(status)

    def requires_top_role(
        self, resource_type: str, status: str, transition: str
    ) -> bool:
        return self.table(resource_type).is_override(status, transition)

    def guard(
        self, resource_type: str, observed_status: str, transition: str
    ) -> TransitionGuard:
        return TransitionGuard(
            resource_type=resource_type,
            expected_status=observed_status,
            transition=transition,
            table=self.table(resource_type),
        )

    def replace(self, tables: Iterable[StatusTransitionTable]) -> LifecycleGate:
        """
        New gate with some tables swapped out (deployment overrides).
        Replacements must target resource types already known.
        """
        merged = dict(self._tables)
        for table in tables:
            if table.resource_type not in merged:
                raise UnregisteredResourceTypeError(table.resource_type)
            merged[table.resource_type] = table
        return LifecycleGate(merged.values())
