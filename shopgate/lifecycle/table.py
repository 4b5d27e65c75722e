"""
ShopGate Lifecycle — Status Transition Table
==============================================
Declarative finite-state table for one resource type.

A table maps each status to the abstract transitions reachable from
it (e.g. pending → {approve, reject, cancel}). Transitions are verbs,
not target states: the engine only answers "may this verb run now".

RULES (NON-NEGOTIABLE):
- At least one terminal status
- Terminal statuses have no ordinary transitions
- Overrides are the only mutating way out of a terminal status, and
  they are reserved for the top role
- Settlements are bookkeeping verbs recorded against a terminal
  status (repayments, late payments); they do not reopen it
- Unknown statuses are configuration errors, not denials

This file contains NO actor logic.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import FrozenSet, Mapping

from shopgate.exceptions import InvalidTransitionTableError, UnknownStatusError


def _freeze_map(data: Mapping) -> Mapping[str, FrozenSet[str]]:
    return MappingProxyType(
        {str(k): frozenset(v) for k, v in (data or {}).items()}
    )


@dataclass(frozen=True)
class StatusTransitionTable:
    """
    Fields:
        resource_type:  Resource type this table governs
        statuses:       Full status vocabulary
        initial:        Status new resources start in
        terminal:       Statuses after which only overrides/settlements apply
        transitions:    {status → reachable transitions}
        overrides:      {terminal status → top-role-only transitions}
        settlements:    {terminal status → bookkeeping transitions}
    """
    resource_type: str
    statuses: FrozenSet[str]
    initial: str
    terminal: FrozenSet[str]
    transitions: Mapping[str, FrozenSet[str]] = field(hash=False)
    overrides: Mapping[str, FrozenSet[str]] = field(default_factory=dict, hash=False)
    settlements: Mapping[str, FrozenSet[str]] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        if not self.resource_type or not isinstance(self.resource_type, str):
            raise ValueError("resource_type must be a non-empty string.")

        object.__setattr__(self, "statuses", frozenset(self.statuses))
        object.__setattr__(self, "terminal", frozenset(self.terminal))
        object.__setattr__(self, "transitions", _freeze_map(self.transitions))
        object.__setattr__(self, "overrides", _freeze_map(self.overrides))
        object.__setattr__(self, "settlements", _freeze_map(self.settlements))

        if not self.statuses:
            self._fail("statuses must not be empty.")
        if self.initial not in self.statuses:
            self._fail(f"initial status '{self.initial}' is not a status.")
        if not self.terminal:
            self._fail("at least one terminal status is required.")

        unknown = self.terminal - self.statuses
        if unknown:
            self._fail(f"terminal statuses {sorted(unknown)} are not statuses.")

        for name, mapping in (
            ("transitions", self.transitions),
            ("overrides", self.overrides),
            ("settlements", self.settlements),
        ):
            unknown = set(mapping) - self.statuses
            if unknown:
                self._fail(f"{name} reference unknown statuses {sorted(unknown)}.")

        for status in self.terminal:
            if self.transitions.get(status):
                self._fail(
                    f"terminal status '{status}' declares ordinary "
                    f"transitions; use overrides or settlements."
                )

        for name, mapping in (
            ("overrides", self.overrides),
            ("settlements", self.settlements),
        ):
            stray = set(mapping) - self.terminal
            if stray:
                self._fail(
                    f"{name} may only leave terminal statuses, "
                    f"got {sorted(stray)}."
                )

    def _fail(self, detail: str) -> None:
        raise InvalidTransitionTableError(self.resource_type, detail)

    # ══════════════════════════════════════════════════════════
    # QUERIES
    # ══════════════════════════════════════════════════════════

    def check_status(self, status: str) -> str:
        if status not in self.statuses:
            raise UnknownStatusError(self.resource_type, status)
        return status

    def is_terminal(self, status: str) -> bool:
        return self.check_status(status) in self.terminal

    def ordinary(self, status: str) -> FrozenSet[str]:
        return self.transitions.get(self.check_status(status), frozenset())

    def override_transitions(self, status: str) -> FrozenSet[str]:
        return self.overrides.get(self.check_status(status), frozenset())

    def settlement_transitions(self, status: str) -> FrozenSet[str]:
        return self.settlements.get(self.check_status(status), frozenset())

    def reachable(self, status: str) -> FrozenSet[str]:
        """Every transition reachable from status, irrespective of actor."""
        return (
            self.ordinary(status)
            | self.override_transitions(status)
            | self.settlement_transitions(status)
        )

    def is_override(self, status: str, transition: str) -> bool:
        return transition in self.override_transitions(status)

    def vocabulary(self) -> FrozenSet[str]:
        """All transition names used anywhere in the table."""
        names = set()
        for mapping in (self.transitions, self.overrides, self.settlements):
            for verbs in mapping.values():
                names |= verbs
        return frozenset(names)

    def statuses_allowing(self, transition: str) -> FrozenSet[str]:
        return frozenset(
            s for s in self.statuses if transition in self.reachable(s)
        )

    # ══════════════════════════════════════════════════════════
    # SERIALIZATION
    # ══════════════════════════════════════════════════════════

    def to_dict(self) -> dict:
        def dump(mapping):
            return {k: sorted(v) for k, v in sorted(mapping.items())}

        return {
            "resource_type": self.resource_type,
            "statuses": sorted(self.statuses),
            "initial": self.initial,
            "terminal": sorted(self.terminal),
            "transitions": dump(self.transitions),
            "overrides": dump(self.overrides),
            "settlements": dump(self.settlements),
        }

    @classmethod
    def from_dict(cls, data: dict) -> StatusTransitionTable:
        return cls(
            resource_type=data["resource_type"],
            statuses=data["statuses"],
            initial=data["initial"],
            terminal=data["terminal"],
            transitions=data.get("transitions", {}),
            overrides=data.get("overrides", {}),
            settlements=data.get("settlements", {}),
        )
