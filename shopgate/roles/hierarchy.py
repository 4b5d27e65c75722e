"""
ShopGate Roles — Role Hierarchy
=================================
Totally ordered role table with explicit capability sets.

RULES (NON-NEGOTIABLE):
- Every Role member has exactly one definition
- Levels are unique (strict total order)
- Exactly one top role, and it carries the highest level
- Capabilities are enumerated per role; no inheritance chains
- can_assign(a, b) is the single seniority primitive:
      level(a) > level(b) AND b is not the top role
  Equality never grants anything.

The table is built once at startup and is immutable afterwards.
"""

from __future__ import annotations

import logging
from typing import Dict, FrozenSet, Iterable, Tuple

from shopgate.exceptions import InvalidRoleTableError
from shopgate.roles.models import (
    Capability,
    Role,
    RoleDefinition,
    resolve_capability,
)

logger = logging.getLogger("shopgate.roles")


class RoleHierarchy:
    """
    Immutable role table.

    Usage:
        hierarchy = RoleHierarchy(DEFAULT_ROLE_TABLE)
        hierarchy.level(Role.OWNER)                     # 100
        hierarchy.has_capability(Role.CASHIER, "process_sales")
        hierarchy.can_assign(Role.OWNER, Role.GENERAL_MANAGER)
    """

    def __init__(self, definitions: Iterable[RoleDefinition]):
        table: Dict[Role, RoleDefinition] = {}
        for definition in definitions:
            if not isinstance(definition, RoleDefinition):
                raise InvalidRoleTableError(
                    f"Expected RoleDefinition, got "
                    f"{type(definition).__name__}."
                )
            if definition.role in table:
                raise InvalidRoleTableError(
                    f"Role '{definition.role.value}' is defined twice."
                )
            table[definition.role] = definition

        self._table = table
        self._validate()

        self._top_role = next(d.role for d in table.values() if d.is_top)

        logger.info(
            f"Role hierarchy built — {len(table)} roles, "
            f"top={self._top_role.value}"
        )

    # ══════════════════════════════════════════════════════════
    # VALIDATION
    # ══════════════════════════════════════════════════════════

    def _validate(self) -> None:
        missing = [r.value for r in Role if r not in self._table]
        if missing:
            self._fail(f"Missing role definitions: {sorted(missing)}")

        levels: Dict[int, Role] = {}
        for definition in self._table.values():
            other = levels.get(definition.level)
            if other is not None:
                self._fail(
                    f"Roles '{other.value}' and '{definition.role.value}' "
                    f"share level {definition.level}; levels must be unique."
                )
            levels[definition.level] = definition.role

        tops = [d for d in self._table.values() if d.is_top]
        if len(tops) != 1:
            self._fail(
                f"Exactly one top role required, found {len(tops)}."
            )

        highest = max(levels)
        if tops[0].level != highest:
            self._fail(
                f"Top role '{tops[0].role.value}' must carry the highest "
                f"level ({highest}), has {tops[0].level}."
            )

    @staticmethod
    def _fail(message: str) -> None:
        logger.error(f"Invalid role table: {message}")
        raise InvalidRoleTableError(message)

    # ══════════════════════════════════════════════════════════
    # QUERIES
    # ══════════════════════════════════════════════════════════

    def definition(self, role: Role) -> RoleDefinition:
        if not isinstance(role, Role):
            raise TypeError(f"Expected Role, got {type(role).__name__}.")
        return self._table[role]

    def level(self, role: Role) -> int:
        return self.definition(role).level

    def capabilities(self, role: Role) -> FrozenSet[Capability]:
        return self.definition(role).capabilities

    def has_capability(self, role: Role, capability) -> bool:
        """
        Static lookup. Unknown capability keys raise
        UnknownCapabilityError instead of answering False.
        """
        key = resolve_capability(capability, role.value)
        return key in self.definition(role).capabilities

    def is_global(self, role: Role) -> bool:
        return self.definition(role).is_global

    def is_cross_tenant(self, role: Role) -> bool:
        return self.definition(role).cross_tenant

    @property
    def top_role(self) -> Role:
        return self._top_role

    def is_top(self, role: Role) -> bool:
        return role == self._top_role

    # ══════════════════════════════════════════════════════════
    # SENIORITY
    # ══════════════════════════════════════════════════════════

    def outranks(self, actor_role: Role, target_role: Role) -> bool:
        """Strict seniority. A role never outranks itself."""
        return self.level(actor_role) > self.level(target_role)

    def can_assign(self, actor_role: Role, target_role: Role) -> bool:
        return (
            self.outranks(actor_role, target_role)
            and not self.is_top(target_role)
        )

    def assignable_roles(self, actor_role: Role) -> Tuple[Role, ...]:
        """Roles the actor may hand out, most senior first."""
        candidates = [r for r in self._table if self.can_assign(actor_role, r)]
        return tuple(sorted(candidates, key=self.level, reverse=True))

    def roles(self) -> Tuple[Role, ...]:
        """All roles, most senior first."""
        return tuple(sorted(self._table, key=self.level, reverse=True))

    def to_dict(self) -> dict:
        return {
            "roles": [self._table[r].to_dict() for r in self.roles()],
        }
