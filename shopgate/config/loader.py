"""
ShopGate Config — Deployment Overrides
========================================
Deployments adjust the shipped role and lifecycle tables without
touching source code.

Document format (JSON or an equivalent mapping):

    {
      "roles": {
        "store_manager": {
          "level": 65,
          "add_capabilities": ["approve_payroll"],
          "remove_capabilities": ["disburse_funds"]
        },
        "assistant_manager": {"capabilities": ["view_products"]}
      },
      "lifecycle": [
        {"resource_type": "fund_request", "statuses": [...], ...}
      ]
    }

Role entries change level, the whole capability set, or add/remove
individual capabilities, plus the is_global flag. Lifecycle entries
replace whole tables of known resource types.

Roles stay the closed enum: unknown role names, capability keys or
statuses are startup errors. Nothing here falls back to defaults on
bad input.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, FrozenSet, Iterable, Mapping, Optional, Tuple, Union

from shopgate.exceptions import InvalidPolicyConfigError
from shopgate.lifecycle import (
    DEFAULT_TRANSITION_TABLES,
    LifecycleGate,
    StatusTransitionTable,
)
from shopgate.roles import (
    DEFAULT_ROLE_TABLE,
    Capability,
    Role,
    RoleDefinition,
    RoleHierarchy,
    resolve_capabilities,
)

logger = logging.getLogger("shopgate.config")

_TOP_LEVEL_KEYS = frozenset({"roles", "lifecycle"})
_ROLE_KEYS = frozenset({
    "level",
    "capabilities",
    "add_capabilities",
    "remove_capabilities",
    "is_global",
})


# ══════════════════════════════════════════════════════════════
# ROLE OVERRIDE
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class RoleOverride:
    """
    Changes to one role's shipped definition.

    Fields:
        role:                 Role being changed
        level:                New level (None keeps the shipped one)
        capabilities:         Whole replacement set (None keeps shipped)
        add_capabilities:     Added after any replacement
        remove_capabilities:  Removed after any replacement
        is_global:            New global flag (None keeps shipped)
    """
    role: Role
    level: Optional[int] = None
    capabilities: Optional[FrozenSet[Capability]] = None
    add_capabilities: FrozenSet[Capability] = frozenset()
    remove_capabilities: FrozenSet[Capability] = frozenset()
    is_global: Optional[bool] = None

    def __post_init__(self):
        if not isinstance(self.role, Role):
            raise ValueError("role must be Role enum.")
        if self.level is not None and (
            isinstance(self.level, bool) or not isinstance(self.level, int)
        ):
            raise ValueError("level must be an integer.")
        if self.is_global is not None and not isinstance(self.is_global, bool):
            raise ValueError("is_global must be a boolean.")

        owner = self.role.value
        if self.capabilities is not None:
            object.__setattr__(
                self,
                "capabilities",
                resolve_capabilities(self.capabilities, owner),
            )
        object.__setattr__(
            self,
            "add_capabilities",
            resolve_capabilities(self.add_capabilities, owner),
        )
        object.__setattr__(
            self,
            "remove_capabilities",
            resolve_capabilities(self.remove_capabilities, owner),
        )

    def apply(self, definition: RoleDefinition) -> RoleDefinition:
        capabilities = (
            definition.capabilities
            if self.capabilities is None
            else self.capabilities
        )
        capabilities = (capabilities | self.add_capabilities) - self.remove_capabilities
        return replace(
            definition,
            level=definition.level if self.level is None else self.level,
            capabilities=capabilities,
            is_global=(
                definition.is_global if self.is_global is None else self.is_global
            ),
        )


# ══════════════════════════════════════════════════════════════
# POLICY CONFIG
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class PolicyConfig:
    """
    A parsed override document.

    Usage:
        config = load_policy_config_file("/etc/shopgate/policy.json")
        hierarchy = config.build_hierarchy()
        gate = config.build_gate()
    """
    roles: Tuple[RoleOverride, ...] = ()
    tables: Tuple[StatusTransitionTable, ...] = ()
    source: str = ""

    def __post_init__(self):
        object.__setattr__(self, "roles", tuple(self.roles))
        object.__setattr__(self, "tables", tuple(self.tables))
        seen = [o.role for o in self.roles]
        if len(seen) != len(set(seen)):
            raise InvalidPolicyConfigError("a role is overridden twice.", self.source)
        types = [t.resource_type for t in self.tables]
        if len(types) != len(set(types)):
            raise InvalidPolicyConfigError(
                "a lifecycle table is given twice.", self.source
            )

    @property
    def is_empty(self) -> bool:
        return not self.roles and not self.tables

    def role_definitions(
        self,
        base: Iterable[RoleDefinition] = DEFAULT_ROLE_TABLE,
    ) -> Tuple[RoleDefinition, ...]:
        overrides = {o.role: o for o in self.roles}
        result = []
        for definition in base:
            override = overrides.get(definition.role)
            result.append(override.apply(definition) if override else definition)
        return tuple(result)

    def build_hierarchy(
        self,
        base: Iterable[RoleDefinition] = DEFAULT_ROLE_TABLE,
    ) -> RoleHierarchy:
        """Shipped table with overrides applied. Structural rules re-checked."""
        return RoleHierarchy(self.role_definitions(base))

    def build_gate(
        self,
        base: Iterable[StatusTransitionTable] = DEFAULT_TRANSITION_TABLES,
    ) -> LifecycleGate:
        gate = LifecycleGate(base)
        if not self.tables:
            return gate
        return gate.replace(self.tables)


# ══════════════════════════════════════════════════════════════
# LOADING
# ══════════════════════════════════════════════════════════════

def load_policy_config(
    data: Optional[Mapping[str, Any]],
    source: str = "",
) -> PolicyConfig:
    """
    Parse an override mapping. An empty or None mapping yields an
    empty PolicyConfig (shipped defaults).
    """
    if data is None:
        return PolicyConfig(source=source)
    if not isinstance(data, Mapping):
        _fail("document must be an object.", source)

    unknown = set(data) - _TOP_LEVEL_KEYS
    if unknown:
        _fail(f"unknown keys {sorted(unknown)}.", source)

    roles = _parse_roles(data.get("roles") or {}, source)
    tables = _parse_tables(data.get("lifecycle") or [], source)
    config = PolicyConfig(roles=roles, tables=tables, source=source)

    logger.info(
        f"Policy config loaded{' from ' + source if source else ''}: "
        f"{len(roles)} role overrides, {len(tables)} lifecycle tables"
    )
    return config


def load_policy_config_file(path: Union[str, Path]) -> PolicyConfig:
    """Read a JSON override document. A missing file raises OSError."""
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except ValueError as exc:
        logger.error(f"Policy config {path} is not valid JSON: {exc}")
        raise InvalidPolicyConfigError(
            f"not valid JSON: {exc}", str(path)
        ) from exc
    return load_policy_config(data, source=str(path))


def _parse_roles(entries: Any, source: str) -> Tuple[RoleOverride, ...]:
    if not isinstance(entries, Mapping):
        _fail("'roles' must be an object keyed by role name.", source)

    overrides = []
    for name, entry in entries.items():
        try:
            role = Role(name)
        except ValueError:
            _fail(f"unknown role '{name}'.", source)
        if not isinstance(entry, Mapping):
            _fail(f"role '{name}' must map to an object.", source)
        unknown = set(entry) - _ROLE_KEYS
        if unknown:
            _fail(f"role '{name}' has unknown keys {sorted(unknown)}.", source)
        try:
            overrides.append(
                RoleOverride(
                    role=role,
                    level=entry.get("level"),
                    capabilities=entry.get("capabilities"),
                    add_capabilities=entry.get("add_capabilities", ()),
                    remove_capabilities=entry.get("remove_capabilities", ()),
                    is_global=entry.get("is_global"),
                )
            )
        except (TypeError, ValueError) as exc:
            _fail(f"role '{name}': {exc}", source)
    return tuple(overrides)


def _parse_tables(entries: Any, source: str) -> Tuple[StatusTransitionTable, ...]:
    if not isinstance(entries, list):
        _fail("'lifecycle' must be a list of tables.", source)

    tables = []
    for entry in entries:
        if not isinstance(entry, Mapping):
            _fail("each lifecycle table must be an object.", source)
        try:
            tables.append(StatusTransitionTable.from_dict(dict(entry)))
        except KeyError as exc:
            _fail(f"lifecycle table is missing {exc}.", source)
        except (TypeError, ValueError) as exc:
            _fail(f"lifecycle table is malformed: {exc}", source)
    return tuple(tables)


def _fail(detail: str, source: str) -> None:
    logger.error(f"Policy config rejected: {detail}")
    raise InvalidPolicyConfigError(detail, source)


def dump_policy_config(
    hierarchy: RoleHierarchy,
    gate: LifecycleGate,
) -> Dict[str, Any]:
    """Full effective tables, in the document format load_policy_config reads."""
    return {
        "roles": {
            d["role"]: {
                "level": d["level"],
                "capabilities": d["capabilities"],
                "is_global": d["is_global"],
            }
            for d in hierarchy.to_dict()["roles"]
        },
        "lifecycle": [
            gate.table(t).to_dict() for t in gate.resource_types()
        ],
    }
