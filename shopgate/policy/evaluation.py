"""
ShopGate Policy — Evaluation Context
======================================
PolicyEnvironment bundles the three static primitives (role table,
scope resolver, lifecycle gate). Evaluation is the per-call view a
predicate reads: the environment plus the actor, the resolved target
resource and the normalized context.

Both are immutable. Nothing here reads ambient state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from shopgate.exceptions import MissingContextError
from shopgate.lifecycle.gate import LifecycleGate
from shopgate.primitives.actor import CustomerActor, StaffActor
from shopgate.primitives.resource import Resource
from shopgate.roles.hierarchy import RoleHierarchy
from shopgate.scope.resolver import ScopeResolver


@dataclass(frozen=True)
class PolicyEnvironment:
    hierarchy: RoleHierarchy
    scope: ScopeResolver
    gate: LifecycleGate

    def __post_init__(self):
        if not isinstance(self.hierarchy, RoleHierarchy):
            raise TypeError("hierarchy must be RoleHierarchy.")
        if not isinstance(self.scope, ScopeResolver):
            raise TypeError("scope must be ScopeResolver.")
        if not isinstance(self.gate, LifecycleGate):
            raise TypeError("gate must be LifecycleGate.")


@dataclass(frozen=True)
class Evaluation:
    """
    Fields:
        env:             Static primitives
        actor:           StaffActor or CustomerActor
        resource_type:   Registered type the ability belongs to
        ability:         Ability name being evaluated
        resource:        Target snapshot (the subject for subject abilities)
        lifecycle_type:  Type whose transition table gates the target
        context:         Normalized secondary inputs keyed by name
    """
    env: PolicyEnvironment
    actor: Any
    resource_type: str
    ability: str
    resource: Optional[Resource] = None
    lifecycle_type: str = ""
    context: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not isinstance(self.actor, (StaffActor, CustomerActor)):
            raise TypeError(
                f"actor must be StaffActor or CustomerActor, "
                f"got {type(self.actor).__name__}."
            )
        if self.resource is not None and not isinstance(self.resource, Resource):
            raise TypeError(
                f"resource must be Resource, got {type(self.resource).__name__}."
            )
        if not self.lifecycle_type:
            object.__setattr__(self, "lifecycle_type", self.resource_type)

    # ── Convenience accessors for predicates ─────────────────

    @property
    def hierarchy(self) -> RoleHierarchy:
        return self.env.hierarchy

    @property
    def scope(self) -> ScopeResolver:
        return self.env.scope

    @property
    def gate(self) -> LifecycleGate:
        return self.env.gate

    @property
    def staff(self) -> Optional[StaffActor]:
        """The actor if it is staff, else None."""
        return self.actor if isinstance(self.actor, StaffActor) else None

    def require_resource(self) -> Resource:
        if self.resource is None:
            raise MissingContextError(
                self.resource_type, self.ability, "resource",
                "This check needs a resource instance.",
            )
        return self.resource

    def value(self, key: str) -> Any:
        if key not in self.context:
            raise MissingContextError(self.resource_type, self.ability, key)
        return self.context[key]
