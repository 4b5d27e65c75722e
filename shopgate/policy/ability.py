"""
ShopGate Policy — Ability Declarations
========================================
An Ability is a declarative, ordered composition of predicates.
Resource policies declare abilities; ResourcePolicy.evaluate runs
them step by step:

    1. requires      — checks that precede any resource-level step
                       (e.g. can_assign for role assignment)
    2. tenant / side — tenant match, or the buyer/supplier branch of a
                       bilateral resource; cross-tenant abilities admit
                       cross-tenant roles only
    3. self_service  — ownership shortcut: when it holds, steps 4-6
                       are skipped (lifecycle still applies)
    4. rules         — explicit exclusions with their own reason codes
    5. role          — capability / seniority check
    6. scope         — shop overlap, skipped for global roles
    7. lifecycle     — transition reachable from the current status;
                       override transitions need the top role

Target modes:
    NONE      — collection-level ability, no resource instance
    REQUIRED  — needs a resource instance
    OPTIONAL  — resource-level steps run only when one is supplied;
                the role predicate must then be actor-only
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from shopgate.exceptions import MissingContextError
from shopgate.policy.predicates import ALWAYS, Predicate
from shopgate.policy.result import ReasonCode
from shopgate.primitives.resource import Resource
from shopgate.roles.models import Role


# ══════════════════════════════════════════════════════════════
# CONSTANTS
# ══════════════════════════════════════════════════════════════

class Target:
    """Whether an ability acts on a resource instance."""
    NONE = "none"
    REQUIRED = "required"
    OPTIONAL = "optional"

    ALL = frozenset({"none", "required", "optional"})


class Side:
    """Party of a bilateral resource the actor's tenant plays."""
    BUYER = "buyer"
    SUPPLIER = "supplier"

    ALL = frozenset({"buyer", "supplier"})


class ContextKind:
    RESOURCE = "resource"
    ROLE = "role"
    FLAG = "flag"

    ALL = frozenset({"resource", "role", "flag"})


# ══════════════════════════════════════════════════════════════
# BUILDING BLOCKS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Rule:
    """A check that must hold, with the reason code used when it does not."""
    check: Predicate
    reason: str

    def __post_init__(self):
        if not isinstance(self.check, Predicate):
            raise TypeError("check must be Predicate.")
        if self.reason not in ReasonCode.ALL:
            raise ValueError(
                f"reason '{self.reason}' not valid. "
                f"Must be one of: {sorted(ReasonCode.ALL)}"
            )


@dataclass(frozen=True)
class ContextField:
    """
    A secondary input an ability needs besides the resource.

    Fields:
        name:           Context key
        kind:           RESOURCE | ROLE | FLAG
        resource_type:  Expected type for RESOURCE fields
    """
    name: str
    kind: str
    resource_type: Optional[str] = None

    def __post_init__(self):
        if not self.name or not isinstance(self.name, str):
            raise ValueError("name must be a non-empty string.")
        if self.kind not in ContextKind.ALL:
            raise ValueError(
                f"kind '{self.kind}' not valid. "
                f"Must be one of: {sorted(ContextKind.ALL)}"
            )
        if self.kind == ContextKind.RESOURCE and not self.resource_type:
            raise ValueError("RESOURCE context fields need a resource_type.")

    def normalize(self, value: Any, resource_type: str, ability: str) -> Any:
        """Validate and coerce a supplied value. Bad values raise."""
        if self.kind == ContextKind.RESOURCE:
            if not isinstance(value, Resource):
                raise MissingContextError(
                    resource_type, ability, self.name,
                    f"Expected a '{self.resource_type}' Resource.",
                )
            if value.resource_type != self.resource_type:
                raise MissingContextError(
                    resource_type, ability, self.name,
                    f"Expected a '{self.resource_type}' Resource, "
                    f"got '{value.resource_type}'.",
                )
            return value

        if self.kind == ContextKind.ROLE:
            if isinstance(value, Role):
                return value
            try:
                return Role(value)
            except ValueError:
                raise MissingContextError(
                    resource_type, ability, self.name,
                    f"'{value}' is not a known role.",
                ) from None

        if not isinstance(value, bool):
            raise MissingContextError(
                resource_type, ability, self.name, "Expected a boolean flag."
            )
        return value


def context_resource(name: str, resource_type: Optional[str] = None) -> ContextField:
    return ContextField(name, ContextKind.RESOURCE, resource_type or name)


def context_role(name: str = "role") -> ContextField:
    return ContextField(name, ContextKind.ROLE)


def context_flag_field(name: str) -> ContextField:
    return ContextField(name, ContextKind.FLAG)


# ══════════════════════════════════════════════════════════════
# ABILITY
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Ability:
    """
    Fields:
        name:           Ability name (e.g. 'approve', 'view_any')
        role:           Role / capability / seniority predicate
        target:         NONE | REQUIRED | OPTIONAL
        requires:       Rules evaluated before any resource-level step
        self_service:   Ownership shortcut predicate
        rules:          Exclusion rules (reason code per rule)
        scoped:         Apply the shop-scope step
        transition:     Abstract lifecycle transition this ability performs
        cross_tenant:   Cross-tenant roles may act across tenants
        sides:          Bilateral resources: {Side → role predicate}
        subject:        Context key whose resource replaces the target
                        (e.g. creating a payment FOR an order)
        context:        Context fields the ability needs
        description:    Short human description (UI / docs)
    """
    name: str
    role: Predicate = ALWAYS
    target: str = Target.REQUIRED
    requires: Tuple[Rule, ...] = ()
    self_service: Optional[Predicate] = None
    rules: Tuple[Rule, ...] = ()
    scoped: bool = False
    transition: Optional[str] = None
    cross_tenant: bool = False
    sides: Mapping[str, Predicate] = field(default_factory=dict, hash=False)
    subject: Optional[str] = None
    context: Tuple[ContextField, ...] = ()
    description: str = ""

    def __post_init__(self):
        if not self.name or not isinstance(self.name, str):
            raise ValueError("Ability name must be a non-empty string.")
        if not isinstance(self.role, Predicate):
            raise TypeError(f"Ability '{self.name}': role must be Predicate.")
        if self.target not in Target.ALL:
            raise ValueError(
                f"Ability '{self.name}': target '{self.target}' not valid. "
                f"Must be one of: {sorted(Target.ALL)}"
            )
        if self.self_service is not None and not isinstance(
            self.self_service, Predicate
        ):
            raise TypeError(
                f"Ability '{self.name}': self_service must be Predicate."
            )

        object.__setattr__(self, "requires", tuple(self.requires))
        object.__setattr__(self, "rules", tuple(self.rules))
        object.__setattr__(self, "context", tuple(self.context))
        object.__setattr__(
            self, "sides", MappingProxyType(dict(self.sides or {}))
        )

        for rule in self.requires + self.rules:
            if not isinstance(rule, Rule):
                raise TypeError(
                    f"Ability '{self.name}': requires/rules take Rule objects."
                )

        for side, predicate in self.sides.items():
            if side not in Side.ALL:
                raise ValueError(
                    f"Ability '{self.name}': unknown side '{side}'."
                )
            if not isinstance(predicate, Predicate):
                raise TypeError(
                    f"Ability '{self.name}': side '{side}' needs a Predicate."
                )
        if self.sides and self.cross_tenant:
            raise ValueError(
                f"Ability '{self.name}': bilateral abilities cannot be "
                f"cross-tenant."
            )

        names = [f.name for f in self.context]
        if len(names) != len(set(names)):
            raise ValueError(
                f"Ability '{self.name}': duplicate context fields {names}."
            )

        if self.subject is not None:
            if self.subject_field is None:
                raise ValueError(
                    f"Ability '{self.name}': subject '{self.subject}' must be "
                    f"declared as a RESOURCE context field."
                )
            if self.target != Target.NONE:
                raise ValueError(
                    f"Ability '{self.name}': subject abilities act on the "
                    f"subject, so target must be NONE."
                )

        if self.target == Target.NONE and self.subject is None:
            if self.scoped or self.transition or self.self_service or self.rules:
                raise ValueError(
                    f"Ability '{self.name}': collection-level abilities "
                    f"cannot use resource-level steps."
                )

    # ── Introspection ────────────────────────────────────────

    @property
    def subject_field(self) -> Optional[ContextField]:
        for f in self.context:
            if f.name == self.subject and f.kind == ContextKind.RESOURCE:
                return f
        return None

    @property
    def subject_type(self) -> Optional[str]:
        f = self.subject_field
        return f.resource_type if f else None

    @property
    def acts_on_resource(self) -> bool:
        return self.target != Target.NONE or self.subject is not None

    @property
    def bilateral(self) -> bool:
        return bool(self.sides)

    def missing_inputs(
        self,
        resource: Optional[Resource],
        context: Optional[Mapping[str, Any]],
    ) -> Tuple[str, ...]:
        """Inputs the caller has not supplied ('resource' or context keys)."""
        missing = []
        if self.target == Target.REQUIRED and resource is None:
            missing.append("resource")
        supplied = context or {}
        for f in self.context:
            if f.name not in supplied:
                missing.append(f.name)
        return tuple(missing)

    def normalize_context(
        self,
        context: Optional[Mapping[str, Any]],
        resource_type: str,
    ) -> Dict[str, Any]:
        supplied = dict(context or {})
        for f in self.context:
            if f.name not in supplied:
                raise MissingContextError(resource_type, self.name, f.name)
            supplied[f.name] = f.normalize(
                supplied[f.name], resource_type, self.name
            )
        return supplied

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "target": self.target,
            "transition": self.transition,
            "scoped": self.scoped,
            "cross_tenant": self.cross_tenant,
            "sides": sorted(self.sides),
            "subject": self.subject,
            "context": [f.name for f in self.context],
            "description": self.description,
        }
