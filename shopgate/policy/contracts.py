"""
ShopGate Policy — Resource Policy Contract
============================================
Base class for every per-resource-type ability set (the evaluator
the registry dispatches to).

Every resource policy must:
- Be pure (no side effects, no storage access)
- Be deterministic (same snapshots → same Decision)
- Declare its resource_type and ResourceShape
- Declare its abilities through declare_abilities()

Contract validation enforced at class creation time:
- resource_type: non-empty string
- shape: ResourceShape instance
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from shopgate.exceptions import (
    MissingContextError,
    ResourceTypeMismatchError,
    UnknownAbilityError,
)
from shopgate.policy.ability import Ability, Side, Target
from shopgate.policy.evaluation import Evaluation, PolicyEnvironment
from shopgate.policy.predicates import scope_overlaps
from shopgate.policy.result import Decision, ReasonCode
from shopgate.primitives.resource import Resource, ResourceShape

logger = logging.getLogger("shopgate.policy")

_SCOPE = scope_overlaps()


class ResourcePolicy(ABC):
    """
    Abstract base for ShopGate resource policies.

    Subclasses must:
    - Set resource_type (e.g. 'wage_advance')
    - Set shape (ResourceShape of the snapshots it accepts)
    - Implement declare_abilities()

    Contract is validated at class creation time (__init_subclass__).
    """

    resource_type: str = ""
    shape: ResourceShape = ResourceShape()
    description: str = ""

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)

        # Skip validation for intermediate abstract classes. ABCMeta
        # sets __abstractmethods__ only after this hook runs.
        if getattr(cls.declare_abilities, "__isabstractmethod__", False):
            return

        if not cls.resource_type or not isinstance(cls.resource_type, str):
            raise TypeError(
                f"Policy class {cls.__name__} must declare "
                f"resource_type as non-empty string."
            )

        if not isinstance(cls.shape, ResourceShape):
            raise TypeError(
                f"Policy class {cls.__name__} must declare "
                f"shape as ResourceShape."
            )

    def __init__(self):
        abilities: Dict[str, Ability] = {}
        for ability in self.declare_abilities():
            if not isinstance(ability, Ability):
                raise TypeError(
                    f"{type(self).__name__}.declare_abilities() must yield "
                    f"Ability, got {type(ability).__name__}."
                )
            if ability.name in abilities:
                raise ValueError(
                    f"{type(self).__name__}: ability '{ability.name}' "
                    f"declared twice."
                )
            abilities[ability.name] = ability
        if not abilities:
            raise ValueError(f"{type(self).__name__} declares no abilities.")
        self._abilities = abilities

    @abstractmethod
    def declare_abilities(self) -> Iterable[Ability]:
        """Return every ability of this resource type."""
        ...

    # ══════════════════════════════════════════════════════════
    # INTROSPECTION
    # ══════════════════════════════════════════════════════════

    def ability(self, name: str) -> Ability:
        ability = self._abilities.get(name)
        if ability is None:
            raise UnknownAbilityError(self.resource_type, name)
        return ability

    def has_ability(self, name: str) -> bool:
        return name in self._abilities

    def ability_names(self) -> Tuple[str, ...]:
        return tuple(sorted(self._abilities))

    def abilities(self) -> Tuple[Ability, ...]:
        return tuple(self._abilities[n] for n in self.ability_names())

    # ══════════════════════════════════════════════════════════
    # EVALUATION
    # ══════════════════════════════════════════════════════════

    def evaluate(
        self,
        env: PolicyEnvironment,
        ability_name: str,
        actor: Any,
        resource: Optional[Resource] = None,
        context: Optional[Mapping[str, Any]] = None,
    ) -> Decision:
        """
        Run the ordered composition of one ability.

        Denials are returned. Integration bugs (unknown ability, wrong
        snapshot type, missing field or context) raise.
        """
        ability = self.ability(ability_name)
        normalized = ability.normalize_context(context, self.resource_type)

        target, lifecycle_type = self._resolve_target(
            ability, resource, normalized
        )

        ev = Evaluation(
            env=env,
            actor=actor,
            resource_type=self.resource_type,
            ability=ability.name,
            resource=target,
            lifecycle_type=lifecycle_type,
            context=normalized,
        )

        # ── 1. Checks preceding any resource-level step ──────
        for rule in ability.requires:
            if not rule.check(ev):
                return self._deny(ev, rule.reason)

        if target is None:
            # Collection level, or an OPTIONAL target not supplied.
            if not ability.role(ev):
                return self._deny(ev, ReasonCode.ROLE_INSUFFICIENT)
            return Decision.allow(ability.name, self.resource_type)

        # ── 2. Tenant match / bilateral side ─────────────────
        role_check = ability.role
        side = None
        if ability.bilateral:
            side = self._side_of(ev)
            if side is None:
                return self._deny(ev, ReasonCode.TENANT_MISMATCH)
            if side not in ability.sides:
                # A party to the resource, but not the one that acts.
                return self._deny(ev, ReasonCode.ROLE_INSUFFICIENT)
            role_check = ability.sides[side]
        elif actor.tenant_id != target.tenant_id:
            crossing = (
                ability.cross_tenant
                and ev.staff is not None
                and env.hierarchy.is_cross_tenant(ev.staff.role)
            )
            if not crossing:
                return self._deny(ev, ReasonCode.TENANT_MISMATCH)

        # ── 3. Ownership shortcut ────────────────────────────
        shortcut = ability.self_service is not None and ability.self_service(ev)

        if not shortcut:
            # ── 4. Exclusion rules ───────────────────────────
            for rule in ability.rules:
                if not rule.check(ev):
                    return self._deny(ev, rule.reason)

            # ── 5. Role / capability / seniority ─────────────
            if not role_check(ev):
                return self._deny(ev, ReasonCode.ROLE_INSUFFICIENT)

            # ── 6. Shop scope (buyer-side shops only) ────────
            if (
                ability.scoped
                and side != Side.SUPPLIER
                and not self._in_scope(ev)
            ):
                return self._deny(ev, ReasonCode.SCOPE_MISMATCH)

        # ── 7. Lifecycle ─────────────────────────────────────
        if ability.transition is not None and not self._lifecycle_allows(
            ev, ability.transition
        ):
            return self._deny(ev, ReasonCode.LIFECYCLE_BLOCKED)

        return Decision.allow(ability.name, self.resource_type)

    # ── Steps ────────────────────────────────────────────────

    def _resolve_target(
        self,
        ability: Ability,
        resource: Optional[Resource],
        context: Dict[str, Any],
    ) -> Tuple[Optional[Resource], str]:
        if ability.subject is not None:
            return context[ability.subject], ability.subject_type

        if ability.target == Target.NONE:
            return None, self.resource_type

        if resource is None:
            if ability.target == Target.REQUIRED:
                raise MissingContextError(
                    self.resource_type, ability.name, "resource",
                    "This ability needs a resource instance.",
                )
            return None, self.resource_type

        if not isinstance(resource, Resource):
            raise TypeError(
                f"resource must be Resource, got {type(resource).__name__}."
            )
        if resource.resource_type != self.resource_type:
            raise ResourceTypeMismatchError(
                self.resource_type, resource.resource_type
            )
        self.shape.validate(resource, ability.name)
        return resource, self.resource_type

    @staticmethod
    def _side_of(ev: Evaluation) -> Optional[str]:
        resource = ev.resource
        if ev.actor.tenant_id == resource.tenant_id:
            return Side.BUYER
        if (
            resource.counterparty_tenant_id is not None
            and ev.actor.tenant_id == resource.counterparty_tenant_id
        ):
            return Side.SUPPLIER
        return None

    @staticmethod
    def _in_scope(ev: Evaluation) -> bool:
        return _SCOPE(ev)

    @staticmethod
    def _lifecycle_allows(ev: Evaluation, transition: str) -> bool:
        status = ev.resource.require("status", ev.ability)
        table = ev.gate.table(ev.lifecycle_type)
        if transition not in table.reachable(status):
            return False
        if table.is_override(status, transition):
            return ev.staff is not None and ev.hierarchy.is_top(ev.staff.role)
        return True

    def _deny(self, ev: Evaluation, reason: str) -> Decision:
        logger.debug(
            f"Denied {self.resource_type}.{ev.ability} for actor "
            f"{ev.actor.id}: {reason}"
        )
        return Decision.deny(reason, ev.ability, self.resource_type)

    def to_dict(self) -> dict:
        return {
            "resource_type": self.resource_type,
            "description": self.description,
            "abilities": [a.to_dict() for a in self.abilities()],
        }
