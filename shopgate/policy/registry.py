"""
ShopGate Policy — Policy Registry
===================================
Central dispatch from (resource_type, ability) to the resource
policy that evaluates it. The single entry point for callers.

Responsibilities:
- Register one ResourcePolicy per resource type
- Cross-check abilities against the lifecycle tables at registration
- Lock after bootstrap
- can() / allows() / ability_map() for backend and UI
- transition_guard() for the caller's compare-and-swap commit

Evaluation is synchronous and side-effect free; any number of
threads may call can() concurrently. The lock only protects the
registration map.
"""

from __future__ import annotations

import logging
from threading import Lock
from typing import Any, Dict, Mapping, Optional, Tuple

from shopgate.exceptions import (
    DuplicateResourcePolicyError,
    InvalidTransitionTableError,
    PolicyConfigurationError,
    RegistryLockedError,
    UnregisteredResourceTypeError,
)
from shopgate.lifecycle import LifecycleGate, TransitionGuard, default_lifecycle_gate
from shopgate.policy.contracts import ResourcePolicy
from shopgate.policy.evaluation import PolicyEnvironment
from shopgate.policy.result import Decision
from shopgate.primitives.resource import Resource
from shopgate.roles import RoleHierarchy, default_role_hierarchy
from shopgate.scope import ScopeResolver

logger = logging.getLogger("shopgate.policy")


class PolicyRegistry:
    """
    Central registry of resource policies.

    Thread-safe. Lock-after-bootstrap.

    Usage:
        registry = PolicyRegistry(hierarchy, gate)
        registry.register(WageAdvancePolicy())
        registry.lock()

        decision = registry.can(actor, "cancel", "wage_advance", advance)
        if not decision:
            return forbidden(decision.reason_code)
    """

    def __init__(
        self,
        hierarchy: Optional[RoleHierarchy] = None,
        gate: Optional[LifecycleGate] = None,
        scope: Optional[ScopeResolver] = None,
    ):
        self._env = PolicyEnvironment(
            hierarchy=hierarchy or default_role_hierarchy(),
            scope=scope or ScopeResolver(),
            gate=gate or default_lifecycle_gate(),
        )
        self._policies: Dict[str, ResourcePolicy] = {}
        self._locked: bool = False
        self._lock = Lock()

    # ══════════════════════════════════════════════════════════
    # REGISTRATION
    # ══════════════════════════════════════════════════════════

    def register(self, policy: ResourcePolicy) -> None:
        """
        Register a resource policy instance.

        Validates:
        - Registry not locked
        - One policy per resource type
        - Status-bearing shapes have a lifecycle table
        - Every ability transition exists in its table
        """
        if not isinstance(policy, ResourcePolicy):
            raise TypeError(
                f"Expected ResourcePolicy instance, got {type(policy).__name__}."
            )

        with self._lock:
            if self._locked:
                raise RegistryLockedError()

            if policy.resource_type in self._policies:
                raise DuplicateResourcePolicyError(policy.resource_type)

            self._check_tables(policy)
            self._policies[policy.resource_type] = policy

            logger.info(
                f"Policy registered: {policy.resource_type} "
                f"abilities={list(policy.ability_names())}"
            )

    def _check_tables(self, policy: ResourcePolicy) -> None:
        gate = self._env.gate
        if policy.shape.has_status and not gate.has_table(policy.resource_type):
            self._fail(
                policy.resource_type,
                "shape carries a status but no transition table exists.",
            )

        for ability in policy.abilities():
            if ability.transition is None:
                continue
            lifecycle_type = ability.subject_type or policy.resource_type
            if not gate.has_table(lifecycle_type):
                self._fail(
                    lifecycle_type,
                    f"ability '{policy.resource_type}.{ability.name}' "
                    f"uses transition '{ability.transition}' but the type "
                    f"has no table.",
                )
            vocabulary = gate.table(lifecycle_type).vocabulary()
            if ability.transition not in vocabulary:
                self._fail(
                    lifecycle_type,
                    f"ability '{policy.resource_type}.{ability.name}' uses "
                    f"unknown transition '{ability.transition}'.",
                )

    @staticmethod
    def _fail(resource_type: str, detail: str) -> None:
        logger.error(f"Policy table check failed for '{resource_type}': {detail}")
        raise InvalidTransitionTableError(resource_type, detail)

    # ══════════════════════════════════════════════════════════
    # LOCK
    # ══════════════════════════════════════════════════════════

    def lock(self) -> None:
        """
        Lock the registry. Subject types referenced by any ability
        must be registered by now.
        """
        with self._lock:
            if self._locked:
                return
            for policy in self._policies.values():
                for ability in policy.abilities():
                    subject_type = ability.subject_type
                    if subject_type and subject_type not in self._policies:
                        logger.error(
                            f"Ability '{policy.resource_type}.{ability.name}' "
                            f"refers to unregistered type '{subject_type}'."
                        )
                        raise UnregisteredResourceTypeError(subject_type)
            self._locked = True
            logger.info(
                f"Policy Registry LOCKED — {len(self._policies)} resource types"
            )

    @property
    def is_locked(self) -> bool:
        with self._lock:
            return self._locked

    # ══════════════════════════════════════════════════════════
    # EVALUATION
    # ══════════════════════════════════════════════════════════

    def can(
        self,
        actor: Any,
        ability: str,
        resource_type: str,
        resource: Optional[Resource] = None,
        context: Optional[Mapping[str, Any]] = None,
    ) -> Decision:
        """
        Evaluate one ability. Denials are returned as Decision values;
        configuration errors propagate.
        """
        policy = self.policy(resource_type)
        try:
            return policy.evaluate(self._env, ability, actor, resource, context)
        except PolicyConfigurationError as exc:
            logger.error(
                f"Configuration error evaluating {resource_type}.{ability}: {exc}"
            )
            raise

    def allows(
        self,
        actor: Any,
        ability: str,
        resource_type: str,
        resource: Optional[Resource] = None,
        context: Optional[Mapping[str, Any]] = None,
    ) -> bool:
        return self.can(actor, ability, resource_type, resource, context).allowed

    def ability_map(
        self,
        actor: Any,
        resource_type: str,
        resource: Optional[Resource] = None,
        context: Optional[Mapping[str, Any]] = None,
    ) -> Dict[str, bool]:
        """
        {ability: allowed} for UI show/hide. Abilities whose resource
        or context inputs were not supplied are omitted.
        """
        policy = self.policy(resource_type)
        result: Dict[str, bool] = {}
        for ability in policy.abilities():
            if ability.missing_inputs(resource, context):
                continue
            result[ability.name] = self.allows(
                actor, ability.name, resource_type, resource, context
            )
        return result

    def transition_guard(
        self,
        resource_type: str,
        observed_status: str,
        transition: str,
    ) -> TransitionGuard:
        """Compare-and-swap predicate for the caller's atomic commit."""
        return self._env.gate.guard(resource_type, observed_status, transition)

    # ══════════════════════════════════════════════════════════
    # QUERIES
    # ══════════════════════════════════════════════════════════

    def policy(self, resource_type: str) -> ResourcePolicy:
        with self._lock:
            policy = self._policies.get(resource_type)
        if policy is None:
            logger.error(f"No policy registered for '{resource_type}'.")
            raise UnregisteredResourceTypeError(resource_type)
        return policy

    def resource_types(self) -> Tuple[str, ...]:
        with self._lock:
            return tuple(sorted(self._policies))

    def abilities(self, resource_type: str) -> Tuple[str, ...]:
        return self.policy(resource_type).ability_names()

    @property
    def environment(self) -> PolicyEnvironment:
        return self._env

    @property
    def hierarchy(self) -> RoleHierarchy:
        return self._env.hierarchy

    @property
    def gate(self) -> LifecycleGate:
        return self._env.gate

    def policy_count(self) -> int:
        with self._lock:
            return len(self._policies)
