"""
ShopGate Policy — Ability Evaluation Engine
=============================================
Resource-agnostic authorization: every resource type declares named
abilities as ordered compositions of tenant, ownership, role, scope
and lifecycle checks; the registry dispatches to them.

Policy is evaluation, not execution.
Denials are values. Configuration errors are raised.
"""

from shopgate.exceptions import (
    DuplicateResourcePolicyError,
    InvalidPolicyConfigError,
    InvalidRoleTableError,
    InvalidTransitionTableError,
    MissingContextError,
    MissingResourceFieldError,
    PolicyConfigurationError,
    RegistryLockedError,
    ResourceTypeMismatchError,
    UnknownAbilityError,
    UnknownCapabilityError,
    UnknownStatusError,
    UnregisteredResourceTypeError,
)
from shopgate.policy.ability import (
    Ability,
    ContextField,
    ContextKind,
    Rule,
    Side,
    Target,
    context_flag_field,
    context_resource,
    context_role,
)
from shopgate.policy.contracts import ResourcePolicy
from shopgate.policy.evaluation import Evaluation, PolicyEnvironment
from shopgate.policy.registry import PolicyRegistry
from shopgate.policy.result import Decision, ReasonCode

__all__ = [
    # ── Contract ──────────────────────────────────────────────
    "Ability",
    "ContextField",
    "ContextKind",
    "ResourcePolicy",
    "Rule",
    "Side",
    "Target",
    "context_flag_field",
    "context_resource",
    "context_role",
    # ── Evaluation ────────────────────────────────────────────
    "Evaluation",
    "PolicyEnvironment",
    # ── Registry ──────────────────────────────────────────────
    "PolicyRegistry",
    # ── Results ───────────────────────────────────────────────
    "Decision",
    "ReasonCode",
    # ── Exceptions ────────────────────────────────────────────
    "PolicyConfigurationError",
    "DuplicateResourcePolicyError",
    "InvalidPolicyConfigError",
    "InvalidRoleTableError",
    "InvalidTransitionTableError",
    "MissingContextError",
    "MissingResourceFieldError",
    "RegistryLockedError",
    "ResourceTypeMismatchError",
    "UnknownAbilityError",
    "UnknownCapabilityError",
    "UnknownStatusError",
    "UnregisteredResourceTypeError",
]
