"""
ShopGate Policy — Predicates and Combinators
==============================================
Small, independently testable checks over an Evaluation, combined
with all_of / any_of / negate (or the &, |, ~ operators).

Every predicate is pure and returns a bool. A predicate that needs a
resource field the snapshot does not carry raises
MissingResourceFieldError; it never answers False for missing data.

Customers hold no role: every role or capability predicate is False
for a CustomerActor.
"""

from __future__ import annotations

from typing import Callable, Iterable

from shopgate.exceptions import MissingContextError
from shopgate.roles.models import Role, resolve_capability


class Predicate:
    """
    Named boolean check.

    Usage:
        approver = has_capability(Capability.APPROVE_PAYROLL) & outranks_owner()
        approver(evaluation)   # True / False
    """

    __slots__ = ("name", "_test")

    def __init__(self, name: str, test: Callable):
        if not name or not isinstance(name, str):
            raise ValueError("Predicate name must be a non-empty string.")
        if not callable(test):
            raise TypeError("Predicate test must be callable.")
        self.name = name
        self._test = test

    def __call__(self, evaluation) -> bool:
        return bool(self._test(evaluation))

    def __and__(self, other: Predicate) -> Predicate:
        return all_of(self, other)

    def __or__(self, other: Predicate) -> Predicate:
        return any_of(self, other)

    def __invert__(self) -> Predicate:
        return negate(self)

    def __repr__(self) -> str:
        return f"<Predicate {self.name}>"


# ══════════════════════════════════════════════════════════════
# COMBINATORS
# ══════════════════════════════════════════════════════════════

def all_of(*predicates: Predicate) -> Predicate:
    """Short-circuiting conjunction. all_of() is always True."""
    parts = _flatten(predicates)
    name = "all_of(" + ", ".join(p.name for p in parts) + ")"
    return Predicate(name, lambda ev: all(p(ev) for p in parts))


def any_of(*predicates: Predicate) -> Predicate:
    """Short-circuiting disjunction. any_of() is always False."""
    parts = _flatten(predicates)
    name = "any_of(" + ", ".join(p.name for p in parts) + ")"
    return Predicate(name, lambda ev: any(p(ev) for p in parts))


def negate(predicate: Predicate) -> Predicate:
    _check(predicate)
    return Predicate(f"not({predicate.name})", lambda ev: not predicate(ev))


def _flatten(predicates: Iterable) -> tuple:
    for p in predicates:
        _check(p)
    return tuple(predicates)


def _check(predicate) -> None:
    if not isinstance(predicate, Predicate):
        raise TypeError(
            f"Expected Predicate, got {type(predicate).__name__}."
        )


ALWAYS = Predicate("always", lambda ev: True)
NEVER = Predicate("never", lambda ev: False)


# ══════════════════════════════════════════════════════════════
# TENANT AND OWNERSHIP
# ══════════════════════════════════════════════════════════════

def tenant_matches() -> Predicate:
    return Predicate(
        "tenant_matches",
        lambda ev: ev.actor.tenant_id == ev.require_resource().tenant_id,
    )


def is_staff() -> Predicate:
    return Predicate("is_staff", lambda ev: ev.staff is not None)


def is_customer() -> Predicate:
    return Predicate("is_customer", lambda ev: ev.staff is None)


def is_owner(required: bool = True) -> Predicate:
    """
    Actor is the user the resource belongs to.

    With required=False a snapshot without owner_user_id answers
    False instead of raising.
    """
    def test(ev):
        if ev.staff is None:
            return False
        resource = ev.require_resource()
        if not required and resource.owner_user_id is None:
            return False
        return ev.actor.id == resource.require("owner_user_id", ev.ability)

    return Predicate("is_owner", test)


def is_customer_owner(required: bool = True) -> Predicate:
    def test(ev):
        if ev.staff is not None:
            return False
        resource = ev.require_resource()
        if not required and resource.customer_id is None:
            return False
        return ev.actor.id == resource.require("customer_id", ev.ability)

    return Predicate("is_customer_owner", test)


# ══════════════════════════════════════════════════════════════
# ROLE AND CAPABILITY
# ══════════════════════════════════════════════════════════════

def has_capability(capability) -> Predicate:
    key = resolve_capability(capability)

    def test(ev):
        staff = ev.staff
        return staff is not None and ev.hierarchy.has_capability(staff.role, key)

    return Predicate(f"has_capability({key.value})", test)


def has_any_capability(*capabilities) -> Predicate:
    keys = tuple(resolve_capability(c) for c in capabilities)

    def test(ev):
        staff = ev.staff
        if staff is None:
            return False
        return any(ev.hierarchy.has_capability(staff.role, k) for k in keys)

    names = ", ".join(k.value for k in keys)
    return Predicate(f"has_any_capability({names})", test)


def role_at_least(role: Role) -> Predicate:
    def test(ev):
        staff = ev.staff
        if staff is None:
            return False
        return ev.hierarchy.level(staff.role) >= ev.hierarchy.level(role)

    return Predicate(f"role_at_least({role.value})", test)


def is_global_role() -> Predicate:
    return Predicate(
        "is_global_role",
        lambda ev: ev.staff is not None and ev.hierarchy.is_global(ev.staff.role),
    )


def is_cross_tenant_role() -> Predicate:
    return Predicate(
        "is_cross_tenant_role",
        lambda ev: (
            ev.staff is not None
            and ev.hierarchy.is_cross_tenant(ev.staff.role)
        ),
    )


def is_tenant_owner() -> Predicate:
    return Predicate(
        "is_tenant_owner",
        lambda ev: ev.staff is not None and ev.staff.is_tenant_owner,
    )


def outranks_owner() -> Predicate:
    """Strict seniority over the role of the resource's user."""
    def test(ev):
        if ev.staff is None:
            return False
        target = ev.require_resource().require("owner_role", ev.ability)
        return ev.hierarchy.outranks(ev.staff.role, target)

    return Predicate("outranks_owner", test)


def target_is_tenant_owner() -> Predicate:
    def test(ev):
        resource = ev.require_resource()
        if resource.attribute("is_tenant_owner", False):
            return True
        return (
            resource.owner_role is not None
            and ev.hierarchy.is_top(resource.owner_role)
        )

    return Predicate("target_is_tenant_owner", test)


def can_assign_candidate(key: str = "role") -> Predicate:
    """can_assign(actor.role, context[key]) — the single seniority rule."""
    def test(ev):
        if ev.staff is None:
            return False
        return ev.hierarchy.can_assign(ev.staff.role, ev.value(key))

    return Predicate(f"can_assign_candidate({key})", test)


def candidate_is_tenant_role(key: str = "role") -> Predicate:
    return Predicate(
        f"candidate_is_tenant_role({key})",
        lambda ev: not ev.hierarchy.is_cross_tenant(ev.value(key)),
    )


# ══════════════════════════════════════════════════════════════
# SCOPE AND LIFECYCLE
# ══════════════════════════════════════════════════════════════

def scope_overlaps() -> Predicate:
    """
    Actor's shop set overlaps the resource's shop(s). Global roles
    pass without consulting the resolver.
    """
    def test(ev):
        staff = ev.staff
        if staff is None:
            return False
        if ev.hierarchy.is_global(staff.role):
            return True
        resource = ev.require_resource()
        if resource.shop_ids:
            return ev.scope.overlaps(staff.shop_ids, resource.shops)
        return ev.scope.overlaps(staff.shop_ids, resource.shop_id)

    return Predicate("scope_overlaps", test)


def lifecycle_allows(transition: str) -> Predicate:
    def test(ev):
        status = ev.require_resource().require("status", ev.ability)
        return ev.gate.allows(ev.lifecycle_type, status, transition)

    return Predicate(f"lifecycle_allows({transition})", test)


def status_in(*statuses: str) -> Predicate:
    members = frozenset(statuses)
    return Predicate(
        f"status_in({', '.join(sorted(members))})",
        lambda ev: ev.require_resource().require("status", ev.ability) in members,
    )


# ══════════════════════════════════════════════════════════════
# RESOURCE ATTRIBUTES AND CONTEXT FLAGS
# ══════════════════════════════════════════════════════════════

def attribute_true(name: str) -> Predicate:
    """Resource attribute flag; absent means False."""
    return Predicate(
        f"attribute_true({name})",
        lambda ev: bool(ev.require_resource().attribute(name, False)),
    )


def context_flag(key: str) -> Predicate:
    """Caller-supplied boolean context value. Absent raises."""
    def test(ev):
        value = ev.value(key)
        if not isinstance(value, bool):
            raise MissingContextError(
                ev.resource_type, ev.ability, key, "Expected a boolean flag."
            )
        return value

    return Predicate(f"context_flag({key})", test)


__all__ = [
    "ALWAYS",
    "NEVER",
    "Predicate",
    "all_of",
    "any_of",
    "attribute_true",
    "can_assign_candidate",
    "candidate_is_tenant_role",
    "context_flag",
    "has_any_capability",
    "has_capability",
    "is_cross_tenant_role",
    "is_customer",
    "is_customer_owner",
    "is_global_role",
    "is_owner",
    "is_staff",
    "is_tenant_owner",
    "lifecycle_allows",
    "negate",
    "outranks_owner",
    "role_at_least",
    "scope_overlaps",
    "status_in",
    "target_is_tenant_owner",
    "tenant_matches",
]
