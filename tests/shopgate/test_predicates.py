"""
ShopGate Predicates — Combinator and Primitive Tests
======================================================
Predicates are evaluated directly against hand-built Evaluations.
"""

from __future__ import annotations

import pytest

from shopgate.exceptions import (
    MissingContextError,
    MissingResourceFieldError,
    UnknownCapabilityError,
)
from shopgate.lifecycle import default_lifecycle_gate
from shopgate.policy import Evaluation, PolicyEnvironment
from shopgate.policy.predicates import (
    ALWAYS,
    NEVER,
    Predicate,
    all_of,
    any_of,
    attribute_true,
    can_assign_candidate,
    context_flag,
    has_any_capability,
    has_capability,
    is_customer,
    is_owner,
    is_staff,
    lifecycle_allows,
    negate,
    outranks_owner,
    role_at_least,
    scope_overlaps,
    status_in,
    target_is_tenant_owner,
    tenant_matches,
)
from shopgate.primitives import CustomerActor, Resource, StaffActor
from shopgate.roles import Capability, Role, default_role_hierarchy
from shopgate.scope import ScopeResolver

TENANT = "tenant-a"

ENV = PolicyEnvironment(
    hierarchy=default_role_hierarchy(),
    scope=ScopeResolver(),
    gate=default_lifecycle_gate(),
)


def staff(role, id=1, shops=(), tenant_id=TENANT):
    return StaffActor(id=id, tenant_id=tenant_id, role=role, shop_ids=shops)


def advance(**overrides):
    data = dict(
        resource_type="wage_advance",
        tenant_id=TENANT,
        shop_id=7,
        owner_user_id=42,
        owner_role=Role.SALES_REP,
        status="pending",
    )
    data.update(overrides)
    return Resource(**data)


def evaluation(actor, resource=None, context=None):
    return Evaluation(
        env=ENV,
        actor=actor,
        resource_type="wage_advance",
        ability="test",
        resource=resource,
        context=context or {},
    )


def counting(result):
    calls = []

    def test(ev):
        calls.append(ev)
        return result

    return Predicate(f"counting({result})", test), calls


# ══════════════════════════════════════════════════════════════
# COMBINATORS
# ══════════════════════════════════════════════════════════════


class TestCombinators:

    def test_empty_all_of_is_true_and_any_of_false(self):
        ev = evaluation(staff(Role.CASHIER))
        assert all_of()(ev) is True
        assert any_of()(ev) is False

    def test_operators(self):
        ev = evaluation(staff(Role.CASHIER))
        assert (ALWAYS & ALWAYS)(ev)
        assert not (ALWAYS & NEVER)(ev)
        assert (NEVER | ALWAYS)(ev)
        assert (~NEVER)(ev)
        assert negate(ALWAYS)(ev) is False

    def test_all_of_short_circuits(self):
        probe, calls = counting(True)
        assert not all_of(NEVER, probe)(evaluation(staff(Role.CASHIER)))
        assert calls == []

    def test_any_of_short_circuits(self):
        probe, calls = counting(False)
        assert any_of(ALWAYS, probe)(evaluation(staff(Role.CASHIER)))
        assert calls == []

    def test_names_compose(self):
        combined = has_capability(Capability.MANAGE_PAYROLL) & ~is_customer()
        assert combined.name == (
            "all_of(has_capability(manage_payroll), not(is_customer))"
        )

    def test_non_predicate_rejected(self):
        with pytest.raises(TypeError):
            all_of(ALWAYS, lambda ev: True)

    def test_unknown_capability_rejected_when_built(self):
        with pytest.raises(UnknownCapabilityError) as exc:
            has_capability("sell_everything")
        assert exc.value.capability == "sell_everything"


# ══════════════════════════════════════════════════════════════
# ACTOR PREDICATES
# ══════════════════════════════════════════════════════════════


class TestActorPredicates:

    def test_staff_and_customer(self):
        assert is_staff()(evaluation(staff(Role.CASHIER)))
        assert is_customer()(evaluation(CustomerActor(id=5, tenant_id=TENANT)))

    def test_role_at_least_uses_levels(self):
        predicate = role_at_least(Role.STORE_MANAGER)
        assert predicate(evaluation(staff(Role.GENERAL_MANAGER)))
        assert predicate(evaluation(staff(Role.STORE_MANAGER)))
        assert not predicate(evaluation(staff(Role.ASSISTANT_MANAGER)))

    def test_customers_hold_no_role_or_capability(self):
        ev = evaluation(CustomerActor(id=5, tenant_id=TENANT))
        assert not role_at_least(Role.CASHIER)(ev)
        assert not has_capability(Capability.VIEW_PRODUCTS)(ev)
        assert not has_any_capability(Capability.PROCESS_SALES)(ev)

    def test_can_assign_candidate_reads_context(self):
        ev = evaluation(staff(Role.OWNER), context={"role": Role.GENERAL_MANAGER})
        assert can_assign_candidate("role")(ev)

    def test_can_assign_candidate_missing_context_raises(self):
        with pytest.raises(MissingContextError):
            can_assign_candidate("role")(evaluation(staff(Role.OWNER)))


# ══════════════════════════════════════════════════════════════
# RESOURCE PREDICATES
# ══════════════════════════════════════════════════════════════


class TestResourcePredicates:

    def test_tenant_matches(self):
        assert tenant_matches()(evaluation(staff(Role.CASHIER), advance()))
        foreign = staff(Role.CASHIER, tenant_id="tenant-b")
        assert not tenant_matches()(evaluation(foreign, advance()))

    def test_is_owner(self):
        assert is_owner()(evaluation(staff(Role.SALES_REP, id=42), advance()))
        assert not is_owner()(evaluation(staff(Role.SALES_REP, id=43), advance()))

    def test_is_owner_missing_field_raises(self):
        resource = advance(owner_user_id=None)
        with pytest.raises(MissingResourceFieldError) as exc:
            is_owner()(evaluation(staff(Role.SALES_REP), resource))
        assert exc.value.field_name == "owner_user_id"

    def test_optional_owner_answers_false(self):
        resource = advance(owner_user_id=None)
        assert not is_owner(required=False)(evaluation(staff(Role.SALES_REP), resource))

    def test_outranks_owner_is_strict(self):
        resource = advance(owner_role=Role.STORE_MANAGER)
        assert outranks_owner()(evaluation(staff(Role.GENERAL_MANAGER), resource))
        assert not outranks_owner()(evaluation(staff(Role.STORE_MANAGER), resource))

    def test_target_is_tenant_owner(self):
        by_role = advance(owner_role=Role.OWNER)
        by_flag = advance(attributes={"is_tenant_owner": True})
        ev_actor = staff(Role.GENERAL_MANAGER)
        assert target_is_tenant_owner()(evaluation(ev_actor, by_role))
        assert target_is_tenant_owner()(evaluation(ev_actor, by_flag))
        assert not target_is_tenant_owner()(evaluation(ev_actor, advance()))

    def test_scope_overlaps(self):
        assert scope_overlaps()(evaluation(staff(Role.STORE_MANAGER, shops={7}), advance()))
        assert not scope_overlaps()(
            evaluation(staff(Role.STORE_MANAGER, shops={3, 9}), advance())
        )

    def test_scope_global_role_passes_without_shops(self):
        resource = advance(shop_id=None)
        assert scope_overlaps()(evaluation(staff(Role.GENERAL_MANAGER), resource))
        assert not scope_overlaps()(
            evaluation(staff(Role.STORE_MANAGER, shops={7}), resource)
        )

    def test_lifecycle_and_status(self):
        ev = evaluation(staff(Role.CASHIER), advance())
        assert lifecycle_allows("approve")(ev)
        assert not lifecycle_allows("disburse")(ev)
        assert status_in("pending", "approved")(ev)
        assert not status_in("disbursed")(ev)

    def test_attribute_flag_defaults_false(self):
        ev = evaluation(staff(Role.CASHIER), advance(attributes={"urgent": True}))
        assert attribute_true("urgent")(ev)
        assert not attribute_true("flagged")(ev)


# ══════════════════════════════════════════════════════════════
# CONTEXT FLAGS
# ══════════════════════════════════════════════════════════════


class TestContextFlag:

    def test_flag_value(self):
        predicate = context_flag("payroll_enrolled")
        actor = staff(Role.CASHIER)
        assert predicate(evaluation(actor, context={"payroll_enrolled": True}))
        assert not predicate(evaluation(actor, context={"payroll_enrolled": False}))

    def test_absent_flag_raises(self):
        with pytest.raises(MissingContextError) as exc:
            context_flag("payroll_enrolled")(evaluation(staff(Role.CASHIER)))
        assert exc.value.key == "payroll_enrolled"

    def test_non_boolean_flag_raises(self):
        with pytest.raises(MissingContextError):
            context_flag("payroll_enrolled")(
                evaluation(staff(Role.CASHIER), context={"payroll_enrolled": "yes"})
            )
