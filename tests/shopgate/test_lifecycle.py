"""
ShopGate Lifecycle — Table, Gate and Guard Tests
==================================================
"""

from __future__ import annotations

import pytest

from shopgate.exceptions import (
    InvalidTransitionTableError,
    UnknownStatusError,
    UnregisteredResourceTypeError,
)
from shopgate.lifecycle import (
    DEFAULT_TRANSITION_TABLES,
    LifecycleGate,
    StatusTransitionTable,
    TransitionGuard,
    default_lifecycle_gate,
)


def _table(**overrides):
    data = dict(
        resource_type="ticket",
        statuses={"open", "closed", "void"},
        initial="open",
        terminal={"closed", "void"},
        transitions={"open": {"close", "void"}},
        overrides={"closed": {"reopen"}},
        settlements={"closed": {"annotate"}},
    )
    data.update(overrides)
    return StatusTransitionTable(**data)


@pytest.fixture
def gate():
    return default_lifecycle_gate()


# ══════════════════════════════════════════════════════════════
# TABLE VALIDATION
# ══════════════════════════════════════════════════════════════


class TestTableValidation:

    def test_valid_table(self):
        table = _table()
        assert table.initial == "open"
        assert table.vocabulary() == frozenset({"close", "void", "reopen", "annotate"})

    def test_initial_must_be_status(self):
        with pytest.raises(InvalidTransitionTableError, match="initial"):
            _table(initial="draft")

    def test_terminal_required(self):
        with pytest.raises(InvalidTransitionTableError, match="terminal"):
            _table(terminal=set(), overrides={}, settlements={})

    def test_terminal_must_be_statuses(self):
        with pytest.raises(InvalidTransitionTableError):
            _table(terminal={"closed", "archived"})

    def test_transitions_reference_known_statuses(self):
        with pytest.raises(InvalidTransitionTableError, match="unknown statuses"):
            _table(transitions={"open": {"close"}, "pending": {"open"}})

    def test_terminal_status_cannot_have_ordinary_transitions(self):
        with pytest.raises(InvalidTransitionTableError, match="ordinary"):
            _table(transitions={"open": {"close"}, "closed": {"reopen"}})

    def test_overrides_only_from_terminal(self):
        with pytest.raises(InvalidTransitionTableError, match="overrides"):
            _table(overrides={"open": {"force"}})

    def test_settlements_only_from_terminal(self):
        with pytest.raises(InvalidTransitionTableError, match="settlements"):
            _table(settlements={"open": {"annotate"}})

    def test_dict_round_trip(self):
        table = _table()
        assert StatusTransitionTable.from_dict(table.to_dict()) == table


# ══════════════════════════════════════════════════════════════
# TABLE QUERIES
# ══════════════════════════════════════════════════════════════


class TestTableQueries:

    def test_reachable_is_union(self):
        table = _table()
        assert table.reachable("open") == frozenset({"close", "void"})
        assert table.reachable("closed") == frozenset({"reopen", "annotate"})
        assert table.reachable("void") == frozenset()

    def test_override_detection(self):
        table = _table()
        assert table.is_override("closed", "reopen")
        assert not table.is_override("closed", "annotate")
        assert not table.is_override("open", "close")

    def test_unknown_status_raises(self):
        with pytest.raises(UnknownStatusError) as exc:
            _table().reachable("archived")
        assert exc.value.status == "archived"

    def test_statuses_allowing(self):
        assert _table().statuses_allowing("reopen") == frozenset({"closed"})

    def test_maps_are_read_only(self):
        table = _table()
        with pytest.raises(TypeError):
            table.transitions["closed"] = frozenset({"reopen"})
        with pytest.raises(TypeError):
            table.overrides["void"] = frozenset({"restore"})
        with pytest.raises(TypeError):
            table.settlements["void"] = frozenset({"annotate"})
        assert table.reachable("void") == frozenset()

    def test_table_is_hashable(self):
        assert hash(_table()) == hash(_table())


# ══════════════════════════════════════════════════════════════
# DEFAULT TABLES
# ══════════════════════════════════════════════════════════════


class TestDefaultTables:

    def test_every_default_table_is_unique(self):
        types = [t.resource_type for t in DEFAULT_TRANSITION_TABLES]
        assert len(types) == len(set(types))

    def test_wage_advance_pending(self, gate):
        assert gate.reachable("wage_advance", "pending") == frozenset(
            {"approve", "reject", "cancel", "update", "delete"}
        )

    def test_disbursed_advance_only_records_repayments(self, gate):
        assert gate.is_terminal("wage_advance", "disbursed")
        assert gate.reachable("wage_advance", "disbursed") == frozenset(
            {"record_repayment"}
        )

    def test_pay_run_regenerate_is_override_after_rejection(self, gate):
        assert gate.allows("pay_run", "rejected", "regenerate")
        assert gate.requires_top_role("pay_run", "rejected", "regenerate")
        assert not gate.requires_top_role("pay_run", "draft", "regenerate")

    def test_payroll_period_vocabulary(self, gate):
        table = gate.table("payroll_period")
        assert table.statuses == frozenset(
            {"draft", "processing", "processed", "approved", "paid", "cancelled"}
        )
        assert gate.allows("payroll_period", "processed", "approve")
        assert not gate.allows("payroll_period", "paid", "approve")

    def test_timesheet_force_delete_reachable_until_paid(self, gate):
        for status in ("draft", "submitted", "pending", "rejected", "approved"):
            assert gate.allows("timesheet", status, "force_delete")
        assert not gate.allows("timesheet", "paid", "force_delete")

    def test_unknown_type_raises(self, gate):
        with pytest.raises(UnregisteredResourceTypeError):
            gate.table("spaceship")


# ══════════════════════════════════════════════════════════════
# GATE
# ══════════════════════════════════════════════════════════════


class TestGate:

    def test_duplicate_table_rejected(self):
        with pytest.raises(InvalidTransitionTableError):
            LifecycleGate([_table(), _table()])

    def test_replace_swaps_known_table(self):
        gate = LifecycleGate([_table()])
        narrower = _table(overrides={}, settlements={})
        replaced = gate.replace([narrower])
        assert replaced.reachable("ticket", "closed") == frozenset()
        assert gate.reachable("ticket", "closed") == frozenset({"reopen", "annotate"})

    def test_replace_rejects_unknown_type(self):
        gate = LifecycleGate([_table()])
        with pytest.raises(UnregisteredResourceTypeError):
            gate.replace([_table(resource_type="invoice")])


# ══════════════════════════════════════════════════════════════
# TRANSITION GUARD
# ══════════════════════════════════════════════════════════════


class TestTransitionGuard:

    def test_holds_only_in_observed_status(self, gate):
        guard = gate.guard("pay_run", "pending_approval", "approve")
        assert guard.holds("pending_approval")
        assert not guard.holds("approved")
        assert not guard.holds(None)

    def test_guard_is_callable(self, gate):
        guard = gate.guard("pay_run", "pending_approval", "approve")
        assert guard("pending_approval") is True

    def test_guard_false_when_transition_unreachable(self, gate):
        guard = gate.guard("pay_run", "draft", "approve")
        assert not guard.holds("draft")

    def test_unknown_observed_status_raises(self, gate):
        with pytest.raises(UnknownStatusError):
            gate.guard("pay_run", "archived", "approve")

    def test_unknown_transition_raises(self, gate):
        with pytest.raises(InvalidTransitionTableError):
            gate.guard("pay_run", "draft", "teleport")

    def test_table_must_match_type(self):
        with pytest.raises(ValueError):
            TransitionGuard(
                resource_type="invoice",
                expected_status="open",
                transition="close",
                table=_table(),
            )

    def test_guard_is_hashable(self, gate):
        guard = gate.guard("pay_run", "pending_approval", "approve")
        same = gate.guard("pay_run", "pending_approval", "approve")
        assert hash(guard) == hash(same)
        assert {guard, same} == {guard}
