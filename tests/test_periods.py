"""Mini README: Tests for ledger mutations, the period manager and summaries.

Structure:
    * Mutation tests - add/remove expenses, lock transitions, input rejection.
    * PeriodManager tests - fresh periods, mismatch recovery, persistence.
    * Summary tests - totals and today's allowance under both policies.
"""

from __future__ import annotations

import math

import pytest

from dailybudget.budget import (
    DEFAULT_CATEGORY,
    InvalidInputError,
    Ledger,
    PeriodConfig,
    PeriodManager,
    StructuralMismatchError,
    add_expense,
    allocate_rsr,
    allocate_scr,
    evaluate,
    new_ledger,
    remove_expense,
    reset_day,
    summarize,
)
from dailybudget.storage import InMemoryLedgerStore


def test_new_ledger_matches_calendar() -> None:
    assert new_ledger(2024, 2).days_in_period == 29
    assert new_ledger(2023, 2).days_in_period == 28
    assert new_ledger(2024, 1).days_in_period == 31
    assert not any(day.locked for day in new_ledger(2024, 6).days)


def test_add_expense_locks_day_without_touching_input() -> None:
    original = new_ledger(2024, 5)

    updated = add_expense(original, 7, "12.50", "  Lunch ")

    assert original.days[6].expenses == ()
    day = updated.days[6]
    assert day.locked is True
    assert day.spent == pytest.approx(12.5)
    assert day.expenses[0].label == "Lunch"
    assert day.expenses[0].expense_id


@pytest.mark.parametrize("amount", [-1, "abc", None, True, math.nan, math.inf])
def test_add_expense_rejects_invalid_amounts(amount) -> None:
    ledger = new_ledger(2024, 5)

    with pytest.raises(InvalidInputError):
        add_expense(ledger, 1, amount)
    assert ledger == new_ledger(2024, 5)


@pytest.mark.parametrize("day_number", [0, 32, -3])
def test_add_expense_rejects_out_of_range_days(day_number) -> None:
    with pytest.raises(InvalidInputError):
        add_expense(new_ledger(2024, 5), day_number, 10.0)


def test_add_expense_rejects_duplicate_identifier() -> None:
    ledger = add_expense(new_ledger(2024, 5), 1, 10.0, expense_id="dup")

    with pytest.raises(InvalidInputError):
        add_expense(ledger, 2, 5.0, expense_id="dup")


def test_partial_removal_keeps_day_locked() -> None:
    ledger = add_expense(new_ledger(2024, 5), 3, 10.0, expense_id="a")
    ledger = add_expense(ledger, 3, 4.0, expense_id="b")

    partially = remove_expense(ledger, 3, "a")
    emptied = remove_expense(partially, 3, "b")

    assert partially.days[2].locked is True
    assert partially.days[2].spent == pytest.approx(4.0)
    assert emptied.days[2].locked is False


def test_remove_unknown_expense_raises_key_error() -> None:
    with pytest.raises(KeyError):
        remove_expense(new_ledger(2024, 5), 3, "missing")


def test_reset_day_unlocks() -> None:
    ledger = add_expense(new_ledger(2024, 5), 3, 10.0)

    assert reset_day(ledger, 3).days[2].locked is False


def test_ledger_rejects_wrong_day_count() -> None:
    short = new_ledger(2024, 4)

    with pytest.raises(StructuralMismatchError):
        Ledger(year=2024, month=5, days=short.days)


def test_from_dict_recomputes_lock_flags() -> None:
    payload = add_expense(new_ledger(2024, 5), 2, 8.0, expense_id="x").as_dict()
    payload["days"][0]["locked"] = True
    payload["days"][1]["locked"] = False

    ledger = Ledger.from_dict(payload)

    assert ledger.days[0].locked is False
    assert ledger.days[1].locked is True


def test_from_dict_rejects_repeated_expense_identifiers() -> None:
    payload = add_expense(new_ledger(2024, 5), 2, 8.0, expense_id="x").as_dict()
    payload["days"][3]["expenses"] = [dict(payload["days"][1]["expenses"][0])]

    with pytest.raises(StructuralMismatchError):
        Ledger.from_dict(payload)
    assert InMemoryLedgerStore({"2024-05": payload}).load("2024-05") is None


def test_expense_categories_are_normalised_and_serialised() -> None:
    ledger = add_expense(new_ledger(2024, 5), 1, 12.0, "Bus pass", category="transport")
    ledger = add_expense(ledger, 1, 3.0, "Gum")

    first, second = ledger.days[0].expenses
    assert first.category == "Transport"
    assert second.category == DEFAULT_CATEGORY
    assert first.as_dict()["category"] == "Transport"
    assert Ledger.from_dict(ledger.as_dict()) == ledger
    with pytest.raises(InvalidInputError):
        add_expense(ledger, 2, 5.0, category="Yachts")


def test_payload_without_categories_loads_as_default() -> None:
    payload = add_expense(new_ledger(2024, 5), 2, 8.0, expense_id="x").as_dict()
    del payload["days"][1]["expenses"][0]["category"]

    assert Ledger.from_dict(payload).days[1].expenses[0].category == DEFAULT_CATEGORY


def test_period_config_validation() -> None:
    config = PeriodConfig(2024, 2, 30.0)
    assert config.total_budget == pytest.approx(870.0)

    for bad in (0, -5.0, math.nan, "30"):
        with pytest.raises(InvalidInputError):
            PeriodConfig(2024, 2, bad)
    with pytest.raises(InvalidInputError):
        PeriodConfig(2024, 13, 30.0)


def test_open_period_creates_and_persists_fresh_ledger() -> None:
    store = InMemoryLedgerStore()
    manager = PeriodManager(store)

    ledger = manager.open_period(2024, 2, 30.0)

    assert ledger.days_in_period == 29
    assert store.load("2024-02") == ledger


def test_open_period_discards_mismatched_ledger() -> None:
    # A leap-year ledger stored under a non-leap February key.
    stale = add_expense(new_ledger(2024, 2), 29, 50.0)
    store = InMemoryLedgerStore({"2023-02": stale.as_dict()})
    manager = PeriodManager(store)

    ledger = manager.open_period(2023, 2, 30.0)

    assert ledger.days_in_period == 28
    assert ledger.total_spent == 0.0
    assert store.load("2023-02") == ledger


def test_open_period_recovers_from_corrupt_payload() -> None:
    store = InMemoryLedgerStore({"2024-05": {"year": 2024, "month": 5, "days": "garbage"}})

    ledger = PeriodManager(store).open_period(2024, 5, 30.0)

    assert ledger == new_ledger(2024, 5)


def test_manager_mutations_persist_and_reset() -> None:
    store = InMemoryLedgerStore()
    manager = PeriodManager(store)

    ledger = manager.add_expense(2024, 5, 1, 60.0, "Groceries")
    expense_id = ledger.days[0].expenses[0].expense_id
    assert store.load("2024-05").days[0].spent == pytest.approx(60.0)

    with pytest.raises(InvalidInputError):
        manager.add_expense(2024, 5, 1, -2)
    assert store.load("2024-05") == ledger

    assert manager.remove_expense(2024, 5, 1, expense_id).days[0].locked is False
    manager.add_expense(2024, 5, 2, 5.0)
    assert manager.reset_period(2024, 5) == new_ledger(2024, 5)


def test_open_period_validates_target() -> None:
    with pytest.raises(InvalidInputError):
        PeriodManager().open_period(2024, 5, 0)


def test_summary_is_policy_independent() -> None:
    ledger = add_expense(new_ledger(2024, 4), 1, 60.0)
    ledger = add_expense(ledger, 2, 0.0)

    rsr = summarize(allocate_rsr(ledger, 30.0), 30.0)
    scr = summarize(allocate_scr(ledger, 30.0), 30.0)

    assert rsr == scr
    assert scr.total_budget == pytest.approx(900.0)
    assert scr.total_spent == pytest.approx(60.0)
    assert scr.total_balance == pytest.approx(840.0)
    assert scr.is_over_budget is False
    assert scr.locked_days == 2
    assert scr.current_daily_allowance == pytest.approx(840.0 / 28)
    assert scr.average_daily_spend == pytest.approx(30.0)
    assert scr.projected_spend == pytest.approx(900.0)


def test_summary_flags_over_budget_and_critical_days() -> None:
    ledger = add_expense(new_ledger(2024, 2), 1, 1000.0)

    report = evaluate(ledger, 30.0, "rsr")

    assert report.summary.is_over_budget is True
    assert report.summary.critical_days == tuple(range(2, 30))
    assert report.as_dict()["days"][0]["expenses"][0]["amount"] == pytest.approx(1000.0)


def test_summary_with_every_day_locked() -> None:
    ledger = new_ledger(2023, 2)
    for day_number in range(1, 29):
        ledger = add_expense(ledger, day_number, 10.0)

    summary = summarize(allocate_scr(ledger, 30.0), 30.0)

    assert summary.unlocked_days == 0
    assert summary.current_daily_allowance == 0.0


def test_summary_of_empty_results() -> None:
    summary = summarize([], 30.0)

    assert summary.total_budget == 0.0
    assert summary.current_daily_allowance == 0.0


def test_summary_breaks_spend_down_by_category() -> None:
    ledger = add_expense(new_ledger(2024, 4), 1, 20.0, category="Food")
    ledger = add_expense(ledger, 2, 45.0, category="Bills")
    ledger = add_expense(ledger, 3, 5.5, category="food")

    report = evaluate(ledger, 30.0)

    assert report.summary.spent_by_category == {"Food": pytest.approx(25.5), "Bills": pytest.approx(45.0)}
    assert list(report.summary.spent_by_category) == ["Food", "Bills"]
    assert report.as_dict()["summary"]["spent_by_category"]["Bills"] == pytest.approx(45.0)
    assert summarize(report.allocations, 30.0).spent_by_category == {}


def test_manager_records_category() -> None:
    manager = PeriodManager()

    ledger = manager.add_expense(2024, 4, 3, 9.0, "Cinema", category="Leisure")

    assert ledger.days[2].expenses[0].category == "Leisure"
