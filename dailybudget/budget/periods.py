"""Mini README: Period lifecycle and expense mutations.

Structure:
    * new_ledger - empty, fully unlocked ledger for a (year, month).
    * add_expense / remove_expense / reset_day - pure ledger mutations.
    * PeriodReport - config, allocation and summary bundled for hosts.
    * PeriodManager - opens, mutates and persists ledgers through a store.

The pure functions never touch their input: they validate first and return a
new ``Ledger``, so a rejected request leaves the caller's ledger exactly as it
was. A day is locked while it holds at least one expense; removing the last
expense unlocks it and returns its slot to the sequential allocator's pool.

``PeriodManager`` is the host-side owner of the current ledger. It serialises
load-mutate-save cycles with a lock, because the engine itself assumes a
single writer per snapshot.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Callable, Dict, List, Optional

from ..logging_utils import get_logger
from .allocation import AllocationResult
from .errors import InvalidInputError
from .ledger import (
    DayRecord,
    ExpenseRecord,
    Ledger,
    PeriodConfig,
    coerce_amount,
    coerce_category,
    days_in_period,
    new_expense_id,
    period_key,
)
from .registry import DEFAULT_POLICY, REGISTRY
from .summary import BudgetSummary, summarize

if TYPE_CHECKING:  # pragma: no cover
    from ..storage.local_store import LedgerStore

LOGGER = get_logger(__name__)


def new_ledger(year: int, month: int) -> Ledger:
    """Create a ledger with every day of the month unlocked and empty."""

    total_days = days_in_period(year, month)
    return Ledger(
        year=year,
        month=month,
        days=tuple(DayRecord(day_number=number) for number in range(1, total_days + 1)),
    )


def _replace_day(ledger: Ledger, day: DayRecord) -> Ledger:
    days = list(ledger.days)
    days[day.day_number - 1] = day
    return replace(ledger, days=tuple(days))


def add_expense(
    ledger: Ledger,
    day_number: int,
    amount: object,
    label: str = "",
    expense_id: Optional[str] = None,
    category: Optional[str] = None,
) -> Ledger:
    """Return a ledger with the expense appended to ``day_number`` and the day locked.

    ``category`` must name one of ``CATEGORIES`` (any case); blank means
    ``DEFAULT_CATEGORY``.
    """

    day = ledger.get_day(day_number)
    value = coerce_amount(amount)
    group = coerce_category(category)
    identifier = expense_id or new_expense_id()
    if identifier in set(ledger.expense_ids()):
        raise InvalidInputError(f"Expense {identifier} already exists in {ledger.key}")
    expense = ExpenseRecord(
        expense_id=identifier, amount=value, label=(label or "").strip(), category=group
    )
    updated = replace(day, expenses=day.expenses + (expense,), locked=True)
    LOGGER.info("Recorded expense %s of %.2f on %s day %s", identifier, value, ledger.key, day_number)
    return _replace_day(ledger, updated)


def remove_expense(ledger: Ledger, day_number: int, expense_id: str) -> Ledger:
    """Return a ledger without the expense; the day unlocks once it is empty."""

    day = ledger.get_day(day_number)
    remaining = tuple(expense for expense in day.expenses if expense.expense_id != expense_id)
    if len(remaining) == len(day.expenses):
        raise KeyError(f"Expense {expense_id} not found on {ledger.key} day {day_number}")
    updated = replace(day, expenses=remaining, locked=bool(remaining))
    LOGGER.info(
        "Removed expense %s from %s day %s (locked=%s)",
        expense_id,
        ledger.key,
        day_number,
        updated.locked,
    )
    return _replace_day(ledger, updated)


def reset_day(ledger: Ledger, day_number: int) -> Ledger:
    """Return a ledger where ``day_number`` has no expenses and is unlocked."""

    day = ledger.get_day(day_number)
    return _replace_day(ledger, DayRecord(day_number=day.day_number))


@dataclass(frozen=True, slots=True)
class PeriodReport:
    """Everything a host needs to render one period."""

    policy: str
    config: PeriodConfig
    ledger: Ledger
    allocations: List[AllocationResult]
    summary: BudgetSummary

    def as_dict(self) -> Dict[str, object]:
        expenses = {day.day_number: day.as_dict()["expenses"] for day in self.ledger.days}
        return {
            "period": self.config.key,
            "policy": self.policy,
            "config": self.config.as_dict(),
            "summary": self.summary.as_dict(),
            "days": [
                {**result.as_dict(), "expenses": expenses[result.day_number]}
                for result in self.allocations
            ],
        }


def evaluate(ledger: Ledger, base_daily_target: float, policy: str = DEFAULT_POLICY) -> PeriodReport:
    """Run the full allocation and summary for ``ledger`` under ``policy``."""

    config = PeriodConfig(year=ledger.year, month=ledger.month, base_daily_target=base_daily_target)
    strategy = REGISTRY.create(policy)
    allocations = strategy.allocate(ledger, config.base_daily_target)
    return PeriodReport(
        policy=strategy.policy_name,
        config=config,
        ledger=ledger,
        allocations=allocations,
        summary=summarize(allocations, config.base_daily_target, ledger),
    )


class PeriodManager:
    """Open, mutate and persist period ledgers through a ``LedgerStore``."""

    def __init__(self, store: Optional[LedgerStore] = None) -> None:
        if store is None:
            from ..storage.local_store import InMemoryLedgerStore

            store = InMemoryLedgerStore()
        self.store = store
        self._lock = threading.Lock()
        LOGGER.debug("PeriodManager initialised with %s", type(self.store).__name__)

    def open_period(self, year: int, month: int, base_daily_target: float) -> Ledger:
        """Load the period's ledger, replacing a missing or mismatched one."""

        PeriodConfig(year=year, month=month, base_daily_target=base_daily_target)
        with self._lock:
            return self._load_or_create(year, month)

    def _load_or_create(self, year: int, month: int) -> Ledger:
        key = period_key(year, month)
        loaded = self.store.load(key)
        expected_days = days_in_period(year, month)
        if loaded is not None and (loaded.year, loaded.month, loaded.days_in_period) == (
            year,
            month,
            expected_days,
        ):
            return loaded
        if loaded is not None:
            LOGGER.warning(
                "Discarding stored ledger %s: found %s days for %s, expected %s",
                key,
                loaded.days_in_period,
                loaded.key,
                expected_days,
            )
        ledger = new_ledger(year, month)
        self.store.save(key, ledger)
        LOGGER.info("Opened fresh ledger for %s with %s days", key, expected_days)
        return ledger

    def apply(self, year: int, month: int, change: Callable[[Ledger], Ledger]) -> Ledger:
        """Run ``change`` on the persisted ledger and save what it returns."""

        with self._lock:
            ledger = change(self._load_or_create(year, month))
            if not self.store.save(ledger.key, ledger):
                LOGGER.warning("Ledger %s changed in memory but could not be persisted", ledger.key)
            return ledger

    def add_expense(
        self,
        year: int,
        month: int,
        day_number: int,
        amount: object,
        label: str = "",
        category: Optional[str] = None,
    ) -> Ledger:
        """Record an expense on the persisted ledger and save the result."""

        return self.apply(
            year,
            month,
            lambda ledger: add_expense(ledger, day_number, amount, label, category=category),
        )

    def remove_expense(self, year: int, month: int, day_number: int, expense_id: str) -> Ledger:
        """Remove an expense from the persisted ledger and save the result."""

        return self.apply(year, month, lambda ledger: remove_expense(ledger, day_number, expense_id))

    def replace_ledger(self, ledger: Ledger) -> Ledger:
        """Persist ``ledger`` as the period's current state, e.g. after a sync pull."""

        with self._lock:
            self.store.save(ledger.key, ledger)
            LOGGER.info("Replaced ledger %s", ledger.key)
            return ledger

    def reset_period(self, year: int, month: int) -> Ledger:
        """Discard all expenses of the period and start again."""

        with self._lock:
            ledger = new_ledger(year, month)
            self.store.save(ledger.key, ledger)
            LOGGER.info("Reset ledger %s", ledger.key)
            return ledger

    def evaluate(
        self, ledger: Ledger, base_daily_target: float, policy: str = DEFAULT_POLICY
    ) -> PeriodReport:
        return evaluate(ledger, base_daily_target, policy)
