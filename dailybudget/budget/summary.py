"""Mini README: Month-level totals derived from per-day allocations.

Structure:
    * BudgetSummary - totals, balance, today's allowance and projections.
    * summarize - build a summary from a list of ``AllocationResult``.
    * spending_by_category - per-category spend totals of a ledger.

``current_daily_allowance`` answers "what is left, spread over the days that
have not recorded spend yet". It is computed from totals and lock flags only,
never from the allowances of the active policy, so it reads the same under
RSR and SCR.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence, Tuple

from .allocation import AllocationResult
from .ledger import CATEGORIES, Ledger


@dataclass(frozen=True, slots=True)
class BudgetSummary:
    """Aggregated view of one period's allocation."""

    total_budget: float
    total_spent: float
    total_balance: float
    is_over_budget: bool
    current_daily_allowance: float
    days_in_period: int
    locked_days: int
    unlocked_days: int
    average_daily_spend: float
    projected_spend: float
    critical_days: Tuple[int, ...] = ()
    spent_by_category: Dict[str, float] = field(default_factory=dict)

    def as_dict(self) -> Dict[str, object]:
        return {
            "total_budget": self.total_budget,
            "total_spent": self.total_spent,
            "total_balance": self.total_balance,
            "is_over_budget": self.is_over_budget,
            "current_daily_allowance": self.current_daily_allowance,
            "days_in_period": self.days_in_period,
            "locked_days": self.locked_days,
            "unlocked_days": self.unlocked_days,
            "average_daily_spend": self.average_daily_spend,
            "projected_spend": self.projected_spend,
            "critical_days": list(self.critical_days),
            "spent_by_category": dict(self.spent_by_category),
        }


def spending_by_category(ledger: Ledger) -> Dict[str, float]:
    """Sum the ledger's spend per category, skipping categories with no spend."""

    totals: Dict[str, float] = {category: 0.0 for category in CATEGORIES}
    for day in ledger.days:
        for expense in day.expenses:
            totals[expense.category] = totals.get(expense.category, 0.0) + expense.amount
    return {category: amount for category, amount in totals.items() if amount > 0}


def summarize(
    results: Sequence[AllocationResult],
    base_daily_target: float,
    ledger: Optional[Ledger] = None,
) -> BudgetSummary:
    """Derive period totals from a full allocation result list.

    The category breakdown needs the expenses themselves, so it is only
    filled in when ``ledger`` is given.
    """

    days = len(results)
    total_budget = base_daily_target * days
    total_spent = sum((result.spent for result in results), 0.0)
    total_balance = total_budget - total_spent
    locked = sum(1 for result in results if result.locked)
    unlocked = days - locked
    current_daily_allowance = total_balance / unlocked if unlocked > 0 else 0.0
    average_daily_spend = total_spent / locked if locked > 0 else 0.0
    return BudgetSummary(
        total_budget=total_budget,
        total_spent=total_spent,
        total_balance=total_balance,
        is_over_budget=total_spent > total_budget,
        current_daily_allowance=current_daily_allowance,
        days_in_period=days,
        locked_days=locked,
        unlocked_days=unlocked,
        average_daily_spend=average_daily_spend,
        projected_spend=average_daily_spend * days,
        critical_days=tuple(result.day_number for result in results if result.allowance < 0),
        spent_by_category=spending_by_category(ledger) if ledger is not None else {},
    )
