"""Mini README: Daily budget allocation engine.

This package holds the core of the planner: the day-indexed ledger model,
the two allocation policies (retroactive symmetric redistribution and
sequential carry-forward rebalancing), the policy registry, the month-level
summary and the period manager that opens and mutates ledgers. Everything
here is synchronous and free of I/O apart from the store handed to
``PeriodManager``.
"""

from .errors import BudgetError, InvalidInputError, StructuralMismatchError
from .ledger import (
    CATEGORIES,
    DEFAULT_CATEGORY,
    DayRecord,
    ExpenseRecord,
    Ledger,
    PeriodConfig,
    coerce_category,
    days_in_period,
    period_key,
)
from .allocation import (
    AllocationPolicy,
    AllocationResult,
    RetroactiveSymmetricPolicy,
    SequentialCarryForwardPolicy,
    allocate_rsr,
    allocate_scr,
    rsr_penalties,
)
from .registry import DEFAULT_POLICY, REGISTRY, PolicyRegistry, allocate
from .summary import BudgetSummary, spending_by_category, summarize
from .periods import (
    PeriodManager,
    PeriodReport,
    add_expense,
    evaluate,
    new_ledger,
    remove_expense,
    reset_day,
)

__all__ = [
    "CATEGORIES",
    "DEFAULT_CATEGORY",
    "AllocationPolicy",
    "AllocationResult",
    "BudgetError",
    "BudgetSummary",
    "DEFAULT_POLICY",
    "DayRecord",
    "ExpenseRecord",
    "InvalidInputError",
    "Ledger",
    "PeriodConfig",
    "PeriodManager",
    "PeriodReport",
    "PolicyRegistry",
    "REGISTRY",
    "RetroactiveSymmetricPolicy",
    "SequentialCarryForwardPolicy",
    "StructuralMismatchError",
    "add_expense",
    "allocate",
    "allocate_rsr",
    "allocate_scr",
    "coerce_category",
    "days_in_period",
    "evaluate",
    "new_ledger",
    "period_key",
    "remove_expense",
    "reset_day",
    "rsr_penalties",
    "spending_by_category",
    "summarize",
]
