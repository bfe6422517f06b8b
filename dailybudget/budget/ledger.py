"""Mini README: Day-indexed expense ledger for one budget period.

Structure:
    * ExpenseRecord - a single spend entry owned by one day.
    * DayRecord - one calendar day, its expenses and its lock flag.
    * Ledger - the complete, contiguous set of days for a (year, month).
    * PeriodConfig - base daily target plus the derived period totals.
    * days_in_period / period_key / coerce_amount / coerce_category - shared
      helpers.
    * CATEGORIES - the fixed spending categories an expense can carry.

All records are frozen dataclasses. Operations that change a ledger (see
``periods``) build and return a new ``Ledger`` instead of editing one in
place, so the allocators can always be handed a consistent snapshot. The
``as_dict``/``from_dict`` pair defines the serialised shape shared by the
JSON store and the remote sync client.
"""

from __future__ import annotations

import calendar
import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Tuple
from uuid import uuid4

from .errors import InvalidInputError, StructuralMismatchError

CATEGORIES: Tuple[str, ...] = ("Food", "Transport", "Leisure", "Bills", "Health", "Home", "Other")
DEFAULT_CATEGORY = "Other"


def days_in_period(year: int, month: int) -> int:
    """Return the number of calendar days in the given month."""

    if not 1 <= month <= 12:
        raise InvalidInputError(f"Month must be between 1 and 12, got {month}")
    if year < 1:
        raise InvalidInputError(f"Year must be positive, got {year}")
    return calendar.monthrange(year, month)[1]


def period_key(year: int, month: int) -> str:
    """Build the storage key identifying a period, e.g. ``2024-02``."""

    return f"{year:04d}-{month:02d}"


def coerce_amount(value: object) -> float:
    """Convert user input into a finite, non-negative amount."""

    if isinstance(value, bool):
        raise InvalidInputError("Amount must be a number, not a boolean")
    try:
        amount = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as error:
        raise InvalidInputError(f"Amount {value!r} is not numeric") from error
    if not math.isfinite(amount):
        raise InvalidInputError(f"Amount {value!r} is not a finite number")
    if amount < 0:
        raise InvalidInputError(f"Amount {value!r} must not be negative")
    return amount


def coerce_category(value: object, *, strict: bool = True) -> str:
    """Match ``value`` against ``CATEGORIES`` ignoring case.

    Blank values fall back to ``DEFAULT_CATEGORY``. Unknown names are
    rejected, or mapped to the default when ``strict`` is off.
    """

    name = str(value or "").strip()
    if not name:
        return DEFAULT_CATEGORY
    for category in CATEGORIES:
        if category.lower() == name.lower():
            return category
    if strict:
        raise InvalidInputError(
            f"Unknown category {name!r}; expected one of {', '.join(CATEGORIES)}"
        )
    return DEFAULT_CATEGORY


def new_expense_id() -> str:
    """Generate an opaque identifier for a freshly recorded expense."""

    return uuid4().hex


@dataclass(frozen=True, slots=True)
class ExpenseRecord:
    """A single recorded spend."""

    expense_id: str
    amount: float
    label: str = ""
    category: str = DEFAULT_CATEGORY

    def as_dict(self) -> Dict[str, object]:
        return {
            "expense_id": self.expense_id,
            "amount": self.amount,
            "label": self.label,
            "category": self.category,
        }


@dataclass(frozen=True, slots=True)
class DayRecord:
    """One calendar day of a period.

    ``locked`` marks the day as settled once it holds at least one expense.
    The sequential allocator reads it; the symmetric allocator ignores it.
    """

    day_number: int
    expenses: Tuple[ExpenseRecord, ...] = ()
    locked: bool = False

    @property
    def spent(self) -> float:
        """Total spend recorded on the day."""

        return sum((expense.amount for expense in self.expenses), 0.0)

    def as_dict(self) -> Dict[str, object]:
        return {
            "day_number": self.day_number,
            "locked": self.locked,
            "expenses": [expense.as_dict() for expense in self.expenses],
        }


@dataclass(frozen=True, slots=True)
class Ledger:
    """Every day record for one (year, month) period."""

    year: int
    month: int
    days: Tuple[DayRecord, ...]

    def __post_init__(self) -> None:
        try:
            expected = days_in_period(self.year, self.month)
        except InvalidInputError as error:
            raise StructuralMismatchError(str(error)) from error
        numbers = [day.day_number for day in self.days]
        if numbers != list(range(1, expected + 1)):
            raise StructuralMismatchError(
                f"Ledger {period_key(self.year, self.month)} needs days 1..{expected}, "
                f"got {len(numbers)} records"
            )

    @property
    def key(self) -> str:
        return period_key(self.year, self.month)

    @property
    def days_in_period(self) -> int:
        return len(self.days)

    @property
    def total_spent(self) -> float:
        return sum((day.spent for day in self.days), 0.0)

    def get_day(self, day_number: int) -> DayRecord:
        """Return the record for ``day_number``, rejecting out-of-range values."""

        if isinstance(day_number, bool) or not isinstance(day_number, int):
            raise InvalidInputError(f"Day number {day_number!r} must be an integer")
        if not 1 <= day_number <= len(self.days):
            raise InvalidInputError(
                f"Day {day_number} is outside 1..{len(self.days)} for {self.key}"
            )
        return self.days[day_number - 1]

    def locked_days(self) -> List[DayRecord]:
        return [day for day in self.days if day.locked]

    def expense_ids(self) -> Iterable[str]:
        for day in self.days:
            for expense in day.expenses:
                yield expense.expense_id

    def as_dict(self) -> Dict[str, object]:
        """Export the ledger in its serialised, JSON-ready shape."""

        return {
            "year": self.year,
            "month": self.month,
            "days": [day.as_dict() for day in self.days],
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Ledger":
        """Rebuild a ledger from ``as_dict`` output.

        Lock flags are recomputed from the expense lists so a stale stored
        flag cannot leak into the allocators. Payloads written before
        categories existed load with ``DEFAULT_CATEGORY``.
        """

        try:
            days = tuple(
                DayRecord(
                    day_number=int(raw_day["day_number"]),
                    expenses=tuple(
                        ExpenseRecord(
                            expense_id=str(raw_expense["expense_id"]),
                            amount=coerce_amount(raw_expense["amount"]),
                            label=str(raw_expense.get("label", "")),
                            category=coerce_category(raw_expense.get("category")),
                        )
                        for raw_expense in raw_day.get("expenses", [])
                    ),
                    locked=bool(raw_day.get("expenses")),
                )
                for raw_day in payload["days"]
            )
            year = int(payload["year"])
            month = int(payload["month"])
        except (KeyError, TypeError, ValueError, AttributeError) as error:
            raise StructuralMismatchError(f"Malformed ledger payload: {error}") from error
        identifiers = [expense.expense_id for day in days for expense in day.expenses]
        if len(identifiers) != len(set(identifiers)):
            raise StructuralMismatchError("Ledger payload repeats an expense identifier")
        return cls(year=year, month=month, days=days)


@dataclass(frozen=True, slots=True)
class PeriodConfig:
    """Budget parameters for a period; totals are derived, never stored."""

    year: int
    month: int
    base_daily_target: float

    def __post_init__(self) -> None:
        days_in_period(self.year, self.month)
        target = self.base_daily_target
        if isinstance(target, bool) or not isinstance(target, (int, float)):
            raise InvalidInputError(f"Base daily target {target!r} must be a number")
        if not math.isfinite(target) or target <= 0:
            raise InvalidInputError(f"Base daily target {target!r} must be positive")

    @property
    def key(self) -> str:
        return period_key(self.year, self.month)

    @property
    def days_in_period(self) -> int:
        return days_in_period(self.year, self.month)

    @property
    def total_budget(self) -> float:
        return self.base_daily_target * self.days_in_period

    def as_dict(self) -> Dict[str, object]:
        return {
            "year": self.year,
            "month": self.month,
            "base_daily_target": self.base_daily_target,
            "days_in_period": self.days_in_period,
            "total_budget": self.total_budget,
        }
