"""Mini README: Daily allowance allocation policies.

Structure:
    * AllocationResult - per-day allowance, spend and remaining balance.
    * allocate_rsr - Retroactive Symmetric Redistribution.
    * allocate_scr - Sequential Carry-Forward Rebalancing.
    * AllocationPolicy - abstract strategy wrapping an allocation function.
    * RetroactiveSymmetricPolicy / SequentialCarryForwardPolicy - built-ins.

Both allocators are pure: they read a ledger (or any contiguous sequence of
day records numbered 1..N) and rebuild the whole result list on every call.
Nothing is cached between calls, so the host simply re-runs them after each
mutation.

RSR spreads every day's overspend evenly across all *other* days, past and
future alike, and ignores lock flags. SCR walks the days in order, treating
the period total as a pool that locked days draw down; unlocked days share
whatever is left.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple, Union

from ..logging_utils import get_logger
from .errors import StructuralMismatchError
from .ledger import DayRecord, Ledger

LOGGER = get_logger(__name__)

DaySource = Union[Ledger, Sequence[DayRecord]]


@dataclass(frozen=True, slots=True)
class AllocationResult:
    """Allowance attributed to a single day under one policy."""

    day_number: int
    allowance: float
    spent: float
    remaining: float
    locked: bool

    @property
    def status(self) -> str:
        """Classify the day for display: ``critical``, ``over`` or ``ok``."""

        if self.allowance < 0:
            return "critical"
        if self.remaining < 0:
            return "over"
        return "ok"

    def as_dict(self) -> Dict[str, object]:
        return {
            "day_number": self.day_number,
            "allowance": self.allowance,
            "spent": self.spent,
            "remaining": self.remaining,
            "locked": self.locked,
            "status": self.status,
        }


def _ordered_days(source: DaySource) -> Tuple[DayRecord, ...]:
    """Return the days sorted by number, checking they form 1..N."""

    days = tuple(source.days) if isinstance(source, Ledger) else tuple(source)
    ordered = tuple(sorted(days, key=lambda day: day.day_number))
    if [day.day_number for day in ordered] != list(range(1, len(ordered) + 1)):
        raise StructuralMismatchError("Day numbers must form a contiguous 1..N range")
    return ordered


def _result(day: DayRecord, allowance: float, spent: float) -> AllocationResult:
    return AllocationResult(
        day_number=day.day_number,
        allowance=allowance,
        spent=spent,
        remaining=allowance - spent,
        locked=day.locked,
    )


def rsr_penalties(source: DaySource, base_daily_target: float) -> Dict[int, float]:
    """Return the share of other days' overspend charged to each day."""

    days = _ordered_days(source)
    excess = {day.day_number: max(0.0, day.spent - base_daily_target) for day in days}
    total_excess = sum(excess.values(), 0.0)
    # A single-day period has nobody to share with.
    denominator = max(1, len(days) - 1)
    return {
        day_number: (total_excess - day_excess) / denominator
        for day_number, day_excess in excess.items()
    }


def allocate_rsr(source: DaySource, base_daily_target: float) -> List[AllocationResult]:
    """Retroactive Symmetric Redistribution.

    ``allowance(d) = base - (total_excess - excess(d)) / (N - 1)``. Allowances
    may go negative when the aggregate overspend is large; that is a valid
    result, not an error.
    """

    days = _ordered_days(source)
    penalties = rsr_penalties(days, base_daily_target)
    results = [
        _result(day, base_daily_target - penalties[day.day_number], day.spent)
        for day in days
    ]
    LOGGER.debug("RSR allocated %s days with base target %.2f", len(results), base_daily_target)
    return results


def allocate_scr(source: DaySource, base_daily_target: float) -> List[AllocationResult]:
    """Sequential Carry-Forward Rebalancing.

    Each day receives ``(total_budget - accumulated_spent) / remaining_days``
    computed from the days locked *before* it. A locked day then consumes its
    spend and one slot from the pool; an unlocked day leaves the pool alone,
    so every unlocked day after the last locked one sees the same allowance.
    """

    days = _ordered_days(source)
    total_budget = base_daily_target * len(days)
    accumulated_spent = 0.0
    processed_days = 0
    results: List[AllocationResult] = []
    for day in days:
        remaining_days = len(days) - processed_days
        remaining_budget = total_budget - accumulated_spent
        allowance = remaining_budget / remaining_days if remaining_days > 0 else 0.0
        spent = day.spent
        results.append(_result(day, allowance, spent))
        if day.locked:
            accumulated_spent += spent
            processed_days += 1
    LOGGER.debug(
        "SCR allocated %s days, %s locked, pool spent %.2f of %.2f",
        len(results),
        processed_days,
        accumulated_spent,
        total_budget,
    )
    return results


class AllocationPolicy(ABC):
    """Strategy interface for turning a ledger into per-day allowances."""

    policy_name: str = "generic"
    description: str = ""

    @abstractmethod
    def allocate(self, source: DaySource, base_daily_target: float) -> List[AllocationResult]:
        """Compute the full allocation for every day of ``source``."""

    def metadata(self) -> Dict[str, str]:
        """Return policy details for UI displays."""

        return {"policy": self.policy_name, "description": self.description}


class RetroactiveSymmetricPolicy(AllocationPolicy):
    """Overspend anywhere is absorbed equally by every other day."""

    policy_name = "rsr"
    description = (
        "Retroactive symmetric redistribution: each day's allowance is reduced by an "
        "equal share of every other day's overspend, regardless of date order."
    )

    def allocate(self, source: DaySource, base_daily_target: float) -> List[AllocationResult]:
        return allocate_rsr(source, base_daily_target)


class SequentialCarryForwardPolicy(AllocationPolicy):
    """Locked days draw down the period pool; the rest share what is left."""

    policy_name = "scr"
    description = (
        "Sequential carry-forward rebalancing: days with recorded spend consume the "
        "budget pool in date order and the remainder is split across unlocked days."
    )

    def allocate(self, source: DaySource, base_daily_target: float) -> List[AllocationResult]:
        return allocate_scr(source, base_daily_target)
