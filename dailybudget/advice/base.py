"""Mini README: Contracts for AI advice and receipt scanning collaborators.

Structure:
    * LockedDaySnapshot / AdviceSnapshot - read-only view handed to advisors.
    * SpendingAdvice - free-text analysis plus a short list of tips.
    * ReceiptScan - the amount, merchant and category read from a receipt image.
    * AdviceProvider - abstract interface implemented by advice services.
    * request_advice - call a provider, falling back when it fails.
    * record_receipt - feed a scan back through the normal expense path.

Advisors only ever see a snapshot of the locked days and the period config.
Whatever they return reaches the ledger exclusively via ``add_expense``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from ..budget.errors import InvalidInputError
from ..budget.ledger import DEFAULT_CATEGORY, Ledger, PeriodConfig, coerce_category
from ..budget.periods import add_expense
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

MIN_LOCKED_DAYS_FOR_ADVICE = 3
SCANNED_RECEIPT_LABEL = "Scanned receipt"

FALLBACK_ANALYSIS = (
    "Smart analysis is temporarily unavailable. Please check your connection "
    "or the advice service configuration."
)
FALLBACK_TIPS = (
    "Record every expense on the day it happens so the remaining days rebalance early.",
    "Compare today's allowance with the base daily target before large purchases.",
    "Plan fixed bills in advance so they do not surprise the rest of the month.",
)


@dataclass(frozen=True, slots=True)
class LockedDaySnapshot:
    """A settled day as seen by an advisor."""

    day_number: int
    spent: float
    labels: Tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class AdviceSnapshot:
    """Read-only period view for advice services."""

    config: PeriodConfig
    locked_days: Tuple[LockedDaySnapshot, ...]

    @classmethod
    def from_ledger(cls, ledger: Ledger, config: PeriodConfig) -> "AdviceSnapshot":
        if (ledger.year, ledger.month) != (config.year, config.month):
            raise InvalidInputError(f"Config {config.key} does not match ledger {ledger.key}")
        return cls(
            config=config,
            locked_days=tuple(
                LockedDaySnapshot(
                    day_number=day.day_number,
                    spent=day.spent,
                    labels=tuple(expense.label for expense in day.expenses if expense.label),
                )
                for day in ledger.locked_days()
            ),
        )

    @property
    def total_spent(self) -> float:
        return sum((day.spent for day in self.locked_days), 0.0)


@dataclass(slots=True)
class SpendingAdvice:
    """Advice returned to the user."""

    analysis: str
    tips: List[str] = field(default_factory=list)
    fallback: bool = False

    def as_dict(self) -> Dict[str, object]:
        return {"analysis": self.analysis, "tips": list(self.tips), "fallback": self.fallback}


@dataclass(frozen=True, slots=True)
class ReceiptScan:
    """Result of scanning a receipt image."""

    amount: float
    merchant: str = ""
    category: str = DEFAULT_CATEGORY


def fallback_advice() -> SpendingAdvice:
    return SpendingAdvice(analysis=FALLBACK_ANALYSIS, tips=list(FALLBACK_TIPS), fallback=True)


class AdviceProvider(ABC):
    """Base interface for advice and OCR integrations."""

    provider_name: str = "generic"

    @abstractmethod
    def advise(self, snapshot: AdviceSnapshot) -> SpendingAdvice:
        """Produce advice for the snapshot."""

    @abstractmethod
    def scan_receipt(self, image: bytes, mime_type: str = "image/jpeg") -> ReceiptScan:
        """Extract the total amount from a receipt image."""


def request_advice(provider: AdviceProvider, snapshot: AdviceSnapshot) -> SpendingAdvice:
    """Ask ``provider`` for advice; provider failures yield the fallback advice."""

    if len(snapshot.locked_days) < MIN_LOCKED_DAYS_FOR_ADVICE:
        raise InvalidInputError(
            f"Advice needs at least {MIN_LOCKED_DAYS_FOR_ADVICE} days with recorded spend"
        )
    try:
        advice = provider.advise(snapshot)
    except Exception:
        LOGGER.exception("Advice provider '%s' failed; using fallback advice", provider.provider_name)
        return fallback_advice()
    LOGGER.info(
        "Advice provider '%s' returned %s tips for %s",
        provider.provider_name,
        len(advice.tips),
        snapshot.config.key,
    )
    return advice


def record_receipt(ledger: Ledger, day_number: int, scan: ReceiptScan) -> Ledger:
    """Record a scanned receipt as an ordinary expense.

    A category the scanner made up is filed under ``DEFAULT_CATEGORY``.
    """

    label = scan.merchant.strip() or SCANNED_RECEIPT_LABEL
    category = coerce_category(scan.category, strict=False)
    return add_expense(ledger, day_number, scan.amount, label, category=category)
