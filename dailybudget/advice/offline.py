"""Mini README: Rule-based advisor used when no AI service is configured.

``OfflineAdviceProvider`` looks at the snapshot's average daily spend, its
most expensive day and the number of days over target, and writes advice
from those numbers. It cannot read receipts.
"""

from __future__ import annotations

from typing import List

from .base import AdviceProvider, AdviceSnapshot, ReceiptScan, SpendingAdvice


class OfflineAdviceProvider(AdviceProvider):
    """Deterministic advice computed from the snapshot alone."""

    provider_name = "offline"

    def advise(self, snapshot: AdviceSnapshot) -> SpendingAdvice:
        target = snapshot.config.base_daily_target
        days = snapshot.locked_days
        average = snapshot.total_spent / len(days) if days else 0.0
        over_target = [day for day in days if day.spent > target]
        analysis = (
            f"You recorded spend on {len(days)} days, averaging {average:.2f} "
            f"against a daily target of {target:.2f}."
        )
        tips: List[str] = []
        if over_target:
            worst = max(over_target, key=lambda day: day.spent)
            analysis += (
                f" {len(over_target)} days went over target; day {worst.day_number} "
                f"was the highest at {worst.spent:.2f}."
            )
            tips.append(f"Look at what drove day {worst.day_number} and plan that cost ahead next time.")
        else:
            analysis += " Every recorded day stayed within target."
        if average > target:
            tips.append(f"Trim about {average - target:.2f} per day to get back on track.")
        else:
            tips.append(f"Keeping the current pace leaves about {target - average:.2f} per day spare.")
        tips.append("Log expenses as they happen so the remaining days rebalance immediately.")
        return SpendingAdvice(analysis=analysis, tips=tips[:3])

    def scan_receipt(self, image: bytes, mime_type: str = "image/jpeg") -> ReceiptScan:
        raise NotImplementedError("Receipt scanning needs an AI-backed advice provider")
