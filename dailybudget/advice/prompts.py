"""Mini README: Prompt formatting for generative advice services.

``build_advice_prompt`` renders an ``AdviceSnapshot`` into the plain-text
request sent to a text generation service, asking for a JSON object with
``analysis`` and ``tips``. ``parse_advice_response`` turns such a reply back
into ``SpendingAdvice``. ``RECEIPT_PROMPT`` and ``parse_receipt_response`` do
the same for receipt images and ``ReceiptScan``.
"""

from __future__ import annotations

import json

from ..budget.errors import BudgetError
from ..budget.ledger import CATEGORIES, coerce_amount, coerce_category
from ..logging_utils import get_logger
from .base import AdviceSnapshot, ReceiptScan, SpendingAdvice

LOGGER = get_logger(__name__)

HISTORY_LIMIT = 15

RECEIPT_PROMPT = (
    "Read this receipt and reply with a JSON object containing:\n"
    '"amount": the total paid as a number,\n'
    '"merchant": the shop or business name,\n'
    f'"category": one of {", ".join(CATEGORIES)}.'
)


def build_advice_prompt(snapshot: AdviceSnapshot, limit: int = HISTORY_LIMIT) -> str:
    """Render the most recent ``limit`` locked days into an advice request."""

    config = snapshot.config
    recent = sorted(snapshot.locked_days, key=lambda day: day.day_number, reverse=True)[:limit]
    history = "\n".join(
        f"- Day {day.day_number}: spent {day.spent:.2f}"
        + (f" ({', '.join(day.labels)})" if day.labels else "")
        for day in recent
    )
    return (
        f"Review my daily spending for {config.key}.\n"
        f"Base daily target: {config.base_daily_target:.2f}. "
        f"Monthly budget: {config.total_budget:.2f} over {config.days_in_period} days. "
        f"Spent so far: {snapshot.total_spent:.2f} across {len(snapshot.locked_days)} days.\n"
        f"{history}\n\n"
        "Reply with a JSON object containing:\n"
        '1. "analysis": a short professional summary of my spending against the target.\n'
        '2. "tips": an array of 3 practical tips to stay within budget.'
    )


def parse_advice_response(text: str) -> SpendingAdvice:
    """Parse a JSON advice reply; raises ``ValueError`` for unusable replies."""

    try:
        payload = json.loads((text or "{}").strip())
    except json.JSONDecodeError as error:
        raise ValueError("Advice reply is not valid JSON") from error
    if not isinstance(payload, dict) or not isinstance(payload.get("analysis"), str):
        raise ValueError("Advice reply must contain an 'analysis' string")
    tips = payload.get("tips") or []
    if not isinstance(tips, list):
        raise ValueError("Advice reply 'tips' must be a list")
    return SpendingAdvice(analysis=payload["analysis"], tips=[str(tip) for tip in tips])


def parse_receipt_response(text: str) -> ReceiptScan:
    """Parse a JSON receipt reply; raises ``ValueError`` when no usable total is present."""

    try:
        payload = json.loads((text or "{}").strip())
    except json.JSONDecodeError as error:
        raise ValueError("Receipt reply is not valid JSON") from error
    if not isinstance(payload, dict) or "amount" not in payload:
        raise ValueError("Receipt reply must contain an 'amount'")
    try:
        amount = coerce_amount(payload["amount"])
    except BudgetError as error:
        raise ValueError(f"Receipt reply has an unusable amount: {error}") from error
    merchant = payload.get("merchant")
    return ReceiptScan(
        amount=amount,
        merchant=merchant.strip() if isinstance(merchant, str) else "",
        category=coerce_category(payload.get("category"), strict=False),
    )
