"""Mini README: Advice and receipt scanning collaborators.

The engine exposes a read-only snapshot of settled days to advisors and
accepts scanned receipts only as ordinary expenses. ``base`` holds the
contracts, ``prompts`` the text request/response formatting, ``generative``
the Gemini-backed provider and ``offline`` a rule-based advisor that works
without one.
"""

from .base import (
    MIN_LOCKED_DAYS_FOR_ADVICE,
    AdviceProvider,
    AdviceSnapshot,
    LockedDaySnapshot,
    ReceiptScan,
    SpendingAdvice,
    fallback_advice,
    record_receipt,
    request_advice,
)
from .generative import GenerativeAdviceProvider, build_advice_provider
from .offline import OfflineAdviceProvider
from .prompts import build_advice_prompt, parse_advice_response, parse_receipt_response

__all__ = [
    "AdviceProvider",
    "AdviceSnapshot",
    "GenerativeAdviceProvider",
    "LockedDaySnapshot",
    "MIN_LOCKED_DAYS_FOR_ADVICE",
    "OfflineAdviceProvider",
    "ReceiptScan",
    "SpendingAdvice",
    "build_advice_prompt",
    "build_advice_provider",
    "fallback_advice",
    "parse_advice_response",
    "parse_receipt_response",
    "record_receipt",
    "request_advice",
]
