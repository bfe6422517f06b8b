"""Mini README: Exception taxonomy for the budget engine.

Structure:
    * BudgetError - base class, a ``ValueError`` so callers can catch broadly.
    * InvalidInputError - bad amounts, day numbers, targets or periods.
    * StructuralMismatchError - a ledger payload that does not fit its period.

Division-by-zero style degenerate cases have no exception: the allocators
guard them inline and return zero.
"""

from __future__ import annotations


class BudgetError(ValueError):
    """Base class for every error raised by the budget engine."""


class InvalidInputError(BudgetError):
    """User supplied data was rejected; the ledger was left unchanged."""


class StructuralMismatchError(BudgetError):
    """A ledger's records do not match the calendar shape of its period."""
