"""Domain type definitions for fplan.

These types describe everything the ledger holds:
- Money: Exact decimal amount in euros
- Month: Month in YYYY-MM format
- Category: Closed set of expense categories
- Income, Expense, Subscription: Immutable ledger records
- ErrorKind, LedgerError: Error values returned by the functional core
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import NewType

# Money amounts are exact decimals to avoid floating point drift
Money = NewType("Money", Decimal)

ZERO = Money(Decimal("0"))

# Month is always in YYYY-MM format (e.g., "2025-09")
Month = NewType("Month", str)


class Category(str, Enum):
    """Expense category. The value is the canonical (PascalCase) name."""

    FOOD = "Food"
    TRANSPORT = "Transport"
    FUN = "Fun"
    SCHOOL = "School"
    OTHER = "Other"

    def __str__(self) -> str:
        return self.value


class ErrorKind(Enum):
    """Kinds of failure the core can report."""

    INVALID_DATE = "invalid_date"
    INVALID_AMOUNT = "invalid_amount"
    EMPTY_FIELD = "empty_field"
    INVALID_CATEGORY = "invalid_category"
    INVALID_PERIOD = "invalid_period"
    STRUCTURAL_PARSE = "structural_parse"
    INDEX_OUT_OF_RANGE = "index_out_of_range"

    @property
    def is_validation(self) -> bool:
        """Whether this kind rejects user input (always recoverable)."""
        return self in _VALIDATION_KINDS


_VALIDATION_KINDS = frozenset(
    {
        ErrorKind.INVALID_DATE,
        ErrorKind.INVALID_AMOUNT,
        ErrorKind.EMPTY_FIELD,
        ErrorKind.INVALID_CATEGORY,
        ErrorKind.INVALID_PERIOD,
    }
)


@dataclass(frozen=True)
class LedgerError:
    """Immutable error value with a kind and a user-facing message."""

    kind: ErrorKind
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class Income:
    """Immutable income record."""

    date: date
    source: str
    amount: Money


@dataclass(frozen=True)
class Expense:
    """Immutable expense record."""

    date: date
    category: Category
    amount: Money
    note: str = ""


@dataclass(frozen=True)
class Subscription:
    """Immutable recurring subscription."""

    name: str
    monthly_price: Money
    start_date: date
    is_active: bool = True
