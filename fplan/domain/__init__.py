"""Domain models and logic for fplan.

This package contains the functional core:
- Pure functions with no I/O
- Errors returned as values, never raised at the caller
- Easy to test
- The Ledger is the only mutable object and is passed in explicitly
"""

from fplan.domain.models import Category, ErrorKind, Expense, Income, LedgerError, Money, Month, Subscription

__all__ = ["Category", "ErrorKind", "Expense", "Income", "LedgerError", "Money", "Month", "Subscription"]
