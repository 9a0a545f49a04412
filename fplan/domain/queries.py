"""Pure functions for filtering and listing ledger records.

All results are ordered by date, newest first.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from typing import TypeVar

from fplan.domain.ledger import Ledger
from fplan.domain.models import Category, Expense, Income, Money, Subscription
from fplan.domain.money import sum_amounts

R = TypeVar("R", Income, Expense, Subscription)


@dataclass(frozen=True)
class ListingRow:
    """One line of the combined "all records" view."""

    date: date
    kind: str
    text: str
    amount: Money


@dataclass(frozen=True)
class RangeListing:
    """Incomes and expenses that fall inside a date range."""

    start: date
    end: date
    incomes: list[Income]
    expenses: list[Expense]
    income_total: Money
    expense_total: Money


def record_date(record: Income | Expense | Subscription) -> date:
    """Date a record is filed under (start date for subscriptions)."""
    if isinstance(record, Subscription):
        return record.start_date
    return record.date


def record_amount(record: Income | Expense | Subscription) -> Money:
    """Amount of a record (monthly price for subscriptions)."""
    if isinstance(record, Subscription):
        return record.monthly_price
    return record.amount


def sort_by_date(records: Iterable[R]) -> list[R]:
    """Sort newest first; records sharing a date keep their order."""
    return sorted(records, key=record_date, reverse=True)


def filter_by_date_range(records: Iterable[R], start: date, end: date) -> list[R]:
    """Select records dated between start and end, both inclusive.

    Args:
        records: Any ledger records.
        start: First date to include.
        end: Last date to include.

    Returns:
        Matching records, newest first. Empty when start is after end.
    """
    if start > end:
        return []
    return sort_by_date(r for r in records if start <= record_date(r) <= end)


def filter_expenses_by_category(expenses: Iterable[Expense], category: Category) -> list[Expense]:
    """Select expenses in exactly one category, newest first."""
    return sort_by_date(e for e in expenses if e.category == category)


def total_amount(records: Iterable[Income | Expense | Subscription]) -> Money:
    """Sum of the amounts of the given records."""
    return sum_amounts(record_amount(r) for r in records)


def describe_record(record: Income | Expense | Subscription) -> str:
    """Short display text for a record."""
    if isinstance(record, Income):
        return record.source
    if isinstance(record, Expense):
        return f"{record.category} {record.note}".rstrip()
    status = "active" if record.is_active else "inactive"
    return f"{record.name} ({status})"


def combined_listing(ledger: Ledger) -> list[ListingRow]:
    """Merge incomes, expenses and subscriptions into one newest-first list.

    Args:
        ledger: Ledger to read.

    Returns:
        ListingRow per record; subscriptions are filed under their start date.
    """
    rows: list[ListingRow] = []
    rows.extend(ListingRow(i.date, "Income", describe_record(i), i.amount) for i in ledger.incomes)
    rows.extend(ListingRow(e.date, "Expense", describe_record(e), e.amount) for e in ledger.expenses)
    rows.extend(
        ListingRow(s.start_date, "Subscription", describe_record(s), s.monthly_price) for s in ledger.subscriptions
    )
    return sorted(rows, key=lambda row: row.date, reverse=True)


def records_in_range(ledger: Ledger, start: date, end: date) -> RangeListing:
    """Collect incomes and expenses dated within [start, end] with their totals."""
    incomes = filter_by_date_range(ledger.incomes, start, end)
    expenses = filter_by_date_range(ledger.expenses, start, end)
    return RangeListing(
        start=start,
        end=end,
        incomes=incomes,
        expenses=expenses,
        income_total=total_amount(incomes),
        expense_total=total_amount(expenses),
    )
