"""Pure functions for the monthly report.

This module contains the functional core for reporting:
- No I/O operations (no console, no files)
- No side effects
- Pure data transformations
- Easy to test

All monetary amounts are Decimal (Money type).
"""

from dataclasses import dataclass
from datetime import date

from fplan.dates import format_month_display, month_bounds, parse_period
from fplan.domain.ledger import Ledger
from fplan.domain.models import Category, ErrorKind, Expense, Income, LedgerError, Money, Subscription
from fplan.domain.money import percent, safe_divide, sum_amounts


@dataclass(frozen=True)
class CategoryBreakdown:
    """Immutable spending total for one category."""

    category: Category
    amount: Money
    percentage: str


@dataclass(frozen=True)
class MonthReport:
    """Immutable monthly report."""

    year: int
    month: int
    start: date
    end: date
    label: str
    incomes: list[Income]
    expenses: list[Expense]
    subscriptions: list[Subscription]
    income_total: Money
    expense_total: Money
    subscription_total: Money
    net: Money
    categories: list[CategoryBreakdown]
    largest_expense: Expense | None
    days_in_month: int
    average_daily: Money


def active_subscriptions(
    subscriptions: list[Subscription] | tuple[Subscription, ...],
    month_end: date,
) -> list[Subscription]:
    """Subscriptions charged for a month ending on month_end.

    A subscription counts for the whole month once it has started,
    without pro-rating.
    """
    return [s for s in subscriptions if s.is_active and s.start_date <= month_end]


def calculate_category_breakdown(expenses: list[Expense], expense_total: Money) -> list[CategoryBreakdown]:
    """Group expenses by category, in order of first appearance.

    Args:
        expenses: Expenses of the period.
        expense_total: Sum of all those expenses.

    Returns:
        CategoryBreakdown per category that has spending.
    """
    totals: dict[Category, Money] = {}
    for expense in expenses:
        totals[expense.category] = Money(totals.get(expense.category, Money(0)) + expense.amount)

    return [
        CategoryBreakdown(category=category, amount=amount, percentage=percent(amount, expense_total))
        for category, amount in totals.items()
    ]


def find_largest_expense(expenses: list[Expense]) -> Expense | None:
    """Return the expense with the highest amount (first one wins a tie)."""
    if not expenses:
        return None
    return max(expenses, key=lambda e: e.amount)


def sort_categories(categories: list[CategoryBreakdown], sort_by: str = "value") -> list[CategoryBreakdown]:
    """Sort category totals by value (largest first) or alphabetically.

    Args:
        categories: Category totals.
        sort_by: Sort method - "value" or "alpha".

    Returns:
        New sorted list.
    """
    if sort_by == "alpha":
        return sorted(categories, key=lambda c: c.category.value)
    return sorted(categories, key=lambda c: c.amount, reverse=True)


def generate_month_report(ledger: Ledger, year: int, month: int) -> tuple[MonthReport | None, LedgerError | None]:
    """Build the financial summary for one calendar month.

    Args:
        ledger: Ledger to report on.
        year: Four digit year.
        month: Month number 1-12.

    Returns:
        Tuple of (report, error). Error kind is INVALID_PERIOD for a bad month.
    """
    try:
        month_start, month_end = month_bounds(year, month)
    except ValueError:
        return None, LedgerError(ErrorKind.INVALID_PERIOD, f"Invalid month {year}-{month:02d}. Example: 2025-09")

    # Collection order is kept so the largest-expense tie-break is deterministic.
    incomes = [i for i in ledger.incomes if month_start <= i.date <= month_end]
    expenses = [e for e in ledger.expenses if month_start <= e.date <= month_end]
    subscriptions = active_subscriptions(ledger.subscriptions, month_end)

    income_total = sum_amounts(i.amount for i in incomes)
    expense_total = sum_amounts(e.amount for e in expenses)
    subscription_total = sum_amounts(s.monthly_price for s in subscriptions)
    net = Money(income_total - expense_total - subscription_total)

    days_in_month = (month_end - month_start).days + 1

    return (
        MonthReport(
            year=year,
            month=month,
            start=month_start,
            end=month_end,
            label=format_month_display(year, month),
            incomes=incomes,
            expenses=expenses,
            subscriptions=subscriptions,
            income_total=income_total,
            expense_total=expense_total,
            subscription_total=subscription_total,
            net=net,
            categories=calculate_category_breakdown(expenses, expense_total),
            largest_expense=find_largest_expense(expenses),
            days_in_month=days_in_month,
            average_daily=Money(safe_divide(expense_total, days_in_month)),
        ),
        None,
    )


def generate_report_for_period(ledger: Ledger, period: str | None) -> tuple[MonthReport | None, LedgerError | None]:
    """Build the monthly report for a YYYY-MM selector."""
    try:
        year, month = parse_period(period)
    except ValueError:
        return None, LedgerError(ErrorKind.INVALID_PERIOD, f"Unknown format '{period}'. Example: 2025-09")
    return generate_month_report(ledger, year, month)


def calculate_histogram_bar_length(
    amount: Money,
    max_amount: Money,
    bar_width: int,
) -> int:
    """Calculate histogram bar length.

    Args:
        amount: Amount to display.
        max_amount: Maximum amount in dataset.
        bar_width: Maximum bar width in characters.

    Returns:
        Bar length in characters.
    """
    if max_amount <= 0:
        return 0
    return int((abs(amount) / max_amount) * bar_width)
