"""Report command for the monthly financial summary."""

import sys
from pathlib import Path

from rich.console import Console

from fplan.commands.admin import load_ledger_from_file, load_settings
from fplan.config import get_report_settings
from fplan.dates import current_month
from fplan.domain.ledger import Ledger
from fplan.domain.models import Money
from fplan.domain.money import format_currency
from fplan.domain.report import (
    CategoryBreakdown,
    MonthReport,
    calculate_histogram_bar_length,
    generate_report_for_period,
    sort_categories,
)

console = Console()


def render_category_line(
    breakdown: CategoryBreakdown, histogram: bool, max_amount: Money | None, bar_width: int
) -> None:
    """Render single expense category line.

    Args:
        breakdown: Category total with its share of spending.
        histogram: Whether to show histogram bars.
        max_amount: Maximum amount for histogram scaling.
        bar_width: Width of histogram bar in characters.
    """
    amount_display = format_currency(breakdown.amount)
    share = f"({breakdown.percentage})"

    if histogram and max_amount:
        bar_length = calculate_histogram_bar_length(breakdown.amount, max_amount, bar_width)
        bar = "█" * bar_length
        console.print(f"  {breakdown.category.value:12} {amount_display:>12} {share:>8} {bar}")
    else:
        console.print(f"  {breakdown.category.value}: {amount_display} {share}")


def render_month_report(report: MonthReport, sort_by: str = "value", histogram: bool = True) -> None:
    """Print a month report.

    Args:
        report: Report produced by the functional core.
        sort_by: Category order - "value" or "alpha".
        histogram: Whether to draw bars next to categories.
    """
    console.print(f"[bold cyan]{report.label}[/bold cyan] [dim]({report.start} - {report.end})[/dim]\n")

    console.print(f"  [bold]Income:[/bold]        [green]{format_currency(report.income_total)}[/green]")
    console.print(f"  [bold]Expenses:[/bold]      [red]{format_currency(report.expense_total)}[/red]")
    console.print(
        f"  [bold]Subscriptions:[/bold] [red]{format_currency(report.subscription_total)}[/red]"
        f" [dim]({len(report.subscriptions)} active)[/dim]"
    )
    net_style = "green" if report.net >= 0 else "red"
    console.print(f"  [bold]Net:[/bold]           [{net_style}]{format_currency(report.net)}[/{net_style}]\n")

    if report.categories:
        console.print("[bold red]Expenses by category:[/bold red]\n")
        categories = sort_categories(report.categories, sort_by)
        max_amount = Money(max(c.amount for c in categories)) if histogram else None
        for breakdown in categories:
            render_category_line(breakdown, histogram, max_amount, bar_width=30)
        console.print()

    largest = report.largest_expense
    if largest:
        note = f" - {largest.note}" if largest.note else ""
        console.print(
            f"[bold]Largest expense:[/bold] {largest.date} {largest.category.value}{note} {format_currency(largest.amount)}"
        )
    else:
        console.print("[dim]No expenses[/dim]")

    console.print(
        f"[bold]Average daily expense:[/bold] {format_currency(report.average_daily)}"
        f" [dim]({report.days_in_month} days)[/dim]"
    )


def show_month_report(ledger: Ledger, month: str, sort_by: str = "value", histogram: bool = True) -> bool:
    """Generate and print the report for a YYYY-MM month.

    Returns:
        False if the month was rejected.
    """
    report, error = generate_report_for_period(ledger, month)
    if error:
        console.print(f"[red]{error}[/red]")
        return False
    render_month_report(report, sort_by, histogram)
    return True


def report_command(
    bundle_path: Path,
    month: str | None = None,
    sort_by: str | None = None,
    histogram: bool = True,
) -> None:
    """Show the monthly report for a bundle document."""
    config = load_settings()
    default_sort, _ = get_report_settings(config)

    ledger = load_ledger_from_file(bundle_path)

    ok = show_month_report(
        ledger,
        month or current_month(),
        sort_by or default_sort,
        histogram,
    )
    if not ok:
        sys.exit(1)
