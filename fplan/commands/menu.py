"""Interactive menu for working with a ledger in one session."""

from datetime import date
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from fplan.commands.admin import load_ledger_from_file, load_settings, render_listing
from fplan.commands.report import show_month_report
from fplan.config import get_export_indent, get_report_settings
from fplan.dates import current_month, parse_calendar_date
from fplan.domain.bundle import bundle_to_json, export_bundle, import_bundle_text
from fplan.domain.ledger import Ledger
from fplan.domain.models import Category, Expense, Income, LedgerError, Subscription
from fplan.domain.money import format_currency
from fplan.domain.queries import (
    combined_listing,
    filter_by_date_range,
    filter_expenses_by_category,
    records_in_range,
    total_amount,
)
from fplan.domain.records import create_expense, create_income, create_subscription, parse_category
from fplan.logging_setup import get_logger

console = Console()
logger = get_logger(__name__)

CATEGORY_NAMES = ", ".join(c.value for c in Category)

HELP_TEXT = f"""[bold]fplan - personal finance planner[/bold]

[cyan]Incomes[/cyan]        date, source and a positive amount
[cyan]Expenses[/cyan]       date, category, positive amount and an optional note
[cyan]Subscriptions[/cyan]  name, monthly price, start date, active or not
[cyan]All records[/cyan]    everything together, newest first
[cyan]Filters[/cyan]        records between two dates, or expenses of one category
[cyan]Month report[/cyan]   totals, category shares, largest expense and daily average
[cyan]JSON[/cyan]           export every record as JSON, or replace everything from JSON

Dates:       YYYY-MM-DD (e.g. 2025-09-05)
Months:      YYYY-MM (e.g. 2025-09)
Amounts:     numbers greater than 0, "." as decimal separator (e.g. 12.50)
Categories:  {CATEGORY_NAMES} (any letter case)

Subscriptions count in full for every month from their start date while active.
Numbers in delete and toggle refer to the list as shown, newest first."""


def print_error(error: LedgerError) -> None:
    """Print an error returned by the core."""
    label = "Validation error" if error.kind.is_validation else "Error"
    console.print(f"[red]{label}: {error}[/red]")


def choose(title: str, options: list[tuple[str, str]]) -> str:
    """Show a numbered menu and return the chosen key (lowercase)."""
    console.rule(f"[bold]{title}[/bold]")
    for key, label in options:
        console.print(f"  [cyan]{key}[/cyan]) {label}")
    choice: str = typer.prompt("Choice", type=str)
    return choice.strip().lower()


def prompt_index(action: str) -> int:
    """Ask for a 1-based list number; 0 cancels."""
    index: int = typer.prompt(f"Number to {action} (0 to cancel)", type=int, default=0)
    return index


# Tables ------------------------------------------------------------------------


def render_incomes(incomes: list[Income], title: str = "Incomes") -> None:
    if not incomes:
        console.print("[yellow]No incomes[/yellow]")
        return
    table = Table(title=title)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Date", style="cyan")
    table.add_column("Source", style="white")
    table.add_column("Amount", justify="right", style="green")
    for idx, income in enumerate(incomes, 1):
        table.add_row(str(idx), income.date.isoformat(), income.source, format_currency(income.amount))
    console.print(table)


def render_expenses(expenses: list[Expense], title: str = "Expenses", show_total: bool = False) -> None:
    if not expenses:
        console.print("[yellow]No expenses[/yellow]")
        return
    table = Table(title=title)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Date", style="cyan")
    table.add_column("Category", style="magenta")
    table.add_column("Note", style="white")
    table.add_column("Amount", justify="right", style="red")
    for idx, expense in enumerate(expenses, 1):
        table.add_row(
            str(idx),
            expense.date.isoformat(),
            expense.category.value,
            expense.note or "[dim]-[/dim]",
            format_currency(expense.amount),
        )
    console.print(table)
    if show_total:
        console.print(f"\n[bold]Total:[/bold] {format_currency(total_amount(expenses))}")


def render_subscriptions(subscriptions: list[Subscription], title: str = "Subscriptions") -> None:
    if not subscriptions:
        console.print("[yellow]No subscriptions[/yellow]")
        return
    table = Table(title=title)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Name", style="white")
    table.add_column("Monthly", justify="right")
    table.add_column("Since", style="cyan")
    table.add_column("Status", justify="center")
    for idx, sub in enumerate(subscriptions, 1):
        status = "[green]active[/green]" if sub.is_active else "[dim]inactive[/dim]"
        table.add_row(str(idx), sub.name, format_currency(sub.monthly_price), sub.start_date.isoformat(), status)
    console.print(table)


# Incomes -----------------------------------------------------------------------


def add_income(ledger: Ledger) -> None:
    date_text = typer.prompt("Date (YYYY-MM-DD)")
    source = typer.prompt("Source")
    amount = typer.prompt("Amount")
    income, error = create_income(date_text, source, amount)
    if error:
        print_error(error)
        return
    ledger.add_income(income)
    console.print(f"[green]✓[/green] Income added: {income.date} {income.source} {format_currency(income.amount)}")


def delete_income(ledger: Ledger) -> None:
    render_incomes(ledger.incomes_by_date())
    index = prompt_index("delete")
    if index == 0:
        return
    removed, error = ledger.remove_income_at(index)
    if error:
        print_error(error)
        return
    console.print(f"[green]✓[/green] Deleted income: {removed.date} {removed.source}")


def incomes_menu(ledger: Ledger) -> None:
    while True:
        choice = choose("Incomes", [("1", "Add"), ("2", "Show"), ("3", "Delete"), ("0", "Back")])
        if choice == "1":
            add_income(ledger)
        elif choice == "2":
            render_incomes(ledger.incomes_by_date())
        elif choice == "3":
            delete_income(ledger)
        elif choice == "0":
            return
        else:
            console.print("[red]Unknown choice[/red]")


# Expenses ----------------------------------------------------------------------


def add_expense(ledger: Ledger) -> None:
    date_text = typer.prompt("Date (YYYY-MM-DD)")
    category = typer.prompt(f"Category ({CATEGORY_NAMES})")
    amount = typer.prompt("Amount")
    note = typer.prompt("Note (optional)", default="", show_default=False)
    expense, error = create_expense(date_text, category, amount, note)
    if error:
        print_error(error)
        return
    ledger.add_expense(expense)
    console.print(
        f"[green]✓[/green] Expense added: {expense.date} {expense.category.value} {format_currency(expense.amount)}"
    )


def delete_expense(ledger: Ledger) -> None:
    render_expenses(ledger.expenses_by_date())
    index = prompt_index("delete")
    if index == 0:
        return
    removed, error = ledger.remove_expense_at(index)
    if error:
        print_error(error)
        return
    console.print(f"[green]✓[/green] Deleted expense: {removed.date} {removed.category.value}")


def prompt_date_range() -> tuple[date, date] | None:
    """Ask for a from/to date pair; None if either is not a date."""
    start = parse_calendar_date(typer.prompt("From (YYYY-MM-DD)"))
    end = parse_calendar_date(typer.prompt("To (YYYY-MM-DD)"))
    if start is None or end is None:
        console.print("[red]Invalid dates[/red]")
        return None
    return start, end


def filter_expenses_by_date(ledger: Ledger) -> None:
    dates = prompt_date_range()
    if dates is None:
        return
    start, end = dates
    render_expenses(filter_by_date_range(ledger.expenses, start, end), f"Expenses {start} - {end}", show_total=True)


def filter_expenses_by_category_prompt(ledger: Ledger) -> None:
    category = parse_category(typer.prompt(f"Category ({CATEGORY_NAMES})"))
    if category is None:
        console.print("[red]Invalid category[/red]")
        return
    render_expenses(
        filter_expenses_by_category(ledger.expenses, category), f"Expenses: {category.value}", show_total=True
    )


def expenses_menu(ledger: Ledger) -> None:
    while True:
        choice = choose(
            "Expenses",
            [
                ("1", "Add"),
                ("2", "Show"),
                ("3", "Delete"),
                ("4", "Filter by date"),
                ("5", "Filter by category"),
                ("0", "Back"),
            ],
        )
        if choice == "1":
            add_expense(ledger)
        elif choice == "2":
            render_expenses(ledger.expenses_by_date())
        elif choice == "3":
            delete_expense(ledger)
        elif choice == "4":
            filter_expenses_by_date(ledger)
        elif choice == "5":
            filter_expenses_by_category_prompt(ledger)
        elif choice == "0":
            return
        else:
            console.print("[red]Unknown choice[/red]")


# Subscriptions -----------------------------------------------------------------


def add_subscription(ledger: Ledger) -> None:
    name = typer.prompt("Name")
    price = typer.prompt("Monthly price")
    start_text = typer.prompt("Start date (YYYY-MM-DD)")
    active = typer.confirm("Active?", default=True)
    subscription, error = create_subscription(name, price, start_text, active)
    if error:
        print_error(error)
        return
    ledger.add_subscription(subscription)
    console.print(
        f"[green]✓[/green] Subscription added: {subscription.name} {format_currency(subscription.monthly_price)}/month"
    )


def toggle_subscription(ledger: Ledger) -> None:
    render_subscriptions(ledger.subscriptions_by_date())
    index = prompt_index("activate/deactivate")
    if index == 0:
        return
    toggled, error = ledger.toggle_subscription_at(index)
    if error:
        print_error(error)
        return
    status = "active" if toggled.is_active else "inactive"
    console.print(f"[green]✓[/green] {toggled.name} is now {status}")


def delete_subscription(ledger: Ledger) -> None:
    render_subscriptions(ledger.subscriptions_by_date())
    index = prompt_index("delete")
    if index == 0:
        return
    removed, error = ledger.remove_subscription_at(index)
    if error:
        print_error(error)
        return
    console.print(f"[green]✓[/green] Deleted subscription: {removed.name}")


def subscriptions_menu(ledger: Ledger) -> None:
    while True:
        choice = choose(
            "Subscriptions",
            [("1", "Add"), ("2", "Show"), ("3", "Activate/deactivate"), ("4", "Delete"), ("0", "Back")],
        )
        if choice == "1":
            add_subscription(ledger)
        elif choice == "2":
            render_subscriptions(ledger.subscriptions_by_date())
        elif choice == "3":
            toggle_subscription(ledger)
        elif choice == "4":
            delete_subscription(ledger)
        elif choice == "0":
            return
        else:
            console.print("[red]Unknown choice[/red]")


# Filters, report, JSON ---------------------------------------------------------


def filter_all_by_date(ledger: Ledger) -> None:
    dates = prompt_date_range()
    if dates is None:
        return
    start, end = dates
    listing = records_in_range(ledger, start, end)
    render_incomes(listing.incomes, f"Incomes {start} - {end}")
    render_expenses(listing.expenses, f"Expenses {start} - {end}")
    console.print(
        f"\n[bold]Income:[/bold] {format_currency(listing.income_total)}"
        f"   [bold]Expenses:[/bold] {format_currency(listing.expense_total)}"
    )


def filters_menu(ledger: Ledger) -> None:
    while True:
        choice = choose("Filters", [("1", "By date range (all records)"), ("2", "Expenses by category"), ("0", "Back")])
        if choice == "1":
            filter_all_by_date(ledger)
        elif choice == "2":
            filter_expenses_by_category_prompt(ledger)
        elif choice == "0":
            return
        else:
            console.print("[red]Unknown choice[/red]")


def month_report(ledger: Ledger, settings: dict[str, Any]) -> None:
    month = typer.prompt("Month (YYYY-MM)", default=current_month())
    sort_by, histogram = get_report_settings(settings)
    show_month_report(ledger, month, sort_by, histogram)


def export_json(ledger: Ledger, settings: dict[str, Any]) -> None:
    text = bundle_to_json(export_bundle(ledger), indent=get_export_indent(settings))
    typer.echo(text)
    target = typer.prompt("Save to file (Enter to skip)", default="", show_default=False)
    if not target.strip():
        return
    path = Path(target.strip()).expanduser()
    try:
        path.write_text(text + "\n", encoding="utf-8")
    except OSError as e:
        console.print(f"[red]Could not write {path}: {e}[/red]")
        return
    console.print(f"[green]✓[/green] Saved to {path}")


def read_pasted_json() -> str:
    """Read lines until an empty line."""
    console.print("[dim]Paste JSON, then an empty line to finish[/dim]")
    lines = []
    while True:
        line: str = typer.prompt("", default="", show_default=False, prompt_suffix="")
        if not line.strip():
            break
        lines.append(line)
    return "\n".join(lines)


def import_json(ledger: Ledger) -> None:
    source = typer.prompt("File path (Enter to paste JSON)", default="", show_default=False)
    if source.strip():
        path = Path(source.strip()).expanduser()
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            console.print(f"[red]Could not read {path}: {e}[/red]")
            return
    else:
        text = read_pasted_json()

    if not ledger.is_empty and not typer.confirm("This replaces all current records. Continue?", default=True):
        console.print("[dim]Import cancelled[/dim]")
        return

    error = import_bundle_text(ledger, text)
    if error:
        print_error(error)
        console.print("[dim]Nothing was changed[/dim]")
        return
    counts = ledger.counts()
    console.print(
        f"[green]✓[/green] Imported {counts['incomes']} incomes, {counts['expenses']} expenses, "
        f"{counts['subscriptions']} subscriptions"
    )


def json_menu(ledger: Ledger, settings: dict[str, Any]) -> None:
    while True:
        choice = choose("Import/Export JSON", [("1", "Export JSON"), ("2", "Import JSON"), ("0", "Back")])
        if choice == "1":
            export_json(ledger, settings)
        elif choice == "2":
            import_json(ledger)
        elif choice == "0":
            return
        else:
            console.print("[red]Unknown choice[/red]")


def run_menu(ledger: Ledger, settings: dict[str, Any]) -> None:
    """Main menu loop; returns when the user quits."""
    while True:
        counts = ledger.counts()
        console.print(
            f"\n[dim]{counts['incomes']} incomes, {counts['expenses']} expenses, "
            f"{counts['subscriptions']} subscriptions[/dim]"
        )
        choice = choose(
            "Personal finance planner",
            [
                ("1", "Incomes"),
                ("2", "Expenses"),
                ("3", "Subscriptions"),
                ("4", "All records"),
                ("5", "Filters"),
                ("6", "Month report"),
                ("7", "Import/Export JSON"),
                ("h", "Help"),
                ("0", "Quit"),
            ],
        )
        if choice == "1":
            incomes_menu(ledger)
        elif choice == "2":
            expenses_menu(ledger)
        elif choice == "3":
            subscriptions_menu(ledger)
        elif choice == "4":
            rows = combined_listing(ledger)
            render_listing(rows, f"All records ({len(rows)})")
        elif choice == "5":
            filters_menu(ledger)
        elif choice == "6":
            month_report(ledger, settings)
        elif choice == "7":
            json_menu(ledger, settings)
        elif choice == "h":
            console.print(HELP_TEXT)
        elif choice == "0":
            console.print("[dim]Bye[/dim]")
            return
        else:
            console.print("[red]Unknown choice[/red]")


def menu_command(bundle_path: Path | None = None) -> None:
    """Start an interactive session, optionally preloaded from a bundle document."""
    settings = load_settings()
    ledger = load_ledger_from_file(bundle_path) if bundle_path else Ledger()
    logger.debug("Menu session started with %s", ledger.counts())

    try:
        run_menu(ledger, settings)
    except typer.Abort:
        # End of input or Ctrl-C: records only live for the session.
        console.print("\n[dim]Bye[/dim]")
