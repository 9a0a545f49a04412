"""Admin commands for init, loading bundle documents and listing records."""

import sys
import tomllib
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.table import Table

from fplan.config import create_default_config, get_config_path, load_config
from fplan.domain.bundle import import_bundle_text
from fplan.domain.ledger import Ledger
from fplan.domain.money import format_currency
from fplan.domain.queries import ListingRow, combined_listing
from fplan.logging_setup import get_logger

console = Console()
logger = get_logger(__name__)

KIND_STYLES = {"Income": "green", "Expense": "red", "Subscription": "magenta"}


def load_settings() -> dict[str, Any]:
    """Load the config file, exiting with a message if it is broken."""
    config_path = get_config_path()
    try:
        return load_config(config_path)
    except tomllib.TOMLDecodeError as e:
        console.print(f"[red]Config error in {config_path}: {e}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Could not read config {config_path}: {e}[/red]", style="bold")
        sys.exit(1)


def load_ledger_from_file(bundle_path: Path) -> Ledger:
    """Create a ledger filled from a bundle document on disk.

    Exits with status 1 if the file can't be read or the document is rejected.
    """
    ledger = Ledger()
    path = bundle_path.expanduser()
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        console.print(f"[red]Could not read {path}: {e}[/red]", style="bold")
        sys.exit(1)

    error = import_bundle_text(ledger, text)
    if error:
        console.print(f"[red]Import failed: {error}[/red]", style="bold")
        sys.exit(1)

    logger.debug("Loaded %s from %s", ledger.counts(), path)
    return ledger


def render_listing(rows: list[ListingRow], title: str) -> None:
    """Print the combined listing as a table."""
    if not rows:
        console.print("[yellow]No records found[/yellow]")
        return

    table = Table(title=title)
    table.add_column("Date", style="cyan")
    table.add_column("Type")
    table.add_column("Details", style="white")
    table.add_column("Amount", justify="right")

    for row in rows:
        style = KIND_STYLES.get(row.kind, "white")
        table.add_row(row.date.isoformat(), f"[{style}]{row.kind}[/{style}]", row.text, format_currency(row.amount))

    console.print(table)


def list_command(bundle_path: Path) -> None:
    """List every record of a bundle document, newest first."""
    ledger = load_ledger_from_file(bundle_path)
    rows = combined_listing(ledger)
    render_listing(rows, f"All records ({len(rows)})")


def init_command(force: bool = False) -> None:
    """Write the default configuration file."""
    config_path = get_config_path()

    if config_path.exists() and not force:
        console.print("[red]Initialization failed:[/red]", style="bold")
        console.print(f"  Config already exists: {config_path}")
        console.print("\n[yellow]Use 'fplan init --force' to overwrite[/yellow]")
        sys.exit(1)

    try:
        console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
        create_default_config(config_path)
        console.print("[green]✓[/green] Config file created (permissions: 600)")
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)
