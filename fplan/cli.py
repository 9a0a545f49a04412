"""CLI entry point for fplan."""

import os
from pathlib import Path

import typer

from fplan.commands.admin import init_command, list_command, load_settings
from fplan.commands.menu import menu_command
from fplan.commands.report import report_command
from fplan.logging_setup import LOG_LEVEL_ENV_VAR, configure_logging

app = typer.Typer(
    name="fplan",
    help="Personal finance planner - incomes, expenses, subscriptions and monthly reports",
    add_completion=False,
)


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug messages to stderr"),
) -> None:
    """Personal finance planner - incomes, expenses, subscriptions and monthly reports."""
    if verbose:
        configure_logging("DEBUG")
    elif os.getenv(LOG_LEVEL_ENV_VAR) or ctx.invoked_subcommand == "init":
        # init must run even when the existing config is unreadable.
        configure_logging()
    else:
        configure_logging(load_settings().get("log_level"))


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing config"),
) -> None:
    """Write the default configuration file."""
    init_command(force)


@app.command()
def menu(
    bundle: Path = typer.Option(None, "--bundle", "-b", help="JSON bundle to load at start"),
) -> None:
    """Start the interactive menu. Records live until you quit."""
    menu_command(bundle)


@app.command(name="list")
def list_records(
    bundle: Path = typer.Option(..., "--bundle", "-b", help="JSON bundle to read"),
) -> None:
    """List every record of a bundle, newest first."""
    list_command(bundle)


@app.command(name="report")
def report(
    bundle: Path = typer.Option(..., "--bundle", "-b", help="JSON bundle to read"),
    month: str = typer.Option(None, "--month", help="Specific month (YYYY-MM, default: current month)"),
    sort_by: str = typer.Option(None, "--sort-by", help="Sort categories by 'value' or 'alpha'"),
    histogram: bool = typer.Option(True, "--histogram/--no-histogram", help="Show histogram of your spending"),
) -> None:
    """Show income, spending and subscriptions for a month."""
    report_command(bundle, month, sort_by, histogram)


if __name__ == "__main__":
    app()
