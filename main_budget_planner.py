"""Mini README: Entry point CLI for the daily budget planner.

This script exposes a Typer CLI that starts the FastAPI interface and offers
quick terminal access to a period: ``show`` prints every day's allowance and
the month summary, ``add`` records an expense in the JSON ledger store.
Settings come from ``DAILYBUDGET_*`` environment variables when available.
"""

from __future__ import annotations

from typing import Optional

import typer
import uvicorn

from dailybudget.budget import DEFAULT_CATEGORY, InvalidInputError, PeriodManager
from dailybudget.configuration import get_settings
from dailybudget.logging_utils import configure_root_logger
from dailybudget.storage import JsonFileLedgerStore

cli = typer.Typer(help="Plan daily spending against a monthly budget.")


def _manager() -> PeriodManager:
    return PeriodManager(JsonFileLedgerStore())


@cli.command()
def run(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the FastAPI application using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    configure_root_logger()

    # Browsers cannot open the 0.0.0.0 sentinel, so point them at localhost.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting budget planner on {effective_host}:{effective_port}.\n"
        f"API docs at http://{browser_host}:{effective_port}/docs"
    )
    uvicorn.run(
        "dailybudget.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


@cli.command()
def show(
    year: int = typer.Argument(..., help="Calendar year of the period."),
    month: int = typer.Argument(..., help="Calendar month of the period (1-12)."),
    policy: Optional[str] = typer.Option(None, help="Allocation policy (rsr or scr)."),
    target: Optional[float] = typer.Option(None, help="Base daily target."),
) -> None:
    """Print each day's allowance and the period summary."""

    settings = get_settings()
    base_daily_target = target if target is not None else settings.base_daily_target
    manager = _manager()
    try:
        ledger = manager.open_period(year, month, base_daily_target)
        report = manager.evaluate(ledger, base_daily_target, policy or settings.default_policy)
    except (InvalidInputError, KeyError) as error:
        typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=1) from error

    typer.echo(f"Period {report.config.key} ({report.policy})")
    typer.echo(f"{'Day':>4} {'Allowance':>11} {'Spent':>10} {'Remaining':>11}  Status")
    for result in report.allocations:
        marker = "*" if result.locked else " "
        typer.echo(
            f"{result.day_number:>3}{marker} {result.allowance:>11.2f} {result.spent:>10.2f} "
            f"{result.remaining:>11.2f}  {result.status}"
        )
    summary = report.summary
    typer.echo(
        f"Budget {summary.total_budget:.2f} | spent {summary.total_spent:.2f} | "
        f"balance {summary.total_balance:.2f} | today {summary.current_daily_allowance:.2f}"
        + (" | OVER BUDGET" if summary.is_over_budget else "")
    )
    for category, spent in summary.spent_by_category.items():
        typer.echo(f"  {category}: {spent:.2f}")


@cli.command()
def add(
    year: int = typer.Argument(..., help="Calendar year of the period."),
    month: int = typer.Argument(..., help="Calendar month of the period (1-12)."),
    day: int = typer.Argument(..., help="Day of the month the expense belongs to."),
    amount: str = typer.Argument(..., help="Amount spent."),
    label: str = typer.Option("", help="Short description of the expense."),
    category: str = typer.Option(DEFAULT_CATEGORY, help="Spending category, e.g. Food or Bills."),
) -> None:
    """Record an expense in the persisted ledger."""

    try:
        ledger = _manager().add_expense(year, month, day, amount, label, category=category)
    except InvalidInputError as error:
        typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=1) from error
    expense = ledger.get_day(day).expenses[-1]
    typer.echo(f"Recorded {expense.amount:.2f} ({expense.category}) on {ledger.key} day {day}.")


if __name__ == "__main__":
    cli()
