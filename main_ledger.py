"""Mini README: Command line entry point for the household ledger.

This script exposes a Typer CLI to record and inspect transactions, move the
ledger in and out of CSV, and launch the FastAPI service. Settings come from
``HOUSEHOLDLEDGER_`` environment variables (or ``.env``), so the CLI and the
web service share the same persisted slot.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
import uvicorn

from householdledger.configuration import get_settings
from householdledger.finance import LedgerService, create_ledger_service
from householdledger.logging_utils import configure_root_logger

cli = typer.Typer(help="Record household income and expenses.")


def _service() -> LedgerService:
    settings = get_settings()
    configure_root_logger(settings.log_level)
    return create_ledger_service(settings)


def _fail(error: Exception) -> None:
    typer.echo(f"Error: {error}", err=True)
    raise typer.Exit(code=1)


def _won(value: float) -> str:
    return f"{value:,.0f}원" if float(value).is_integer() else f"{value:,.2f}원"


@cli.command()
def serve(
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
    configure_root_logger(settings.log_level)

    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting the ledger on {effective_host}:{effective_port}.\n"
        f"API docs at http://{browser_host}:{effective_port}/docs"
    )
    uvicorn.run(
        "householdledger.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


@cli.command()
def add(
    amount: str = typer.Argument(..., help="Amount, always recorded as a positive value."),
    income: bool = typer.Option(False, "--income", help="Record income instead of an expense."),
    category: Optional[str] = typer.Option(None, help="Category label (defaults to 기타)."),
    memo: str = typer.Option("", help="Free-form note."),
    date: Optional[str] = typer.Option(None, help="Date as YYYY-MM-DD (defaults to today)."),
) -> None:
    """Record a transaction."""

    service = _service()
    try:
        transaction = service.add_transaction(
            {
                "type": "income" if income else "expense",
                "amount": amount,
                "category": category,
                "memo": memo,
                "date": date,
            }
        )
    except ValueError as error:
        _fail(error)
    typer.echo(
        f"Recorded {transaction.transaction_type} {_won(transaction.amount)} "
        f"[{transaction.category}] on {transaction.occurred_on} (id {transaction.transaction_id})"
    )


@cli.command(name="list")
def list_transactions(
    month: Optional[str] = typer.Option(None, help="Month as YYYY-MM (defaults to this month)."),
) -> None:
    """Show the transactions of a month."""

    service = _service()
    try:
        transactions = service.list_month(month)
    except ValueError as error:
        _fail(error)
    if not transactions:
        typer.echo("No transactions for this month.")
        return
    for transaction in transactions:
        label = "수입" if transaction.is_income else "지출"
        typer.echo(
            f"{transaction.occurred_on}  {label}  {transaction.category:<10} "
            f"{_won(transaction.amount):>14}  {transaction.memo}  ({transaction.transaction_id})"
        )


@cli.command()
def remove(
    transaction_id: str = typer.Argument(..., help="Identifier of the transaction to delete."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt."),
) -> None:
    """Delete a transaction."""

    if not yes:
        typer.confirm(f"Delete transaction {transaction_id}?", abort=True)
    removed = _service().remove_transaction(transaction_id)
    if not removed:
        _fail(LookupError(f"Transaction {transaction_id} not found"))
    typer.echo(f"Removed {removed} transaction(s).")


@cli.command()
def reset(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt."),
) -> None:
    """Erase every transaction and the persisted slot."""

    if not yes:
        typer.confirm("Erase the whole ledger?", abort=True)
    _service().reset_all()
    typer.echo("Ledger cleared.")


@cli.command(name="export")
def export_csv(
    output: Optional[Path] = typer.Option(
        None, help="Destination file (defaults to ledger_<today>.csv in the current directory)."
    ),
) -> None:
    """Write the ledger to a CSV file."""

    export = _service().export_csv()
    destination = output or Path(export.filename)
    destination.write_text(export.content, encoding="utf-8")
    typer.echo(f"Exported ledger to {destination}")


@cli.command(name="import")
def import_csv(
    source: Path = typer.Argument(..., exists=True, dir_okay=False, help="CSV file to import."),
) -> None:
    """Import transactions from a CSV file."""

    service = _service()
    try:
        imported = service.import_csv(source.read_bytes())
    except ValueError as error:
        _fail(error)
    typer.echo(f"Imported {len(imported)} transaction(s).")


@cli.command()
def summary(
    month: Optional[str] = typer.Option(None, help="Month as YYYY-MM (defaults to this month)."),
) -> None:
    """Print income, expense, balance and per-category nets."""

    service = _service()
    try:
        monthly = service.get_summary(month)
    except ValueError as error:
        _fail(error)
    typer.echo(f"Month    {monthly.month}")
    typer.echo(f"Income   {_won(monthly.income)}")
    typer.echo(f"Expense  {_won(monthly.expense)}")
    typer.echo(f"Balance  {_won(monthly.balance)}")
    if not monthly.category_net:
        typer.echo("No category data.")
    for category, net in monthly.category_net.items():
        label = "지출" if net > 0 else "(순수입)"
        typer.echo(f"  {category:<12} {_won(abs(net)):>14} {label}")


if __name__ == "__main__":
    cli()
