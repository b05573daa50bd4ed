"""Command-line interface for the trade journal."""

from __future__ import annotations

from datetime import date, datetime

import typer
from pydantic import ValidationError
from rich.console import Console

from tradejournal.analytics.daily import summarize_day, summarize_month
from tradejournal.config.settings import get_settings, setup_logging
from tradejournal.core.dates import to_reference
from tradejournal.core.models import TradeType
from tradejournal.dashboard.calendar import (
    build_calendar_table,
    build_day_table,
    build_summary_panel,
    format_currency,
)
from tradejournal.entry import TradeEntry
from tradejournal.storage import TradeStore, create_trade_store

app = typer.Typer(
    name="journal",
    help="Personal trading journal with calendar and profit summaries",
    add_completion=False,
)
console = Console()


@app.callback()
def main_callback() -> None:
    """Initialize logging on startup."""
    settings = get_settings()
    setup_logging(settings)


def _open_store() -> TradeStore:
    return create_trade_store(get_settings())


def _parse_datetime(value: str) -> datetime:
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise typer.BadParameter(
            f"Invalid date '{value}', use YYYY-MM-DD or YYYY-MM-DDTHH:MM"
        ) from None


def _parse_month(value: str | None, store: TradeStore) -> date:
    if value is None:
        return to_reference(store.selected_date, store.tz).date().replace(day=1)
    try:
        return datetime.strptime(value, "%Y-%m").date()
    except ValueError:
        raise typer.BadParameter(f"Invalid month '{value}', use YYYY-MM") from None


def _print_validation_error(e: ValidationError) -> None:
    for error in e.errors():
        field = ".".join(str(loc) for loc in error["loc"]) or "entry"
        message = error["msg"].removeprefix("Value error, ")
        console.print(f"[red]{field}: {message}[/red]")


def _report_save(store: TradeStore) -> None:
    if store.last_save_error is not None:
        console.print(
            f"[yellow]Warning: changes could not be saved ({store.last_save_error})[/yellow]"
        )


@app.command()
def add(
    symbol: str = typer.Argument(..., help="Instrument symbol (e.g., AAPL)"),
    trade_type: TradeType = typer.Option(TradeType.BUY, "--type", "-t", help="buy or sell"),
    entry_price: float = typer.Option(..., "--entry", "-e", help="Entry price"),
    exit_price: float = typer.Option(..., "--exit", "-x", help="Exit price"),
    quantity: float = typer.Option(..., "--qty", "-q", help="Quantity"),
    profit: float = typer.Option(0.0, "--profit", "-p", help="Realized profit (as entered)"),
    open_date: str | None = typer.Option(None, "--open", help="Open date/time (ISO)"),
    close_date: str | None = typer.Option(
        None, "--close", help="Close date/time (ISO). Defaults to the selected date"
    ),
    notes: str = typer.Option("", "--notes", "-n", help="Free-form notes"),
    tags: list[str] | None = typer.Option(None, "--tag", help="Label (repeatable)"),
) -> None:
    """Record a closed trade."""
    store = _open_store()

    close = _parse_datetime(close_date) if close_date else store.selected_date
    opened = _parse_datetime(open_date) if open_date else close

    try:
        entry = TradeEntry(
            open_date=opened,
            close_date=close,
            symbol=symbol,
            type=trade_type,
            entry_price=entry_price,
            exit_price=exit_price,
            quantity=quantity,
            profit=profit,
            notes=notes,
            tags=tags or None,
        )
    except ValidationError as e:
        _print_validation_error(e)
        raise typer.Exit(1) from None

    trade = store.add_trade(entry.to_draft())
    console.print(
        f"[green]Added {trade.symbol} ({format_currency(trade.profit)}) as {trade.id}[/green]"
    )
    _report_save(store)


@app.command()
def update(
    trade_id: str = typer.Argument(..., help="Trade ID"),
    symbol: str | None = typer.Option(None, "--symbol", "-s"),
    trade_type: TradeType | None = typer.Option(None, "--type", "-t"),
    entry_price: float | None = typer.Option(None, "--entry", "-e"),
    exit_price: float | None = typer.Option(None, "--exit", "-x"),
    quantity: float | None = typer.Option(None, "--qty", "-q"),
    profit: float | None = typer.Option(None, "--profit", "-p"),
    open_date: str | None = typer.Option(None, "--open"),
    close_date: str | None = typer.Option(None, "--close"),
    notes: str | None = typer.Option(None, "--notes", "-n"),
) -> None:
    """Change fields of an existing trade. Only given options are changed."""
    store = _open_store()

    trade = store.get_trade(trade_id)
    if trade is None:
        console.print(f"[red]Error: trade {trade_id} not found[/red]")
        raise typer.Exit(1)

    changes = {
        "symbol": symbol,
        "type": trade_type,
        "entry_price": entry_price,
        "exit_price": exit_price,
        "quantity": quantity,
        "profit": profit,
        "open_date": _parse_datetime(open_date) if open_date else None,
        "close_date": _parse_datetime(close_date) if close_date else None,
        "notes": notes,
    }

    try:
        validated = TradeEntry.for_update(trade, changes)
    except ValidationError as e:
        _print_validation_error(e)
        raise typer.Exit(1) from None

    if not validated:
        console.print("[yellow]Nothing to update[/yellow]")
        return

    store.update_trade(trade_id, validated)
    console.print(f"[green]Updated {trade_id}: {', '.join(sorted(validated))}[/green]")
    _report_save(store)


@app.command()
def delete(
    trade_id: str = typer.Argument(..., help="Trade ID"),
) -> None:
    """Delete a trade."""
    store = _open_store()

    if store.get_trade(trade_id) is None:
        console.print(f"[red]Error: trade {trade_id} not found[/red]")
        raise typer.Exit(1)

    store.delete_trade(trade_id)
    console.print(f"[green]Deleted {trade_id}[/green]")
    _report_save(store)


@app.command()
def select(
    day: str = typer.Argument(..., help="Date to select (ISO)"),
) -> None:
    """Move the selected date."""
    store = _open_store()
    store.set_selected_date(_parse_datetime(day))
    console.print(f"Selected {day}")
    _report_save(store)


@app.command()
def day(
    value: str | None = typer.Argument(None, help="Date (ISO). Defaults to the selected date"),
) -> None:
    """Show the trades closed on a day."""
    store = _open_store()

    if value is not None:
        store.set_selected_date(_parse_datetime(value))

    selected = to_reference(store.selected_date, store.tz).date()
    summary = summarize_day(store.get_trades_by_date(selected), selected)

    if not summary.trades:
        console.print(f"[yellow]No trades on {selected.isoformat()}[/yellow]")
        return

    console.print(build_day_table(summary, tz=store.tz))


@app.command()
def calendar(
    month: str | None = typer.Option(None, "--month", "-m", help="Month (YYYY-MM)"),
) -> None:
    """Show a month calendar with daily profit."""
    store = _open_store()
    console.print(build_calendar_table(store, _parse_month(month, store)))


@app.command()
def summary(
    month: str | None = typer.Option(None, "--month", "-m", help="Month (YYYY-MM)"),
) -> None:
    """Show monthly profit with a weekly breakdown."""
    store = _open_store()
    console.print(build_summary_panel(summarize_month(store, _parse_month(month, store))))


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
