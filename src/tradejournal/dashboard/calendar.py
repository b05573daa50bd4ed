"""Rich renderables for the journal: month grid, day list and summary."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from tradejournal.analytics.daily import summarize_day
from tradejournal.core.dates import month_days, to_reference

if TYPE_CHECKING:
    from datetime import date, tzinfo

    from tradejournal.analytics.daily import DaySummary, MonthSummary
    from tradejournal.storage.store import TradeStore


WEEKDAYS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


def format_currency(value: float) -> str:
    """Format a profit as dollars, e.g. ``-$1,234.50``."""
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def _profit_style(value: float) -> str:
    if value > 0:
        return "green"
    if value < 0:
        return "red"
    return "dim"


def _day_cell(summary: DaySummary, selected: bool) -> Text:
    cell = Text()
    cell.append(str(summary.day.day), style="bold reverse" if selected else "bold")
    if summary.has_notes:
        cell.append(" *", style="yellow")

    if summary.trade_count:
        noun = "trade" if summary.trade_count == 1 else "trades"
        cell.append(f"\n{summary.trade_count} {noun}")
        cell.append(
            f"\n{format_currency(summary.total_profit)}",
            style=f"bold {_profit_style(summary.total_profit)}",
        )
        cell.append(f"\n{summary.win_rate}%", style="cyan")
        top = summary.most_significant_trade
        if top is not None:
            cell.append(f"\n{top.symbol}", style=_profit_style(summary.total_profit))

    return cell


def build_calendar_table(store: TradeStore, month: date) -> Table:
    """Build a Sunday-first month grid with per-day trade statistics."""
    days = month_days(month, store.tz)
    selected = to_reference(store.selected_date, store.tz).date()

    table = Table(
        title=days[0].strftime("%B %Y"),
        show_lines=True,
        expand=True,
    )
    for name in WEEKDAYS:
        table.add_column(name, justify="left", vertical="top", ratio=1)

    # Leading blanks before the 1st (date.weekday(): Monday == 0)
    row: list[Text] = [Text("")] * ((days[0].weekday() + 1) % 7)
    for day in days:
        summary = summarize_day(store.get_trades_by_date(day), day)
        row.append(_day_cell(summary, selected=day == selected))
        if len(row) == 7:
            table.add_row(*row)
            row = []

    if row:
        row.extend([Text("")] * (7 - len(row)))
        table.add_row(*row)

    return table


def build_day_table(summary: DaySummary, tz: tzinfo | None = None) -> Table:
    """Build the trade list for a single day."""
    table = Table(
        title=f"Trades for {summary.day:%B} {summary.day.day}, {summary.day.year}",
        caption=(
            f"Total {format_currency(summary.total_profit)} | "
            f"Win rate {summary.win_rate}% "
            f"({summary.winning_trades}/{summary.trade_count})"
        ),
    )
    table.add_column("ID", style="dim")
    table.add_column("Symbol", style="cyan")
    table.add_column("Type")
    table.add_column("Qty", justify="right")
    table.add_column("Entry", justify="right")
    table.add_column("Exit", justify="right")
    table.add_column("Open")
    table.add_column("Close")
    table.add_column("Profit", justify="right")
    table.add_column("Notes")

    for trade in summary.trades:
        open_date = to_reference(trade.open_date, tz) if tz else trade.open_date
        close_date = to_reference(trade.close_date, tz) if tz else trade.close_date
        table.add_row(
            trade.id[:8],
            trade.symbol,
            trade.type.value.upper(),
            f"{trade.quantity:g}",
            f"{trade.entry_price:,.2f}",
            f"{trade.exit_price:,.2f}",
            f"{open_date:%b} {open_date.day}, {open_date:%H:%M}",
            f"{close_date:%b} {close_date.day}, {close_date:%H:%M}",
            Text(format_currency(trade.profit), style=_profit_style(trade.profit)),
            trade.notes,
        )

    return table


def build_summary_panel(summary: MonthSummary) -> Panel:
    """Build the monthly stats panel with one row per week."""
    header = Table.grid(padding=(0, 2))
    header.add_column()
    header.add_column(justify="right")
    header.add_row(
        "Monthly P&L",
        Text(
            format_currency(summary.total_profit),
            style=f"bold {_profit_style(summary.total_profit)}",
        ),
    )
    header.add_row("Total Trades", str(summary.trade_count))

    weeks = Table(show_header=True, header_style="bold", expand=True)
    weeks.add_column("Week")
    weeks.add_column("Trades", justify="right")
    weeks.add_column("Profit", justify="right")
    for week in summary.weeks:
        weeks.add_row(
            f"Week {week.week_number}",
            str(week.trade_count),
            Text(format_currency(week.total_profit), style=_profit_style(week.total_profit)),
        )

    return Panel(
        Group(header, weeks),
        title=f"Monthly Stats: {summary.month.strftime('%B %Y')}",
        border_style="blue",
    )
