"""Terminal views for the journal."""

from tradejournal.dashboard.calendar import (
    build_calendar_table,
    build_day_table,
    build_summary_panel,
    format_currency,
)

__all__ = [
    "build_calendar_table",
    "build_day_table",
    "build_summary_panel",
    "format_currency",
]
