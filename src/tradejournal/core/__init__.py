"""Core domain models and calendar helpers."""

from tradejournal.core.dates import (
    WeekNumbering,
    calendar_day,
    month_bounds,
    month_days,
    to_reference,
    week_number,
)
from tradejournal.core.models import (
    JournalSnapshot,
    JournalState,
    Trade,
    TradeDraft,
    TradeType,
    WeekSummary,
)

__all__ = [
    "JournalSnapshot",
    "JournalState",
    "Trade",
    "TradeDraft",
    "TradeType",
    "WeekNumbering",
    "WeekSummary",
    "calendar_day",
    "month_bounds",
    "month_days",
    "to_reference",
    "week_number",
]
