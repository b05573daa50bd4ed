"""Journal statistics."""

from tradejournal.analytics.daily import (
    DaySummary,
    MonthSummary,
    summarize_day,
    summarize_month,
    win_rate_pct,
)

__all__ = [
    "DaySummary",
    "MonthSummary",
    "summarize_day",
    "summarize_month",
    "win_rate_pct",
]
