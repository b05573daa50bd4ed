"""Per-day and per-month statistics for calendar views."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tradejournal.core.models import Trade, WeekSummary
    from tradejournal.storage.store import TradeStore


def win_rate_pct(winning: int, total: int) -> int:
    """Winning share as a whole percentage, rounded half up. 0 with no trades."""
    if total == 0:
        return 0
    return math.floor(winning / total * 100 + 0.5)


@dataclass
class DaySummary:
    """Statistics for the trades closed on one calendar day."""

    day: date
    trades: list[Trade] = field(default_factory=list)

    @property
    def trade_count(self) -> int:
        return len(self.trades)

    @property
    def total_profit(self) -> float:
        return sum((t.profit for t in self.trades), 0.0)

    @property
    def winning_trades(self) -> int:
        return sum(1 for t in self.trades if t.is_profitable)

    @property
    def win_rate(self) -> int:
        """Win rate as a whole percentage (0-100)."""
        return win_rate_pct(self.winning_trades, self.trade_count)

    @property
    def is_profitable(self) -> bool:
        return self.total_profit > 0

    @property
    def has_notes(self) -> bool:
        """Check if any trade of the day carries non-blank notes."""
        return any(t.notes and t.notes.strip() for t in self.trades)

    @property
    def most_significant_trade(self) -> Trade | None:
        """The trade with the largest absolute profit; earliest wins ties."""
        if not self.trades:
            return None
        return sorted(self.trades, key=lambda t: abs(t.profit), reverse=True)[0]


def summarize_day(trades: list[Trade], day: date) -> DaySummary:
    """Build the summary for one day's trades."""
    return DaySummary(day=day, trades=list(trades))


@dataclass
class MonthSummary:
    """Monthly profit with its weekly breakdown."""

    month: date
    total_profit: float
    weeks: list[WeekSummary] = field(default_factory=list)

    @property
    def trade_count(self) -> int:
        return sum(w.trade_count for w in self.weeks)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "month": self.month.strftime("%Y-%m"),
            "total_profit": self.total_profit,
            "trade_count": self.trade_count,
            "weeks": [w.to_dict() for w in self.weeks],
        }


def summarize_month(store: TradeStore, month: date) -> MonthSummary:
    """Build the summary sidebar data for the month containing ``month``."""
    return MonthSummary(
        month=month.replace(day=1),
        total_profit=store.get_monthly_profit(month),
        weeks=store.get_weekly_summaries(month),
    )
