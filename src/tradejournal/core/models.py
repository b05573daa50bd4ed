"""Core domain models for the trade journal."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class TradeType(str, Enum):
    """Trade direction."""

    BUY = "buy"
    SELL = "sell"


class TradeDraft(BaseModel):
    """A trade record before it has been assigned an id.

    Serialized keys are camelCase (``openDate``, ``entryPrice``...); Python
    code may use either the snake_case attribute names or the keys.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    open_date: datetime
    close_date: datetime
    # Legacy mirror of close_date, never queried
    date: datetime | None = None
    symbol: str
    type: TradeType
    entry_price: float
    exit_price: float
    quantity: float
    profit: float = 0.0
    notes: str = ""
    tags: list[str] | None = None

    @model_validator(mode="before")
    @classmethod
    def _mirror_close_date(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("date") is None:
            close_date = data.get("closeDate", data.get("close_date"))
            if close_date is not None:
                data = {**data, "date": close_date}
        return data

    @property
    def is_profitable(self) -> bool:
        """Check if the trade made money."""
        return self.profit > 0


class Trade(TradeDraft):
    """A stored trade record."""

    id: str


class JournalState(BaseModel):
    """Everything the journal persists."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    trades: list[Trade] = Field(default_factory=list)
    selected_date: datetime


class JournalSnapshot(BaseModel):
    """Versioned envelope written to durable storage."""

    state: JournalState
    version: int = 0


@dataclass
class WeekSummary:
    """Profit and trade count for one week of a month."""

    week_number: int
    total_profit: float = 0.0
    trade_count: int = 0

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "weekNumber": self.week_number,
            "totalProfit": self.total_profit,
            "tradeCount": self.trade_count,
        }
