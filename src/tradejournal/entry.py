"""Validation of user-entered trades before they reach the store."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, field_validator

from tradejournal.core.models import Trade, TradeDraft, TradeType


class TradeEntry(BaseModel):
    """A trade as entered by the user.

    The store does no validation of its own; everything that is added or
    updated goes through this model first.
    """

    open_date: datetime
    close_date: datetime
    symbol: str
    type: TradeType = TradeType.BUY
    entry_price: float
    exit_price: float
    quantity: float
    profit: float = 0.0
    notes: str = ""
    tags: list[str] | None = None

    @field_validator("symbol")
    @classmethod
    def _symbol_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Symbol is required")
        return v

    @field_validator("entry_price")
    @classmethod
    def _entry_price_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Entry price must be positive")
        return v

    @field_validator("exit_price")
    @classmethod
    def _exit_price_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Exit price must be positive")
        return v

    @field_validator("quantity")
    @classmethod
    def _quantity_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Quantity must be positive")
        return v

    def to_draft(self) -> TradeDraft:
        """Convert to a store draft. The legacy ``date`` mirrors the close date."""
        return TradeDraft(date=self.close_date, **self.model_dump())

    @classmethod
    def for_update(cls, trade: Trade, changes: dict[str, Any]) -> dict[str, Any]:
        """Validate ``changes`` against an existing trade.

        The merged record must still be a valid entry.

        Args:
            trade: Existing trade
            changes: Field name to new value; None values are skipped

        Returns:
            The validated subset of changed fields
        """
        changes = {k: v for k, v in changes.items() if v is not None}
        current = {name: getattr(trade, name) for name in cls.model_fields}
        merged = cls.model_validate({**current, **changes})
        return {k: getattr(merged, k) for k in changes if k in cls.model_fields}
