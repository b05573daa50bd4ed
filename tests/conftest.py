"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import Any
from zoneinfo import ZoneInfo

import pytest

from tradejournal.core.models import TradeDraft, TradeType
from tradejournal.storage import MemoryStorage, TradeStore

UTC = ZoneInfo("UTC")


@pytest.fixture
def make_draft() -> Callable[..., TradeDraft]:
    """Factory for trade drafts with sensible defaults."""

    def _make(**overrides: Any) -> TradeDraft:
        close_date = overrides.pop("close_date", datetime(2024, 3, 15, 15, 30))
        fields: dict[str, Any] = {
            "open_date": close_date,
            "close_date": close_date,
            "symbol": "AAPL",
            "type": TradeType.BUY,
            "entry_price": 170.0,
            "exit_price": 172.5,
            "quantity": 10,
            "profit": 25.0,
            "notes": "",
        }
        fields.update(overrides)
        return TradeDraft(**fields)

    return _make


@pytest.fixture
def memory_storage() -> MemoryStorage:
    """Create empty in-memory storage."""
    return MemoryStorage()


@pytest.fixture
def store(memory_storage: MemoryStorage) -> TradeStore:
    """Create a hydrated store on empty in-memory storage, UTC reference."""
    return TradeStore(memory_storage, tz=UTC).hydrate()


@pytest.fixture
def scenario_store(store: TradeStore, make_draft: Callable[..., TradeDraft]) -> TradeStore:
    """Store with a winner and a loser closed on 2024-03-15."""
    store.add_trade(make_draft(symbol="AAPL", profit=100.0))
    store.add_trade(
        make_draft(
            symbol="TSLA",
            type=TradeType.SELL,
            close_date=datetime(2024, 3, 15, 18, 0),
            profit=-40.0,
        )
    )
    return store
