"""Storage module for persisting the trade journal."""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from tradejournal.storage.backends import (
    MemoryStorage,
    SqliteStorage,
    StateStorage,
    StorageError,
)
from tradejournal.storage.store import DEFAULT_STORAGE_KEY, TradeStore

if TYPE_CHECKING:
    from tradejournal.config.settings import Settings


def create_trade_store(settings: Settings) -> TradeStore:
    """Build and hydrate a trade store from settings.

    If the database cannot be opened the journal runs on in-memory storage
    for this session.

    Args:
        settings: Application settings

    Returns:
        Hydrated TradeStore
    """
    storage: StateStorage
    try:
        storage = SqliteStorage(settings.database_path)
    except (StorageError, OSError) as e:
        logger.warning(f"Journal storage unavailable, changes will not be saved: {e}")
        storage = MemoryStorage()

    store = TradeStore(
        storage,
        key=settings.storage_key,
        tz=settings.tzinfo,
        week_numbering=settings.week_numbering,
    )
    return store.hydrate()


__all__ = [
    "DEFAULT_STORAGE_KEY",
    "MemoryStorage",
    "SqliteStorage",
    "StateStorage",
    "StorageError",
    "TradeStore",
    "create_trade_store",
]
