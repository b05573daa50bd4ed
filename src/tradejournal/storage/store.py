"""Trade store: the journal's single source of truth."""

from __future__ import annotations

import functools
import uuid
from collections.abc import Callable, Mapping
from datetime import date, datetime, time, tzinfo
from typing import Any, TypeVar
from zoneinfo import ZoneInfo

from loguru import logger
from pydantic import ValidationError

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
    WeekSummary,
)
from tradejournal.storage.backends import StateStorage, StorageError

DEFAULT_STORAGE_KEY = "trading-journal-storage"

F = TypeVar("F", bound=Callable[..., Any])


def _persist_after(method: F) -> F:
    """Write the whole state to storage after the wrapped mutation returns."""

    @functools.wraps(method)
    def wrapper(self: TradeStore, *args: Any, **kwargs: Any) -> Any:
        result = method(self, *args, **kwargs)
        self.persist()
        return result

    return wrapper  # type: ignore[return-value]


def _field_name(key: str) -> str | None:
    """Resolve a snake_case field name or camelCase key to the field name."""
    if key in Trade.model_fields:
        return key
    for name, info in Trade.model_fields.items():
        if info.alias == key:
            return name
    return None


class TradeStore:
    """
    In-process store of journal trades with snapshot persistence.

    Lifecycle is explicit: construct, ``hydrate()`` from storage, then every
    mutation (add, update, delete, select date) writes the full state back.
    Lookups on unknown ids are silent no-ops and queries never raise.
    """

    def __init__(
        self,
        storage: StateStorage,
        key: str = DEFAULT_STORAGE_KEY,
        tz: tzinfo | None = None,
        week_numbering: WeekNumbering | str = WeekNumbering.CALENDAR,
    ) -> None:
        """Initialize the store with empty state.

        Args:
            storage: Durable key/value storage
            key: Namespace key the snapshot is stored under
            tz: Reference timezone for calendar-day truncation. Defaults to UTC.
            week_numbering: Week convention for weekly summaries
        """
        self.storage = storage
        self.key = key
        self.tz = tz or ZoneInfo("UTC")
        self.week_numbering = WeekNumbering(week_numbering)
        self.state = self._default_state()
        self.last_save_error: StorageError | None = None

    def _default_state(self) -> JournalState:
        return JournalState(trades=[], selected_date=datetime.now(self.tz))

    # ==================== Persistence ====================

    def hydrate(self) -> TradeStore:
        """Load state from storage, falling back to empty state on any failure.

        Returns:
            The store itself, for chaining after construction
        """
        try:
            raw = self.storage.get_item(self.key)
            if raw is None:
                logger.debug(f"No saved journal under '{self.key}', starting empty")
                self.state = self._default_state()
            else:
                self.state = JournalSnapshot.model_validate_json(raw).state
                logger.debug(f"Loaded {len(self.state.trades)} trades from '{self.key}'")
        except (StorageError, ValidationError) as e:
            logger.warning(f"Could not load journal '{self.key}', starting empty: {e}")
            self.state = self._default_state()

        return self

    def persist(self) -> bool:
        """Write the full state to storage.

        Returns:
            True if saved. On failure the in-memory state is kept and the
            error is available as ``last_save_error``.
        """
        snapshot = JournalSnapshot(state=self.state)
        try:
            self.storage.set_item(self.key, snapshot.model_dump_json(by_alias=True))
        except StorageError as e:
            logger.warning(f"Could not save journal '{self.key}': {e}")
            self.last_save_error = e
            return False

        self.last_save_error = None
        return True

    # ==================== Mutations ====================

    @property
    def trades(self) -> list[Trade]:
        """All trades in insertion order (a copy)."""
        return list(self.state.trades)

    @property
    def selected_date(self) -> datetime:
        return self.state.selected_date

    def get_trade(self, trade_id: str) -> Trade | None:
        """Get a trade by id, or None."""
        for trade in self.state.trades:
            if trade.id == trade_id:
                return trade
        return None

    @_persist_after
    def add_trade(self, draft: TradeDraft) -> Trade:
        """Append a new trade with a freshly generated id.

        Fields are taken verbatim from the draft; profit is never recomputed.

        Returns:
            The stored trade
        """
        trade = Trade(id=str(uuid.uuid4()), **draft.model_dump(exclude={"id"}))
        self.state.trades.append(trade)
        logger.info(
            f"Added trade {trade.id}: {trade.type.value} {trade.symbol} "
            f"profit={trade.profit:+,.2f}"
        )
        return trade

    @_persist_after
    def update_trade(self, trade_id: str, changes: Mapping[str, Any]) -> None:
        """Shallow-merge ``changes`` onto the trade with ``trade_id``.

        Keys may be field names or camelCase keys. ``id`` and unknown keys are
        ignored; an unknown ``trade_id`` leaves the collection untouched.

        Raises:
            ValidationError: If the merged record is not a valid trade. The
                stored trade is left unchanged.
        """
        for index, trade in enumerate(self.state.trades):
            if trade.id == trade_id:
                break
        else:
            logger.debug(f"update_trade: no trade {trade_id}")
            return

        update: dict[str, Any] = {}
        for key, value in changes.items():
            name = _field_name(key)
            if name is not None and name != "id":
                update[name] = value

        # Re-validate so strings and enum values are parsed like on add
        self.state.trades[index] = Trade.model_validate({**trade.model_dump(), **update})
        logger.info(f"Updated trade {trade_id}: {sorted(update)}")

    @_persist_after
    def delete_trade(self, trade_id: str) -> None:
        """Remove the trade with ``trade_id``, if present."""
        remaining = [t for t in self.state.trades if t.id != trade_id]
        if len(remaining) != len(self.state.trades):
            logger.info(f"Deleted trade {trade_id}")
        self.state.trades = remaining

    @_persist_after
    def set_selected_date(self, value: date | datetime) -> None:
        """Move the UI date cursor. A plain date selects its midnight."""
        if not isinstance(value, datetime):
            value = datetime.combine(value, time.min)
        self.state.selected_date = value

    # ==================== Queries ====================

    def get_trades_by_date(self, day: date | datetime) -> list[Trade]:
        """Get trades whose close date falls on the calendar day of ``day``."""
        target = calendar_day(day, self.tz)
        return [
            t for t in self.state.trades
            if calendar_day(t.close_date, self.tz) == target
        ]

    def get_trades_by_date_range(self, start: datetime, end: datetime) -> list[Trade]:
        """Get trades closed between ``start`` and ``end``, both inclusive."""
        start = to_reference(start, self.tz)
        end = to_reference(end, self.tz)
        return [
            t for t in self.state.trades
            if start <= to_reference(t.close_date, self.tz) <= end
        ]

    def get_monthly_trades(self, month: date | datetime) -> list[Trade]:
        """Get trades closed within the calendar month containing ``month``."""
        return self.get_trades_by_date_range(*month_bounds(month, self.tz))

    def week_of(self, value: date | datetime) -> int:
        """Week number of an instant's calendar day."""
        return week_number(calendar_day(value, self.tz), self.week_numbering)

    def get_weekly_summaries(self, month: date | datetime) -> list[WeekSummary]:
        """Get per-week profit and trade count for a calendar month.

        Every week touched by a day of the month gets a bucket, even if it has
        no trades. Buckets are ordered by first appearance while scanning the
        month from day 1, so a January can start with week 52/53 and a
        December can end with week 1.
        """
        weekly: dict[int, WeekSummary] = {}
        for day in month_days(month, self.tz):
            week = self.week_of(day)
            if week not in weekly:
                weekly[week] = WeekSummary(week_number=week)

        for trade in self.get_monthly_trades(month):
            summary = weekly.get(self.week_of(trade.close_date))
            if summary is None:
                continue
            summary.total_profit += trade.profit
            summary.trade_count += 1

        return list(weekly.values())

    def get_monthly_profit(self, month: date | datetime) -> float:
        """Total profit of trades closed in the calendar month."""
        return sum((t.profit for t in self.get_monthly_trades(month)), 0.0)
