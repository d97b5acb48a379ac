# src/today_tracker/items/item_store.py

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable, Iterator

from ..core.colors import Color
from ..core.models import ONE_DAY_SECONDS, TodayItem

logger = logging.getLogger(__name__)

ChangeListener = Callable[["ItemStore"], None]


def _now(now_ts: float | None) -> float:
    return time.time() if now_ts is None else float(now_ts)


def days_ago(created_at: float, now_ts: float) -> int:
    """Whole days between now and created_at (absolute, floored)."""
    return int(abs(now_ts - created_at) // ONE_DAY_SECONDS)


class ItemStore:
    """
    In-memory ordered collection of TodayItem plus derived views.

    Not thread-safe: every call is expected from the single UI/console thread.
    Mutations notify `on_change` (if set) after the collection is updated;
    listener failures are logged and never reach the caller.
    """

    def __init__(
        self,
        items: Iterable[TodayItem] | None = None,
        *,
        on_change: ChangeListener | None = None,
    ) -> None:
        self._items: list[TodayItem] = []
        self.on_change = on_change
        if items is not None:
            self._set_items(items)

    def _set_items(self, items: Iterable[TodayItem]) -> None:
        seen: set[str] = set()
        out: list[TodayItem] = []
        for item in items:
            if item.id in seen:
                logger.warning("Dropping duplicate item id=%s", item.id)
                continue
            seen.add(item.id)
            out.append(item)
        self._items = out

    def _changed(self) -> None:
        if self.on_change is None:
            return
        try:
            self.on_change(self)
        except Exception:
            logger.exception("ItemStore change listener failed.")

    # ---- collection access ----

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[TodayItem]:
        return iter(list(self._items))

    def items(self) -> list[TodayItem]:
        return list(self._items)

    def get(self, item_id: str) -> TodayItem | None:
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def find_by_prefix(self, prefix: str) -> TodayItem | None:
        """Return the only item whose id starts with prefix, else None."""
        prefix = (prefix or "").strip().lower()
        if not prefix:
            return None
        matches = [i for i in self._items if i.id.lower().startswith(prefix)]
        return matches[0] if len(matches) == 1 else None

    def replace_all(self, items: Iterable[TodayItem]) -> None:
        """Swap the whole collection (used by load). Does not notify listeners."""
        self._set_items(items)

    # ---- mutations ----

    def add(
        self,
        text: str,
        foreground_color: Color,
        background_color: Color,
        *,
        now_ts: float | None = None,
    ) -> TodayItem | None:
        # Only the empty string is rejected; whitespace is kept as typed.
        if text == "":
            return None

        item = TodayItem(
            text=text,
            foreground_color=foreground_color,
            background_color=background_color,
            created_at=_now(now_ts),
        )
        self._items.append(item)
        logger.debug("Item added id=%s", item.id)
        self._changed()
        return item

    def toggle_completion(self, item_id: str, *, now_ts: float | None = None) -> TodayItem | None:
        item = self.get(item_id)
        if item is None:
            return None

        if item.completed_at is not None:
            item.completed_at = None
        else:
            item.completed_at = _now(now_ts)
        logger.debug("Item toggled id=%s done=%s", item.id, item.is_done)
        self._changed()
        return item

    def prune(self, cutoff_ts: float) -> list[TodayItem]:
        """
        Drop items completed strictly before cutoff_ts.

        Incomplete items are never pruned, whatever their age.
        """
        kept: list[TodayItem] = []
        removed: list[TodayItem] = []
        for item in self._items:
            if item.completed_at is not None and item.completed_at < cutoff_ts:
                removed.append(item)
            else:
                kept.append(item)

        if removed:
            self._items = kept
            logger.info("Pruned %d completed item(s)", len(removed))
            self._changed()
        return removed

    # ---- derived views ----

    def group_by_age(self, *, now_ts: float | None = None) -> dict[int, list[TodayItem]]:
        """
        Bucket items by whole days since creation.

        The whole collection is sorted newest-first before bucketing, so the
        order inside each bucket follows global recency.
        """
        now = _now(now_ts)
        grouped: dict[int, list[TodayItem]] = {}
        for item in sorted(self._items, key=lambda i: i.created_at, reverse=True):
            grouped.setdefault(days_ago(item.created_at, now), []).append(item)
        return grouped

    def completed_within(
        self,
        from_ts: float,
        to_ts: float,
        *,
        now_ts: float | None = None,
    ) -> list[TodayItem]:
        """
        Items completed strictly between from_ts and to_ts.

        Order is the flattened group_by_age() order (bucket insertion order),
        not an independent sort.
        """
        out: list[TodayItem] = []
        for bucket in self.group_by_age(now_ts=now_ts).values():
            for item in bucket:
                if item.completed_at is None:
                    continue
                if from_ts < item.completed_at < to_ts:
                    out.append(item)
        return out
