# src/today_tracker/items/item_api.py

from __future__ import annotations

import time

from ..core.colors import Color
from ..core.models import ONE_DAY_SECONDS, TodayItem
from ..core.state import AppState
from .item_store import ItemStore


def today_count(grouped: dict[int, list[TodayItem]]) -> int:
    """Number of items created today (bucket 0); shown as "Today: N"."""
    return len(grouped.get(0, []))


def section_title(days: int, count: int) -> str:
    """Header for a day bucket. Bucket 0 has no header."""
    if days == 0:
        return ""
    unit = "Day" if days == 1 else "Days"
    return f"{days} {unit} ago: {count}"


def rollup(store: ItemStore, *, now_ts: float | None = None) -> dict[int, list[TodayItem]]:
    """
    Completed-items summary: the last 24h under 0, the 24h before that under 1.
    """
    now = time.time() if now_ts is None else float(now_ts)
    return {
        0: store.completed_within(now - ONE_DAY_SECONDS, now, now_ts=now),
        1: store.completed_within(now - ONE_DAY_SECONDS * 2, now - ONE_DAY_SECONDS, now_ts=now),
    }


def background_prune_cutoff(now_ts: float, prune_after_days: float) -> float:
    return float(now_ts) - float(prune_after_days) * ONE_DAY_SECONDS


def add_item(
    state: AppState,
    text: str,
    *,
    foreground: Color | None = None,
    background: Color | None = None,
    now_ts: float | None = None,
) -> TodayItem | None:
    """
    Add an item, falling back to the theme defaults for missing colors.
    Returns None when text is empty.
    """
    fg, bg = state.default_colors()
    return state.store.add(
        text,
        foreground if foreground is not None else fg,
        background if background is not None else bg,
        now_ts=now_ts,
    )


def _item_line(item: TodayItem, index: int) -> str:
    mark = "x" if item.is_done else " "
    colors = "" if item.is_done else f" ({item.foreground_color.to_hex()} on {item.background_color.to_hex()})"
    return f"  {index:>3}. [{mark}] {item.text}{colors}  #{item.id[:8]}"


def render_lines(grouped: dict[int, list[TodayItem]], *, title: str = "Today") -> list[str]:
    """
    Plain-text rendering of grouped items, buckets in ascending order.

    Numbering is continuous across buckets so the console can address items
    by position.
    """
    lines = [f"{title}: {today_count(grouped)}"]
    index = 1
    for days in sorted(grouped):
        bucket = grouped[days]
        header = section_title(days, len(bucket))
        if header:
            lines.append(header)
        for item in bucket:
            lines.append(_item_line(item, index))
            index += 1
    return lines


def numbered_items(grouped: dict[int, list[TodayItem]]) -> list[TodayItem]:
    """Items in the same order (and 1-based numbering) as render_lines."""
    out: list[TodayItem] = []
    for days in sorted(grouped):
        out.extend(grouped[days])
    return out
