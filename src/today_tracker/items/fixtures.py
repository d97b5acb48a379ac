# src/today_tracker/items/fixtures.py

"""Demo fixture list used instead of stored data when TODAY_SEED_FIXTURES is on."""

from __future__ import annotations

from ..core.colors import BLACK, WHITE
from ..core.models import ONE_DAY_SECONDS, TodayItem

_HOUR = 60 * 60


def _item(title: str, now_ts: float, epoch_offset: float, completion_offset: float | None) -> TodayItem:
    return TodayItem(
        text=title,
        created_at=now_ts + epoch_offset,
        completed_at=None if completion_offset is None else now_ts + completion_offset,
        foreground_color=BLACK,
        background_color=WHITE,
    )


def seed_items(now_ts: float) -> list[TodayItem]:
    # Creation offsets point into the future; bucketing uses the absolute distance.
    completed = [_item("Completed", now_ts, ONE_DAY_SECONDS * day, -30 * _HOUR) for day in range(1, 10)]
    uncompleted = [_item("New", now_ts, ONE_DAY_SECONDS * day, None) for day in range(1, 10)]
    completed_old = [_item("Old", now_ts, ONE_DAY_SECONDS * day, -300 * _HOUR) for day in range(1, 100)]
    return completed + uncompleted + completed_old
