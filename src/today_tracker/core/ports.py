# src/today_tracker/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps storage backends swappable and makes testing easier.
"""

from typing import Iterable, Iterator, Protocol

from .colors import Color
from .models import TodayItem


class KeyValueStore(Protocol):
    """Blob store addressed by a fixed string key (UserDefaults-like)."""

    def get(self, key: str) -> bytes | None: ...
    def set(self, key: str, value: bytes) -> None: ...


class ItemRepo(Protocol):
    def add(
            self,
            text: str,
            foreground_color: Color,
            background_color: Color,
            *,
            now_ts: float | None = None,
    ) -> TodayItem | None: ...

    def toggle_completion(self, item_id: str, *, now_ts: float | None = None) -> TodayItem | None: ...
    def group_by_age(self, *, now_ts: float | None = None) -> dict[int, list[TodayItem]]: ...

    def completed_within(
            self,
            from_ts: float,
            to_ts: float,
            *,
            now_ts: float | None = None,
    ) -> list[TodayItem]: ...

    def prune(self, cutoff_ts: float) -> list[TodayItem]: ...

    def items(self) -> list[TodayItem]: ...
    def replace_all(self, items: Iterable[TodayItem]) -> None: ...
    def __len__(self) -> int: ...
    def __iter__(self) -> Iterator[TodayItem]: ...
