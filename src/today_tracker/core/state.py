# src/today_tracker/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .colors import Color, theme_defaults
from .ports import KeyValueStore

if TYPE_CHECKING:
    from ..items.item_store import ItemStore
    from ..storage.persistence import BackgroundSaver


@dataclass
class AppState:
    # Settings are kept on the state so commands/lifecycle read one object.
    settings: object

    store: ItemStore
    kv: KeyValueStore
    saver: BackgroundSaver | None = None

    @property
    def storage_key(self) -> str:
        return str(getattr(self.settings, "storage_key", "TodayItems"))

    @property
    def color_scheme(self) -> str:
        return str(getattr(self.settings, "color_scheme", "light"))

    def default_colors(self) -> tuple[Color, Color]:
        return theme_defaults(self.color_scheme)
