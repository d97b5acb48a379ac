# src/today_tracker/core/models.py

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any

from .colors import Color

ONE_DAY_SECONDS = 60 * 60 * 24


def new_item_id() -> str:
    return str(uuid.uuid4())


@dataclass(slots=True)
class TodayItem:
    """
    A single tracked item.

    `completed_at` is set iff the item is currently done. Everything except
    the completion timestamp is treated as immutable after creation.
    """

    text: str
    foreground_color: Color
    background_color: Color
    created_at: float
    completed_at: float | None = None
    id: str = field(default_factory=new_item_id)

    @property
    def is_done(self) -> bool:
        return self.completed_at is not None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "epoch": self.created_at,
            "todo": self.text,
            "foregroundColor": self.foreground_color.to_dict(),
            "backgroundColor": self.background_color.to_dict(),
        }
        if self.completed_at is not None:
            data["completionEpoch"] = self.completed_at
        return data

    @classmethod
    def from_dict(cls, data: Any) -> TodayItem:
        """Strict decode: raises KeyError/ValueError/TypeError on malformed input."""
        if not isinstance(data, dict):
            raise ValueError("item must be an object")
        item_id = data["id"]
        if not isinstance(item_id, str) or not item_id:
            raise ValueError("item id must be a non-empty string")
        text = data["todo"]
        if not isinstance(text, str):
            raise ValueError("item text must be a string")
        completed = data.get("completionEpoch")
        return cls(
            id=item_id,
            created_at=float(data["epoch"]),
            completed_at=None if completed is None else float(completed),
            text=text,
            foreground_color=Color.from_dict(data["foregroundColor"]),
            background_color=Color.from_dict(data["backgroundColor"]),
        )
