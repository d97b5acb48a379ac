# src/today_tracker/core/colors.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

_NAMED: dict[str, tuple[float, float, float, float]] = {
    "black": (0.0, 0.0, 0.0, 1.0),
    "white": (1.0, 1.0, 1.0, 1.0),
    "red": (1.0, 0.0, 0.0, 1.0),
    "green": (0.0, 1.0, 0.0, 1.0),
    "blue": (0.0, 0.0, 1.0, 1.0),
    "yellow": (1.0, 1.0, 0.0, 1.0),
    "orange": (1.0, 0.5, 0.0, 1.0),
    "purple": (0.5, 0.0, 0.5, 1.0),
    "gray": (0.5, 0.5, 0.5, 1.0),
    "grey": (0.5, 0.5, 0.5, 1.0),
    "clear": (0.0, 0.0, 0.0, 0.0),
}


def _clamp(v: Any) -> float:
    return max(0.0, min(1.0, float(v)))


@dataclass(frozen=True, slots=True)
class Color:
    """RGBA color, four float channels in [0, 1]."""

    red: float
    green: float
    blue: float
    alpha: float = 1.0

    def __post_init__(self) -> None:
        # frozen dataclass: normalize through object.__setattr__
        for name in ("red", "green", "blue", "alpha"):
            object.__setattr__(self, name, _clamp(getattr(self, name)))

    @classmethod
    def parse(cls, raw: str) -> Color:
        """
        Parse "#RRGGBB", "#RRGGBBAA" (leading '#' optional) or a known name.

        Raises ValueError on anything else.
        """
        s = (raw or "").strip().lower()
        if s in _NAMED:
            return cls(*_NAMED[s])

        h = s.lstrip("#")
        if len(h) not in (6, 8) or any(c not in "0123456789abcdef" for c in h):
            raise ValueError(f"Unknown color: {raw!r}")

        channels = [int(h[i : i + 2], 16) / 255.0 for i in range(0, len(h), 2)]
        return cls(*channels)

    def to_hex(self) -> str:
        parts = [self.red, self.green, self.blue]
        if self.alpha < 1.0:
            parts.append(self.alpha)
        return "#" + "".join(f"{round(p * 255):02x}" for p in parts)

    def to_dict(self) -> dict[str, float]:
        return {"red": self.red, "green": self.green, "blue": self.blue, "alpha": self.alpha}

    @classmethod
    def from_dict(cls, data: Any) -> Color:
        if not isinstance(data, dict):
            raise ValueError("color must be an object")
        alpha = data.get("alpha")
        return cls(
            red=float(data["red"]),
            green=float(data["green"]),
            blue=float(data["blue"]),
            alpha=1.0 if alpha is None else float(alpha),
        )


BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)


def theme_defaults(color_scheme: str) -> tuple[Color, Color]:
    """(foreground, background) picked for new items under the given scheme."""
    if (color_scheme or "").strip().lower() == "dark":
        return WHITE, BLACK
    return BLACK, WHITE
