# src/today_tracker/cli/commands.py

from __future__ import annotations

import contextlib
import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..core.colors import Color
from ..core.models import TodayItem
from ..core.state import AppState
from ..items.item_api import add_item, numbered_items, render_lines, rollup, section_title
from .bootstrap import on_background

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except Exception:
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  Any line not starting with '/' is added as a new item.")
        return "\n".join(lines)


registry = CommandRegistry()


def _resolve_item(state: AppState, ref: str) -> TodayItem | None:
    """An item by its listed number (as shown by /list) or by id prefix."""
    ref = ref.strip().lstrip("#")
    if ref.isdigit():
        ordered = numbered_items(state.store.group_by_age())
        idx = int(ref) - 1
        if 0 <= idx < len(ordered):
            return ordered[idx]
        return None
    return state.store.find_by_prefix(ref)


def _parse_add_args(args: list[str]) -> tuple[str, Color | None, Color | None]:
    fg: Color | None = None
    bg: Color | None = None
    words: list[str] = []
    it = iter(args)
    for token in it:
        if token in ("--fg", "--bg"):
            value = next(it, None)
            if value is None:
                raise ValueError(f"{token} needs a color")
            if token == "--fg":
                fg = Color.parse(value)
            else:
                bg = Color.parse(value)
            continue
        words.append(token)
    return " ".join(words), fg, bg


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_add(
    state: AppState,
    args: list[str],
    emit: CommandEmitter | None = None,
) -> str:
    """
    /add <text>                      -> theme colors
    /add --fg red --bg #ffeeaa <text> -> custom colors
    """
    try:
        text, fg, bg = _parse_add_args(args)
    except ValueError as e:
        return f"{e}. Usage: /add [--fg COLOR] [--bg COLOR] <text>"

    item = add_item(state, text, foreground=fg, background=bg)
    if item is None:
        return "Nothing to add: text is empty."
    return f"Added: {item.text}"


def cmd_done(state: AppState, args: list[str]) -> str:
    """/done <n|id> toggles completion."""
    if len(args) != 1:
        return "Usage: /done <number|id>"

    item = _resolve_item(state, args[0])
    if item is None:
        return f"No such item: {args[0]}"

    state.store.toggle_completion(item.id)
    return f"{'Done' if item.is_done else 'Not done'}: {item.text}"


def cmd_list(state: AppState, args: list[str]) -> str:
    grouped = state.store.group_by_age()
    if not grouped:
        return "Today: 0\n  (no items)"
    return "\n".join(render_lines(grouped))


def cmd_rollup(state: AppState, args: list[str]) -> str:
    """Completed in the last 24h and the 24h before."""
    summary = rollup(state.store)
    lines = [f"Today: {len(summary[0])}"]
    for days, items in summary.items():
        header = section_title(days, len(items))
        if header:
            lines.append(header)
        for item in items:
            lines.append(f"  [x] {item.text}")
    return "\n".join(lines)


def cmd_background(
    state: AppState,
    args: list[str],
    emit: CommandEmitter | None = None,
) -> str:
    if emit:
        with contextlib.suppress(Exception):
            emit("[STORE] Pruning and saving...")
    before = len(state.store)
    on_background(state)
    return f"Pruned {before - len(state.store)} item(s); save scheduled."


def cmd_status(state: AppState, args: list[str]) -> str:
    settings = state.settings
    done = sum(1 for item in state.store if item.is_done)
    return (
        "Status:\n"
        f"  Items: {len(state.store)} ({done} done)\n"
        f"  Storage: {getattr(settings, 'storage_backend', '?')} key={state.storage_key}\n"
        f"  Color scheme: {state.color_scheme}\n"
        f"  Prune completed after: {getattr(settings, 'prune_after_days', 2.0)} day(s)"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("add", cmd_add, help_text="Add an item: /add [--fg COLOR] [--bg COLOR] <text>.", aliases=["a"])
registry.register("done", cmd_done, help_text="Toggle completion: /done <number|id>.", aliases=["x", "toggle"])
registry.register("list", cmd_list, help_text="Show items grouped by day.", aliases=["ls"])
registry.register("rollup", cmd_rollup, help_text="Show items completed today and yesterday.")
registry.register("background", cmd_background, help_text="Prune completed items and save now.")
registry.register("status", cmd_status, help_text="Show item counts and storage settings.")
