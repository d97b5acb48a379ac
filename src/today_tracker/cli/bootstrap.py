# src/today_tracker/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the item store, key-value backend and background saver into AppState,
- exposes the lifecycle hooks the host calls (start, background).
"""

from __future__ import annotations

import logging
import time

from ..config import get_settings
from ..core.state import AppState
from ..items.fixtures import seed_items
from ..items.item_api import background_prune_cutoff
from ..items.item_store import ItemStore
from ..storage import persistence
from ..storage.kv_store import open_kv_store

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.storage_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None, kv=None, background_saves: bool = True) -> AppState:
    """
    Create AppState from the provided settings.

    Settings and the kv backend are injectable so tests can avoid disk and
    hidden global config reads. If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    if kv is None:
        _ensure_local_dirs(settings)
        kv = open_kv_store(settings.storage_backend, settings.storage_path)

    state = AppState(settings=settings, store=ItemStore(), kv=kv)

    if background_saves:
        state.saver = persistence.BackgroundSaver(kv, state.storage_key)
        if getattr(settings, "save_on_change", True):
            state.store.on_change = state.saver.schedule_store

    return state


def save_items(state: AppState) -> None:
    """Dispatch a save without waiting for it (synchronous when no saver is wired)."""
    if state.saver is not None:
        state.saver.schedule_store(state.store)
        return
    persistence.save(state.store, state.kv, state.storage_key)


def on_start(state: AppState, *, now_ts: float | None = None) -> None:
    """Populate the store once when the app first shows its list."""
    if getattr(state.settings, "seed_fixtures", False):
        now = time.time() if now_ts is None else float(now_ts)
        state.store.replace_all(seed_items(now))
        logger.info("Seeded %d fixture item(s); storage is not loaded.", len(state.store))
        return
    persistence.load(state.store, state.kv, state.storage_key)


def on_background(state: AppState, *, now_ts: float | None = None) -> None:
    """
    Host hook for "app is going to background / shutting down".

    Prunes aged-out completed items, then saves. The order matters: pruned
    items must never reach storage.
    """
    logger.info("Application entering background.")
    now = time.time() if now_ts is None else float(now_ts)
    days = float(getattr(state.settings, "prune_after_days", 2.0))

    # Mute per-change saves during prune; one explicit save follows.
    listener = state.store.on_change
    state.store.on_change = None
    try:
        state.store.prune(background_prune_cutoff(now, days))
    finally:
        state.store.on_change = listener

    save_items(state)


def shutdown(state: AppState) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    saver = state.saver
    if saver is None:
        return
    try:
        saver.flush()
        saver.shutdown()
    except Exception:
        logger.exception("Failed to stop background saver.")
