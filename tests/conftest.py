# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from today_tracker.cli.bootstrap import create_initial_state
from today_tracker.core.state import AppState
from today_tracker.storage.kv_store import MemoryKVStore

NOW = 1_700_000_000.0
HOUR = 60 * 60
DAY = 24 * HOUR


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="today-test",
        log_level="DEBUG",
        data_dir=tmp_path,
        storage_backend="memory",
        storage_path=tmp_path / "today.json",
        storage_key="TodayItems",
        prune_after_days=2.0,
        color_scheme="light",
        seed_fixtures=False,
        save_on_change=True,
    )


@pytest.fixture()
def kv() -> MemoryKVStore:
    return MemoryKVStore()


@pytest.fixture()
def state(settings: SimpleNamespace, kv: MemoryKVStore) -> AppState:
    """
    AppState with synchronous saves (no worker thread), so tests can read
    the kv store right after an operation.
    """
    return create_initial_state(settings=settings, kv=kv, background_saves=False)
