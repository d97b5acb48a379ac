# tests/test_lifecycle.py

from __future__ import annotations

from types import SimpleNamespace

from today_tracker.cli.bootstrap import (
    create_initial_state,
    on_background,
    on_start,
    shutdown,
)
from today_tracker.core.state import AppState
from today_tracker.items.fixtures import seed_items
from today_tracker.storage import persistence
from today_tracker.storage.kv_store import MemoryKVStore

from .conftest import DAY, HOUR, NOW
from .fakes import RecordingKVStore, make_item


def test_on_background_prunes_then_saves(state: AppState, kv: MemoryKVStore) -> None:
    keep_open = make_item("open", created_at=NOW - 10 * DAY)
    keep_recent = make_item("recent", created_at=NOW - DAY, completed_at=NOW - DAY)
    drop_old = make_item("old", created_at=NOW - 5 * DAY, completed_at=NOW - 3 * DAY)
    state.store.replace_all([keep_open, keep_recent, drop_old])

    on_background(state, now_ts=NOW)

    assert state.store.items() == [keep_open, keep_recent]
    stored = persistence.decode_items(kv.get("TodayItems") or b"")
    assert [i.text for i in stored] == ["open", "recent"]


def test_on_start_loads_saved_items(settings: SimpleNamespace, kv: MemoryKVStore) -> None:
    first = create_initial_state(settings=settings, kv=kv, background_saves=False)
    first.store.replace_all([make_item("kept", created_at=NOW)])
    on_background(first, now_ts=NOW)

    second = create_initial_state(settings=settings, kv=kv, background_saves=False)
    on_start(second)

    assert second.store.items() == first.store.items()


def test_on_start_with_empty_storage_starts_empty(state: AppState) -> None:
    on_start(state)
    assert len(state.store) == 0


def test_seed_fixtures_skip_storage(settings: SimpleNamespace) -> None:
    settings.seed_fixtures = True
    kv = RecordingKVStore()
    kv.data["TodayItems"] = b"[]"
    state = create_initial_state(settings=settings, kv=kv, background_saves=False)

    on_start(state, now_ts=NOW)

    assert len(state.store) == 9 + 9 + 99
    assert kv.writes == []


def test_seed_items_layout() -> None:
    items = seed_items(NOW)
    completed = [i for i in items if i.text == "Completed"]
    old = [i for i in items if i.text == "Old"]
    new = [i for i in items if i.text == "New"]

    assert len(completed) == 9 and len(new) == 9 and len(old) == 99
    assert all(i.completed_at == NOW - 30 * HOUR for i in completed)
    assert all(i.completed_at == NOW - 300 * HOUR for i in old)
    assert all(i.completed_at is None for i in new)
    assert completed[0].created_at == NOW + DAY


def test_background_on_seeded_fixtures_drops_old_completed(settings: SimpleNamespace) -> None:
    settings.seed_fixtures = True
    state = create_initial_state(settings=settings, kv=MemoryKVStore(), background_saves=False)
    on_start(state, now_ts=NOW)

    on_background(state, now_ts=NOW)

    assert {i.text for i in state.store} == {"Completed", "New"}
    assert len(state.store) == 18


def test_changes_are_saved_in_background(settings: SimpleNamespace) -> None:
    kv = RecordingKVStore()
    state = create_initial_state(settings=settings, kv=kv)
    try:
        fg, bg = state.default_colors()
        item = state.store.add("write report", fg, bg, now_ts=NOW)
        assert item is not None
        state.store.toggle_completion(item.id, now_ts=NOW)
    finally:
        shutdown(state)

    assert len(kv.writes) == 2
    stored = persistence.decode_items(kv.data["TodayItems"])
    assert stored[0].completed_at == NOW


def test_background_saves_once_after_prune(settings: SimpleNamespace) -> None:
    kv = RecordingKVStore()
    state = create_initial_state(settings=settings, kv=kv)
    state.store.replace_all(
        [
            make_item("a", created_at=NOW, completed_at=NOW - 5 * DAY),
            make_item("b", created_at=NOW),
        ]
    )
    try:
        on_background(state, now_ts=NOW)
    finally:
        shutdown(state)

    assert len(kv.writes) == 1
    assert [i.text for i in persistence.decode_items(kv.writes[0][1])] == ["b"]


def test_save_on_change_can_be_disabled(settings: SimpleNamespace) -> None:
    settings.save_on_change = False
    kv = RecordingKVStore()
    state = create_initial_state(settings=settings, kv=kv)
    try:
        fg, bg = state.default_colors()
        state.store.add("quiet", fg, bg, now_ts=NOW)
    finally:
        shutdown(state)
    assert kv.writes == []
