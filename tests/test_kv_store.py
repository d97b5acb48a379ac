# tests/test_kv_store.py

from __future__ import annotations

from pathlib import Path

import pytest

from today_tracker.storage.kv_store import (
    JsonFileKVStore,
    MemoryKVStore,
    SqliteKVStore,
    open_kv_store,
)


@pytest.mark.parametrize("backend", ["json", "sqlite", "memory"])
def test_get_set_overwrite(tmp_path: Path, backend: str) -> None:
    kv = open_kv_store(backend, tmp_path / f"kv.{backend}")

    assert kv.get("TodayItems") is None
    kv.set("TodayItems", b"[1]")
    kv.set("Other", b"\x00\xff")
    kv.set("TodayItems", b"[1, 2]")

    assert kv.get("TodayItems") == b"[1, 2]"
    assert kv.get("Other") == b"\x00\xff"


def test_open_kv_store_picks_backend(tmp_path: Path) -> None:
    assert isinstance(open_kv_store("sqlite", tmp_path / "a.sqlite3"), SqliteKVStore)
    assert isinstance(open_kv_store("memory", tmp_path / "unused"), MemoryKVStore)
    assert isinstance(open_kv_store("json", tmp_path / "a.json"), JsonFileKVStore)
    assert isinstance(open_kv_store("bogus", tmp_path / "b.json"), JsonFileKVStore)


def test_json_store_persists_across_instances(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "today.json"
    JsonFileKVStore(path).set("TodayItems", b"hello")

    assert path.exists()
    assert not path.with_suffix(".json.tmp").exists()
    assert JsonFileKVStore(path).get("TodayItems") == b"hello"


def test_json_store_rewrites_corrupt_file(tmp_path: Path) -> None:
    path = tmp_path / "today.json"
    path.write_text("{broken", "utf-8")
    kv = JsonFileKVStore(path)

    with pytest.raises(ValueError):
        kv.get("TodayItems")

    kv.set("TodayItems", b"ok")
    assert kv.get("TodayItems") == b"ok"


def test_sqlite_store_persists_across_instances(tmp_path: Path) -> None:
    db = tmp_path / "today.sqlite3"
    SqliteKVStore(db).set("TodayItems", b"payload")
    assert SqliteKVStore(db).get("TodayItems") == b"payload"
