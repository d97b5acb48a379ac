# tests/test_config.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from today_tracker.config import Settings
from today_tracker.logging_setup import _ConsoleNoiseFilter


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "TODAY_DATA_DIR",
        "TODAY_STORAGE_BACKEND",
        "TODAY_STORAGE_PATH",
        "TODAY_STORAGE_KEY",
        "TODAY_PRUNE_AFTER_DAYS",
        "TODAY_COLOR_SCHEME",
        "TODAY_SEED_FIXTURES",
    ):
        monkeypatch.delenv(name, raising=False)

    s = Settings.from_env()

    assert s.storage_backend == "json"
    assert s.storage_path == Path(".local/today") / "today.json"
    assert s.storage_key == "TodayItems"
    assert s.prune_after_days == 2.0
    assert s.color_scheme == "light"
    assert s.seed_fixtures is False


def test_settings_from_env_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TODAY_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("TODAY_STORAGE_BACKEND", "SQLite")
    monkeypatch.delenv("TODAY_STORAGE_PATH", raising=False)
    monkeypatch.setenv("TODAY_PRUNE_AFTER_DAYS", "7")
    monkeypatch.setenv("TODAY_COLOR_SCHEME", "dark")
    monkeypatch.setenv("TODAY_SEED_FIXTURES", "yes")

    s = Settings.from_env()

    assert s.storage_backend == "sqlite"
    assert s.storage_path == tmp_path / "today.sqlite3"
    assert s.prune_after_days == 7.0
    assert s.color_scheme == "dark"
    assert s.seed_fixtures is True


def test_settings_fall_back_on_bad_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TODAY_STORAGE_BACKEND", "postgres")
    monkeypatch.setenv("TODAY_PRUNE_AFTER_DAYS", "soon")
    monkeypatch.setenv("TODAY_COLOR_SCHEME", "sepia")

    s = Settings.from_env()

    assert s.storage_backend == "json"
    assert s.prune_after_days == 2.0
    assert s.color_scheme == "light"


def test_console_filter_quiets_storage_and_third_party() -> None:
    f = _ConsoleNoiseFilter()

    def rec(name: str, level: int) -> logging.LogRecord:
        return logging.LogRecord(name, level, __file__, 1, "msg", None, None)

    assert f.filter(rec("today_tracker.items.item_store", logging.DEBUG))
    assert not f.filter(rec("today_tracker.storage.persistence", logging.INFO))
    assert f.filter(rec("today_tracker.storage.persistence", logging.WARNING))
    assert not f.filter(rec("urllib3", logging.WARNING))
    assert f.filter(rec("urllib3", logging.ERROR))
