# src/today_tracker/storage/persistence.py

"""
Persistence of the item collection into a key-value store.

Contract:
- save(): serialize the whole collection under one fixed key; failures are
  logged and swallowed.
- load(): read the same key; a missing key or malformed data leaves the
  collection empty instead of raising.

BackgroundSaver moves the actual store write off the caller's thread. It is
fed encoded snapshots, so the worker never touches live items.
"""

from __future__ import annotations

import json
import logging
import queue
import threading
from collections.abc import Iterable

from ..core.models import TodayItem
from ..core.ports import ItemRepo, KeyValueStore

logger = logging.getLogger(__name__)


def encode_items(items: Iterable[TodayItem]) -> bytes:
    return json.dumps([item.to_dict() for item in items], ensure_ascii=False).encode("utf-8")


def decode_items(data: bytes) -> list[TodayItem]:
    raw = json.loads(data.decode("utf-8"))
    if not isinstance(raw, list):
        raise ValueError("stored items must be a JSON list")
    return [TodayItem.from_dict(entry) for entry in raw]


def save(store: ItemRepo, kv: KeyValueStore, key: str) -> bool:
    """Synchronous best-effort save. Returns False on failure (never raises)."""
    try:
        kv.set(key, encode_items(store.items()))
    except Exception:
        logger.exception("Failed to save %d item(s) under key=%s", len(store), key)
        return False
    logger.debug("Saved %d item(s) under key=%s", len(store), key)
    return True


def load(store: ItemRepo, kv: KeyValueStore, key: str) -> bool:
    """Best-effort load. On any failure the collection ends up empty."""
    try:
        data = kv.get(key)
        if data is None:
            logger.info("Nothing stored under key=%s; starting empty.", key)
            store.replace_all([])
            return False
        items = decode_items(data)
    except Exception:
        logger.exception("Failed to load items from key=%s; starting empty.", key)
        store.replace_all([])
        return False

    store.replace_all(items)
    logger.info("Loaded %d item(s) from key=%s", len(items), key)
    return True


class BackgroundSaver:
    """
    Single worker thread applying queued writes in order.

    schedule() never blocks and never reports back; since writes are applied
    in submission order the last scheduled snapshot wins.
    """

    def __init__(self, kv: KeyValueStore, key: str) -> None:
        self._kv = kv
        self._key = key
        self._queue: "queue.Queue[bytes | None]" = queue.Queue()
        self._stopped = False
        self._worker = threading.Thread(target=self._run, name="today-saver", daemon=True)
        self._worker.start()
        logger.debug("BackgroundSaver started key=%s", key)

    def _run(self) -> None:
        while True:
            payload = self._queue.get()
            try:
                if payload is None:
                    logger.debug("BackgroundSaver received stop signal.")
                    return
                try:
                    self._kv.set(self._key, payload)
                except Exception:
                    logger.exception("Background save failed key=%s", self._key)
            finally:
                self._queue.task_done()

    def schedule(self, items: Iterable[TodayItem]) -> None:
        """Snapshot items now, write them later."""
        if self._stopped:
            logger.warning("BackgroundSaver is stopped; dropping save.")
            return
        try:
            payload = encode_items(items)
        except Exception:
            logger.exception("Failed to encode items for background save.")
            return
        self._queue.put(payload)

    def schedule_store(self, store: ItemRepo) -> None:
        self.schedule(store.items())

    def flush(self) -> None:
        """Block until every scheduled write has been attempted."""
        self._queue.join()

    def shutdown(self, timeout: float = 10.0) -> None:
        if self._stopped:
            return
        self._stopped = True
        self._queue.put(None)
        self._worker.join(timeout=timeout)
