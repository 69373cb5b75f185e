"""Repository kept in memory and mirrored to one DurableStore snapshot."""

import logging
import threading
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from venue.domain.errors import StorageError
from venue.stores.interfaces import DurableStore, Repository

T = TypeVar("T")

logger = logging.getLogger(__name__)


class SnapshotRepository(Repository[T], Generic[T]):
    """Entities held in memory, saved as a whole after every change.

    A failed snapshot write is logged and the in-memory change stands;
    the next successful write catches the store up.
    """

    def __init__(
        self,
        store: DurableStore,
        snapshot_key: str,
        key_of: Callable[[T], str],
        encode: Callable[[T], dict[str, Any]],
        decode: Callable[[dict[str, Any]], T],
    ) -> None:
        self._store = store
        self._snapshot_key = snapshot_key
        self._key_of = key_of
        self._encode = encode
        self._decode = decode
        self._lock = threading.RLock()
        self._items: dict[str, T] = {}
        for data in store.load_snapshot(snapshot_key) or []:
            item = decode(data)
            self._items[key_of(item)] = item

    def get(self, key: str) -> T | None:
        with self._lock:
            return self._items.get(key)

    def list(self) -> list[T]:
        with self._lock:
            return list(self._items.values())

    def upsert(self, item: T) -> None:
        with self._lock:
            self._items[self._key_of(item)] = item
            self.flush()

    def flush(self) -> bool:
        """Write the current collection. Returns False if the write failed."""
        with self._lock:
            payload = [self._encode(item) for item in self._items.values()]
            try:
                self._store.save_snapshot(self._snapshot_key, payload)
            except StorageError:
                logger.exception("Snapshot %s could not be saved", self._snapshot_key)
                return False
            return True
