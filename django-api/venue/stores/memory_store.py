"""In-process implementation of the DurableStore, used by tests and local runs."""

import copy
import threading
from typing import Any

from venue.stores.interfaces import DurableStore


class InMemoryDurableStore(DurableStore):
    """Dict-backed store. Snapshots are deep-copied in and out."""

    def __init__(self) -> None:
        self._lines: dict[str, list[str]] = {}
        self._snapshots: dict[str, Any] = {}
        self._lock = threading.Lock()

    def exists(self, key: str) -> bool:
        with self._lock:
            return key in self._lines or key in self._snapshots

    def read_lines(self, key: str) -> list[str]:
        with self._lock:
            return list(self._lines.get(key, []))

    def append_line(self, key: str, text: str) -> None:
        with self._lock:
            self._lines.setdefault(key, []).append(text)

    def overwrite(self, key: str, text: str) -> None:
        with self._lock:
            self._lines[key] = [text]

    def save_snapshot(self, key: str, value: Any) -> None:
        with self._lock:
            self._snapshots[key] = copy.deepcopy(value)

    def load_snapshot(self, key: str) -> Any | None:
        with self._lock:
            return copy.deepcopy(self._snapshots.get(key))
