"""Store interfaces (repository pattern).

Stores must be swappable and return plain data or domain models.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class DurableStore(ABC):
    """Key-addressed text and snapshot storage.

    Text streams back ticket, notification and audit history; snapshots
    back whole entity collections. Implementations raise StorageError on
    any read or write failure.
    """

    @abstractmethod
    def exists(self, key: str) -> bool:
        """Check if a text stream or snapshot exists under ``key``."""
        ...

    @abstractmethod
    def read_lines(self, key: str) -> list[str]:
        """Return the lines of a text stream in write order, empty if missing."""
        ...

    @abstractmethod
    def append_line(self, key: str, text: str) -> None:
        """Append one line to a text stream, creating it if needed."""
        ...

    @abstractmethod
    def overwrite(self, key: str, text: str) -> None:
        """Replace a text stream with a single line."""
        ...

    @abstractmethod
    def save_snapshot(self, key: str, value: Any) -> None:
        """Store a JSON-compatible value, replacing any previous one."""
        ...

    @abstractmethod
    def load_snapshot(self, key: str) -> Any | None:
        """Return the stored value, or None if nothing was saved."""
        ...

    def close(self) -> None:
        """Release per-thread resources. Called by background workers on exit."""


class Repository(ABC, Generic[T]):
    """Collection of entities addressed by a string key."""

    @abstractmethod
    def get(self, key: str) -> T | None:
        ...

    @abstractmethod
    def upsert(self, item: T) -> None:
        ...

    @abstractmethod
    def list(self) -> list[T]:
        ...
