"""Django ORM implementation of the DurableStore."""

from typing import Any

from django.db import DatabaseError, connections, transaction

from venue.domain.errors import StorageError
from venue.models import Snapshot, StreamLine
from venue.stores.interfaces import DurableStore


class DjangoDurableStore(DurableStore):
    """Database-backed store using Django ORM."""

    def exists(self, key: str) -> bool:
        try:
            return (
                StreamLine.objects.filter(key=key).exists()
                or Snapshot.objects.filter(key=key).exists()
            )
        except DatabaseError as exc:
            raise StorageError(key, str(exc)) from exc

    def read_lines(self, key: str) -> list[str]:
        try:
            return list(StreamLine.objects.filter(key=key).values_list("text", flat=True))
        except DatabaseError as exc:
            raise StorageError(key, str(exc)) from exc

    def append_line(self, key: str, text: str) -> None:
        try:
            StreamLine.objects.create(key=key, text=text)
        except DatabaseError as exc:
            raise StorageError(key, str(exc)) from exc

    def overwrite(self, key: str, text: str) -> None:
        try:
            with transaction.atomic():
                StreamLine.objects.filter(key=key).delete()
                StreamLine.objects.create(key=key, text=text)
        except DatabaseError as exc:
            raise StorageError(key, str(exc)) from exc

    def save_snapshot(self, key: str, value: Any) -> None:
        try:
            Snapshot.objects.update_or_create(key=key, defaults={"value": value})
        except DatabaseError as exc:
            raise StorageError(key, str(exc)) from exc

    def load_snapshot(self, key: str) -> Any | None:
        try:
            row = Snapshot.objects.filter(key=key).first()
        except DatabaseError as exc:
            raise StorageError(key, str(exc)) from exc
        return row.value if row is not None else None

    def close(self) -> None:
        connections.close_all()
