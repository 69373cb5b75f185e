"""Resource calendar and the buffered overlap rule.

A candidate screening collides with an existing one in the same room when

    candidate.start < existing.end + buffer  and  candidate.end > existing.start - buffer

Both comparisons are strict, so touching the buffered boundary is allowed.
"""

import threading
from collections.abc import Iterable
from datetime import date, timedelta

from venue.domain.models import Occupation
from venue.domain.value_objects import Interval, OccupationId, ResourceId


def collides(candidate: Interval, existing: Interval, buffer: timedelta) -> bool:
    return (
        candidate.starts_at < existing.ends_at + buffer
        and candidate.ends_at > existing.starts_at - buffer
    )


def find_conflict(
    resource_id: ResourceId,
    candidate: Interval,
    occupations: Iterable[Occupation],
    buffer: timedelta,
) -> Occupation | None:
    """Return the first occupation of the room that the candidate collides with."""
    for occupation in occupations:
        if occupation.resource_id != resource_id:
            continue
        if collides(candidate, occupation.interval, buffer):
            return occupation
    return None


def is_admissible(
    resource_id: ResourceId,
    candidate: Interval,
    occupations: Iterable[Occupation],
    buffer: timedelta,
) -> bool:
    return find_conflict(resource_id, candidate, occupations, buffer) is None


class ResourceCalendar:
    """All admitted occupations, in admission order.

    The calendar only appends. ``lock`` guards the validate-then-insert
    sequence; callers hold it across ``find_conflict`` and ``add``.
    """

    def __init__(self, occupations: Iterable[Occupation] = ()) -> None:
        self._occupations: dict[OccupationId, Occupation] = {}
        for occupation in occupations:
            self._occupations[occupation.id] = occupation
        self.lock = threading.RLock()

    def __len__(self) -> int:
        return len(self._occupations)

    def __iter__(self):
        return iter(list(self._occupations.values()))

    def get(self, occupation_id: OccupationId) -> Occupation | None:
        return self._occupations.get(occupation_id)

    def add(self, occupation: Occupation) -> None:
        if occupation.id in self._occupations:
            raise ValueError(f"Occupation {occupation.id} already scheduled")
        self._occupations[occupation.id] = occupation

    def for_resource(self, resource_id: ResourceId) -> list[Occupation]:
        return [o for o in self._occupations.values() if o.resource_id == resource_id]

    def on_day(self, resource_id: ResourceId, day: date) -> list[Occupation]:
        return sorted(
            (o for o in self.for_resource(resource_id) if o.starts_at.date() == day),
            key=lambda o: o.starts_at,
        )
