"""Scheduling service - admits screenings into the resource calendar.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

import logging
from datetime import date, datetime, timedelta

from venue.domain.calendar import ResourceCalendar, find_conflict
from venue.domain.errors import (
    OccupationNotFoundError,
    ResourceNotFoundError,
    ScheduleConflictError,
)
from venue.domain.models import Account, Occupation, Resource, ScheduleEntry
from venue.domain.value_objects import Interval, OccupationId, ResourceId
from venue.stores.interfaces import Repository

logger = logging.getLogger(__name__)


class SchedulingService:
    """Service for room programming."""

    def __init__(
        self,
        resources: Repository[Resource],
        occupations: Repository[Occupation],
        buffer: timedelta,
    ) -> None:
        self._resources = resources
        self._occupations = occupations
        self._buffer = buffer
        self._calendar = ResourceCalendar(occupations.list())

    @property
    def calendar(self) -> ResourceCalendar:
        return self._calendar

    def list_resources(self) -> list[Resource]:
        return self._resources.list()

    def get_resource(self, resource_id: str) -> Resource:
        """Return a room by id.

        Raises:
            ResourceNotFoundError: If the room does not exist.
        """
        try:
            key = ResourceId.from_string(resource_id)
        except ValueError:
            raise ResourceNotFoundError(resource_id) from None
        resource = self._resources.get(key.value)
        if resource is None:
            raise ResourceNotFoundError(resource_id)
        return resource

    def get_occupation(self, occupation_id: str) -> Occupation:
        """Return a screening by id.

        Raises:
            OccupationNotFoundError: If no screening has that id.
        """
        try:
            occupation = self._calendar.get(OccupationId(occupation_id))
        except ValueError:
            occupation = None
        if occupation is None:
            raise OccupationNotFoundError(occupation_id)
        return occupation

    def validate_and_schedule(
        self,
        resource_id: str,
        starts_at: datetime,
        duration_minutes: int,
        title: str,
        scheduled_by: Account,
    ) -> Occupation:
        """Admit a screening if it keeps the turnaround buffer to every other one in the room.

        Raises:
            ResourceNotFoundError: If the room does not exist.
            ScheduleConflictError: Carrying the first screening it collides with.
        """
        resource = self.get_resource(resource_id)
        candidate = Interval(starts_at=starts_at, duration_minutes=duration_minutes)

        with self._calendar.lock:
            conflict = find_conflict(
                resource.id, candidate, self._calendar.for_resource(resource.id), self._buffer
            )
            if conflict is not None:
                logger.info(
                    "Rejected %s in %s at %s: collides with %s",
                    title, resource.id, starts_at, conflict.id,
                )
                raise ScheduleConflictError(conflict)

            occupation = Occupation.schedule(
                id=OccupationId.build(scheduled_by.initials, starts_at, resource.id),
                resource=resource,
                interval=candidate,
                title=title,
            )
            self._calendar.add(occupation)
            self._occupations.upsert(occupation)

        logger.info("Scheduled %s (%s) until %s", occupation.id, title, occupation.ends_at)
        return occupation

    def schedule_for(self, resource_id: str, day: date) -> list[ScheduleEntry]:
        resource = self.get_resource(resource_id)
        return [
            ScheduleEntry(
                occupation_id=occupation.id,
                starts_at=occupation.starts_at,
                ends_at=occupation.ends_at,
                title=occupation.title,
            )
            for occupation in self._calendar.on_day(resource.id, day)
        ]
