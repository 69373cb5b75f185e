"""Unit tests for the buffered overlap rule and the resource calendar.

Run with: pytest tests/test_calendar.py -v
"""

from datetime import date, datetime, timedelta

import pytest

from venue.domain import (
    Interval,
    Occupation,
    OccupationId,
    Resource,
    ResourceCalendar,
    ResourceId,
    SeatLayout,
    find_conflict,
    is_admissible,
)

BUFFER = timedelta(minutes=30)
ROOM_A = Resource(ResourceId("A"), "Room A", SeatLayout.uniform("AB", 5))
ROOM_B = Resource(ResourceId("B"), "Room B", SeatLayout.uniform("AB", 5))


def at(hour: int, minute: int = 0) -> datetime:
    return datetime(2026, 10, 17, hour, minute)


def occupation(resource: Resource, start: datetime, minutes: int) -> Occupation:
    return Occupation.schedule(
        id=OccupationId.build("EA", start, resource.id),
        resource=resource,
        interval=Interval(start, minutes),
        title="Feature",
    )


class TestBufferedOverlap:
    """Tests for is_admissible / find_conflict."""

    existing = [occupation(ROOM_A, at(14), 120)]

    def test_start_inside_trailing_buffer_is_rejected(self):
        """[14:00,16:00) blocks a start at 16:25."""
        candidate = Interval(at(16, 25), 95)
        assert not is_admissible(ROOM_A.id, candidate, self.existing, BUFFER)

    def test_start_at_end_plus_buffer_is_admitted(self):
        """[14:00,16:00) admits a start at exactly 16:30."""
        candidate = Interval(at(16, 30), 90)
        assert is_admissible(ROOM_A.id, candidate, self.existing, BUFFER)

    def test_one_minute_before_boundary_is_rejected(self):
        """T + buffer - 1 minute collides."""
        candidate = Interval(at(16, 29), 60)
        assert find_conflict(ROOM_A.id, candidate, self.existing, BUFFER) is self.existing[0]

    def test_end_at_start_minus_buffer_is_admitted(self):
        """A screening ending exactly 30 minutes before 14:00 is fine."""
        candidate = Interval(at(11, 30), 120)
        assert is_admissible(ROOM_A.id, candidate, self.existing, BUFFER)

    def test_end_inside_leading_buffer_is_rejected(self):
        candidate = Interval(at(11, 31), 120)
        assert not is_admissible(ROOM_A.id, candidate, self.existing, BUFFER)

    def test_candidate_enclosing_existing_is_rejected(self):
        candidate = Interval(at(12), 300)
        assert not is_admissible(ROOM_A.id, candidate, self.existing, BUFFER)

    def test_other_rooms_are_ignored(self):
        """Only occupations of the same room count."""
        candidate = Interval(at(14), 120)
        assert is_admissible(ROOM_B.id, candidate, self.existing, BUFFER)

    def test_first_conflict_is_returned(self):
        later = occupation(ROOM_A, at(18), 60)
        candidate = Interval(at(17), 60)
        assert find_conflict(ROOM_A.id, candidate, [*self.existing, later], BUFFER) is later


class TestResourceCalendar:
    """Tests for ResourceCalendar."""

    def test_add_and_lookup(self):
        calendar = ResourceCalendar()
        screening = occupation(ROOM_A, at(14), 120)
        calendar.add(screening)
        assert calendar.get(screening.id) is screening
        assert len(calendar) == 1

    def test_add_rejects_duplicate_id(self):
        screening = occupation(ROOM_A, at(14), 120)
        calendar = ResourceCalendar([screening])
        with pytest.raises(ValueError):
            calendar.add(screening)

    def test_on_day_filters_room_and_date_sorted(self):
        late = occupation(ROOM_A, at(20), 90)
        early = occupation(ROOM_A, at(10), 90)
        other_room = occupation(ROOM_B, at(12), 90)
        next_day = occupation(ROOM_A, at(10) + timedelta(days=1), 90)
        calendar = ResourceCalendar([late, early, other_room, next_day])
        assert calendar.on_day(ROOM_A.id, date(2026, 10, 17)) == [early, late]

    def test_each_occupation_owns_its_seats(self):
        """Two screenings of one room never share a seat matrix."""
        first = occupation(ROOM_A, at(10), 90)
        second = occupation(ROOM_A, at(14), 90)
        assert first.seats is not second.seats
