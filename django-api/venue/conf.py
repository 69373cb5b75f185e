"""Engine settings, read from ``settings.VENUE`` over built-in defaults."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any

from django.conf import settings
from django.utils import timezone

from venue.domain.models import Resource
from venue.domain.value_objects import Money, ResourceId, SeatLayout

DEFAULTS: dict[str, Any] = {
    "TURNAROUND_BUFFER_MINUTES": 30,
    "TICKET_PRICE": "60.00",
    "SETTLEMENT_DELAY_RANGE": (2.0, 5.0),
    "LIVENESS_POLL_INTERVAL": 0.5,
    "TICKET_GRACE_DELAY": 3.0,
    "CONCESSION_GRACE_DELAY": 1.0,
    "PHASE_DELAY_RANGES": {
        "assigned": (20.0, 40.0),
        "preparing": (20.0, 30.0),
        "finishing": (10.0, 15.0),
    },
    "STORE": "django",
    "RESOURCES": [
        {"id": "A", "name": "Room A", "rows": "ABCDEFGH", "seats_per_row": 15},
        {"id": "B", "name": "Room B", "rows": "ABCDEFGH", "seats_per_row": 15},
        {"id": "VIP", "name": "Room VIP", "rows": "ABCD", "seats_per_row": 6},
    ],
}


def local_now() -> datetime:
    """Naive wall-clock time in the configured ``TIME_ZONE``."""
    return to_local(timezone.now())


def to_local(value: datetime) -> datetime:
    """Convert an aware datetime to naive ``TIME_ZONE`` time. Naive values pass through."""
    if timezone.is_aware(value):
        value = timezone.localtime(value)
    return value.replace(tzinfo=None)


@dataclass(frozen=True)
class GateSettings:
    """Timing of the simulated payment gate, in seconds."""

    settlement_delay_range: tuple[float, float] = (2.0, 5.0)
    liveness_poll_interval: float = 0.5
    grace_delay: float = 3.0


@dataclass(frozen=True)
class PipelineSettings:
    """Delay ranges of the fulfillment phases, in seconds."""

    phase_delay_ranges: dict[str, tuple[float, float]] = field(
        default_factory=lambda: dict(DEFAULTS["PHASE_DELAY_RANGES"])
    )


@dataclass(frozen=True)
class VenueSettings:
    buffer: timedelta
    ticket_price: Money
    ticket_gate: GateSettings
    concession_gate: GateSettings
    pipeline: PipelineSettings
    store: str
    resources: tuple[Resource, ...]


def _resource(entry: dict[str, Any]) -> Resource:
    if "layout" in entry:
        layout = SeatLayout(rows=tuple((label, int(count)) for label, count in entry["layout"]))
    else:
        layout = SeatLayout.uniform(entry["rows"], int(entry["seats_per_row"]))
    return Resource(id=ResourceId.from_string(entry["id"]), name=entry["name"], layout=layout)


def venue_settings() -> VenueSettings:
    raw = {**DEFAULTS, **getattr(settings, "VENUE", {})}
    settlement = tuple(float(v) for v in raw["SETTLEMENT_DELAY_RANGE"])
    poll = float(raw["LIVENESS_POLL_INTERVAL"])
    return VenueSettings(
        buffer=timedelta(minutes=int(raw["TURNAROUND_BUFFER_MINUTES"])),
        ticket_price=Money.of(raw["TICKET_PRICE"]),
        ticket_gate=GateSettings(settlement, poll, float(raw["TICKET_GRACE_DELAY"])),
        concession_gate=GateSettings(settlement, poll, float(raw["CONCESSION_GRACE_DELAY"])),
        pipeline=PipelineSettings(
            {phase: (float(low), float(high)) for phase, (low, high) in raw["PHASE_DELAY_RANGES"].items()}
        ),
        store=raw["STORE"],
        resources=tuple(_resource(entry) for entry in raw["RESOURCES"]),
    )
