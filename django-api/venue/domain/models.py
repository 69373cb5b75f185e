"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in venue/models.py (persistence layer).
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from venue.domain.seating import SeatMatrix
from venue.domain.value_objects import (
    Interval,
    Money,
    OccupationId,
    OrderKey,
    ResourceId,
    SeatLayout,
    SeatPosition,
)


@dataclass(frozen=True)
class Resource:
    """A physical room. Its layout is fixed once created."""

    id: ResourceId
    name: str
    layout: SeatLayout


@dataclass(eq=False)
class Occupation:
    """One screening of a title in a room.

    The occupation owns its seat matrix; it is cloned from the room layout
    at creation and never shared with other screenings.
    """

    id: OccupationId
    resource_id: ResourceId
    interval: Interval
    title: str
    seats: SeatMatrix

    @classmethod
    def schedule(
        cls,
        id: OccupationId,
        resource: Resource,
        interval: Interval,
        title: str,
    ) -> "Occupation":
        return cls(
            id=id,
            resource_id=resource.id,
            interval=interval,
            title=title,
            seats=SeatMatrix.from_layout(resource.layout),
        )

    @property
    def starts_at(self) -> datetime:
        return self.interval.starts_at

    @property
    def ends_at(self) -> datetime:
        return self.interval.ends_at


class Role(Enum):
    """Capability tag of an account."""

    CUSTOMER = "customer"
    ADMINISTRATOR = "administrator"
    CONCESSION_HANDLER = "concession_handler"


class Shift(Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    NIGHT = "night"


@dataclass(frozen=True)
class CustomerProfile:
    card_number: str

    @property
    def masked_card(self) -> str:
        return f"*{self.card_number[-4:]}"


@dataclass(frozen=True)
class AdministratorProfile:
    shift: Shift = Shift.MORNING
    weekend: bool = False


@dataclass(frozen=True)
class HandlerProfile:
    shift: Shift = Shift.MORNING
    rest_day: str = "Sunday"


Profile = CustomerProfile | AdministratorProfile | HandlerProfile

PROFILE_BY_ROLE: dict[Role, type] = {
    Role.CUSTOMER: CustomerProfile,
    Role.ADMINISTRATOR: AdministratorProfile,
    Role.CONCESSION_HANDLER: HandlerProfile,
}


@dataclass(frozen=True)
class Account:
    """Flat account record. Role-specific data lives in ``profile``."""

    nickname: str
    first_name: str
    last_name: str
    email: str
    role: Role
    profile: Profile

    def __post_init__(self) -> None:
        if not isinstance(self.profile, PROFILE_BY_ROLE[self.role]):
            raise ValueError(f"{self.role.value} accounts need a {PROFILE_BY_ROLE[self.role].__name__}")

    @property
    def initials(self) -> str:
        return (self.first_name.strip()[:1] + self.last_name.strip()[:1]).upper()

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class Ticket:
    """One purchased seat."""

    receipt_id: str
    seat: SeatPosition


@dataclass(frozen=True)
class PurchaseReceipt:
    """Summary of a committed seat purchase."""

    occupation_id: OccupationId
    title: str
    starts_at: datetime
    resource_id: ResourceId
    purchaser: str
    tickets: tuple[Ticket, ...]
    total: Money
    card: str


@dataclass(frozen=True)
class LineItem:
    description: str
    price: Money


@dataclass(frozen=True)
class Order:
    """A confirmed concession order. Immutable once created."""

    key: OrderKey
    owner: str
    handler: str
    created_at: datetime
    description: str
    total: Money
    items: tuple[LineItem, ...] = field(default=())


@dataclass(frozen=True)
class ScheduleEntry:
    """One line of a room's daily programme."""

    occupation_id: OccupationId
    starts_at: datetime
    ends_at: datetime
    title: str
