"""Domain primitives that enforce validity at creation time."""

import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Self

_SEAT_TOKEN = re.compile(r"^([A-Z])(\d{1,3})$")


@dataclass(frozen=True)
class ResourceId:
    """Identifier of a physical room, e.g. ``A`` or ``VIP``."""

    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValueError("ResourceId cannot be empty")

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=value.strip().upper())

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class OccupationId:
    """Identifier of one scheduled screening.

    Built as ``INITIALS:YYYYMMDD:HHMM:RESOURCE`` so receipts can be traced
    back to who scheduled the screening and when it starts.
    """

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("OccupationId cannot be empty")

    @classmethod
    def build(cls, initials: str, starts_at: datetime, resource_id: ResourceId) -> Self:
        return cls(value=f"{initials}:{starts_at:%Y%m%d}:{starts_at:%H%M}:{resource_id}")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class OrderKey:
    """Concession order key, ``INITIALS:YYYYMMDD:HHMM``."""

    value: str

    @classmethod
    def build(cls, initials: str, created_at: datetime) -> Self:
        return cls(value=f"{initials}:{created_at:%Y%m%d:%H%M}")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Money:
    """Price representation with validation."""

    amount: Decimal

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")

    @classmethod
    def of(cls, value: str | int | Decimal) -> Self:
        return cls(amount=Decimal(str(value)))

    def __add__(self, other: "Money") -> "Money":
        return Money(self.amount + other.amount)

    def times(self, count: int) -> "Money":
        return Money(self.amount * count)

    def __str__(self) -> str:
        return f"{self.amount:.2f}"


@dataclass(frozen=True)
class Capacity:
    """Non-negative integer representing capacity."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("Capacity cannot be negative")


@dataclass(frozen=True, order=True)
class SeatPosition:
    """One seat address inside a matrix: a row letter and a 1-based number."""

    row: str
    number: int

    def __post_init__(self) -> None:
        if len(self.row) != 1 or not self.row.isalpha() or not self.row.isupper():
            raise ValueError(f"Invalid row label: {self.row!r}")
        if self.number < 1:
            raise ValueError("Seat number must be positive")

    @classmethod
    def parse(cls, token: str) -> Self:
        """Parse ``"a10"`` or ``"A10"`` into row ``A``, number 10.

        Raises:
            ValueError: If the token is not a row letter followed by digits.
        """
        match = _SEAT_TOKEN.match(token.strip().upper())
        if match is None:
            raise ValueError(f"Invalid seat token: {token!r}")
        return cls(row=match.group(1), number=int(match.group(2)))

    def __str__(self) -> str:
        return f"{self.row}{self.number}"


@dataclass(frozen=True)
class SeatLayout:
    """Row layout of a room. Rows may have different lengths."""

    rows: tuple[tuple[str, int], ...]

    def __post_init__(self) -> None:
        if not self.rows:
            raise ValueError("SeatLayout needs at least one row")
        labels = [label for label, _ in self.rows]
        if len(set(labels)) != len(labels):
            raise ValueError("SeatLayout row labels must be unique")
        for label, count in self.rows:
            SeatPosition(row=label, number=1)
            Capacity(count)

    @classmethod
    def uniform(cls, row_labels: str, seats_per_row: int) -> Self:
        return cls(rows=tuple((label, seats_per_row) for label in row_labels))

    @property
    def capacity(self) -> Capacity:
        return Capacity(sum(count for _, count in self.rows))

    def positions(self) -> list[SeatPosition]:
        return [
            SeatPosition(row=label, number=number)
            for label, count in self.rows
            for number in range(1, count + 1)
        ]


@dataclass(frozen=True)
class Interval:
    """Half-open time interval ``[starts_at, ends_at)`` given by a duration."""

    starts_at: datetime
    duration_minutes: int

    def __post_init__(self) -> None:
        if self.duration_minutes <= 0:
            raise ValueError("Duration must be a positive number of minutes")

    @property
    def ends_at(self) -> datetime:
        return self.starts_at + timedelta(minutes=self.duration_minutes)
