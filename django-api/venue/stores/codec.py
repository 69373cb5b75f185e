"""JSON-compatible encoding of domain entities for snapshots."""

from datetime import datetime
from typing import Any

from venue.domain.models import (
    PROFILE_BY_ROLE,
    Account,
    Occupation,
    Resource,
    Role,
    Shift,
)
from venue.domain.seating import SeatMatrix
from venue.domain.value_objects import (
    Interval,
    OccupationId,
    ResourceId,
    SeatLayout,
    SeatPosition,
)


def encode_layout(layout: SeatLayout) -> list[list[Any]]:
    return [[label, count] for label, count in layout.rows]


def decode_layout(rows: list[list[Any]]) -> SeatLayout:
    return SeatLayout(rows=tuple((str(label), int(count)) for label, count in rows))


def encode_resource(resource: Resource) -> dict[str, Any]:
    return {
        "id": resource.id.value,
        "name": resource.name,
        "layout": encode_layout(resource.layout),
    }


def decode_resource(data: dict[str, Any]) -> Resource:
    return Resource(
        id=ResourceId(data["id"]),
        name=data["name"],
        layout=decode_layout(data["layout"]),
    )


def encode_occupation(occupation: Occupation) -> dict[str, Any]:
    return {
        "id": occupation.id.value,
        "resource_id": occupation.resource_id.value,
        "starts_at": occupation.starts_at.isoformat(),
        "duration_minutes": occupation.interval.duration_minutes,
        "title": occupation.title,
        "layout": encode_layout(occupation.seats.layout),
        "occupied": [str(position) for position in occupation.seats.occupied_positions()],
    }


def decode_occupation(data: dict[str, Any]) -> Occupation:
    layout = decode_layout(data["layout"])
    return Occupation(
        id=OccupationId(data["id"]),
        resource_id=ResourceId(data["resource_id"]),
        interval=Interval(
            starts_at=datetime.fromisoformat(data["starts_at"]),
            duration_minutes=int(data["duration_minutes"]),
        ),
        title=data["title"],
        seats=SeatMatrix(layout, [SeatPosition.parse(token) for token in data["occupied"]]),
    )


def encode_account(account: Account) -> dict[str, Any]:
    profile: dict[str, Any] = dict(vars(account.profile))
    if "shift" in profile:
        profile["shift"] = profile["shift"].value
    return {
        "nickname": account.nickname,
        "first_name": account.first_name,
        "last_name": account.last_name,
        "email": account.email,
        "role": account.role.value,
        "profile": profile,
    }


def decode_account(data: dict[str, Any]) -> Account:
    role = Role(data["role"])
    profile_data = dict(data.get("profile", {}))
    if "shift" in profile_data:
        profile_data["shift"] = Shift(profile_data["shift"])
    profile = PROFILE_BY_ROLE[role](**profile_data)
    return Account(
        nickname=data["nickname"],
        first_name=data["first_name"],
        last_name=data["last_name"],
        email=data["email"],
        role=role,
        profile=profile,
    )
