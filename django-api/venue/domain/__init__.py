from venue.domain.calendar import ResourceCalendar, find_conflict, is_admissible
from venue.domain.models import (
    Account,
    AdministratorProfile,
    CustomerProfile,
    HandlerProfile,
    LineItem,
    Occupation,
    Order,
    PurchaseReceipt,
    Resource,
    Role,
    ScheduleEntry,
    Shift,
    Ticket,
)
from venue.domain.seating import SeatMatrix
from venue.domain.value_objects import (
    Capacity,
    Interval,
    Money,
    OccupationId,
    OrderKey,
    ResourceId,
    SeatLayout,
    SeatPosition,
)

__all__ = [
    "Account",
    "AdministratorProfile",
    "CustomerProfile",
    "HandlerProfile",
    "LineItem",
    "Occupation",
    "Order",
    "PurchaseReceipt",
    "Resource",
    "ResourceCalendar",
    "Role",
    "ScheduleEntry",
    "SeatMatrix",
    "Shift",
    "Ticket",
    "find_conflict",
    "is_admissible",
    "Capacity",
    "Interval",
    "Money",
    "OccupationId",
    "OrderKey",
    "ResourceId",
    "SeatLayout",
    "SeatPosition",
]
