"""Domain error codes for the venue module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    SCHEDULE_CONFLICT = "SCHEDULE_CONFLICT"
    SEAT_SELECTION_INVALID = "SEAT_SELECTION_INVALID"
    PAYMENT_INTERRUPTED = "PAYMENT_INTERRUPTED"
    STORAGE_FAILURE = "STORAGE_FAILURE"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    OCCUPATION_NOT_FOUND = "OCCUPATION_NOT_FOUND"
    ACCOUNT_NOT_FOUND = "ACCOUNT_NOT_FOUND"
    DUPLICATE_ACCOUNT = "DUPLICATE_ACCOUNT"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    UNKNOWN_MENU_ITEM = "UNKNOWN_MENU_ITEM"


class SelectionFailure(Enum):
    """Why a seat selection was rejected."""

    NOT_FOUND = "NOT_FOUND"
    ALREADY_OCCUPIED = "ALREADY_OCCUPIED"
    DUPLICATE = "DUPLICATE"
    MALFORMED = "MALFORMED"
    EMPTY = "EMPTY"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ScheduleConflictError(DomainError):
    """Raised when a candidate screening overlaps another one plus the buffer."""

    def __init__(self, conflicting) -> None:
        super().__init__(
            code=ErrorCode.SCHEDULE_CONFLICT,
            message="Screening overlaps an existing one in the same room",
        )
        self.conflicting = conflicting


class SelectionError(DomainError):
    """Raised when a seat selection cannot be honoured as a whole."""

    def __init__(self, reason: SelectionFailure, token: str = "") -> None:
        messages = {
            SelectionFailure.NOT_FOUND: f"Seat {token} does not exist in this room",
            SelectionFailure.ALREADY_OCCUPIED: f"Seat {token} is already occupied",
            SelectionFailure.DUPLICATE: f"Seat {token} was selected twice",
            SelectionFailure.MALFORMED: f"Invalid seat format: {token}",
            SelectionFailure.EMPTY: "No seats were selected",
        }
        super().__init__(code=ErrorCode.SEAT_SELECTION_INVALID, message=messages[reason])
        self.reason = reason
        self.token = token


class GateFailedError(DomainError):
    """Raised when the payment gate is interrupted before settling."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.PAYMENT_INTERRUPTED,
            message="Payment could not be processed",
        )


class StorageError(DomainError):
    """Raised by durable stores when a read or write fails."""

    def __init__(self, key: str, detail: str = "") -> None:
        super().__init__(
            code=ErrorCode.STORAGE_FAILURE,
            message="Storage is unavailable",
        )
        self.key = key
        self.detail = detail


class ResourceNotFoundError(DomainError):
    """Raised when a room is not found."""

    def __init__(self, resource_id: str) -> None:
        super().__init__(code=ErrorCode.RESOURCE_NOT_FOUND, message="Room not found")
        self.resource_id = resource_id


class OccupationNotFoundError(DomainError):
    """Raised when a screening is not found."""

    def __init__(self, occupation_id: str) -> None:
        super().__init__(code=ErrorCode.OCCUPATION_NOT_FOUND, message="Screening not found")
        self.occupation_id = occupation_id


class AccountNotFoundError(DomainError):
    """Raised when an account nickname is unknown."""

    def __init__(self, nickname: str) -> None:
        super().__init__(code=ErrorCode.ACCOUNT_NOT_FOUND, message="Account not found")
        self.nickname = nickname


class DuplicateAccountError(DomainError):
    """Raised when a nickname is already taken."""

    def __init__(self, nickname: str) -> None:
        super().__init__(code=ErrorCode.DUPLICATE_ACCOUNT, message="Nickname is already registered")
        self.nickname = nickname


class PermissionDeniedError(DomainError):
    """Raised when an account's role does not grant an action."""

    def __init__(self, action: str) -> None:
        super().__init__(
            code=ErrorCode.PERMISSION_DENIED,
            message=f"Not allowed to {action.replace('_', ' ')}",
        )
        self.action = action


class UnknownMenuItemError(DomainError):
    """Raised when a combo or product size is not on the menu."""

    def __init__(self, item: str) -> None:
        super().__init__(code=ErrorCode.UNKNOWN_MENU_ITEM, message=f"Unknown menu item: {item}")
        self.item = item
