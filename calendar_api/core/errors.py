"""Typed failures raised by the scheduling engine and request validation."""

from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = 'validation'
    CONFLICT = 'conflict'
    UNAVAILABLE = 'unavailable'
    INTERNAL = 'internal'


STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.CONFLICT: 409,
    ErrorKind.UNAVAILABLE: 404,
    ErrorKind.INTERNAL: 500,
}


class SchedulingError(Exception):
    """Base class for every failure the engine reports to its callers."""
    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]


class SlotValidationError(SchedulingError):
    """Raised when request fields are missing or malformed, or a window has no full slot."""
    kind = ErrorKind.VALIDATION


class AvailabilityConflictError(SchedulingError):
    """Raised when availability is replaced on a date that already has bookings."""
    kind = ErrorKind.CONFLICT


class NoAvailabilityError(SchedulingError):
    """Raised when an owner has not published any availability."""
    kind = ErrorKind.UNAVAILABLE


class SlotUnavailableError(SchedulingError):
    """Raised when the requested slot was never published or is already booked."""
    kind = ErrorKind.UNAVAILABLE


class InternalSchedulingError(SchedulingError):
    kind = ErrorKind.INTERNAL
