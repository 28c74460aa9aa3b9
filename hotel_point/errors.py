"""
Error taxonomy for the booking core

Every core operation fails fast with one of these. The HTTP layer maps each
kind to a status code; callers never see stack traces or internal ids.
"""
from typing import Optional


class ErrorReason:
    """Machine-distinguishable reasons carried by client errors"""

    VALIDATION = "validation_error"
    NOT_FOUND = "not_found"
    INSUFFICIENT_BALANCE = "insufficient_balance"
    ROOM_UNAVAILABLE = "room_unavailable"
    ROOM_HOTEL_MISMATCH = "room_hotel_mismatch"
    CANCEL_WINDOW = "cancel_window"
    ALREADY_CANCELLED = "already_cancelled"
    ALREADY_COMPLETED = "already_completed"
    UNAUTHORIZED = "unauthorized"
    DEPENDENCY = "dependency_error"
    EMAIL_TAKEN = "email_taken"


class BookingError(Exception):
    """
    Base error of the booking core.

    Attributes:
        message: human-readable message, safe to show to the caller
        reason: one of ErrorReason
    """

    default_reason = ErrorReason.VALIDATION

    def __init__(self, message: str, reason: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.reason = reason or self.default_reason

    def to_dict(self) -> dict:
        return {"detail": self.message, "reason": self.reason}


class ValidationError(BookingError):
    """Bad input, rejected before any mutation"""

    default_reason = ErrorReason.VALIDATION


class NotFoundError(BookingError):
    """Hotel, room, booking, user or date rule does not exist"""

    default_reason = ErrorReason.NOT_FOUND


class ConflictError(BookingError):
    """Business rule violation (balance, availability, cancellation window...)"""

    default_reason = ErrorReason.ROOM_UNAVAILABLE


class UnauthorizedError(BookingError):
    """Principal is not allowed to act on the resource"""

    default_reason = ErrorReason.UNAUTHORIZED


class DependencyError(BookingError):
    """Persistence failure; surfaced as a server error, never retried here"""

    default_reason = ErrorReason.DEPENDENCY


__all__ = [
    "ErrorReason",
    "BookingError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "UnauthorizedError",
    "DependencyError",
]
