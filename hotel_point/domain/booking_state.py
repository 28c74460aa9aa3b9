"""
hotel_point/domain/booking_state.py

Booking state machine - closed transition table and ledger side effects

    pending -> confirmed -> completed
    {pending, confirmed} -> cancelled
    cancelled -> {pending, confirmed}   (admin reactivation, re-debits points)

completed and cancelled are terminal for normal user actions.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, List, Tuple, Union

from hotel_point.errors import ValidationError
from hotel_point.models.entities import BookingStatus


class LedgerEffect(str, Enum):
    """Point movement caused by a status change"""
    NONE = "none"
    DEBIT = "debit"      # leaving cancelled: points are taken again
    CREDIT = "credit"    # entering cancelled: points are refunded


@dataclass(frozen=True)
class BookingTransition:
    """
    Transition definition

    Attributes:
        from_state: source status
        to_state: target status
        trigger: action name
        admin_only: only administrators may fire it
    """

    from_state: BookingStatus
    to_state: BookingStatus
    trigger: str
    admin_only: bool = False


BOOKING_TRANSITIONS: List[BookingTransition] = [
    BookingTransition(BookingStatus.PENDING, BookingStatus.CONFIRMED, "confirm"),
    BookingTransition(BookingStatus.CONFIRMED, BookingStatus.COMPLETED, "complete"),
    BookingTransition(BookingStatus.PENDING, BookingStatus.CANCELLED, "cancel"),
    BookingTransition(BookingStatus.CONFIRMED, BookingStatus.CANCELLED, "cancel"),
    BookingTransition(BookingStatus.CANCELLED, BookingStatus.PENDING, "reactivate", admin_only=True),
    BookingTransition(BookingStatus.CANCELLED, BookingStatus.CONFIRMED, "reactivate", admin_only=True),
]

# (from_state, to_state) -> transition
_TRANSITION_MAP: Dict[Tuple[BookingStatus, BookingStatus], BookingTransition] = {
    (t.from_state, t.to_state): t for t in BOOKING_TRANSITIONS
}

CANCELLABLE: FrozenSet[BookingStatus] = frozenset(
    t.from_state for t in BOOKING_TRANSITIONS if t.trigger == "cancel"
)


def parse_status(value: Union[str, BookingStatus]) -> BookingStatus:
    """Validate a status value against the closed enum"""
    if isinstance(value, BookingStatus):
        return value
    try:
        return BookingStatus(value)
    except ValueError:
        raise ValidationError("invalid booking status")


def can_transition(from_state: BookingStatus, to_state: BookingStatus,
                   as_admin: bool = False) -> bool:
    """Whether the lifecycle table allows from_state -> to_state"""
    transition = _TRANSITION_MAP.get((from_state, to_state))
    if transition is None:
        return False
    return as_admin or not transition.admin_only


def can_cancel(status: BookingStatus) -> bool:
    return status in CANCELLABLE


def ledger_effect(from_state: BookingStatus, to_state: BookingStatus) -> LedgerEffect:
    """
    Ledger side effect of an administrative status update.

    Administrative updates may set any status (correction); only moves into
    or out of cancelled touch the ledger.
    """
    if from_state == BookingStatus.CANCELLED and to_state != BookingStatus.CANCELLED:
        return LedgerEffect.DEBIT
    if from_state != BookingStatus.CANCELLED and to_state == BookingStatus.CANCELLED:
        return LedgerEffect.CREDIT
    return LedgerEffect.NONE
