# Booking domain rules
from hotel_point.domain.booking_state import (
    BookingTransition, LedgerEffect, BOOKING_TRANSITIONS,
    can_transition, can_cancel, ledger_effect, parse_status
)

__all__ = [
    'BookingTransition', 'LedgerEffect', 'BOOKING_TRANSITIONS',
    'can_transition', 'can_cancel', 'ledger_effect', 'parse_status'
]
