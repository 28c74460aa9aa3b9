"""
Booking engine
Point cost calculation, availability, and booking status changes coupled
with the point ledger

Multi-step operations are not transactional: each store call commits on its
own. A failure after the booking row is written is compensated best-effort
(see create_booking); a failed compensation is logged, the original error is
what the caller sees.
"""
import logging
from datetime import datetime, timedelta
from typing import Callable, List, Optional, Tuple, Union

from sqlalchemy.orm import Session

from hotel_point.config import settings
from hotel_point.domain.booking_state import (
    LedgerEffect, can_cancel, can_transition, ledger_effect, parse_status
)
from hotel_point.errors import (
    ConflictError, ErrorReason, NotFoundError, UnauthorizedError, ValidationError
)
from hotel_point.models.entities import Booking, BookingStatus, TransactionType
from hotel_point.repositories import Stores
from hotel_point.services.availability_checker import AvailabilityChecker
from hotel_point.services.date_rule_calendar import DateRuleCalendar, DayCost
from hotel_point.services.point_ledger import PointLedger
from hotel_point.timeutils import DateLike, at_hour, end_of_day, local_now, start_of_day

logger = logging.getLogger(__name__)

DEFAULT_PAGE_LIMIT = 10
MAX_PAGE_LIMIT = 100


def normalize_page(page: int, limit: int) -> Tuple[int, int]:
    """page < 1 becomes 1, a limit outside [1, 100] becomes 10"""
    if page < 1:
        page = 1
    if limit < 1 or limit > MAX_PAGE_LIMIT:
        limit = DEFAULT_PAGE_LIMIT
    return page, limit


class BookingEngine:
    """Booking engine"""

    def __init__(self, stores: Stores,
                 calendar: Optional[DateRuleCalendar] = None,
                 availability: Optional[AvailabilityChecker] = None,
                 ledger: Optional[PointLedger] = None,
                 clock: Callable[[], datetime] = local_now,
                 strict_balance: Optional[bool] = None):
        self.stores = stores
        self.calendar = calendar or DateRuleCalendar(stores.calendar)
        self.availability = availability or AvailabilityChecker(
            stores.bookings, stores.availability, stores.catalog
        )
        self.ledger = ledger or PointLedger(stores.users)
        self.clock = clock
        self.strict_balance = (
            settings.STRICT_BALANCE_CHECK if strict_balance is None else strict_balance
        )

    @classmethod
    def from_session(cls, db: Session, **kwargs) -> "BookingEngine":
        return cls(Stores.from_session(db), **kwargs)

    # ============== Cost ==============

    def _stay_bounds(self, check_in: DateLike, check_out: DateLike) -> Tuple[datetime, datetime]:
        """Check-in at 14:00, check-out at 12:00 of the given days"""
        return (at_hour(check_in, settings.CHECK_IN_HOUR),
                at_hour(check_out, settings.CHECK_OUT_HOUR))

    def _validate_period(self, check_in: DateLike, check_out: DateLike) -> Tuple[datetime, datetime]:
        start = start_of_day(check_in)
        end = start_of_day(check_out)
        if start > end:
            raise ValidationError("check-in date cannot be after check-out date")
        # lenient by one day
        if start < self.clock() - timedelta(days=1):
            raise ValidationError("check-in date cannot be in the past")
        return start, end

    def calculate_cost_with_details(self, room_id: int, check_in: DateLike, check_out: DateLike,
                                    user_id: Optional[int] = None) -> Tuple[int, List[DayCost]]:
        """
        Total point cost and the per-night breakdown of a stay.

        Raises ValidationError for a bad period, NotFoundError for an unknown
        room and ConflictError when the room is taken. With user_id the
        availability overrides of each night are applied for that user.
        """
        start, end = self._validate_period(check_in, check_out)

        if self.stores.catalog.find_room_by_id(room_id) is None:
            raise NotFoundError("room not found")

        stay_in, stay_out = self._stay_bounds(start, end)
        if user_id is None:
            free = self.availability.is_room_free(room_id, stay_in, stay_out)
        else:
            free = self.availability.is_room_free_for_user(room_id, user_id, stay_in, stay_out)
        if not free:
            raise ConflictError(
                "room is not available for the selected dates", ErrorReason.ROOM_UNAVAILABLE
            )

        details = self.calendar.cost_for_range(start, end)
        return sum(d.point_cost for d in details), details

    def calculate_cost(self, room_id: int, check_in: DateLike, check_out: DateLike,
                       user_id: Optional[int] = None) -> int:
        total, _ = self.calculate_cost_with_details(room_id, check_in, check_out, user_id)
        return total

    # ============== Create / cancel ==============

    def create_booking(self, user_id: int, hotel_id: int, room_id: int,
                       check_in: DateLike, check_out: DateLike) -> Booking:
        """Book a room and debit its point cost from the user"""
        if start_of_day(check_out) <= start_of_day(check_in):
            raise ValidationError("check-out date must be after check-in date")
        stay_in, stay_out = self._stay_bounds(check_in, check_out)

        user = self.stores.users.find_user_by_id(user_id)
        if user is None:
            raise NotFoundError("user not found")
        if self.stores.catalog.find_hotel_by_id(hotel_id) is None:
            raise NotFoundError("hotel not found")
        room = self.stores.catalog.find_room_by_id(room_id)
        if room is None:
            raise NotFoundError("room not found")
        if room.hotel_id != hotel_id:
            raise ConflictError(
                "room does not belong to the specified hotel", ErrorReason.ROOM_HOTEL_MISMATCH
            )

        point_cost = self.calculate_cost(room_id, stay_in, stay_out, user_id=user_id)

        # snapshot read: concurrent bookings by the same user can both pass
        # unless strict_balance is on
        if user.point_balance < point_cost:
            logger.warning(
                f"Booking rejected for user {user_id}: balance {user.point_balance} < {point_cost}"
            )
            raise ConflictError("insufficient point balance", ErrorReason.INSUFFICIENT_BALANCE)

        booking = self.stores.bookings.create(Booking(
            user_id=user_id,
            hotel_id=hotel_id,
            room_id=room_id,
            check_in=stay_in,
            check_out=stay_out,
            point_cost=point_cost,
            status=BookingStatus.CONFIRMED,
            created_at=datetime.utcnow(),
        ))
        reference = str(booking.id)

        try:
            if self.strict_balance:
                debited = self.ledger.debit_if_sufficient(
                    user_id, point_cost, TransactionType.BOOKING_DEDUCTION, reference
                )
                if not debited:
                    raise ConflictError(
                        "insufficient point balance", ErrorReason.INSUFFICIENT_BALANCE
                    )
            else:
                self.ledger.debit(user_id, point_cost, TransactionType.BOOKING_DEDUCTION, reference)
        except Exception:
            self._compensate_cancel(booking.id)
            raise

        logger.info(
            f"Booking {booking.id} created: user {user_id}, room {room_id}, "
            f"{stay_in:%Y-%m-%d}..{stay_out:%Y-%m-%d}, {point_cost} points"
        )
        return booking

    def _compensate_cancel(self, booking_id: int) -> None:
        try:
            self.stores.bookings.update_status(booking_id, BookingStatus.CANCELLED)
            logger.warning(f"Booking {booking_id} cancelled after failed point debit")
        except Exception:
            logger.exception(f"Compensation failed: booking {booking_id} left without debit")

    def cancel_booking(self, booking_id: int, requesting_user_id: int) -> Booking:
        """Cancel a booking (owner or admin) and refund its points"""
        booking = self.get_booking(booking_id)

        if booking.user_id != requesting_user_id:
            requester = self.stores.users.find_user_by_id(requesting_user_id)
            if requester is None or not requester.is_admin:
                raise UnauthorizedError("unauthorized to cancel this booking")

        if not can_cancel(booking.status):
            if booking.status == BookingStatus.CANCELLED:
                raise ConflictError("booking already cancelled", ErrorReason.ALREADY_CANCELLED)
            raise ConflictError("booking already completed", ErrorReason.ALREADY_COMPLETED)

        cutoff = booking.check_in - timedelta(hours=settings.CANCELLATION_WINDOW_HOURS)
        if self.clock() > cutoff:
            raise ConflictError(
                "cannot cancel booking within 24 hours of check-in", ErrorReason.CANCEL_WINDOW
            )

        owner_id, point_cost = booking.user_id, booking.point_cost
        self.stores.bookings.update_status(booking_id, BookingStatus.CANCELLED)
        self.ledger.credit(owner_id, point_cost, TransactionType.BOOKING_REFUND, str(booking_id))
        logger.info(f"Booking {booking_id} cancelled by user {requesting_user_id}")
        return self.get_booking(booking_id)

    # ============== Administration ==============

    def update_booking_status(self, booking_id: int,
                              new_status: Union[str, BookingStatus]) -> Booking:
        """Set any status; moving out of / into cancelled re-debits / refunds points"""
        status = parse_status(new_status)
        booking = self.get_booking(booking_id)
        previous = booking.status
        owner_id, point_cost = booking.user_id, booking.point_cost
        reference = str(booking_id)

        if previous != status and not can_transition(previous, status, as_admin=True):
            logger.warning(
                f"Booking {booking_id}: {previous.value} -> {status.value} is outside the lifecycle, "
                f"applied as administrative correction"
            )

        effect = ledger_effect(previous, status)
        if effect == LedgerEffect.DEBIT:
            self._reactivation_debit(owner_id, point_cost, reference)
        elif effect == LedgerEffect.CREDIT:
            self.ledger.credit(owner_id, point_cost, TransactionType.BOOKING_REFUND, reference)

        self.stores.bookings.update_status(booking_id, status)
        logger.info(f"Booking {booking_id} status {previous.value} -> {status.value}")
        return self.get_booking(booking_id)

    def _reactivation_debit(self, user_id: int, amount: int, reference: str) -> None:
        insufficient = ConflictError(
            "insufficient point balance to reactivate booking", ErrorReason.INSUFFICIENT_BALANCE
        )
        if self.strict_balance:
            if not self.ledger.debit_if_sufficient(
                    user_id, amount, TransactionType.BOOKING_REACTIVATION, reference):
                raise insufficient
            return

        if self.ledger.balance_of(user_id) < amount:
            raise insufficient
        self.ledger.debit(user_id, amount, TransactionType.BOOKING_REACTIVATION, reference)

    def delete_booking(self, booking_id: int) -> None:
        """Hard delete; an active booking is refunded first"""
        booking = self.get_booking(booking_id)
        if booking.status != BookingStatus.CANCELLED:
            self.ledger.credit(
                booking.user_id, booking.point_cost,
                TransactionType.BOOKING_DELETION_REFUND, str(booking_id)
            )
        self.stores.bookings.delete(booking_id)
        logger.info(f"Booking {booking_id} deleted")

    # ============== Queries ==============

    def get_booking(self, booking_id: int) -> Booking:
        booking = self.stores.bookings.find_by_id(booking_id)
        if booking is None:
            raise NotFoundError("booking not found")
        return booking

    def get_user_bookings(self, user_id: int) -> List[Booking]:
        return self.stores.bookings.find_by_user(user_id)

    def get_active_bookings_by_user(self, user_id: int) -> List[Booking]:
        return self.stores.bookings.find_active_by_user(user_id, self.clock())

    def list_bookings(self, page: int = 1, limit: int = DEFAULT_PAGE_LIMIT) -> Tuple[List[Booking], int]:
        page, limit = normalize_page(page, limit)
        return self.stores.bookings.find_all(page, limit)

    def search_bookings(self, query: str = "", status: Optional[str] = None,
                        page: int = 1, limit: int = DEFAULT_PAGE_LIMIT) -> Tuple[List[Booking], int]:
        page, limit = normalize_page(page, limit)
        parsed = parse_status(status) if status else None
        return self.stores.bookings.search(query, parsed, page, limit)

    def count_bookings(self, start: DateLike, end: DateLike) -> int:
        return self.stores.bookings.count_in_range(start_of_day(start), end_of_day(end))
