"""
Availability checker
A room is bookable when no active booking overlaps the stay and every night
of the stay passes its availability override (if any)
"""
import logging
from datetime import timedelta
from typing import Iterable, List, Optional

from hotel_point.errors import NotFoundError, ValidationError
from hotel_point.models.entities import RoomAvailability
from hotel_point.repositories.interfaces import (
    AvailabilityStore, BookingStore, CatalogStore
)
from hotel_point.timeutils import DateLike, iter_days, iter_days_inclusive, start_of_day, to_local

logger = logging.getLogger(__name__)


def override_allows(override: Optional[RoomAvailability], user_id: Optional[int]) -> bool:
    """
    Whether a single day's override lets user_id book.

    No record: open. available=False: closed for everyone. A non-empty
    user_ids list restricts the day to the listed users.
    """
    if override is None:
        return True
    if not override.available:
        return False
    if override.user_ids:
        return user_id is not None and user_id in override.user_ids
    return True


class AvailabilityChecker:
    """Availability checker"""

    def __init__(self, bookings: BookingStore, overrides: AvailabilityStore,
                 catalog: Optional[CatalogStore] = None):
        self.bookings = bookings
        self.overrides = overrides
        self.catalog = catalog

    def is_room_free(self, room_id: int, check_in: DateLike, check_out: DateLike) -> bool:
        """No non-cancelled booking overlaps [check_in, check_out)"""
        count = self.bookings.count_overlapping_active(
            room_id, to_local(check_in), to_local(check_out)
        )
        return count == 0

    def overrides_allow(self, room_id: int, user_id: Optional[int],
                        check_in: DateLike, check_out: DateLike) -> bool:
        """Every night in [check_in, check_out) passes its override"""
        start = start_of_day(check_in)
        end = start_of_day(check_out)
        if end <= start:
            return True

        records = self.overrides.find_overrides_in_range(room_id, start, end - timedelta(days=1))
        if not records:
            return True

        by_day = {}
        for record in records:
            by_day.setdefault(start_of_day(record.date).date(), record)

        for day in iter_days(start, end):
            if not override_allows(by_day.get(day.date()), user_id):
                return False
        return True

    def is_room_free_for_user(self, room_id: int, user_id: Optional[int],
                              check_in: DateLike, check_out: DateLike) -> bool:
        """Booking-overlap check AND the per-day override check"""
        if not self.is_room_free(room_id, check_in, check_out):
            return False
        return self.overrides_allow(room_id, user_id, check_in, check_out)

    def is_room_available_on_date(self, room_id: int, day: DateLike) -> bool:
        """Free for the night starting on day, and not blocked by an override"""
        self._require_room(room_id)
        day = start_of_day(day)
        if self.bookings.find_overlapping_active(room_id, day, day + timedelta(days=1)):
            return False
        override = self.overrides.find_override_for_date(room_id, day)
        if override is not None and not override.available:
            return False
        return True

    # ============== Administration ==============

    def _require_room(self, room_id: int) -> None:
        if self.catalog is not None and self.catalog.find_room_by_id(room_id) is None:
            raise NotFoundError("room not found")

    def set_availability_for_range(self, room_id: int, from_date: DateLike, to_date: DateLike,
                                   available: bool,
                                   user_ids: Optional[Iterable[int]] = None) -> List[RoomAvailability]:
        """
        Set the override of every day in [from_date, to_date] (inclusive).

        Per day: update the record found for that exact day, else insert one.
        Pre-existing duplicates for a day are left as they are; only the
        first one found is updated.
        """
        if start_of_day(from_date) > start_of_day(to_date):
            raise ValidationError("from date cannot be after to date")
        self._require_room(room_id)

        allowed = sorted(set(user_ids or []))
        written = []
        for day in iter_days_inclusive(from_date, to_date):
            existing = self.overrides.find_override_for_date(room_id, day)
            if existing is not None:
                existing.available = available
                existing.user_ids = list(allowed)
                written.append(self.overrides.update_override(existing))
            else:
                written.append(self.overrides.create_override(RoomAvailability(
                    room_id=room_id, date=day, available=available, user_ids=list(allowed)
                )))

        logger.info(
            f"Room {room_id} availability set for {start_of_day(from_date).date()}"
            f"..{start_of_day(to_date).date()}: available={available}, users={allowed}"
        )
        return written

    def get_availability(self, room_id: int, from_date: DateLike,
                         to_date: DateLike) -> List[RoomAvailability]:
        if start_of_day(from_date) > start_of_day(to_date):
            raise ValidationError("from date cannot be after to date")
        self._require_room(room_id)
        return self.overrides.find_overrides_in_range(
            room_id, start_of_day(from_date), start_of_day(to_date)
        )
