"""
Check-then-act races of create_booking

Two concurrent requests are simulated deterministically: a store wrapper
hands the engine the state the second request would have read before the
first one committed.
"""
import pytest
from dataclasses import replace
from datetime import date, datetime
from types import SimpleNamespace

from hotel_point.errors import ConflictError, ErrorReason
from hotel_point.models.entities import Booking, BookingStatus, User
from hotel_point.services.booking_engine import BookingEngine

NOW = datetime(2025, 12, 1, 9, 0)


class _StaleUserStore:
    """Returns the balance read before a concurrent booking committed"""

    def __init__(self, inner, stale_balance):
        self._inner = inner
        self._stale_balance = stale_balance

    def __getattr__(self, name):
        return getattr(self._inner, name)

    def find_user_by_id(self, user_id):
        user = self._inner.find_user_by_id(user_id)
        if user is None:
            return None
        return SimpleNamespace(id=user.id, point_balance=self._stale_balance,
                               is_admin=user.is_admin)


class _BlindBookingStore:
    """Overlap check that runs before a concurrent booking committed"""

    def __init__(self, inner):
        self._inner = inner

    def __getattr__(self, name):
        return getattr(self._inner, name)

    def count_overlapping_active(self, room_id, check_in, check_out):
        return 0


def _balance(db, user_id):
    db.expire_all()
    return db.query(User).filter(User.id == user_id).first().point_balance


class TestBalanceOverdraw:

    def _second_request(self, stores, strict):
        stores = replace(stores, users=_StaleUserStore(stores.users, stale_balance=2))
        return BookingEngine(stores, clock=lambda: NOW, strict_balance=strict)

    def test_default_mode_overdraws(self, db_session, stores, user_factory,
                                    sample_room, sample_room_102):
        user = user_factory("racer@example.com", balance=2)
        first = BookingEngine(stores, clock=lambda: NOW, strict_balance=False)
        first.create_booking(user.id, sample_room.hotel_id, sample_room.id,
                             date(2025, 12, 8), date(2025, 12, 10))

        second = self._second_request(stores, strict=False)
        booking = second.create_booking(user.id, sample_room_102.hotel_id, sample_room_102.id,
                                        date(2025, 12, 8), date(2025, 12, 10))

        assert booking.status == BookingStatus.CONFIRMED
        assert _balance(db_session, user.id) == -2

    def test_strict_mode_refuses_debit(self, db_session, stores, user_factory,
                                       sample_room, sample_room_102):
        user = user_factory("careful@example.com", balance=2)
        first = BookingEngine(stores, clock=lambda: NOW, strict_balance=True)
        first.create_booking(user.id, sample_room.hotel_id, sample_room.id,
                             date(2025, 12, 8), date(2025, 12, 10))

        second = self._second_request(stores, strict=True)
        with pytest.raises(ConflictError) as exc:
            second.create_booking(user.id, sample_room_102.hotel_id, sample_room_102.id,
                                  date(2025, 12, 8), date(2025, 12, 10))

        assert exc.value.reason == ErrorReason.INSUFFICIENT_BALANCE
        assert _balance(db_session, user.id) == 0
        refused = db_session.query(Booking).filter(Booking.room_id == sample_room_102.id).one()
        db_session.refresh(refused)
        assert refused.status == BookingStatus.CANCELLED


class TestDoubleBooking:

    def test_overlap_check_race_double_books(self, db_session, stores, sample_user,
                                             second_user, sample_room):
        engine = BookingEngine(stores, clock=lambda: NOW)
        engine.create_booking(sample_user.id, sample_room.hotel_id, sample_room.id,
                              date(2025, 12, 8), date(2025, 12, 10))

        racing = BookingEngine(replace(stores, bookings=_BlindBookingStore(stores.bookings)),
                               clock=lambda: NOW)
        racing.create_booking(second_user.id, sample_room.hotel_id, sample_room.id,
                              date(2025, 12, 8), date(2025, 12, 10))

        active = db_session.query(Booking).filter(
            Booking.room_id == sample_room.id,
            Booking.status != BookingStatus.CANCELLED
        ).count()
        assert active == 2

    def test_without_race_second_booking_rejected(self, stores, sample_user,
                                                   second_user, sample_room):
        engine = BookingEngine(stores, clock=lambda: NOW)
        engine.create_booking(sample_user.id, sample_room.hotel_id, sample_room.id,
                              date(2025, 12, 8), date(2025, 12, 10))
        with pytest.raises(ConflictError):
            engine.create_booking(second_user.id, sample_room.hotel_id, sample_room.id,
                                  date(2025, 12, 8), date(2025, 12, 10))
