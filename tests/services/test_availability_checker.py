"""
Tests for hotel_point/services/availability_checker.py
Covers: is_room_free, is_room_free_for_user, is_room_available_on_date,
        set_availability_for_range, get_availability
"""
import pytest
from datetime import date, datetime

from hotel_point.errors import NotFoundError, ValidationError
from hotel_point.models.entities import Booking, BookingStatus, RoomAvailability
from hotel_point.services.availability_checker import AvailabilityChecker, override_allows


# ── helpers ──────────────────────────────────────────────────────────

def _checker(stores):
    return AvailabilityChecker(stores.bookings, stores.availability, stores.catalog)


def _booking(db, user, room, check_in, check_out, status=BookingStatus.CONFIRMED):
    booking = Booking(user_id=user.id, hotel_id=room.hotel_id, room_id=room.id,
                      check_in=check_in, check_out=check_out, point_cost=1, status=status)
    db.add(booking)
    db.commit()
    return booking


def _stay(day_in, day_out):
    return datetime(2025, 12, day_in, 14, 0), datetime(2025, 12, day_out, 12, 0)


# ── override_allows ──────────────────────────────────────────────────

class TestOverrideAllows:

    def test_no_record(self):
        assert override_allows(None, 1)

    def test_blocked(self):
        assert not override_allows(RoomAvailability(available=False, user_ids=[]), 1)

    def test_blocked_even_for_listed_user(self):
        assert not override_allows(RoomAvailability(available=False, user_ids=[1]), 1)

    def test_open_with_empty_list(self):
        assert override_allows(RoomAvailability(available=True, user_ids=[]), 7)

    def test_restricted(self):
        record = RoomAvailability(available=True, user_ids=[1, 2])
        assert override_allows(record, 2)
        assert not override_allows(record, 3)
        assert not override_allows(record, None)


# ── booking overlap ──────────────────────────────────────────────────

class TestIsRoomFree:

    def test_empty_room(self, stores, sample_room):
        assert _checker(stores).is_room_free(sample_room.id, *_stay(8, 10))

    def test_overlap(self, stores, db_session, sample_user, sample_room):
        _booking(db_session, sample_user, sample_room, *_stay(8, 10))
        assert not _checker(stores).is_room_free(sample_room.id, *_stay(9, 11))
        assert not _checker(stores).is_room_free(sample_room.id, *_stay(7, 9))

    def test_containing_stay(self, stores, db_session, sample_user, sample_room):
        _booking(db_session, sample_user, sample_room, *_stay(9, 10))
        assert not _checker(stores).is_room_free(sample_room.id, *_stay(8, 12))

    def test_back_to_back(self, stores, db_session, sample_user, sample_room):
        _booking(db_session, sample_user, sample_room, *_stay(8, 10))
        assert _checker(stores).is_room_free(sample_room.id, *_stay(10, 12))
        assert _checker(stores).is_room_free(sample_room.id, *_stay(6, 8))

    def test_cancelled_ignored(self, stores, db_session, sample_user, sample_room):
        _booking(db_session, sample_user, sample_room, *_stay(8, 10), status=BookingStatus.CANCELLED)
        assert _checker(stores).is_room_free(sample_room.id, *_stay(8, 10))

    @pytest.mark.parametrize("status", [BookingStatus.PENDING, BookingStatus.COMPLETED])
    def test_other_statuses_block(self, stores, db_session, sample_user, sample_room, status):
        _booking(db_session, sample_user, sample_room, *_stay(8, 10), status=status)
        assert not _checker(stores).is_room_free(sample_room.id, *_stay(8, 10))

    def test_other_room(self, stores, db_session, sample_user, sample_room, sample_room_102):
        _booking(db_session, sample_user, sample_room, *_stay(8, 10))
        assert _checker(stores).is_room_free(sample_room_102.id, *_stay(8, 10))


# ── overrides ────────────────────────────────────────────────────────

class TestOverrides:

    def test_blocked_day_inside_stay(self, stores, sample_user, sample_room):
        checker = _checker(stores)
        checker.set_availability_for_range(sample_room.id, date(2025, 12, 9), date(2025, 12, 9), False)
        assert not checker.is_room_free_for_user(sample_room.id, sample_user.id, *_stay(8, 10))

    def test_blocked_checkout_day_not_counted(self, stores, sample_user, sample_room):
        checker = _checker(stores)
        checker.set_availability_for_range(sample_room.id, date(2025, 12, 10), date(2025, 12, 10), False)
        assert checker.is_room_free_for_user(sample_room.id, sample_user.id, *_stay(8, 10))

    def test_restricted_to_other_users(self, stores, sample_user, second_user, sample_room):
        checker = _checker(stores)
        checker.set_availability_for_range(sample_room.id, date(2025, 12, 8), date(2025, 12, 9),
                                           True, [second_user.id])
        assert not checker.is_room_free_for_user(sample_room.id, sample_user.id, *_stay(8, 10))
        assert checker.is_room_free_for_user(sample_room.id, second_user.id, *_stay(8, 10))

    def test_overlap_still_checked(self, stores, db_session, sample_user, second_user, sample_room):
        _booking(db_session, sample_user, sample_room, *_stay(8, 10))
        checker = _checker(stores)
        checker.set_availability_for_range(sample_room.id, date(2025, 12, 8), date(2025, 12, 9),
                                           True, [second_user.id])
        assert not checker.is_room_free_for_user(sample_room.id, second_user.id, *_stay(8, 10))

    def test_available_on_date_unknown_room(self, stores):
        with pytest.raises(NotFoundError):
            _checker(stores).is_room_available_on_date(999, date(2025, 12, 9))

    def test_available_on_date(self, stores, db_session, sample_user, sample_room):
        _booking(db_session, sample_user, sample_room, *_stay(8, 10))
        checker = _checker(stores)
        checker.set_availability_for_range(sample_room.id, date(2025, 12, 12), date(2025, 12, 12), False)

        assert not checker.is_room_available_on_date(sample_room.id, date(2025, 12, 9))
        assert checker.is_room_available_on_date(sample_room.id, date(2025, 12, 11))
        assert not checker.is_room_available_on_date(sample_room.id, date(2025, 12, 12))


# ── set_availability_for_range ───────────────────────────────────────

class TestSetAvailability:

    def test_inclusive_range(self, stores, sample_room):
        records = _checker(stores).set_availability_for_range(
            sample_room.id, date(2025, 12, 8), date(2025, 12, 10), False
        )
        assert [r.date for r in records] == [
            datetime(2025, 12, 8), datetime(2025, 12, 9), datetime(2025, 12, 10)
        ]
        assert all(r.available is False for r in records)

    def test_second_call_updates_same_day(self, stores, db_session, sample_user,
                                          second_user, sample_room):
        checker = _checker(stores)
        first = checker.set_availability_for_range(
            sample_room.id, date(2025, 12, 8), date(2025, 12, 8), True, [sample_user.id]
        )
        second = checker.set_availability_for_range(
            sample_room.id, date(2025, 12, 8), date(2025, 12, 8), True, [second_user.id]
        )

        assert second[0].id == first[0].id
        rows = db_session.query(RoomAvailability).filter(
            RoomAvailability.room_id == sample_room.id
        ).all()
        assert len(rows) == 1
        assert rows[0].user_ids == [second_user.id]
        # last write wins
        assert not checker.is_room_free_for_user(sample_room.id, sample_user.id, *_stay(8, 9))
        assert checker.is_room_free_for_user(sample_room.id, second_user.id, *_stay(8, 9))

    def test_user_ids_deduplicated(self, stores, sample_room):
        records = _checker(stores).set_availability_for_range(
            sample_room.id, date(2025, 12, 8), date(2025, 12, 8), True, [3, 1, 3]
        )
        assert records[0].user_ids == [1, 3]

    def test_from_after_to(self, stores, sample_room):
        with pytest.raises(ValidationError):
            _checker(stores).set_availability_for_range(
                sample_room.id, date(2025, 12, 10), date(2025, 12, 8), False
            )

    def test_unknown_room(self, stores):
        with pytest.raises(NotFoundError):
            _checker(stores).set_availability_for_range(999, date(2025, 12, 8), date(2025, 12, 8), False)

    def test_get_availability(self, stores, sample_room):
        checker = _checker(stores)
        checker.set_availability_for_range(sample_room.id, date(2025, 12, 8), date(2025, 12, 12), False)
        records = checker.get_availability(sample_room.id, date(2025, 12, 9), date(2025, 12, 10))
        assert [r.date.day for r in records] == [9, 10]
