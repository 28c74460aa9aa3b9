"""
Booking store
"""
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import and_, func, or_

from hotel_point.errors import NotFoundError
from hotel_point.models.entities import Booking, BookingStatus
from hotel_point.repositories.base import SqlStore
from hotel_point.repositories.interfaces import BookingStore


class SqlBookingStore(SqlStore, BookingStore):

    def create(self, booking: Booking) -> Booking:
        if booking.status is None:
            booking.status = BookingStatus.CONFIRMED
        return self.save(booking, "create booking")

    def find_by_id(self, booking_id: int) -> Optional[Booking]:
        with self.guard("find booking"):
            return self.db.query(Booking).filter(Booking.id == booking_id).first()

    def find_by_user(self, user_id: int) -> List[Booking]:
        with self.guard("find bookings"):
            return self.db.query(Booking).filter(
                Booking.user_id == user_id
            ).order_by(Booking.created_at.desc(), Booking.id.desc()).all()

    def find_active_by_user(self, user_id: int, now: datetime) -> List[Booking]:
        with self.guard("find bookings"):
            return self.db.query(Booking).filter(
                Booking.user_id == user_id,
                Booking.status.notin_([BookingStatus.CANCELLED, BookingStatus.COMPLETED]),
                Booking.check_out >= now
            ).order_by(Booking.check_in).all()

    def _overlapping_active(self, room_id: int, check_in: datetime, check_out: datetime):
        # strict half-open overlap: touching boundaries do not collide
        return self.db.query(Booking).filter(
            Booking.room_id == room_id,
            Booking.status != BookingStatus.CANCELLED,
            Booking.check_in < check_out,
            Booking.check_out > check_in
        )

    def find_overlapping_active(self, room_id: int, check_in: datetime,
                                check_out: datetime) -> List[Booking]:
        with self.guard("find overlapping bookings"):
            return self._overlapping_active(room_id, check_in, check_out).order_by(
                Booking.check_in
            ).all()

    def count_overlapping_active(self, room_id: int, check_in: datetime,
                                 check_out: datetime) -> int:
        with self.guard("count overlapping bookings"):
            return self._overlapping_active(room_id, check_in, check_out).count()

    def update_status(self, booking_id: int, status: BookingStatus) -> None:
        with self.guard("update booking status"):
            updated = self.db.query(Booking).filter(Booking.id == booking_id).update(
                {Booking.status: status}, synchronize_session=False
            )
            self.db.commit()
        if not updated:
            raise NotFoundError("booking not found")

    def delete(self, booking_id: int) -> None:
        with self.guard("delete booking"):
            deleted = self.db.query(Booking).filter(Booking.id == booking_id).delete(
                synchronize_session=False
            )
            self.db.commit()
        if not deleted:
            raise NotFoundError("booking not found")

    def _page(self, query, page: int, limit: int) -> Tuple[List[Booking], int]:
        total = query.count()
        items = query.order_by(Booking.created_at.desc(), Booking.id.desc()).offset(
            (page - 1) * limit
        ).limit(limit).all()
        return items, total

    def find_all(self, page: int, limit: int) -> Tuple[List[Booking], int]:
        with self.guard("list bookings"):
            return self._page(self.db.query(Booking), page, limit)

    def search(self, query: str, status: Optional[BookingStatus],
               page: int, limit: int) -> Tuple[List[Booking], int]:
        with self.guard("search bookings"):
            q = self.db.query(Booking)
            if status:
                q = q.filter(Booking.status == status)
            if query and query.strip().isdigit():
                q = q.filter(Booking.id == int(query.strip()))
            return self._page(q, page, limit)

    def count_in_range(self, start: datetime, end: datetime) -> int:
        with self.guard("count bookings"):
            return self.db.query(func.count(Booking.id)).filter(
                Booking.status != BookingStatus.CANCELLED,
                or_(
                    and_(Booking.check_in >= start, Booking.check_in <= end),
                    and_(Booking.check_out >= start, Booking.check_out <= end),
                    and_(Booking.check_in <= start, Booking.check_out >= end),
                )
            ).scalar()
