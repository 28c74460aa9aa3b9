"""
Store capability interfaces

The booking core depends only on these operations, never on a concrete
persistence technology. Each write is a single per-entity operation; nothing
here spans documents in one transaction.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Tuple

from hotel_point.models.entities import (
    Booking, BookingStatus, DateRule, Hotel, PointTransaction, Room,
    RoomAvailability, User
)


class CatalogStore(ABC):
    """Hotels and rooms (read-only to the core)"""

    @abstractmethod
    def find_hotel_by_id(self, hotel_id: int) -> Optional[Hotel]:
        ...

    @abstractmethod
    def find_room_by_id(self, room_id: int) -> Optional[Room]:
        ...

    @abstractmethod
    def find_rooms_by_hotel_id(self, hotel_id: int) -> List[Room]:
        ...


class CalendarStore(ABC):
    """Special date rules"""

    @abstractmethod
    def find_rules_in_range(self, start: datetime, end: datetime) -> List[DateRule]:
        """Rules whose date falls in [start-of-day(start), end-of-day(end)], by date"""

    @abstractmethod
    def find_rule_for_date(self, day: datetime) -> Optional[DateRule]:
        ...

    @abstractmethod
    def find_rule_by_id(self, rule_id: int) -> Optional[DateRule]:
        ...

    @abstractmethod
    def create_rule(self, rule: DateRule) -> DateRule:
        ...

    @abstractmethod
    def update_rule(self, rule: DateRule) -> DateRule:
        ...

    @abstractmethod
    def delete_rule(self, rule: DateRule) -> None:
        ...


class AvailabilityStore(ABC):
    """Per-room per-day availability overrides"""

    @abstractmethod
    def find_overrides_in_range(self, room_id: int, start: datetime,
                                end: datetime) -> List[RoomAvailability]:
        """Overrides in [start-of-day(start), end-of-day(end)], by date"""

    @abstractmethod
    def find_override_for_date(self, room_id: int, day: datetime) -> Optional[RoomAvailability]:
        ...

    @abstractmethod
    def create_override(self, override: RoomAvailability) -> RoomAvailability:
        ...

    @abstractmethod
    def update_override(self, override: RoomAvailability) -> RoomAvailability:
        ...


class BookingStore(ABC):
    """Bookings"""

    @abstractmethod
    def create(self, booking: Booking) -> Booking:
        ...

    @abstractmethod
    def find_by_id(self, booking_id: int) -> Optional[Booking]:
        ...

    @abstractmethod
    def find_by_user(self, user_id: int) -> List[Booking]:
        """Newest first"""

    @abstractmethod
    def find_active_by_user(self, user_id: int, now: datetime) -> List[Booking]:
        """Not cancelled/completed and not yet checked out, by check-in"""

    @abstractmethod
    def find_overlapping_active(self, room_id: int, check_in: datetime,
                                check_out: datetime) -> List[Booking]:
        """Non-cancelled bookings with check_in < check_out' and check_out > check_in'"""

    @abstractmethod
    def count_overlapping_active(self, room_id: int, check_in: datetime,
                                 check_out: datetime) -> int:
        ...

    @abstractmethod
    def update_status(self, booking_id: int, status: BookingStatus) -> None:
        ...

    @abstractmethod
    def delete(self, booking_id: int) -> None:
        ...

    @abstractmethod
    def find_all(self, page: int, limit: int) -> Tuple[List[Booking], int]:
        ...

    @abstractmethod
    def search(self, query: str, status: Optional[BookingStatus],
               page: int, limit: int) -> Tuple[List[Booking], int]:
        ...

    @abstractmethod
    def count_in_range(self, start: datetime, end: datetime) -> int:
        ...


class UserLedgerStore(ABC):
    """Users, their point balance and the transaction ledger"""

    @abstractmethod
    def find_user_by_id(self, user_id: int) -> Optional[User]:
        ...

    @abstractmethod
    def find_user_by_email(self, email: str) -> Optional[User]:
        ...

    @abstractmethod
    def create_user(self, user: User) -> User:
        ...

    @abstractmethod
    def increment_balance(self, user_id: int, delta: int) -> None:
        """Atomic signed increment of point_balance"""

    @abstractmethod
    def decrement_balance_if_sufficient(self, user_id: int, amount: int) -> bool:
        """Atomic decrement guarded by point_balance >= amount; False if refused"""

    @abstractmethod
    def append_transaction(self, transaction: PointTransaction) -> PointTransaction:
        ...

    @abstractmethod
    def list_transactions(self, user_id: int) -> List[PointTransaction]:
        """Newest first"""
