"""
Stores used by the booking core, bundled for constructor injection
"""
from dataclasses import dataclass

from sqlalchemy.orm import Session

from hotel_point.repositories.interfaces import (
    AvailabilityStore, BookingStore, CalendarStore, CatalogStore, UserLedgerStore
)
from hotel_point.repositories.availability_store import SqlAvailabilityStore
from hotel_point.repositories.booking_store import SqlBookingStore
from hotel_point.repositories.calendar_store import SqlCalendarStore
from hotel_point.repositories.catalog_store import SqlCatalogStore
from hotel_point.repositories.ledger_store import SqlUserLedgerStore


@dataclass
class Stores:
    """Capability bundle: one store per persistence concern"""
    catalog: CatalogStore
    calendar: CalendarStore
    availability: AvailabilityStore
    bookings: BookingStore
    users: UserLedgerStore

    @classmethod
    def from_session(cls, db: Session) -> "Stores":
        return cls(
            catalog=SqlCatalogStore(db),
            calendar=SqlCalendarStore(db),
            availability=SqlAvailabilityStore(db),
            bookings=SqlBookingStore(db),
            users=SqlUserLedgerStore(db),
        )


__all__ = [
    'Stores', 'CatalogStore', 'CalendarStore', 'AvailabilityStore',
    'BookingStore', 'UserLedgerStore', 'SqlCatalogStore', 'SqlCalendarStore',
    'SqlAvailabilityStore', 'SqlBookingStore', 'SqlUserLedgerStore'
]
