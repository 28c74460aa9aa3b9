# Persistent entities
from hotel_point.models.entities import (
    User, Hotel, Room, Booking, DateRule, RoomAvailability, PointTransaction,
    UserRole, BookingStatus, DayType, TransactionType
)

__all__ = [
    'User', 'Hotel', 'Room', 'Booking', 'DateRule', 'RoomAvailability',
    'PointTransaction', 'UserRole', 'BookingStatus', 'DayType', 'TransactionType'
]
