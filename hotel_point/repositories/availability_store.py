"""
Availability store - per-room per-day overrides
"""
from datetime import datetime
from typing import List, Optional

from hotel_point.models.entities import RoomAvailability
from hotel_point.repositories.base import SqlStore
from hotel_point.repositories.interfaces import AvailabilityStore
from hotel_point.timeutils import end_of_day, start_of_day


class SqlAvailabilityStore(SqlStore, AvailabilityStore):

    def find_overrides_in_range(self, room_id: int, start: datetime,
                                end: datetime) -> List[RoomAvailability]:
        with self.guard("find room availability"):
            return self.db.query(RoomAvailability).filter(
                RoomAvailability.room_id == room_id,
                RoomAvailability.date >= start_of_day(start),
                RoomAvailability.date <= end_of_day(end)
            ).order_by(RoomAvailability.date, RoomAvailability.id).all()

    def find_override_for_date(self, room_id: int, day: datetime) -> Optional[RoomAvailability]:
        with self.guard("find room availability"):
            return self.db.query(RoomAvailability).filter(
                RoomAvailability.room_id == room_id,
                RoomAvailability.date >= start_of_day(day),
                RoomAvailability.date <= end_of_day(day)
            ).order_by(RoomAvailability.id).first()

    def create_override(self, override: RoomAvailability) -> RoomAvailability:
        return self.save(override, "create room availability")

    def update_override(self, override: RoomAvailability) -> RoomAvailability:
        return self.save(override, "update room availability")
