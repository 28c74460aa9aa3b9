"""
Catalog store - hotels and rooms
"""
from typing import List, Optional

from hotel_point.models.entities import Hotel, Room
from hotel_point.repositories.base import SqlStore
from hotel_point.repositories.interfaces import CatalogStore


class SqlCatalogStore(SqlStore, CatalogStore):

    def find_hotel_by_id(self, hotel_id: int) -> Optional[Hotel]:
        with self.guard("find hotel"):
            return self.db.query(Hotel).filter(Hotel.id == hotel_id).first()

    def find_room_by_id(self, room_id: int) -> Optional[Room]:
        with self.guard("find room"):
            return self.db.query(Room).filter(Room.id == room_id).first()

    def find_rooms_by_hotel_id(self, hotel_id: int) -> List[Room]:
        with self.guard("find rooms"):
            return self.db.query(Room).filter(Room.hotel_id == hotel_id).order_by(Room.id).all()
