"""
Persistent entities
Users, catalog (hotels/rooms), bookings, calendar rules, availability
overrides and the point ledger
"""
from datetime import datetime
from enum import Enum
from sqlalchemy import (
    Column, Integer, String, DateTime, ForeignKey, Text,
    Enum as SQLEnum, Boolean, JSON
)
from sqlalchemy.orm import relationship
from hotel_point.database import Base


# ============== Enums ==============

class UserRole(str, Enum):
    """User role"""
    USER = "user"
    ADMIN = "admin"


class BookingStatus(str, Enum):
    """Booking status"""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class DayType(str, Enum):
    """Calendar day type, drives the point cost of a night"""
    REGULAR = "regular"
    WEEKEND = "weekend"
    HOLIDAY = "holiday"


class TransactionType(str, Enum):
    """Point ledger entry type"""
    ANNUAL_GRANT = "annual_grant"
    BOOKING_DEDUCTION = "booking_deduction"
    BOOKING_REFUND = "booking_refund"
    BOOKING_REACTIVATION = "booking_reactivation"
    BOOKING_DELETION_REFUND = "booking_deletion_refund"


# ============== Entities ==============

class User(Base):
    """
    User
    point_balance is only changed through the point ledger
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    point_balance = Column(Integer, nullable=False, default=0)
    role = Column(SQLEnum(UserRole), nullable=False, default=UserRole.USER)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    bookings = relationship("Booking", back_populates="user")
    transactions = relationship("PointTransaction", back_populates="user")

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


class Hotel(Base):
    """Hotel (catalog, read-only to the booking core)"""
    __tablename__ = "hotels"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text)
    address = Column(String(255))
    city = Column(String(100))
    image = Column(String(255))
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    rooms = relationship("Room", back_populates="hotel")


class Room(Base):
    """Room (catalog, read-only to the booking core)"""
    __tablename__ = "rooms"

    id = Column(Integer, primary_key=True, index=True)
    hotel_id = Column(Integer, ForeignKey("hotels.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text)
    capacity = Column(Integer, nullable=False, default=2)
    image = Column(String(255))

    hotel = relationship("Hotel", back_populates="rooms")


class Booking(Base):
    """
    Booking
    point_cost is fixed at creation; status is the only field that changes
    afterwards
    """
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    hotel_id = Column(Integer, ForeignKey("hotels.id"), nullable=False)
    room_id = Column(Integer, ForeignKey("rooms.id"), nullable=False, index=True)
    check_in = Column(DateTime, nullable=False)     # 14:00 local
    check_out = Column(DateTime, nullable=False)    # 12:00 local
    point_cost = Column(Integer, nullable=False, default=0)
    status = Column(SQLEnum(BookingStatus), nullable=False, default=BookingStatus.CONFIRMED)
    created_at = Column(DateTime, default=datetime.utcnow)

    user = relationship("User", back_populates="bookings")


class DateRule(Base):
    """
    Special date rule
    One rule per calendar day (upsert by date); date is stored at 00:00
    """
    __tablename__ = "date_rules"

    id = Column(Integer, primary_key=True, index=True)
    date = Column(DateTime, nullable=False, index=True)
    type = Column(SQLEnum(DayType), nullable=False)
    point_cost = Column(Integer, nullable=False)    # 1..3
    name = Column(String(100))


class RoomAvailability(Base):
    """
    Per-room per-day availability override
    user_ids empty means every user may book that day
    """
    __tablename__ = "room_availability"

    id = Column(Integer, primary_key=True, index=True)
    room_id = Column(Integer, ForeignKey("rooms.id"), nullable=False, index=True)
    date = Column(DateTime, nullable=False, index=True)
    available = Column(Boolean, nullable=False, default=True)
    user_ids = Column(JSON, nullable=False, default=list)


class PointTransaction(Base):
    """Append-only point ledger entry"""
    __tablename__ = "point_transactions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    amount = Column(Integer, nullable=False)        # signed
    type = Column(SQLEnum(TransactionType), nullable=False)
    reference = Column(String(100), default="")
    created_at = Column(DateTime, default=datetime.utcnow)

    user = relationship("User", back_populates="transactions")
