"""
Booking routes
"""
from datetime import date
from typing import List
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from hotel_point.database import get_db
from hotel_point.errors import UnauthorizedError
from hotel_point.models.entities import User
from hotel_point.models.schemas import (
    BookingCreate, BookingResponse, CostRequest, CostResponse, DayCostResponse,
    RoomDayAvailability
)
from hotel_point.services.booking_engine import BookingEngine
from hotel_point.security.auth import get_current_user

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.post("/calculate", response_model=CostResponse)
def calculate_cost(
    data: CostRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Quote the point cost of a stay, night by night"""
    engine = BookingEngine.from_session(db)
    total, days = engine.calculate_cost_with_details(
        data.room_id, data.check_in, data.check_out, user_id=current_user.id
    )
    return CostResponse(
        room_id=data.room_id,
        check_in=data.check_in,
        check_out=data.check_out,
        total_points=total,
        days=[
            DayCostResponse(date=d.date.date(), day_type=d.day_type,
                            point_cost=d.point_cost, name=d.name)
            for d in days
        ],
    )


@router.post("", response_model=BookingResponse, status_code=201)
def create_booking(
    data: BookingCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Book a room with points"""
    engine = BookingEngine.from_session(db)
    return engine.create_booking(
        current_user.id, data.hotel_id, data.room_id, data.check_in, data.check_out
    )


@router.get("", response_model=List[BookingResponse])
def list_my_bookings(
    active: bool = False,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Bookings of the current user"""
    engine = BookingEngine.from_session(db)
    if active:
        return engine.get_active_bookings_by_user(current_user.id)
    return engine.get_user_bookings(current_user.id)


@router.get("/availability", response_model=RoomDayAvailability)
def room_availability(
    room_id: int,
    day: date = Query(..., alias="date"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Whether a room is free for the night starting on a date"""
    available = BookingEngine.from_session(db).availability.is_room_available_on_date(room_id, day)
    return RoomDayAvailability(room_id=room_id, date=day, available=available)


@router.get("/{booking_id}", response_model=BookingResponse)
def get_booking(
    booking_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Booking detail (owner or admin)"""
    booking = BookingEngine.from_session(db).get_booking(booking_id)
    if booking.user_id != current_user.id and not current_user.is_admin:
        raise UnauthorizedError("unauthorized to view this booking")
    return booking


@router.post("/{booking_id}/cancel", response_model=BookingResponse)
def cancel_booking(
    booking_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Cancel a booking and refund its points"""
    return BookingEngine.from_session(db).cancel_booking(booking_id, current_user.id)
