"""
Admin routes - bookings, special dates, room availability
"""
from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from hotel_point.database import get_db
from hotel_point.models.entities import User
from hotel_point.models.schemas import (
    BookingPage, BookingResponse, BookingStatusUpdate,
    DateRuleCreate, DateRuleResponse,
    RoomAvailabilityRequest, RoomAvailabilityResponse
)
from hotel_point.repositories import Stores
from hotel_point.services.availability_checker import AvailabilityChecker
from hotel_point.services.booking_engine import BookingEngine, normalize_page
from hotel_point.services.date_rule_calendar import DateRuleCalendar
from hotel_point.security.auth import require_admin

router = APIRouter(prefix="/admin", tags=["admin"])


# ============== Bookings ==============

@router.get("/bookings", response_model=BookingPage)
def list_bookings(
    q: str = "",
    status_filter: Optional[str] = Query(None, alias="status"),
    page: int = 1,
    limit: int = 10,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """All bookings, optionally filtered by id and status"""
    engine = BookingEngine.from_session(db)
    if q or status_filter:
        items, total = engine.search_bookings(q, status_filter, page, limit)
    else:
        items, total = engine.list_bookings(page, limit)
    page, limit = normalize_page(page, limit)
    return BookingPage(items=items, total=total, page=page, limit=limit)


@router.put("/bookings/{booking_id}/status", response_model=BookingResponse)
def update_booking_status(
    booking_id: int,
    data: BookingStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """Change a booking's status (refund / re-debit on cancel / reactivate)"""
    return BookingEngine.from_session(db).update_booking_status(booking_id, data.status)


@router.delete("/bookings/{booking_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_booking(
    booking_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """Hard-delete a booking, refunding it first if still active"""
    BookingEngine.from_session(db).delete_booking(booking_id)


# ============== Special dates ==============

@router.get("/dates", response_model=List[DateRuleResponse])
def list_special_dates(
    start_date: date,
    end_date: date,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """Special date rules in a range"""
    return DateRuleCalendar(Stores.from_session(db).calendar).list_rules(start_date, end_date)


@router.post("/dates", response_model=DateRuleResponse)
def set_special_date(
    data: DateRuleCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """Create or replace the rule of a day"""
    calendar = DateRuleCalendar(Stores.from_session(db).calendar)
    return calendar.upsert_rule(data.date, data.type, data.point_cost, data.name or "")


@router.delete("/dates/{rule_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_special_date(
    rule_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """Delete a special date rule"""
    DateRuleCalendar(Stores.from_session(db).calendar).delete_rule(rule_id)


# ============== Room availability ==============

def _availability_checker(db: Session) -> AvailabilityChecker:
    stores = Stores.from_session(db)
    return AvailabilityChecker(stores.bookings, stores.availability, stores.catalog)


@router.post("/rooms/availability", response_model=List[RoomAvailabilityResponse])
def set_room_availability(
    data: RoomAvailabilityRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """Set the availability of a room for every day of a range"""
    return _availability_checker(db).set_availability_for_range(
        data.room_id, data.from_date, data.to_date, data.available, data.user_ids
    )


@router.get("/rooms/{room_id}/availability", response_model=List[RoomAvailabilityResponse])
def get_room_availability(
    room_id: int,
    from_date: date,
    to_date: date,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """Availability overrides of a room in a range"""
    return _availability_checker(db).get_availability(room_id, from_date, to_date)
