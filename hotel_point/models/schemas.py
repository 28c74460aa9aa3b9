"""
Pydantic schemas
Request/response validation for the API
"""
import datetime as dt
from datetime import datetime, date
from typing import Optional, List
from pydantic import BaseModel, Field, field_validator, model_validator, ConfigDict
from hotel_point.models.entities import BookingStatus, DayType, TransactionType, UserRole
from hotel_point.security.auth import MAX_PASSWORD_BYTES


# ============== Auth Schemas ==============

class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., max_length=255)
    password: str = Field(..., min_length=6)

    @field_validator('email')
    @classmethod
    def validate_email(cls, v: str) -> str:
        if '@' not in v:
            raise ValueError('invalid email address')
        return v.strip().lower()

    @field_validator('password')
    @classmethod
    def validate_password(cls, v: str) -> str:
        if len(v.encode('utf-8')) > MAX_PASSWORD_BYTES:
            raise ValueError(f'password cannot be longer than {MAX_PASSWORD_BYTES} bytes')
        return v


class LoginRequest(BaseModel):
    email: str
    password: str


class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    point_balance: int
    role: UserRole
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


# ============== Booking Schemas ==============

class StayPeriod(BaseModel):
    check_in: date
    check_out: date

    @model_validator(mode='after')
    def validate_period(self):
        if self.check_in > self.check_out:
            raise ValueError('check-in date cannot be after check-out date')
        return self


class CostRequest(StayPeriod):
    room_id: int


class BookingCreate(StayPeriod):
    hotel_id: int
    room_id: int


class DayCostResponse(BaseModel):
    date: dt.date
    day_type: DayType
    point_cost: int
    name: str = ""


class CostResponse(BaseModel):
    room_id: int
    check_in: date
    check_out: date
    total_points: int
    days: List[DayCostResponse]


class BookingResponse(BaseModel):
    id: int
    user_id: int
    hotel_id: int
    room_id: int
    check_in: datetime
    check_out: datetime
    point_cost: int
    status: BookingStatus
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


class BookingPage(BaseModel):
    items: List[BookingResponse]
    total: int
    page: int
    limit: int


class BookingStatusUpdate(BaseModel):
    status: str


# ============== Point Schemas ==============

class BalanceResponse(BaseModel):
    user_id: int
    point_balance: int


class PointTransactionResponse(BaseModel):
    id: int
    amount: int
    type: TransactionType
    reference: str
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


# ============== Calendar Schemas ==============

class DateRuleCreate(BaseModel):
    date: dt.date
    type: DayType
    point_cost: int = Field(..., ge=1, le=3)
    name: Optional[str] = ""


class DateRuleResponse(BaseModel):
    id: int
    date: datetime
    type: DayType
    point_cost: int
    name: Optional[str] = None
    model_config = ConfigDict(from_attributes=True)


# ============== Availability Schemas ==============

class RoomAvailabilityRequest(BaseModel):
    room_id: int
    from_date: date
    to_date: date
    available: bool = True
    user_ids: List[int] = Field(default_factory=list)

    @model_validator(mode='after')
    def validate_range(self):
        if self.from_date > self.to_date:
            raise ValueError('from date cannot be after to date')
        return self


class RoomDayAvailability(BaseModel):
    room_id: int
    date: dt.date
    available: bool


class RoomAvailabilityResponse(BaseModel):
    id: int
    room_id: int
    date: datetime
    available: bool
    user_ids: List[int]
    model_config = ConfigDict(from_attributes=True)
