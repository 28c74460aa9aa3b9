"""
Authentication routes
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from hotel_point.database import get_db
from hotel_point.models.entities import User
from hotel_point.models.schemas import RegisterRequest, LoginRequest, LoginResponse, UserResponse
from hotel_point.services.account_service import AccountService
from hotel_point.security.auth import get_current_user

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(data: RegisterRequest, db: Session = Depends(get_db)):
    """Register a user; the annual points are granted immediately"""
    service = AccountService.from_session(db)
    return service.register(data.name, data.email, data.password)


@router.post("/login", response_model=LoginResponse)
def login(data: LoginRequest, db: Session = Depends(get_db)):
    """Log in"""
    result = AccountService.from_session(db).authenticate(data.email, data.password)
    if not result:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="invalid email or password"
        )
    return result


@router.get("/me", response_model=UserResponse)
def get_current_user_info(current_user: User = Depends(get_current_user)):
    """Current user"""
    return current_user
