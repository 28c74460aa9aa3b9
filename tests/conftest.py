"""
Pytest configuration and shared fixtures
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from datetime import date, datetime, timedelta

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from hotel_point.database import Base, get_db
from hotel_point.models import entities  # noqa
from hotel_point.models.entities import Hotel, Room, User, UserRole
from hotel_point.repositories import Stores
from hotel_point.security.auth import get_password_hash, create_access_token
from hotel_point.services.booking_engine import BookingEngine
from hotel_point.main import app

# Monday 2025-12-01 09:00 local time
FIXED_NOW = datetime(2025, 12, 1, 9, 0)


@pytest.fixture(scope="function")
def db_engine():
    """In-memory database engine"""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Database session"""
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture(scope="function")
def client(db_session):
    """Test client"""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def stores(db_session):
    return Stores.from_session(db_session)


@pytest.fixture
def fixed_now():
    return FIXED_NOW


@pytest.fixture
def booking_engine(db_session):
    """Booking engine with the clock fixed at FIXED_NOW"""
    return BookingEngine.from_session(db_session, clock=lambda: FIXED_NOW)


# ============== Entity fixtures ==============

def make_user(db, email="guest@example.com", balance=24, role=UserRole.USER, name="Guest"):
    user = User(
        name=name,
        email=email,
        password_hash=get_password_hash("secret123"),
        point_balance=balance,
        role=role,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def sample_hotel(db_session):
    """Test hotel"""
    hotel = Hotel(name="Grand Bali Resort", city="Bali", address="Jl. Pantai Kuta No. 1")
    db_session.add(hotel)
    db_session.commit()
    db_session.refresh(hotel)
    return hotel


@pytest.fixture
def other_hotel(db_session):
    hotel = Hotel(name="Jakarta City Hotel", city="Jakarta")
    db_session.add(hotel)
    db_session.commit()
    db_session.refresh(hotel)
    return hotel


@pytest.fixture
def sample_room(db_session, sample_hotel):
    """Test room"""
    room = Room(hotel_id=sample_hotel.id, name="Deluxe 101", capacity=2)
    db_session.add(room)
    db_session.commit()
    db_session.refresh(room)
    return room


@pytest.fixture
def sample_room_102(db_session, sample_hotel):
    room = Room(hotel_id=sample_hotel.id, name="Deluxe 102", capacity=2)
    db_session.add(room)
    db_session.commit()
    db_session.refresh(room)
    return room


@pytest.fixture
def sample_user(db_session):
    """Regular user with 24 points"""
    return make_user(db_session)


@pytest.fixture
def second_user(db_session):
    return make_user(db_session, email="second@example.com", name="Second")


@pytest.fixture
def admin_user(db_session):
    return make_user(db_session, email="admin@example.com", balance=100,
                     role=UserRole.ADMIN, name="Admin")


@pytest.fixture
def user_factory(db_session):
    """Create users with a given balance and role"""
    def factory(email, balance=24, role=UserRole.USER, name="Guest"):
        return make_user(db_session, email=email, balance=balance, role=role, name=name)
    return factory


@pytest.fixture
def future_monday():
    """A Monday two to three weeks from today (real clock, for API tests)"""
    today = date.today()
    return today + timedelta(days=(7 - today.weekday()) % 7 + 14)


# ============== Auth fixtures ==============

@pytest.fixture
def user_headers(sample_user):
    token = create_access_token(sample_user.id, sample_user.role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def second_user_headers(second_user):
    token = create_access_token(second_user.id, second_user.role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(admin_user):
    token = create_access_token(admin_user.id, admin_user.role)
    return {"Authorization": f"Bearer {token}"}
