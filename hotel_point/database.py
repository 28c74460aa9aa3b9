"""
Database setup - SQLAlchemy persistence layer
Business operations go through the stores in hotel_point.repositories
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from hotel_point.config import settings


def _connect_args(url: str) -> dict:
    if url.startswith("sqlite"):
        # busy timeout: a locked database fails fast instead of hanging
        return {"check_same_thread": False, "timeout": settings.DB_TIMEOUT_SECONDS}
    return {}


engine = create_engine(
    settings.DATABASE_URL,
    connect_args=_connect_args(settings.DATABASE_URL),
    pool_pre_ping=True,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Dependency injection: yield a database session"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Create all tables"""
    from hotel_point.models import entities  # noqa
    Base.metadata.create_all(bind=engine)
