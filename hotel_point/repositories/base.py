"""
SQLAlchemy store base
"""
import logging
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hotel_point.errors import DependencyError

logger = logging.getLogger(__name__)


class SqlStore:
    """Common session handling for the SQLAlchemy stores"""

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def guard(self, action: str):
        """Roll back and surface driver failures as DependencyError"""
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"{action} failed: {e}")
            raise DependencyError(f"{action} failed") from e

    def save(self, obj, action: str):
        with self.guard(action):
            self.db.add(obj)
            self.db.commit()
            self.db.refresh(obj)
        return obj
