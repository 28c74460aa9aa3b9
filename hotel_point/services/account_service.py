"""
Account service
Registration (with the annual point grant) and login
"""
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from hotel_point.config import settings
from hotel_point.errors import ConflictError, ErrorReason, ValidationError
from hotel_point.models.entities import User, UserRole
from hotel_point.repositories.interfaces import UserLedgerStore
from hotel_point.repositories.ledger_store import SqlUserLedgerStore
from hotel_point.security.auth import (
    MAX_PASSWORD_BYTES, create_access_token, get_password_hash, verify_password
)
from hotel_point.services.point_ledger import PointLedger

logger = logging.getLogger(__name__)


class AccountService:
    """Account service"""

    def __init__(self, store: UserLedgerStore, ledger: Optional[PointLedger] = None):
        self.store = store
        self.ledger = ledger or PointLedger(store)

    @classmethod
    def from_session(cls, db: Session) -> "AccountService":
        return cls(SqlUserLedgerStore(db))

    def register(self, name: str, email: str, password: str,
                 role: UserRole = UserRole.USER) -> User:
        """Create a user and credit the yearly point allowance"""
        email = email.strip().lower()
        if not name.strip():
            raise ValidationError("name is required")
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValidationError(f"password cannot be longer than {MAX_PASSWORD_BYTES} bytes")
        if self.store.find_user_by_email(email) is not None:
            raise ConflictError("email already registered", ErrorReason.EMAIL_TAKEN)

        user = self.store.create_user(User(
            name=name.strip(),
            email=email,
            password_hash=get_password_hash(password),
            point_balance=0,
            role=role,
        ))
        grant = settings.ANNUAL_POINT_GRANT
        if grant > 0:
            self.ledger.grant(user.id, grant, f"registration-{datetime.utcnow().year}")
        logger.info(f"User {user.id} registered ({role.value})")
        return self.store.find_user_by_id(user.id)

    def authenticate(self, email: str, password: str) -> Optional[dict]:
        """Return a bearer token for valid credentials, else None"""
        user = self.store.find_user_by_email(email.strip().lower())
        if not user or not verify_password(password, user.password_hash):
            return None
        return {
            'access_token': create_access_token(user.id, user.role),
            'token_type': 'bearer',
            'user': user,
        }
