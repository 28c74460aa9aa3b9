"""
User / ledger store - users, point balance, point transactions
"""
from typing import List, Optional

from hotel_point.errors import NotFoundError
from hotel_point.models.entities import PointTransaction, User
from hotel_point.repositories.base import SqlStore
from hotel_point.repositories.interfaces import UserLedgerStore


class SqlUserLedgerStore(SqlStore, UserLedgerStore):

    def find_user_by_id(self, user_id: int) -> Optional[User]:
        with self.guard("find user"):
            return self.db.query(User).filter(User.id == user_id).first()

    def find_user_by_email(self, email: str) -> Optional[User]:
        with self.guard("find user"):
            return self.db.query(User).filter(User.email == email).first()

    def create_user(self, user: User) -> User:
        return self.save(user, "create user")

    def increment_balance(self, user_id: int, delta: int) -> None:
        with self.guard("update point balance"):
            # single UPDATE ... SET point_balance = point_balance + delta
            updated = self.db.query(User).filter(User.id == user_id).update(
                {User.point_balance: User.point_balance + delta},
                synchronize_session=False
            )
            self.db.commit()
        if not updated:
            raise NotFoundError("user not found")

    def decrement_balance_if_sufficient(self, user_id: int, amount: int) -> bool:
        with self.guard("update point balance"):
            updated = self.db.query(User).filter(
                User.id == user_id,
                User.point_balance >= amount
            ).update(
                {User.point_balance: User.point_balance - amount},
                synchronize_session=False
            )
            self.db.commit()
        return bool(updated)

    def append_transaction(self, transaction: PointTransaction) -> PointTransaction:
        return self.save(transaction, "create point transaction")

    def list_transactions(self, user_id: int) -> List[PointTransaction]:
        with self.guard("list point transactions"):
            return self.db.query(PointTransaction).filter(
                PointTransaction.user_id == user_id
            ).order_by(PointTransaction.created_at.desc(), PointTransaction.id.desc()).all()
