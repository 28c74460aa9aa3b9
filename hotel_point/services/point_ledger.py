"""
Point ledger
Every balance change is one atomic increment plus one appended transaction
"""
import logging
from datetime import datetime
from typing import List

from hotel_point.errors import NotFoundError, ValidationError
from hotel_point.models.entities import PointTransaction, TransactionType
from hotel_point.repositories.interfaces import UserLedgerStore

logger = logging.getLogger(__name__)


class PointLedger:
    """
    Point ledger

    The ledger does not check balances on debit: callers compare
    balance_of() with the amount first, or use debit_if_sufficient() which
    applies the floor in the same write.
    """

    def __init__(self, store: UserLedgerStore):
        self.store = store

    def balance_of(self, user_id: int) -> int:
        user = self.store.find_user_by_id(user_id)
        if user is None:
            raise NotFoundError("user not found")
        return user.point_balance

    def history_of(self, user_id: int) -> List[PointTransaction]:
        """Transactions, newest first"""
        return self.store.list_transactions(user_id)

    def debit(self, user_id: int, amount: int, tx_type: TransactionType,
              reference: str = "") -> PointTransaction:
        self._check_amount(amount)
        self.store.increment_balance(user_id, -amount)
        return self._record(user_id, -amount, tx_type, reference)

    def credit(self, user_id: int, amount: int, tx_type: TransactionType,
               reference: str = "") -> PointTransaction:
        self._check_amount(amount)
        self.store.increment_balance(user_id, amount)
        return self._record(user_id, amount, tx_type, reference)

    def debit_if_sufficient(self, user_id: int, amount: int, tx_type: TransactionType,
                            reference: str = "") -> bool:
        """Debit only if the balance covers amount, decided by the store in one write"""
        self._check_amount(amount)
        if not self.store.decrement_balance_if_sufficient(user_id, amount):
            logger.warning(f"Conditional debit of {amount} refused for user {user_id}")
            return False
        self._record(user_id, -amount, tx_type, reference)
        return True

    def grant(self, user_id: int, amount: int, reference: str = "") -> PointTransaction:
        """Annual point grant"""
        return self.credit(user_id, amount, TransactionType.ANNUAL_GRANT, reference)

    @staticmethod
    def _check_amount(amount: int) -> None:
        if not isinstance(amount, int) or amount < 0:
            raise ValidationError("point amount must be a non-negative integer")

    def _record(self, user_id: int, amount: int, tx_type: TransactionType,
                reference: str) -> PointTransaction:
        transaction = PointTransaction(
            user_id=user_id,
            amount=amount,
            type=tx_type,
            reference=reference,
            created_at=datetime.utcnow(),
        )
        try:
            transaction = self.store.append_transaction(transaction)
        except Exception:
            # keep balance == sum(transactions): undo the balance change
            try:
                self.store.increment_balance(user_id, -amount)
            except Exception:
                logger.exception(
                    f"Failed to reverse balance change of {amount} for user {user_id}"
                )
            raise
        logger.info(f"Ledger {tx_type.value}: user {user_id} {amount:+d} ({reference})")
        return transaction
