"""
Point routes
"""
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from hotel_point.database import get_db
from hotel_point.models.entities import User
from hotel_point.models.schemas import BalanceResponse, PointTransactionResponse
from hotel_point.repositories.ledger_store import SqlUserLedgerStore
from hotel_point.services.point_ledger import PointLedger
from hotel_point.security.auth import get_current_user

router = APIRouter(prefix="/points", tags=["points"])


@router.get("/balance", response_model=BalanceResponse)
def get_balance(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Current point balance"""
    ledger = PointLedger(SqlUserLedgerStore(db))
    return BalanceResponse(user_id=current_user.id, point_balance=ledger.balance_of(current_user.id))


@router.get("/history", response_model=List[PointTransactionResponse])
def get_history(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Point transactions, newest first"""
    return PointLedger(SqlUserLedgerStore(db)).history_of(current_user.id)
