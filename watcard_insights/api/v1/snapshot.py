"""PUT /v1/balance and DELETE /v1/snapshot - persisted state management"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from watcard_insights.api.v1.schemas import BalanceRequest, BalanceResponse
from watcard_insights.api.dependencies import get_snapshot_store
from watcard_insights.domain.snapshot import SnapshotStore
from watcard_insights.infrastructure.database.session import get_db

router = APIRouter()


@router.put("/balance", response_model=BalanceResponse)
def update_balance(
    request_body: BalanceRequest,
    db: Session = Depends(get_db),
    store: SnapshotStore = Depends(get_snapshot_store),
):
    """Store the current balance, or clear it when null"""
    balance = str(request_body.balance) if request_body.balance is not None else None
    store.save_balance(balance)
    db.commit()
    return BalanceResponse(balance=balance)


@router.delete("/snapshot", status_code=204)
def clear_snapshot(
    db: Session = Depends(get_db),
    store: SnapshotStore = Depends(get_snapshot_store),
):
    """Forget the stored batch, timestamp and balance"""
    store.clear()
    db.commit()
