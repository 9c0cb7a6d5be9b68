"""
입금 라우트

POST /api/deposit - 입금 기록 + 잔액 증가
GET  /api/deposit - 입금 기록 목록
"""

from fastapi import APIRouter, Depends

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.ledger.coordinator import TransactionCoordinator
from core.ledger.store import LedgerStore
from web.dependencies import get_current_user_id, get_db
from web.models.requests import DepositRequest
from web.models.responses import DepositRecordResponse, LedgerWriteResponse

router = APIRouter(prefix="/api", tags=["Deposit"])


@router.post("/deposit", response_model=LedgerWriteResponse)
async def record_deposit(
    request: DepositRequest,
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
) -> LedgerWriteResponse:
    """입금 기록"""
    coordinator = TransactionCoordinator(db)
    result = await coordinator.record_deposit(
        user_id,
        request.amount,
        request.from_whom,
        request.date,
    )
    return LedgerWriteResponse(
        message="Deposit recorded and balance updated successfully",
        balance=result.balance,
    )


@router.get("/deposit", response_model=list[DepositRecordResponse])
async def list_deposit(
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
) -> list[DepositRecordResponse]:
    """입금 기록 목록 (deposit_date 내림차순)"""
    records = await LedgerStore(db).list_deposit(user_id)
    return [
        DepositRecordResponse(
            deposit_id=r.deposit_id,
            amount=r.amount,
            source=r.source,
            deposit_date=r.deposit_date,
            created_at=r.created_at,
        )
        for r in records
    ]
