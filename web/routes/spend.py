"""
지출 라우트

POST /api/spend - 지출 기록 + 잔액 차감
GET  /api/spend - 지출 기록 목록
"""

from fastapi import APIRouter, Depends

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.ledger.coordinator import TransactionCoordinator
from core.ledger.store import LedgerStore
from web.dependencies import get_current_user_id, get_db
from web.models.requests import SpendRequest
from web.models.responses import LedgerWriteResponse, SpendRecordResponse

router = APIRouter(prefix="/api", tags=["Spend"])


@router.post("/spend", response_model=LedgerWriteResponse)
async def record_spend(
    request: SpendRequest,
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
) -> LedgerWriteResponse:
    """지출 기록"""
    coordinator = TransactionCoordinator(db)
    result = await coordinator.record_spend(
        user_id,
        request.amount,
        request.for_what,
        request.place,
        request.date,
    )
    return LedgerWriteResponse(
        message="Spend record added & balance updated successfully",
        balance=result.balance,
    )


@router.get("/spend", response_model=list[SpendRecordResponse])
async def list_spend(
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
) -> list[SpendRecordResponse]:
    """지출 기록 목록 (spend_date 내림차순)"""
    records = await LedgerStore(db).list_spend(user_id)
    return [
        SpendRecordResponse(
            spend_id=r.spend_id,
            amount=r.amount,
            for_what=r.for_what,
            place=r.place,
            spend_date=r.spend_date,
        )
        for r in records
    ]
