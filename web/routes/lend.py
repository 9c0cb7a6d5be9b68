"""
빌려준 돈 라우트

POST /api/lend - 빌려준 기록 + 잔액 차감 (잔액 설정 전이면 500)
GET  /api/lend - 빌려준 기록 목록
"""

from fastapi import APIRouter, Depends

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.ledger.coordinator import TransactionCoordinator
from core.ledger.store import LedgerStore
from web.dependencies import get_current_user_id, get_db
from web.models.requests import LendRequest
from web.models.responses import LedgerWriteResponse, LendRecordResponse

router = APIRouter(prefix="/api", tags=["Lend"])


@router.post("/lend", response_model=LedgerWriteResponse)
async def record_lend(
    request: LendRequest,
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
) -> LedgerWriteResponse:
    """빌려준 기록"""
    coordinator = TransactionCoordinator(db)
    result = await coordinator.record_lend(
        user_id,
        request.amount,
        request.to_whom,
        request.return_date,
    )
    return LedgerWriteResponse(
        message="Lend record added & balance updated successfully",
        balance=result.balance,
    )


@router.get("/lend", response_model=list[LendRecordResponse])
async def list_lend(
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
) -> list[LendRecordResponse]:
    """빌려준 기록 목록 (created_at 내림차순)"""
    records = await LedgerStore(db).list_lend(user_id)
    return [
        LendRecordResponse(
            lend_id=r.lend_id,
            amount=r.amount,
            to_whom=r.to_whom,
            return_date=r.return_date,
            created_at=r.created_at,
        )
        for r in records
    ]
