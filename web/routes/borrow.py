"""
빌린 돈 라우트

POST /api/borrow - 빌린 기록 + 잔액 증가
GET  /api/borrow - 빌린 기록 목록
"""

from fastapi import APIRouter, Depends

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.ledger.coordinator import TransactionCoordinator
from core.ledger.store import LedgerStore
from web.dependencies import get_current_user_id, get_db
from web.models.requests import BorrowRequest
from web.models.responses import BorrowRecordResponse, LedgerWriteResponse

router = APIRouter(prefix="/api", tags=["Borrow"])


@router.post("/borrow", response_model=LedgerWriteResponse)
async def record_borrow(
    request: BorrowRequest,
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
) -> LedgerWriteResponse:
    coordinator = TransactionCoordinator(db)
    result = await coordinator.record_borrow(
        user_id,
        request.amount,
        request.for_what,
        request.from_whom,
        request.return_date,
    )
    return LedgerWriteResponse(
        message="Borrow recorded and balance updated successfully",
        balance=result.balance,
    )


@router.get("/borrow", response_model=list[BorrowRecordResponse])
async def list_borrow(
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
) -> list[BorrowRecordResponse]:
    records = await LedgerStore(db).list_borrow(user_id)
    return [
        BorrowRecordResponse(
            borrow_id=r.borrow_id,
            amount=r.amount,
            for_what=r.for_what,
            from_whom=r.from_whom,
            return_date=r.return_date,
            created_at=r.created_at,
        )
        for r in records
    ]
