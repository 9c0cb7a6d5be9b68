"""
잔액 라우트

POST /api/balance       - 잔액 설정 (UPSERT)
GET  /api/check-balance - 잔액 존재 여부 / 현재 잔액
"""

from fastapi import APIRouter, Depends

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.ledger.coordinator import TransactionCoordinator
from core.ledger.store import LedgerStore
from web.dependencies import get_current_user_id, get_db
from web.models.requests import BalanceRequest
from web.models.responses import CheckBalanceResponse, LedgerWriteResponse

router = APIRouter(prefix="/api", tags=["Balance"])


@router.post("/balance", response_model=LedgerWriteResponse)
async def set_balance(
    request: BalanceRequest,
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
) -> LedgerWriteResponse:
    """잔액 설정"""
    coordinator = TransactionCoordinator(db)
    balance = await coordinator.set_balance(user_id, request.balance)
    return LedgerWriteResponse(message="Balance updated successfully", balance=balance)


@router.get(
    "/check-balance",
    response_model=CheckBalanceResponse,
    response_model_exclude_none=True,
)
async def check_balance(
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
) -> CheckBalanceResponse:
    """잔액 조회 (설정 전이면 hasBalance=false)"""
    balance = await LedgerStore(db).get_balance(user_id)

    if balance is None:
        return CheckBalanceResponse(hasBalance=False)

    return CheckBalanceResponse(hasBalance=True, balance=balance.balance)
