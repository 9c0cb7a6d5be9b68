"""
히스토리 / 프로필 라우트

GET /api/history - 전체 기록 병합 (date 내림차순)
GET /api/profile - 사용자 정보 + 유형별 기록 개수
"""

from fastapi import APIRouter, Depends

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.auth.passwords import PasswordHasher
from core.ledger.history import HistoryAggregator
from core.ledger.profile import ProfileAggregator
from core.storage.user_store import UserStore
from web.dependencies import get_current_user_id, get_db, get_password_hasher
from web.models.responses import (
    HistoryEntryResponse,
    ProfileResponse,
    RecordCountsResponse,
    UserResponse,
)

router = APIRouter(prefix="/api", tags=["History"])


@router.get("/history", response_model=list[HistoryEntryResponse])
async def get_history(
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
) -> list[HistoryEntryResponse]:
    """전체 기록 히스토리"""
    entries = await HistoryAggregator(db).get_history(user_id)
    return [HistoryEntryResponse(**entry.to_dict()) for entry in entries]


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> ProfileResponse:
    """프로필 조회

    Raises:
        404: 토큰의 사용자가 존재하지 않음
    """
    aggregator = ProfileAggregator(db, UserStore(db, hasher))
    profile = await aggregator.get_profile(user_id)

    return ProfileResponse(
        user=UserResponse(
            id=profile.user.id,
            name=profile.user.name,
            phone=profile.user.phone,
        ),
        records=RecordCountsResponse(
            lend=profile.records.lend,
            spent=profile.records.spent,
            borrowed=profile.records.borrowed,
            deposit=profile.records.deposit,
        ),
    )
