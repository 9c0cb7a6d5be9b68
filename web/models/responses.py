"""
응답 스키마 (Pydantic)

Web API 응답 데이터 직렬화.
금액(Decimal)은 JSON에서 문자열로 직렬화되어 정밀도를 유지.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """단순 메시지 응답"""

    message: str


class LedgerWriteResponse(BaseModel):
    """기록/잔액 변경 응답"""

    message: str
    balance: Decimal = Field(..., description="반영 후 잔액")


class CheckBalanceResponse(BaseModel):
    """잔액 존재 여부 응답 (잔액 없으면 balance 생략)"""

    hasBalance: bool
    balance: Decimal | None = None


class UserResponse(BaseModel):
    """사용자 공개 정보"""

    id: int
    name: str
    phone: str


class LoginResponse(BaseModel):
    """로그인 응답"""

    token: str
    user: UserResponse
    message: str


class SpendRecordResponse(BaseModel):
    """지출 기록"""

    spend_id: int
    amount: Decimal
    for_what: str
    place: str | None
    spend_date: str


class LendRecordResponse(BaseModel):
    """빌려준 기록"""

    lend_id: int
    amount: Decimal
    to_whom: str
    return_date: str
    created_at: str | None


class BorrowRecordResponse(BaseModel):
    """빌린 기록"""

    borrow_id: int
    amount: Decimal
    for_what: str
    from_whom: str
    return_date: str
    created_at: str | None


class DepositRecordResponse(BaseModel):
    """입금 기록"""

    deposit_id: int
    amount: Decimal
    source: str
    deposit_date: str
    created_at: str | None


class HistoryEntryResponse(BaseModel):
    """히스토리 항목"""

    type: str = Field(..., description="Spent / Lent / Borrowed / Deposit")
    amount: Decimal
    description: str | None
    details: str | None
    date: datetime


class RecordCountsResponse(BaseModel):
    """유형별 기록 개수"""

    lend: int
    spent: int
    borrowed: int
    deposit: int


class ProfileResponse(BaseModel):
    """프로필 응답"""

    user: UserResponse
    records: RecordCountsResponse


class ProtectedRouteResponse(BaseModel):
    """인증 확인용 응답"""

    message: str
    user: dict[str, int]


class DbHealthResponse(BaseModel):
    """DB 헬스 체크 응답"""

    status: str = Field(default="ok", description="DB 상태")
    time: str = Field(..., description="DB 기준 현재 시각 (UTC)")
