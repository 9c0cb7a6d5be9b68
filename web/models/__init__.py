"""
Web 모델 패키지

Pydantic 스키마 정의
"""

from web.models.requests import (
    BalanceRequest,
    BorrowRequest,
    DepositRequest,
    LendRequest,
    LoginRequest,
    RegisterRequest,
    SpendRequest,
)
from web.models.responses import (
    BorrowRecordResponse,
    CheckBalanceResponse,
    DbHealthResponse,
    DepositRecordResponse,
    HistoryEntryResponse,
    LedgerWriteResponse,
    LendRecordResponse,
    LoginResponse,
    MessageResponse,
    ProfileResponse,
    ProtectedRouteResponse,
    RecordCountsResponse,
    SpendRecordResponse,
    UserResponse,
)

__all__ = [
    # Requests
    "RegisterRequest",
    "LoginRequest",
    "BalanceRequest",
    "SpendRequest",
    "LendRequest",
    "BorrowRequest",
    "DepositRequest",
    # Responses
    "MessageResponse",
    "LedgerWriteResponse",
    "CheckBalanceResponse",
    "UserResponse",
    "LoginResponse",
    "SpendRecordResponse",
    "LendRecordResponse",
    "BorrowRecordResponse",
    "DepositRecordResponse",
    "HistoryEntryResponse",
    "RecordCountsResponse",
    "ProfileResponse",
    "ProtectedRouteResponse",
    "DbHealthResponse",
]
