"""
Ledger 타입 정의

잔액, 기록(spend/lend/borrow/deposit), 히스토리, 프로필 데이터 구조.
금액은 모두 Decimal.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from core.types import RecordType


def to_decimal(value: Any) -> Decimal:
    """DB 값을 Decimal로 변환

    Raises:
        ValueError: 숫자로 해석할 수 없는 값
    """
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, TypeError) as e:
        raise ValueError(f"Not a decimal value: {value!r}") from e


@dataclass(frozen=True)
class Balance:
    """사용자 잔액 (users_balance 1행)"""

    user_id: int
    balance: Decimal
    updated_at: str | None = None


@dataclass
class SpendRecord:
    """지출 기록 (잔액 감소)

    Attributes:
        spend_id: 기록 ID
        user_id: 사용자 ID
        amount: 금액 (양수)
        for_what: 지출 항목
        place: 장소
        spend_date: 지출일
        created_at: 생성 시각
    """

    spend_id: int
    user_id: int
    amount: Decimal
    for_what: str
    place: str | None
    spend_date: str
    created_at: str | None = None

    record_type = RecordType.SPENT

    @classmethod
    def from_row(cls, row: tuple[Any, ...]) -> "SpendRecord":
        """DB 행에서 생성 (spend_id, user_id, amount, for_what, place, spend_date, created_at)"""
        return cls(
            spend_id=row[0],
            user_id=row[1],
            amount=to_decimal(row[2]),
            for_what=row[3],
            place=row[4],
            spend_date=row[5],
            created_at=row[6],
        )


@dataclass
class LendRecord:
    """빌려준 기록 (잔액 감소)"""

    lend_id: int
    user_id: int
    amount: Decimal
    to_whom: str
    return_date: str
    created_at: str | None = None

    record_type = RecordType.LENT

    @classmethod
    def from_row(cls, row: tuple[Any, ...]) -> "LendRecord":
        """DB 행에서 생성 (lend_id, user_id, amount, to_whom, return_date, created_at)"""
        return cls(
            lend_id=row[0],
            user_id=row[1],
            amount=to_decimal(row[2]),
            to_whom=row[3],
            return_date=row[4],
            created_at=row[5],
        )


@dataclass
class BorrowRecord:
    """빌린 기록 (잔액 증가)"""

    borrow_id: int
    user_id: int
    amount: Decimal
    for_what: str
    from_whom: str
    return_date: str
    created_at: str | None = None

    record_type = RecordType.BORROWED

    @classmethod
    def from_row(cls, row: tuple[Any, ...]) -> "BorrowRecord":
        """DB 행에서 생성 (borrow_id, userid, amount, for_what, from_whom, return_date, created_at)"""
        return cls(
            borrow_id=row[0],
            user_id=row[1],
            amount=to_decimal(row[2]),
            for_what=row[3],
            from_whom=row[4],
            return_date=row[5],
            created_at=row[6],
        )


@dataclass
class DepositRecord:
    """입금 기록 (잔액 증가)"""

    deposit_id: int
    user_id: int
    amount: Decimal
    source: str
    deposit_date: str
    created_at: str | None = None

    record_type = RecordType.DEPOSIT

    @classmethod
    def from_row(cls, row: tuple[Any, ...]) -> "DepositRecord":
        """DB 행에서 생성 (deposit_id, user_id, amount, source, deposit_date, created_at)"""
        return cls(
            deposit_id=row[0],
            user_id=row[1],
            amount=to_decimal(row[2]),
            source=row[3],
            deposit_date=row[4],
            created_at=row[5],
        )


LedgerRecord = SpendRecord | LendRecord | BorrowRecord | DepositRecord


@dataclass(frozen=True)
class RecordResult:
    """Coordinator 처리 결과

    Attributes:
        record: 저장된 기록
        balance: 반영 후 잔액
    """

    record: LedgerRecord
    balance: Decimal


@dataclass(frozen=True)
class HistoryEntry:
    """히스토리 항목 (네 종류 기록의 공통 형태)"""

    type: RecordType
    amount: Decimal
    description: str | None
    details: str | None
    date: datetime

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["type"] = self.type.value
        return data


@dataclass(frozen=True)
class UserSummary:
    """사용자 공개 정보 (비밀번호 제외)"""

    id: int
    name: str
    phone: str


@dataclass(frozen=True)
class RecordCounts:
    """유형별 기록 개수"""

    lend: int = 0
    spent: int = 0
    borrowed: int = 0
    deposit: int = 0


@dataclass(frozen=True)
class Profile:
    """프로필 (사용자 정보 + 기록 개수)"""

    user: UserSummary
    records: RecordCounts = field(default_factory=RecordCounts)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
