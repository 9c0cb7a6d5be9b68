"""
Transaction Coordinator

기록 저장과 잔액 변경을 하나의 트랜잭션으로 처리.

처리 순서 (spend/lend/borrow/deposit 공통):
1. 입력 검증 (금액 > 0, 필수 필드)
2. BEGIN IMMEDIATE (쓰기 잠금 획득)
3. 잔액 행 조회 (없으면 BalanceNotFoundError)
4. 기록 INSERT → 잔액 UPDATE
5. COMMIT (실패 시 전체 ROLLBACK)

잔액 조회가 잠금 획득 이후에 일어나므로 같은 사용자에 대한
동시 요청이 오래된 잔액을 기준으로 덮어쓰는 일이 없음.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from datetime import date, datetime
from decimal import Decimal, Inexact, InvalidOperation, Overflow, localcontext
from typing import TYPE_CHECKING, Any

import aiosqlite

from core.errors import (
    BalanceNotFoundError,
    InvalidAmountError,
    InvalidInputError,
    StorageError,
    TransactionFailedError,
    UserNotFoundError,
)
from core.ledger.store import LedgerStore
from core.ledger.types import LedgerRecord, RecordResult
from core.types import RecordType
from core.utils.timezone import normalize_db_date, to_db_date

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)


def parse_amount(value: Any, positive: bool = True) -> Decimal:
    """금액 검증 및 Decimal 변환

    Args:
        value: 요청 금액 (Decimal, int, float, 숫자 문자열)
        positive: True면 0 이하 거부

    Raises:
        InvalidAmountError: 숫자가 아니거나 NaN/Infinity, 또는 0 이하
    """
    if value is None or isinstance(value, bool):
        raise InvalidAmountError()

    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as e:
        raise InvalidAmountError() from e

    if not amount.is_finite():
        raise InvalidAmountError()

    if positive and amount <= 0:
        raise InvalidAmountError()

    return amount


def apply_delta(balance: Decimal, delta: Decimal) -> Decimal:
    """잔액에 변화량 반영

    결과를 현재 정밀도로 정확히 표현할 수 없으면 반올림하지 않고 거부.
    잔액 변화량은 항상 기록 금액과 같음.

    Raises:
        InvalidAmountError: 자릿수 초과 또는 지수 범위 초과
    """
    with localcontext() as ctx:
        ctx.traps[Inexact] = True
        ctx.traps[Overflow] = True
        try:
            return balance + delta
        except Inexact as e:
            # Overflow는 Inexact 하위 신호
            raise InvalidAmountError("Amount exceeds supported precision") from e


def require_text(field_name: str, value: str | None) -> str:
    """필수 문자열 필드 검증 (공백 제거)"""
    cleaned = (value or "").strip()
    if not cleaned:
        raise InvalidInputError(f"Missing required field: {field_name}")
    return cleaned


def optional_text(value: str | None) -> str | None:
    cleaned = (value or "").strip()
    return cleaned or None


def require_date(field_name: str, value: date | datetime | str | None) -> str:
    """필수 날짜 필드 검증

    date/datetime 객체 또는 ISO 8601 문자열 허용.
    저장 형식은 normalize_db_date로 통일 (목록 조회는 문자열 순서로 정렬).

    Returns:
        DB 저장용 문자열
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise InvalidInputError(f"Missing required field: {field_name}")

    if isinstance(value, (date, datetime)):
        return to_db_date(value)

    cleaned = value.strip()
    normalized = normalize_db_date(cleaned)
    if normalized is None:
        raise InvalidInputError(f"Invalid date for {field_name}: {cleaned}")
    return normalized


class TransactionCoordinator:
    """잔액 변경 코디네이터

    잔액(users_balance)을 쓰는 유일한 경로.
    연결(db)은 호출 단위로 주입되며, 동시 요청은 서로 다른 연결을 사용해야 함.

    Args:
        db: SQLite 어댑터 (요청 단위 연결)
        store: LedgerStore (None이면 db로 생성)
    """

    def __init__(self, db: SQLiteAdapter, store: LedgerStore | None = None):
        self.db = db
        self.store = store or LedgerStore(db)

    # =========================================================================
    # 잔액 설정
    # =========================================================================

    async def set_balance(self, user_id: int, amount: Any) -> Decimal:
        """잔액 설정 (UPSERT)

        음수 허용. 반복 호출 시 마지막 값으로 덮어씀.

        Returns:
            설정된 잔액

        Raises:
            InvalidAmountError: 숫자가 아니거나 NaN/Infinity
            UserNotFoundError: 사용자 행 없음 (외래 키 위반)
            StorageError: DB 오류
        """
        value = parse_amount(amount, positive=False)

        try:
            async with self.db.transaction():
                await self.store.upsert_balance(user_id, value)
        except aiosqlite.IntegrityError as e:
            logger.warning(f"잔액 설정 실패 (사용자 없음): user_id={user_id}")
            raise UserNotFoundError() from e
        except aiosqlite.Error as e:
            logger.error(f"잔액 설정 실패: user_id={user_id}, error={e}")
            raise StorageError() from e

        logger.info(f"잔액 설정: user_id={user_id}, balance={value}")
        return value

    # =========================================================================
    # 기록 + 잔액 변경
    # =========================================================================

    async def record_spend(
        self,
        user_id: int,
        amount: Any,
        for_what: str | None,
        place: str | None,
        spend_date: date | datetime | str | None,
    ) -> RecordResult:
        """지출 기록 (잔액 -amount)"""
        value = parse_amount(amount)
        for_what = require_text("for_what", for_what)
        place = optional_text(place)
        spend_date = require_date("date", spend_date)

        return await self._apply(
            user_id,
            RecordType.SPENT,
            value,
            lambda: self.store.insert_spend(user_id, value, for_what, place, spend_date),
        )

    async def record_lend(
        self,
        user_id: int,
        amount: Any,
        to_whom: str | None,
        return_date: date | datetime | str | None,
    ) -> RecordResult:
        """빌려준 기록 (잔액 -amount)

        초기 잔액 설정 전이면 BalanceNotFoundError, 기록은 남지 않음.
        """
        value = parse_amount(amount)
        to_whom = require_text("to_whom", to_whom)
        return_date = require_date("return_date", return_date)

        return await self._apply(
            user_id,
            RecordType.LENT,
            value,
            lambda: self.store.insert_lend(user_id, value, to_whom, return_date),
        )

    async def record_borrow(
        self,
        user_id: int,
        amount: Any,
        for_what: str | None,
        from_whom: str | None,
        return_date: date | datetime | str | None,
    ) -> RecordResult:
        """빌린 기록 (잔액 +amount)"""
        value = parse_amount(amount)
        for_what = require_text("for_what", for_what)
        from_whom = require_text("from_whom", from_whom)
        return_date = require_date("return_date", return_date)

        return await self._apply(
            user_id,
            RecordType.BORROWED,
            value,
            lambda: self.store.insert_borrow(user_id, value, for_what, from_whom, return_date),
        )

    async def record_deposit(
        self,
        user_id: int,
        amount: Any,
        from_whom: str | None,
        deposit_date: date | datetime | str | None,
    ) -> RecordResult:
        """입금 기록 (잔액 +amount)"""
        value = parse_amount(amount)
        source = require_text("fromWhom", from_whom)
        deposit_date = require_date("date", deposit_date)

        return await self._apply(
            user_id,
            RecordType.DEPOSIT,
            value,
            lambda: self.store.insert_deposit(user_id, value, source, deposit_date),
        )

    async def _apply(
        self,
        user_id: int,
        record_type: RecordType,
        amount: Decimal,
        insert: Callable[[], Awaitable[LedgerRecord]],
    ) -> RecordResult:
        """기록 INSERT + 잔액 UPDATE (단일 트랜잭션)

        Raises:
            BalanceNotFoundError: 잔액 행 없음
            InvalidAmountError: 결과 잔액 자릿수 초과 (전체 롤백됨)
            TransactionFailedError: DB 오류 (전체 롤백됨)
        """
        delta = amount if record_type.is_credit else amount.copy_negate()

        try:
            async with self.db.transaction():
                current = await self.store.get_balance(user_id)
                if current is None:
                    raise BalanceNotFoundError()

                record = await insert()
                new_balance = apply_delta(current.balance, delta)
                await self.store.update_balance(user_id, new_balance)
        except BalanceNotFoundError:
            logger.warning(
                f"잔액 행 없음: user_id={user_id}, type={record_type.value}, amount={amount}"
            )
            raise
        except aiosqlite.Error as e:
            logger.error(
                f"트랜잭션 실패 (롤백): user_id={user_id}, type={record_type.value}, "
                f"amount={amount}, error={e}"
            )
            raise TransactionFailedError() from e

        logger.info(
            f"{record_type.value} 기록: user_id={user_id}, amount={amount}, "
            f"balance={current.balance} -> {new_balance}"
        )
        return RecordResult(record=record, balance=new_balance)
