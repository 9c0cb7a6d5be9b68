"""
Ledger 저장소

잔액(users_balance)과 네 종류 기록 테이블의 저장/조회.
트랜잭션 경계는 호출자(TransactionCoordinator)가 관리.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import TYPE_CHECKING

from core.errors import BalanceNotFoundError
from core.ledger.types import (
    Balance,
    BorrowRecord,
    DepositRecord,
    LendRecord,
    SpendRecord,
    to_decimal,
)
from core.types import RecordType

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)


# 유형별 (테이블, 사용자 컬럼) - 원본 스키마의 컬럼명 차이(userid/user_id) 유지
RECORD_TABLES: dict[RecordType, tuple[str, str]] = {
    RecordType.SPENT: ("user_spend", "user_id"),
    RecordType.LENT: ("user_lend", "user_id"),
    RecordType.BORROWED: ("user_borrow", "userid"),
    RecordType.DEPOSIT: ("user_deposit", "user_id"),
}

_SPEND_COLUMNS = "spend_id, user_id, amount, for_what, place, spend_date, created_at"
_LEND_COLUMNS = "lend_id, user_id, amount, to_whom, return_date, created_at"
_BORROW_COLUMNS = "borrow_id, userid, amount, for_what, from_whom, return_date, created_at"
_DEPOSIT_COLUMNS = "deposit_id, user_id, amount, source, deposit_date, created_at"


class LedgerStore:
    """Ledger 저장소

    잔액 1행 + append-only 기록 테이블.
    기록 수정/삭제 메서드는 제공하지 않음.

    Args:
        db: SQLite 어댑터
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db

    # =========================================================================
    # 잔액
    # =========================================================================

    async def get_balance(self, user_id: int) -> Balance | None:
        """잔액 조회

        Returns:
            Balance 또는 None (초기 잔액 설정 전)
        """
        row = await self.db.fetchone(
            "SELECT userid, balance, updated_at FROM users_balance WHERE userid = ?",
            (user_id,),
        )
        if row is None:
            return None
        return Balance(user_id=row[0], balance=to_decimal(row[1]), updated_at=row[2])

    async def upsert_balance(self, user_id: int, amount: Decimal) -> None:
        """잔액 설정 (없으면 생성, 있으면 덮어씀)"""
        await self.db.execute(
            """
            INSERT INTO users_balance (userid, balance)
            VALUES (?, ?)
            ON CONFLICT(userid) DO UPDATE SET
                balance = excluded.balance,
                updated_at = datetime('now')
            """,
            (user_id, str(amount)),
        )

    async def update_balance(self, user_id: int, new_balance: Decimal) -> None:
        """기존 잔액 행 갱신

        Raises:
            BalanceNotFoundError: 잔액 행이 없는 경우
        """
        cursor = await self.db.execute(
            """
            UPDATE users_balance
            SET balance = ?, updated_at = datetime('now')
            WHERE userid = ?
            """,
            (str(new_balance), user_id),
        )
        if cursor.rowcount != 1:
            raise BalanceNotFoundError()

    # =========================================================================
    # 기록 저장
    # =========================================================================

    async def insert_spend(
        self,
        user_id: int,
        amount: Decimal,
        for_what: str,
        place: str | None,
        spend_date: str,
    ) -> SpendRecord:
        """지출 기록 저장"""
        cursor = await self.db.execute(
            """
            INSERT INTO user_spend (user_id, amount, for_what, place, spend_date)
            VALUES (?, ?, ?, ?, ?)
            """,
            (user_id, str(amount), for_what, place, spend_date),
        )
        row = await self.db.fetchone(
            f"SELECT {_SPEND_COLUMNS} FROM user_spend WHERE spend_id = ?",
            (cursor.lastrowid,),
        )
        return SpendRecord.from_row(row)

    async def insert_lend(
        self,
        user_id: int,
        amount: Decimal,
        to_whom: str,
        return_date: str,
    ) -> LendRecord:
        """빌려준 기록 저장"""
        cursor = await self.db.execute(
            """
            INSERT INTO user_lend (user_id, amount, to_whom, return_date)
            VALUES (?, ?, ?, ?)
            """,
            (user_id, str(amount), to_whom, return_date),
        )
        row = await self.db.fetchone(
            f"SELECT {_LEND_COLUMNS} FROM user_lend WHERE lend_id = ?",
            (cursor.lastrowid,),
        )
        return LendRecord.from_row(row)

    async def insert_borrow(
        self,
        user_id: int,
        amount: Decimal,
        for_what: str,
        from_whom: str,
        return_date: str,
    ) -> BorrowRecord:
        """빌린 기록 저장"""
        cursor = await self.db.execute(
            """
            INSERT INTO user_borrow (userid, amount, for_what, from_whom, return_date)
            VALUES (?, ?, ?, ?, ?)
            """,
            (user_id, str(amount), for_what, from_whom, return_date),
        )
        row = await self.db.fetchone(
            f"SELECT {_BORROW_COLUMNS} FROM user_borrow WHERE borrow_id = ?",
            (cursor.lastrowid,),
        )
        return BorrowRecord.from_row(row)

    async def insert_deposit(
        self,
        user_id: int,
        amount: Decimal,
        source: str,
        deposit_date: str,
    ) -> DepositRecord:
        """입금 기록 저장"""
        cursor = await self.db.execute(
            """
            INSERT INTO user_deposit (user_id, amount, source, deposit_date)
            VALUES (?, ?, ?, ?)
            """,
            (user_id, str(amount), source, deposit_date),
        )
        row = await self.db.fetchone(
            f"SELECT {_DEPOSIT_COLUMNS} FROM user_deposit WHERE deposit_id = ?",
            (cursor.lastrowid,),
        )
        return DepositRecord.from_row(row)

    # =========================================================================
    # 기록 조회
    # =========================================================================

    async def list_spend(self, user_id: int) -> list[SpendRecord]:
        """지출 기록 (spend_date 내림차순)"""
        rows = await self.db.fetchall(
            f"""
            SELECT {_SPEND_COLUMNS} FROM user_spend
            WHERE user_id = ?
            ORDER BY spend_date DESC, spend_id DESC
            """,
            (user_id,),
        )
        return [SpendRecord.from_row(row) for row in rows]

    async def list_lend(self, user_id: int) -> list[LendRecord]:
        """빌려준 기록 (created_at 내림차순)"""
        rows = await self.db.fetchall(
            f"""
            SELECT {_LEND_COLUMNS} FROM user_lend
            WHERE user_id = ?
            ORDER BY created_at DESC, lend_id DESC
            """,
            (user_id,),
        )
        return [LendRecord.from_row(row) for row in rows]

    async def list_borrow(self, user_id: int) -> list[BorrowRecord]:
        """빌린 기록 (created_at 내림차순)"""
        rows = await self.db.fetchall(
            f"""
            SELECT {_BORROW_COLUMNS} FROM user_borrow
            WHERE userid = ?
            ORDER BY created_at DESC, borrow_id DESC
            """,
            (user_id,),
        )
        return [BorrowRecord.from_row(row) for row in rows]

    async def list_deposit(self, user_id: int) -> list[DepositRecord]:
        """입금 기록 (deposit_date 내림차순)"""
        rows = await self.db.fetchall(
            f"""
            SELECT {_DEPOSIT_COLUMNS} FROM user_deposit
            WHERE user_id = ?
            ORDER BY deposit_date DESC, deposit_id DESC
            """,
            (user_id,),
        )
        return [DepositRecord.from_row(row) for row in rows]

    async def count_records(self, user_id: int, record_type: RecordType) -> int:
        """유형별 기록 개수"""
        table, user_column = RECORD_TABLES[record_type]
        row = await self.db.fetchone(
            f"SELECT COUNT(*) FROM {table} WHERE {user_column} = ?",
            (user_id,),
        )
        return int(row[0]) if row else 0

    async def get_db_time(self) -> str:
        """DB 서버 시각 (헬스 체크용)"""
        row = await self.db.fetchone("SELECT datetime('now')")
        return row[0]
