"""
History Aggregator

네 종류 기록을 하나의 시간 역순 목록으로 병합 (읽기 전용).
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from core.ledger.store import LedgerStore
from core.ledger.types import (
    BorrowRecord,
    DepositRecord,
    HistoryEntry,
    LendRecord,
    SpendRecord,
)
from core.types import RecordType
from core.utils.timezone import now_utc, parse_db_timestamp

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter


def _timestamp_or(value: str | None, fallback: datetime) -> datetime:
    """타임스탬프 파싱 (없거나 잘못된 값이면 fallback)"""
    return parse_db_timestamp(value) or fallback


def spend_entry(record: SpendRecord, now: datetime) -> HistoryEntry:
    return HistoryEntry(
        type=RecordType.SPENT,
        amount=record.amount,
        description=record.for_what,
        details=record.place,
        date=_timestamp_or(record.spend_date, now),
    )


def lend_entry(record: LendRecord, now: datetime) -> HistoryEntry:
    return HistoryEntry(
        type=RecordType.LENT,
        amount=record.amount,
        description=record.to_whom,
        details=f"Return by {record.return_date}",
        date=_timestamp_or(record.created_at, now),
    )


def borrow_entry(record: BorrowRecord, now: datetime) -> HistoryEntry:
    return HistoryEntry(
        type=RecordType.BORROWED,
        amount=record.amount,
        description=record.from_whom,
        details=f"Due by {record.return_date}",
        date=_timestamp_or(record.created_at, now),
    )


def deposit_entry(record: DepositRecord, now: datetime) -> HistoryEntry:
    return HistoryEntry(
        type=RecordType.DEPOSIT,
        amount=record.amount,
        description=record.source,
        details=None,
        date=_timestamp_or(record.deposit_date, now),
    )


class HistoryAggregator:
    """히스토리 조회

    spend/deposit은 사용자가 입력한 날짜, lend/borrow는 생성 시각 기준.
    시각이 없는 기록은 조회 시점("now")으로 정렬 (저장값은 변경하지 않음).

    Args:
        db: SQLite 어댑터
    """

    def __init__(self, db: SQLiteAdapter, store: LedgerStore | None = None):
        self.store = store or LedgerStore(db)

    async def get_history(self, user_id: int) -> list[HistoryEntry]:
        """전체 기록 병합 (date 내림차순)

        Returns:
            HistoryEntry 목록 (기록이 없으면 빈 리스트)
        """
        now = now_utc()

        entries: list[HistoryEntry] = []
        entries.extend(spend_entry(r, now) for r in await self.store.list_spend(user_id))
        entries.extend(lend_entry(r, now) for r in await self.store.list_lend(user_id))
        entries.extend(borrow_entry(r, now) for r in await self.store.list_borrow(user_id))
        entries.extend(deposit_entry(r, now) for r in await self.store.list_deposit(user_id))

        # 안정 정렬: 같은 시각이면 위의 유형 순서 유지
        entries.sort(key=lambda entry: entry.date, reverse=True)
        return entries
