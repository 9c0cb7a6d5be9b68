"""
core/ledger/history.py 테스트

네 종류 기록 병합 및 정렬
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.ledger.coordinator import TransactionCoordinator
from core.ledger.history import HistoryAggregator, borrow_entry, deposit_entry, lend_entry
from core.ledger.store import LedgerStore
from core.ledger.types import BorrowRecord, DepositRecord, LendRecord
from core.types import RecordType

NOW = datetime(2030, 1, 1, tzinfo=timezone.utc)


class TestEntryMapping:
    """기록 → HistoryEntry 매핑"""

    def test_lend_entry(self) -> None:
        """lend는 생성 시각 기준, 반환 예정일은 details"""
        record = LendRecord(1, 1, Decimal("300"), "Bob", "2024-02-01", "2024-01-06 09:00:00")

        entry = lend_entry(record, NOW)

        assert entry.type is RecordType.LENT
        assert entry.description == "Bob"
        assert entry.details == "Return by 2024-02-01"
        assert entry.date == datetime(2024, 1, 6, 9, 0, tzinfo=timezone.utc)

    def test_borrow_entry(self) -> None:
        record = BorrowRecord(1, 1, Decimal("500"), "Rent", "Carol", "2024-03-01", None)

        entry = borrow_entry(record, NOW)

        assert entry.description == "Carol"
        assert entry.details == "Due by 2024-03-01"
        assert entry.date == NOW

    def test_deposit_entry(self) -> None:
        record = DepositRecord(1, 1, Decimal("500"), "Salary", "2024-01-10", None)

        entry = deposit_entry(record, NOW)

        assert entry.description == "Salary"
        assert entry.details is None
        assert entry.date == datetime(2024, 1, 10, tzinfo=timezone.utc)


class TestHistoryAggregator:
    """HistoryAggregator 테스트"""

    @pytest.mark.asyncio
    async def test_empty(self, db: SQLiteAdapter, user_id: int) -> None:
        """기록 없음 → 빈 리스트"""
        assert await HistoryAggregator(db).get_history(user_id) == []

    @pytest.mark.asyncio
    async def test_sorted_descending(self, db: SQLiteAdapter, user_id: int) -> None:
        """date 내림차순 병합"""
        coordinator = TransactionCoordinator(db)
        await coordinator.set_balance(user_id, 1000)
        await coordinator.record_spend(user_id, 200, "Lunch", "Cafe", "2024-01-05")
        await coordinator.record_deposit(user_id, 500, "Salary", "2024-01-10")
        await coordinator.record_spend(user_id, 50, "Bus", None, "2023-12-31")
        # lend는 created_at(현재) 기준이므로 가장 최신
        await coordinator.record_lend(user_id, 300, "Bob", "2024-02-01")

        history = await HistoryAggregator(db).get_history(user_id)

        assert [entry.type for entry in history] == [
            RecordType.LENT,
            RecordType.DEPOSIT,
            RecordType.SPENT,
            RecordType.SPENT,
        ]
        dates = [entry.date for entry in history]
        assert dates == sorted(dates, reverse=True)

    @pytest.mark.asyncio
    async def test_other_users_excluded(
        self, db: SQLiteAdapter, user_id: int
    ) -> None:
        """다른 사용자의 기록은 포함되지 않음"""
        cursor = await db.execute(
            "INSERT INTO users (name, phone, password) VALUES ('Other', '111', 'x')"
        )
        other_id = cursor.lastrowid
        await db.commit()

        coordinator = TransactionCoordinator(db)
        await coordinator.set_balance(other_id, 100)
        await coordinator.record_spend(other_id, 10, "Tea", None, "2024-01-01")

        assert await HistoryAggregator(db).get_history(user_id) == []

    @pytest.mark.asyncio
    async def test_mixed_date_formats_match_list_order(
        self, db: SQLiteAdapter, user_id: int
    ) -> None:
        """날짜 형식이 섞여도 지출 목록 순서와 히스토리 순서가 같음"""
        coordinator = TransactionCoordinator(db)
        await coordinator.set_balance(user_id, 1000)
        await coordinator.record_spend(user_id, 1, "Seoul", None, "2024-01-05T10:00:00+09:00")
        await coordinator.record_spend(user_id, 2, "DateOnly", None, "2024-01-05")
        await coordinator.record_spend(user_id, 3, "NewYork", None, "2024-01-04T23:00:00-05:00")

        spends = await LedgerStore(db).list_spend(user_id)
        history = await HistoryAggregator(db).get_history(user_id)

        expected = ["NewYork", "Seoul", "DateOnly"]
        assert [record.for_what for record in spends] == expected
        assert [entry.description for entry in history] == expected
        assert spends[0].spend_date == "2024-01-05T04:00:00+00:00"
