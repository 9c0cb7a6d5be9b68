"""
core/ledger/types.py 테스트
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from core.ledger.types import (
    HistoryEntry,
    Profile,
    RecordCounts,
    SpendRecord,
    UserSummary,
    to_decimal,
)
from core.types import RecordType


class TestToDecimal:
    """to_decimal 테스트"""

    def test_from_text(self) -> None:
        """TEXT 컬럼 값 그대로 보존"""
        assert to_decimal("0.10") == Decimal("0.10")

    def test_from_int(self) -> None:
        assert to_decimal(1500) == Decimal("1500")

    def test_invalid(self) -> None:
        with pytest.raises(ValueError):
            to_decimal("abc")


class TestSpendRecord:
    def test_from_row(self) -> None:
        """DB 행 변환"""
        record = SpendRecord.from_row(
            (1, 2, "200", "Lunch", "Cafe", "2024-01-05", "2024-01-05 12:00:00")
        )

        assert record.spend_id == 1
        assert record.amount == Decimal("200")
        assert record.place == "Cafe"
        assert record.record_type is RecordType.SPENT


class TestHistoryEntry:
    def test_to_dict(self) -> None:
        """type은 문자열 값으로 직렬화"""
        entry = HistoryEntry(
            type=RecordType.DEPOSIT,
            amount=Decimal("500"),
            description="Salary",
            details=None,
            date=datetime(2024, 1, 5, tzinfo=timezone.utc),
        )

        data = entry.to_dict()

        assert data["type"] == "Deposit"
        assert data["details"] is None


class TestProfile:
    def test_to_dict(self) -> None:
        profile = Profile(
            user=UserSummary(id=1, name="A", phone="1"),
            records=RecordCounts(lend=1, spent=2),
        )

        assert profile.to_dict() == {
            "user": {"id": 1, "name": "A", "phone": "1"},
            "records": {"lend": 1, "spent": 2, "borrowed": 0, "deposit": 0},
        }
