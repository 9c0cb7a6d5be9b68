"""
core/ledger/profile.py 테스트
"""

import pytest

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.auth.passwords import PasswordHasher
from core.errors import UserNotFoundError
from core.ledger.coordinator import TransactionCoordinator
from core.ledger.profile import ProfileAggregator
from core.ledger.types import RecordCounts
from core.storage.user_store import UserStore


@pytest.fixture
def profiles(db: SQLiteAdapter, hasher: PasswordHasher) -> ProfileAggregator:
    return ProfileAggregator(db, UserStore(db, hasher))


class TestProfileAggregator:
    """ProfileAggregator 테스트"""

    @pytest.mark.asyncio
    async def test_no_records(self, profiles: ProfileAggregator, user_id: int) -> None:
        """기록 없음 → 모두 0"""
        profile = await profiles.get_profile(user_id)

        assert profile.user.phone == "9999999999"
        assert profile.records == RecordCounts()

    @pytest.mark.asyncio
    async def test_counts(
        self, profiles: ProfileAggregator, db: SQLiteAdapter, user_id: int
    ) -> None:
        """유형별 개수"""
        coordinator = TransactionCoordinator(db)
        await coordinator.set_balance(user_id, 1000)
        await coordinator.record_spend(user_id, 200, "Lunch", "Cafe", "2024-01-05")
        await coordinator.record_spend(user_id, 20, "Tea", None, "2024-01-06")
        await coordinator.record_deposit(user_id, 500, "Salary", "2024-01-10")
        await coordinator.record_borrow(user_id, 50, "Bus", "Dan", "2024-02-01")

        profile = await profiles.get_profile(user_id)

        assert profile.records == RecordCounts(lend=0, spent=2, borrowed=1, deposit=1)

    @pytest.mark.asyncio
    async def test_missing_user(self, profiles: ProfileAggregator) -> None:
        with pytest.raises(UserNotFoundError):
            await profiles.get_profile(424242)
