"""
Ledger (잔액 + 기록) 시스템

모든 잔액 변경은 TransactionCoordinator를 거쳐 기록과 함께 커밋됨.

사용 예시:
```python
from core.ledger import TransactionCoordinator, HistoryAggregator

coordinator = TransactionCoordinator(db)
await coordinator.set_balance(user_id, "1000")
result = await coordinator.record_spend(user_id, "200", "Food", "Cafe", "2024-01-01")
result.balance  # Decimal("800")

history = await HistoryAggregator(db).get_history(user_id)
```
"""

from core.ledger.coordinator import TransactionCoordinator, parse_amount
from core.ledger.history import HistoryAggregator
from core.ledger.profile import ProfileAggregator
from core.ledger.store import LedgerStore
from core.ledger.types import (
    Balance,
    BorrowRecord,
    DepositRecord,
    HistoryEntry,
    LendRecord,
    Profile,
    RecordCounts,
    RecordResult,
    SpendRecord,
    UserSummary,
)

__all__ = [
    # 핵심 클래스
    "LedgerStore",
    "TransactionCoordinator",
    "HistoryAggregator",
    "ProfileAggregator",
    # 데이터
    "Balance",
    "SpendRecord",
    "LendRecord",
    "BorrowRecord",
    "DepositRecord",
    "RecordResult",
    "HistoryEntry",
    "UserSummary",
    "RecordCounts",
    "Profile",
    # 검증
    "parse_amount",
]
