"""
Profile Aggregator

사용자 정보 + 유형별 기록 개수.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from core.errors import UserNotFoundError
from core.ledger.store import LedgerStore
from core.ledger.types import Profile, RecordCounts
from core.types import RecordType

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter
    from core.storage.user_store import UserStore

logger = logging.getLogger(__name__)


class ProfileAggregator:
    """프로필 조회

    Args:
        db: SQLite 어댑터
        users: UserStore
        store: LedgerStore (None이면 db로 생성)
    """

    def __init__(
        self,
        db: SQLiteAdapter,
        users: UserStore,
        store: LedgerStore | None = None,
    ):
        self.users = users
        self.store = store or LedgerStore(db)

    async def get_profile(self, user_id: int) -> Profile:
        """프로필 조회

        Raises:
            UserNotFoundError: 유효한 토큰이지만 사용자 행이 없는 경우 (데이터 무결성 오류)
        """
        user = await self.users.get_by_id(user_id)
        if user is None:
            logger.error(f"토큰의 사용자가 존재하지 않음: user_id={user_id}")
            raise UserNotFoundError()

        # 유형별 테이블이 분리되어 있어 개수는 서로 독립
        counts = {
            record_type: await self.store.count_records(user_id, record_type)
            for record_type in RecordType
        }

        return Profile(
            user=user,
            records=RecordCounts(
                lend=counts[RecordType.LENT],
                spent=counts[RecordType.SPENT],
                borrowed=counts[RecordType.BORROWED],
                deposit=counts[RecordType.DEPOSIT],
            ),
        )
