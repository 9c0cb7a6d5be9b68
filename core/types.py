"""
타입 정의 모듈

Enum 등 핵심 타입 정의
모든 Enum은 str을 상속하여 문자열 직렬화 가능
"""

from enum import Enum


class RecordType(str, Enum):
    """기록 유형 (히스토리 type 필드 값)"""

    SPENT = "Spent"
    LENT = "Lent"
    BORROWED = "Borrowed"
    DEPOSIT = "Deposit"

    @property
    def is_credit(self) -> bool:
        """잔액을 증가시키는 유형인지 여부"""
        return self in (RecordType.BORROWED, RecordType.DEPOSIT)
