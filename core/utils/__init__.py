"""
유틸리티 패키지

타임존 처리 등 공통 유틸리티
"""

from core.utils.timezone import (
    ensure_utc,
    normalize_db_date,
    now_utc,
    parse_db_timestamp,
    to_db_date,
)

__all__ = [
    "ensure_utc",
    "normalize_db_date",
    "now_utc",
    "parse_db_timestamp",
    "to_db_date",
]
