"""
타임존 유틸리티

내부 저장: UTC 원칙 준수를 위한 헬퍼 함수.
SQLite datetime('now')는 타임존 없는 UTC 문자열을 반환하므로
naive 값은 모두 UTC로 간주.
"""

from datetime import date, datetime, timezone


def now_utc() -> datetime:
    """현재 UTC 시각"""
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """naive datetime은 UTC로 간주하여 tzinfo 부여

    Args:
        dt: datetime 객체

    Returns:
        UTC 타임존이 지정된 datetime
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_db_timestamp(value: str | None) -> datetime | None:
    """DB에 저장된 날짜/시각 문자열 파싱

    "2024-01-05", "2024-01-05 10:00:00", "2024-01-05T10:00:00+09:00" 모두 허용.
    파싱 불가 또는 None이면 None 반환.

    Example:
        >>> parse_db_timestamp("2024-01-05")
        datetime.datetime(2024, 1, 5, 0, 0, tzinfo=datetime.timezone.utc)
    """
    if not value:
        return None

    try:
        parsed = datetime.fromisoformat(str(value))
    except ValueError:
        return None

    return ensure_utc(parsed)


def to_db_date(value: date | datetime | str) -> str:
    """날짜 값을 DB 저장용 ISO 문자열로 변환"""
    if isinstance(value, datetime):
        return ensure_utc(value).isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def normalize_db_date(value: str) -> str | None:
    """사용자 입력 날짜 문자열을 저장 형식으로 통일

    - 날짜만 있는 값: "YYYY-MM-DD"
    - 시각 포함 값: UTC로 변환한 ISO 8601 ("YYYY-MM-DDTHH:MM:SS+00:00")

    이 형식끼리는 문자열 순서와 시각 순서가 같음.
    파싱 불가면 None 반환.

    Example:
        >>> normalize_db_date("2024-01-05T10:00:00+09:00")
        '2024-01-05T01:00:00+00:00'
    """
    cleaned = value.strip()
    if not cleaned:
        return None

    try:
        return date.fromisoformat(cleaned).isoformat()
    except ValueError:
        pass

    parsed = parse_db_timestamp(cleaned)
    if parsed is None:
        return None
    return to_db_date(parsed)
