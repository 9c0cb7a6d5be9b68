"""
하드코딩 상수 - 변경될 일이 거의 없는 고정값

중요: 경로는 반드시 pathlib.Path 사용 (Windows/Linux 크로스 플랫폼)
"""

from pathlib import Path


# 프로젝트 루트 (이 파일 기준 2단계 상위: core/constants.py → moneytracker/)
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent


class Defaults:
    """기본값 상수"""

    WEB_HOST: str = "127.0.0.1"
    WEB_PORT: int = 3000

    # 토큰 유효 기간 (로그인 시 발급)
    TOKEN_TTL_DAYS: int = 7
    JWT_ALGORITHM: str = "HS256"

    # bcrypt cost factor
    BCRYPT_ROUNDS: int = 10

    LOG_LEVEL: str = "INFO"


class Paths:
    """프로젝트 경로 상수 (pathlib 사용 - OS 독립적)"""

    # 디렉토리
    CONFIG_DIR: Path = PROJECT_ROOT / "config"
    DATA_DIR: Path = PROJECT_ROOT / "data"
    LOGS_DIR: Path = PROJECT_ROOT / "logs"
    WEB_LOGS_DIR: Path = LOGS_DIR / "web"

    # 설정 파일
    SECRETS_FILE: Path = CONFIG_DIR / "secrets.yaml"

    # DB 파일
    DB_FILE: Path = DATA_DIR / "moneytracker.db"


class Messages:
    """클라이언트 응답 메시지 (모바일 앱과 호환)"""

    HEADER_MISSING: str = "Authorization header is missing."
    TOKEN_MISSING: str = "Token not provided."
    TOKEN_EXPIRED: str = "Token has expired. Please log in again."
    TOKEN_INVALID: str = "Token is invalid."

    BALANCE_NOT_FOUND: str = "User balance record not found"
    USER_NOT_FOUND: str = "User not found"
    DATABASE_ERROR: str = "Database error"
