"""
설정 로더

secrets.yaml 로드 및 서버 설정 생성
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from core.constants import PROJECT_ROOT, Defaults, Paths


@dataclass(frozen=True)
class Secrets:
    """보안 설정 (secrets.yaml에서 로드)

    불변 데이터 구조로 설정 변경 방지
    """

    web_secret_key: str
    token_ttl_days: int = Defaults.TOKEN_TTL_DAYS
    bcrypt_rounds: int = Defaults.BCRYPT_ROUNDS
    db_path: Path = Paths.DB_FILE
    web_host: str = Defaults.WEB_HOST
    web_port: int = Defaults.WEB_PORT


class SecretsLoadError(Exception):
    """Secrets 로드 실패 예외"""

    pass


def _resolve_db_path(value: Any) -> Path:
    """DB 경로 해석 (상대 경로는 프로젝트 루트 기준)"""
    if not value:
        return Paths.DB_FILE

    path = Path(str(value))
    if path.is_absolute():
        return path
    return PROJECT_ROOT / path


def _positive_int(section: dict[str, Any], key: str, default: int, label: str) -> int:
    """양의 정수 설정값 검증"""
    raw = section.get(key, default)
    try:
        value = int(raw)
    except (TypeError, ValueError) as e:
        raise SecretsLoadError(f"secrets.yaml의 {label}는 정수여야 합니다: {raw!r}") from e

    if value <= 0:
        raise SecretsLoadError(f"secrets.yaml의 {label}는 0보다 커야 합니다: {value}")
    return value


def load_secrets(path: Path | None = None) -> Secrets:
    """secrets.yaml 파일 로드

    Args:
        path: secrets.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        Secrets 인스턴스

    Raises:
        SecretsLoadError: 파일이 없거나 형식이 잘못된 경우
    """
    if path is None:
        path = Paths.SECRETS_FILE

    if not path.exists():
        raise SecretsLoadError(f"secrets.yaml 파일을 찾을 수 없습니다: {path}")

    try:
        content = path.read_text(encoding="utf-8")
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise SecretsLoadError(f"secrets.yaml 파싱 실패: {e}") from e

    if data is None:
        raise SecretsLoadError("secrets.yaml이 비어 있습니다")

    if not isinstance(data, dict):
        raise SecretsLoadError("secrets.yaml 최상위는 매핑이어야 합니다")

    # Web 설정 (JWT 서명 키 필수)
    web_config = data.get("web") or {}
    web_secret_key = web_config.get("secret_key", "")

    if not web_secret_key:
        raise SecretsLoadError(
            "secrets.yaml의 web 섹션에 'secret_key'가 없습니다"
        )

    token_ttl_days = _positive_int(
        web_config, "token_ttl_days", Defaults.TOKEN_TTL_DAYS, "web.token_ttl_days"
    )
    web_port = _positive_int(web_config, "port", Defaults.WEB_PORT, "web.port")
    web_host = str(web_config.get("host") or Defaults.WEB_HOST)

    # 보안 설정
    security_config = data.get("security") or {}
    bcrypt_rounds = _positive_int(
        security_config, "bcrypt_rounds", Defaults.BCRYPT_ROUNDS, "security.bcrypt_rounds"
    )

    # DB 설정
    database_config = data.get("database") or {}
    db_path = _resolve_db_path(database_config.get("path"))

    return Secrets(
        web_secret_key=str(web_secret_key),
        token_ttl_days=token_ttl_days,
        bcrypt_rounds=bcrypt_rounds,
        db_path=db_path,
        web_host=web_host,
        web_port=web_port,
    )


class Settings:
    """애플리케이션 설정 (싱글턴 패턴)

    secrets.yaml을 로드하고 관련 설정을 제공
    """

    _instance: "Settings | None" = None
    _secrets: Secrets | None = None

    def __new__(cls, secrets_path: Path | None = None) -> "Settings":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, secrets_path: Path | None = None) -> None:
        if self._secrets is None:
            self._secrets = load_secrets(secrets_path)

    @property
    def web_secret_key(self) -> str:
        """JWT 서명 키"""
        assert self._secrets is not None
        return self._secrets.web_secret_key

    @property
    def token_ttl_days(self) -> int:
        """토큰 유효 기간 (일)"""
        assert self._secrets is not None
        return self._secrets.token_ttl_days

    @property
    def bcrypt_rounds(self) -> int:
        """bcrypt cost factor"""
        assert self._secrets is not None
        return self._secrets.bcrypt_rounds

    @property
    def db_path(self) -> Path:
        """DB 경로"""
        assert self._secrets is not None
        return self._secrets.db_path

    @property
    def web_host(self) -> str:
        assert self._secrets is not None
        return self._secrets.web_host

    @property
    def web_port(self) -> int:
        assert self._secrets is not None
        return self._secrets.web_port

    @classmethod
    def reset(cls) -> None:
        """싱글턴 인스턴스 초기화 (테스트용)"""
        cls._instance = None
        cls._secrets = None


def get_settings(secrets_path: Path | None = None) -> Settings:
    """Settings 인스턴스 반환

    Args:
        secrets_path: secrets.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        Settings 싱글턴 인스턴스
    """
    return Settings(secrets_path)
