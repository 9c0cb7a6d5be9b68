"""
토큰 서명

PyJWT(HS256)로 로그인 토큰 발급 및 검증.
클레임: userid, iat, exp
"""

from datetime import datetime, timedelta
from typing import Any

import jwt

from core.constants import Defaults
from core.errors import TokenExpiredError, TokenInvalidError
from core.utils.timezone import now_utc


class TokenSigner:
    """JWT 서명/검증

    Args:
        secret_key: 서명 키 (secrets.yaml web.secret_key)
        ttl_days: 유효 기간 (일)
        algorithm: 서명 알고리즘
    """

    def __init__(
        self,
        secret_key: str,
        ttl_days: int = Defaults.TOKEN_TTL_DAYS,
        algorithm: str = Defaults.JWT_ALGORITHM,
    ):
        if not secret_key:
            raise ValueError("secret_key is required")
        self._secret_key = secret_key
        self.ttl = timedelta(days=ttl_days)
        self.algorithm = algorithm

    def sign(self, claims: dict[str, Any], issued_at: datetime | None = None) -> str:
        """클레임 서명

        iat/exp는 issued_at 기준으로 채워짐 (claims에 있으면 덮어씀).

        Args:
            claims: 토큰에 담을 클레임
            issued_at: 발급 시각 (테스트용, 기본 현재 시각)

        Returns:
            서명된 토큰 문자열
        """
        issued_at = issued_at or now_utc()
        payload = {
            **claims,
            "iat": issued_at,
            "exp": issued_at + self.ttl,
        }
        return jwt.encode(payload, self._secret_key, algorithm=self.algorithm)

    def issue(self, user_id: int, issued_at: datetime | None = None) -> str:
        """로그인 토큰 발급"""
        return self.sign({"userid": user_id}, issued_at=issued_at)

    def verify(self, token: str) -> dict[str, Any]:
        """토큰 검증

        Returns:
            디코딩된 클레임

        Raises:
            TokenExpiredError: 만료된 토큰
            TokenInvalidError: 서명 불일치, 형식 오류
        """
        try:
            return jwt.decode(token, self._secret_key, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError() from e
        except jwt.InvalidTokenError as e:
            raise TokenInvalidError() from e
