"""
Credential Gate

Authorization 헤더 → 사용자 ID.
모든 잔액/기록 API는 이 검증을 통과해야 실행됨. 부수 효과 없음.
"""

import logging

from core.auth.tokens import TokenSigner
from core.constants import Messages
from core.errors import TokenInvalidError, UnauthenticatedError

logger = logging.getLogger(__name__)


def extract_bearer_token(authorization: str | None) -> str:
    """Authorization 헤더에서 토큰 추출

    "Bearer <token>" 형식에서 두 번째 토큰을 사용.
    모바일 클라이언트가 저장된 토큰이 없을 때 "Bearer null"을 보내므로
    문자열 "null"도 토큰 없음으로 처리.

    Raises:
        UnauthenticatedError: 헤더 없음 또는 토큰 없음
    """
    if authorization is None:
        raise UnauthenticatedError(Messages.HEADER_MISSING)

    parts = authorization.split(" ")
    token = parts[1].strip() if len(parts) > 1 else ""

    if not token or token == "null":
        raise UnauthenticatedError(Messages.TOKEN_MISSING)

    return token


class CredentialGate:
    """Bearer 토큰 검증기

    Args:
        signer: TokenSigner 인스턴스
    """

    def __init__(self, signer: TokenSigner):
        self.signer = signer

    def authenticate(self, authorization: str | None) -> int:
        """헤더 검증 후 사용자 ID 반환

        Args:
            authorization: Authorization 헤더 값 (없으면 None)

        Returns:
            토큰의 userid 클레임

        Raises:
            UnauthenticatedError: 헤더/토큰 없음
            TokenExpiredError: 만료
            TokenInvalidError: 서명 불일치, userid 클레임 없음
        """
        token = extract_bearer_token(authorization)
        claims = self.signer.verify(token)

        user_id = claims.get("userid")
        if isinstance(user_id, bool) or not isinstance(user_id, int):
            logger.warning(f"userid 클레임이 올바르지 않은 토큰: {user_id!r}")
            raise TokenInvalidError()

        return user_id
