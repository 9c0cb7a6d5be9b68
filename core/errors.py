"""
예외 정의

도메인 코드는 아래 예외만 발생시키고,
HTTP 상태 코드 변환은 web.app의 예외 핸들러가 담당.
"""

from core.constants import Messages


class MoneyTrackerError(Exception):
    """모든 도메인 예외의 기본 클래스

    Attributes:
        message: 클라이언트에 노출 가능한 짧은 메시지
    """

    default_message: str = "Unexpected error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


# =========================================================================
# 인증
# =========================================================================


class AuthError(MoneyTrackerError):
    """인증 실패"""


class UnauthenticatedError(AuthError):
    """Authorization 헤더 또는 토큰 없음"""

    default_message = Messages.HEADER_MISSING


class TokenExpiredError(AuthError):
    """토큰 만료"""

    default_message = Messages.TOKEN_EXPIRED


class TokenInvalidError(AuthError):
    """서명 불일치, 형식 오류 등"""

    default_message = Messages.TOKEN_INVALID


class InvalidPasswordError(AuthError):
    """비밀번호 불일치"""

    default_message = "Invalid password"


# =========================================================================
# 입력 검증
# =========================================================================


class InvalidInputError(MoneyTrackerError):
    """필수 필드 누락 또는 형식 오류"""

    default_message = "All fields are required"


class InvalidAmountError(InvalidInputError):
    """금액이 숫자가 아니거나 0 이하"""

    default_message = "Amount must be a positive number"


# =========================================================================
# 조회 실패
# =========================================================================


class NotFoundError(MoneyTrackerError):
    """필요한 행이 존재하지 않음"""

    default_message = "Not found"


class UserNotFoundError(NotFoundError):
    """사용자 없음"""

    default_message = Messages.USER_NOT_FOUND


class BalanceNotFoundError(NotFoundError):
    """잔액 행 없음 (초기 잔액 설정 전)"""

    default_message = Messages.BALANCE_NOT_FOUND


# =========================================================================
# 충돌 / 저장소
# =========================================================================


class ConflictError(MoneyTrackerError):
    """고유 제약 위반"""

    default_message = "Conflict"


class DuplicateUserError(ConflictError):
    """이미 등록된 전화번호"""

    default_message = "Phone number is already registered"


class StorageError(MoneyTrackerError):
    """DB 접근 또는 쿼리 실패"""

    default_message = Messages.DATABASE_ERROR


class TransactionFailedError(StorageError):
    """기록 + 잔액 변경 트랜잭션 실패 (롤백됨)"""

    default_message = Messages.DATABASE_ERROR
