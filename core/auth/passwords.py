"""
비밀번호 해시

bcrypt 기반 hash / verify.
"""

import bcrypt

from core.constants import Defaults


class PasswordHasher:
    """bcrypt 비밀번호 해시

    Args:
        rounds: bcrypt cost factor (4~31, 테스트에서는 4 권장)
    """

    def __init__(self, rounds: int = Defaults.BCRYPT_ROUNDS):
        if not 4 <= rounds <= 31:
            raise ValueError(f"bcrypt rounds must be between 4 and 31: {rounds}")
        self.rounds = rounds

    def hash(self, password: str) -> str:
        """비밀번호 해시 생성

        Returns:
            "$2b$..." 형식의 digest 문자열
        """
        digest = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=self.rounds))
        return digest.decode("utf-8")

    def verify(self, digest: str, password: str) -> bool:
        """비밀번호 검증

        digest 형식이 잘못된 경우 False.
        """
        try:
            return bcrypt.checkpw(password.encode("utf-8"), digest.encode("utf-8"))
        except ValueError:
            return False
