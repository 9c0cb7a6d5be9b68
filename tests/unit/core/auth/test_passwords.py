"""
core/auth/passwords.py 테스트
"""

import pytest

from core.auth.passwords import PasswordHasher


class TestPasswordHasher:
    """PasswordHasher 테스트"""

    def test_hash_and_verify(self, hasher: PasswordHasher) -> None:
        """해시 후 검증 성공"""
        digest = hasher.hash("s3cret")

        assert digest.startswith("$2")
        assert digest != "s3cret"
        assert hasher.verify(digest, "s3cret") is True

    def test_wrong_password(self, hasher: PasswordHasher) -> None:
        """다른 비밀번호는 실패"""
        digest = hasher.hash("s3cret")

        assert hasher.verify(digest, "other") is False

    def test_salted(self, hasher: PasswordHasher) -> None:
        """같은 비밀번호도 매번 다른 digest"""
        assert hasher.hash("same") != hasher.hash("same")

    def test_malformed_digest(self, hasher: PasswordHasher) -> None:
        """잘못된 digest는 False"""
        assert hasher.verify("not-a-bcrypt-hash", "s3cret") is False

    @pytest.mark.parametrize("rounds", [3, 32])
    def test_invalid_rounds(self, rounds: int) -> None:
        """범위 밖 cost factor 거부"""
        with pytest.raises(ValueError):
            PasswordHasher(rounds=rounds)
