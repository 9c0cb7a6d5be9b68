"""
User Store

users 테이블 CRUD 및 회원가입/로그인 처리.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

import aiosqlite

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.auth.passwords import PasswordHasher
from core.auth.tokens import TokenSigner
from core.errors import (
    DuplicateUserError,
    InvalidInputError,
    InvalidPasswordError,
    StorageError,
    UserNotFoundError,
)
from core.ledger.types import UserSummary

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UserRow:
    """users 테이블 행 (비밀번호 digest 포함)"""

    id: int
    name: str
    phone: str
    password: str

    @classmethod
    def from_row(cls, row: tuple[Any, ...]) -> "UserRow":
        return cls(id=row[0], name=row[1], phone=row[2], password=row[3])

    def summary(self) -> UserSummary:
        return UserSummary(id=self.id, name=self.name, phone=self.phone)


@dataclass(frozen=True)
class LoginResult:
    """로그인 결과"""

    token: str
    user: UserSummary


def _require(**fields: str | None) -> dict[str, str]:
    """공백 제거 후 빈 값이 없는지 확인"""
    cleaned = {key: (value or "").strip() for key, value in fields.items()}
    missing = [key for key, value in cleaned.items() if not value]
    if missing:
        raise InvalidInputError(f"Missing required fields: {', '.join(missing)}")
    return cleaned


class UserStore:
    """User 저장소

    Args:
        db: SQLite 어댑터
        hasher: 비밀번호 해시
    """

    def __init__(self, db: SQLiteAdapter, hasher: PasswordHasher):
        self.db = db
        self.hasher = hasher

    async def register(self, name: str | None, phone: str | None, password: str | None) -> UserSummary:
        """회원가입

        Raises:
            InvalidInputError: 필수 필드 누락
            DuplicateUserError: 이미 등록된 전화번호
            StorageError: DB 오류
        """
        fields = _require(name=name, phone=phone, password=password)
        # bcrypt 해시는 이벤트 루프 밖(스레드)에서 실행
        digest = await asyncio.to_thread(self.hasher.hash, password or "")

        try:
            async with self.db.transaction():
                cursor = await self.db.execute(
                    "INSERT INTO users (name, phone, password) VALUES (?, ?, ?)",
                    (fields["name"], fields["phone"], digest),
                )
                user_id = cursor.lastrowid
        except aiosqlite.IntegrityError as e:
            logger.info(f"중복 전화번호 가입 시도: {fields['phone']}")
            raise DuplicateUserError() from e
        except aiosqlite.Error as e:
            logger.error(f"회원가입 실패: {e}")
            raise StorageError() from e

        logger.info(f"사용자 등록: id={user_id}")
        return UserSummary(id=user_id, name=fields["name"], phone=fields["phone"])

    async def get_by_phone(self, phone: str) -> UserRow | None:
        """전화번호로 조회"""
        row = await self.db.fetchone(
            "SELECT id, name, phone, password FROM users WHERE phone = ?",
            (phone,),
        )
        return UserRow.from_row(row) if row else None

    async def get_by_id(self, user_id: int) -> UserSummary | None:
        """ID로 조회 (공개 정보만)"""
        row = await self.db.fetchone(
            "SELECT id, name, phone FROM users WHERE id = ?",
            (user_id,),
        )
        if row is None:
            return None
        return UserSummary(id=row[0], name=row[1], phone=row[2])

    async def login(
        self,
        phone: str | None,
        password: str | None,
        signer: TokenSigner,
    ) -> LoginResult:
        """로그인 후 토큰 발급

        Raises:
            InvalidInputError: 전화번호/비밀번호 누락
            UserNotFoundError: 미등록 전화번호
            InvalidPasswordError: 비밀번호 불일치
        """
        if not phone or not password:
            raise InvalidInputError("Phone and password are required")

        user = await self.get_by_phone(phone.strip())
        if user is None:
            raise UserNotFoundError("User not found. Please create an account.")

        if not await asyncio.to_thread(self.hasher.verify, user.password, password):
            logger.info(f"비밀번호 불일치: user_id={user.id}")
            raise InvalidPasswordError()

        token = signer.issue(user.id)
        logger.info(f"로그인 성공: user_id={user.id}")

        return LoginResult(token=token, user=user.summary())
