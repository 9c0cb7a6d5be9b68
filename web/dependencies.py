"""
의존성 주입

FastAPI의 Depends를 사용한 의존성 관리.
앱 수명 주기 동안 유지되는 객체(DB provider, 토큰 서명기 등)는
lifespan에서 app.state에 등록되고 여기서 꺼내 씀.
"""

from typing import AsyncGenerator

from fastapi import Depends, Header, Request

from adapters.db.sqlite_adapter import SQLiteAdapter, SQLiteProvider
from core.auth.gate import CredentialGate
from core.auth.passwords import PasswordHasher
from core.auth.tokens import TokenSigner


def get_provider(request: Request) -> SQLiteProvider:
    """DB 연결 제공자"""
    return request.app.state.db_provider


def get_token_signer(request: Request) -> TokenSigner:
    return request.app.state.token_signer


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_credential_gate(request: Request) -> CredentialGate:
    return request.app.state.credential_gate


async def get_db(
    provider: SQLiteProvider = Depends(get_provider),
) -> AsyncGenerator[SQLiteAdapter, None]:
    """요청 단위 DB 연결

    응답 후(예외 포함) 연결을 닫고, 커밋되지 않은 트랜잭션은 롤백됨.
    """
    async with provider.session() as db:
        yield db


def get_current_user_id(
    authorization: str | None = Header(default=None),
    gate: CredentialGate = Depends(get_credential_gate),
) -> int:
    """Bearer 토큰 검증 후 사용자 ID 반환

    라우트에서 get_db보다 먼저 선언하여 인증 실패 시 DB 연결을 열지 않음.

    Raises:
        UnauthenticatedError, TokenExpiredError, TokenInvalidError
    """
    return gate.authenticate(authorization)
