"""
인증 라우트

POST /api/register - 회원가입
POST /api/login    - 로그인 (토큰 발급)
GET  /api/home     - 인증 확인
"""

import logging

from fastapi import APIRouter, Depends, status

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.auth.passwords import PasswordHasher
from core.auth.tokens import TokenSigner
from core.storage.user_store import UserStore
from web.dependencies import (
    get_current_user_id,
    get_db,
    get_password_hasher,
    get_token_signer,
)
from web.models.requests import LoginRequest, RegisterRequest
from web.models.responses import (
    LoginResponse,
    MessageResponse,
    ProtectedRouteResponse,
    UserResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Auth"])


@router.post(
    "/register",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    request: RegisterRequest,
    db: SQLiteAdapter = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> MessageResponse:
    """회원가입

    Raises:
        409: 이미 등록된 전화번호
    """
    users = UserStore(db, hasher)
    await users.register(request.name, request.phone, request.password)
    return MessageResponse(message="User registered successfully")


@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    db: SQLiteAdapter = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    signer: TokenSigner = Depends(get_token_signer),
) -> LoginResponse:
    """로그인

    Raises:
        400: 전화번호/비밀번호 누락
        404: 미등록 사용자
        401: 비밀번호 불일치
    """
    users = UserStore(db, hasher)
    result = await users.login(request.phone, request.password, signer)

    return LoginResponse(
        token=result.token,
        user=UserResponse(
            id=result.user.id,
            name=result.user.name,
            phone=result.user.phone,
        ),
        message="Login successful",
    )


@router.get("/home", response_model=ProtectedRouteResponse)
async def home(
    user_id: int = Depends(get_current_user_id),
) -> ProtectedRouteResponse:
    """인증된 사용자 확인"""
    return ProtectedRouteResponse(
        message="This is a protected route",
        user={"userid": user_id},
    )
