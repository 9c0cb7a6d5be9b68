"""
FastAPI 애플리케이션

라우터 등록, 예외 → HTTP 응답 변환, 앱 수명 주기 관리.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from adapters.db.sqlite_adapter import SQLiteProvider
from core.auth.gate import CredentialGate
from core.auth.passwords import PasswordHasher
from core.auth.tokens import TokenSigner
from core.config.loader import get_settings
from core.constants import Messages
from core.errors import (
    AuthError,
    BalanceNotFoundError,
    ConflictError,
    InvalidAmountError,
    InvalidInputError,
    InvalidPasswordError,
    MoneyTrackerError,
    NotFoundError,
    StorageError,
    TokenExpiredError,
    TokenInvalidError,
    UnauthenticatedError,
)
from core.logging import setup_logging

# 로깅 설정 (콘솔 + 파일)
setup_logging("web")

from web.routes import (  # noqa: E402
    auth,
    balance,
    borrow,
    deposit,
    health,
    history,
    lend,
    spend,
)

logger = logging.getLogger(__name__)

# 금액 필드 (검증 실패 시 금액 전용 메시지 사용)
AMOUNT_FIELDS = frozenset({"amount", "balance"})


@asynccontextmanager
async def lifespan(app: FastAPI):
    """앱 생명주기 관리

    시작: 설정 로드, DB 스키마 초기화, 인증 객체 생성
    종료: DB provider 정리
    """
    settings = get_settings()

    provider = SQLiteProvider(settings.db_path)
    await provider.init()

    signer = TokenSigner(settings.web_secret_key, ttl_days=settings.token_ttl_days)

    app.state.db_provider = provider
    app.state.token_signer = signer
    app.state.password_hasher = PasswordHasher(settings.bcrypt_rounds)
    app.state.credential_gate = CredentialGate(signer)

    logger.info("Web: 초기화 완료")

    yield

    await provider.close()
    logger.info("Web: 종료 완료")


def status_for(exc: MoneyTrackerError) -> int:
    """도메인 예외 → HTTP 상태 코드"""
    if isinstance(exc, UnauthenticatedError):
        return 401
    if isinstance(exc, (TokenExpiredError, TokenInvalidError)):
        return 403
    if isinstance(exc, InvalidPasswordError):
        return 401
    if isinstance(exc, AuthError):
        return 403
    if isinstance(exc, InvalidInputError):
        return 400
    if isinstance(exc, BalanceNotFoundError):
        # 모바일 앱 호환: 잔액 설정 전 lend 요청은 500 + 메시지
        return 500
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, ConflictError):
        return 409
    return 500


async def handle_domain_error(request: Request, exc: MoneyTrackerError) -> JSONResponse:
    """도메인 예외 핸들러

    StorageError의 상세 원인은 서버 로그에만 남기고 클라이언트에는 짧은 메시지만 전달.
    """
    status_code = status_for(exc)

    if isinstance(exc, StorageError):
        logger.error(
            f"{request.method} {request.url.path} 실패: {exc.message} (cause: {exc.__cause__!r})"
        )
    elif status_code >= 500:
        logger.error(f"{request.method} {request.url.path} 실패: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} → {status_code}: {exc.message}")

    return JSONResponse(status_code=status_code, content={"message": exc.message})


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """요청 스키마 검증 실패 → 400"""
    errors = exc.errors()
    message = InvalidInputError.default_message

    for error in errors:
        loc = error.get("loc", ())
        field = loc[-1] if loc else None
        if error.get("type") == "missing":
            message = InvalidInputError.default_message
            break
        if field in AMOUNT_FIELDS:
            message = InvalidAmountError.default_message
            break
        if field is not None:
            message = f"Invalid value for {field}: {error.get('msg', '')}"
            break

    logger.info(f"{request.method} {request.url.path} → 400: {message}")
    return JSONResponse(status_code=400, content={"message": message})


async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """HTTPException → {"message": detail}"""
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """처리되지 않은 예외 → 500 (상세는 로그에만)"""
    logger.exception(f"{request.method} {request.url.path} 처리 중 예외: {exc}")
    return JSONResponse(status_code=500, content={"message": Messages.DATABASE_ERROR})


app = FastAPI(
    title="Money Tracker API",
    description="개인 가계부 (지출/대여/차입/입금) 잔액 관리 API",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# CORS 설정 (모바일 앱)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# =========================================================================
# 예외 핸들러
# =========================================================================

app.add_exception_handler(MoneyTrackerError, handle_domain_error)
app.add_exception_handler(RequestValidationError, handle_validation_error)
app.add_exception_handler(StarletteHTTPException, handle_http_error)
app.add_exception_handler(Exception, handle_unexpected_error)

# =========================================================================
# API 라우터 등록
# =========================================================================

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(balance.router)
app.include_router(spend.router)
app.include_router(lend.router)
app.include_router(borrow.router)
app.include_router(deposit.router)
app.include_router(history.router)
