"""
헬스 체크 엔드포인트

GET /          - 서버 생존 확인
GET /health/db - DB 연결 확인
"""

import logging

import aiosqlite
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from adapters.db.sqlite_adapter import SQLiteProvider
from core.ledger.store import LedgerStore
from web.dependencies import get_provider
from web.models.responses import DbHealthResponse, MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/", response_model=MessageResponse)
async def liveness() -> MessageResponse:
    """서버 생존 확인"""
    return MessageResponse(message="Backend is alive")


@router.get("/health/db", response_model=DbHealthResponse)
async def db_health(
    provider: SQLiteProvider = Depends(get_provider),
):
    """DB 연결 확인

    Returns:
        DbHealthResponse 또는 500 {"status": "error", "error": ...}
    """
    try:
        async with provider.session() as db:
            db_time = await LedgerStore(db).get_db_time()
    except (aiosqlite.Error, OSError, RuntimeError) as e:
        logger.error(f"DB 헬스 체크 실패: {e}")
        return JSONResponse(
            status_code=500,
            content={"status": "error", "error": str(e)},
        )

    return DbHealthResponse(status="ok", time=db_time)
