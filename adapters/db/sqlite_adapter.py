"""
SQLite 어댑터

WAL 모드로 SQLite 연결 관리.
요청마다 별도 연결을 열고, 쓰기 트랜잭션은 BEGIN IMMEDIATE로 시작하여
잔액 read-modify-write가 동시에 끼어들지 않도록 직렬화.

주의: SQLite alias로 time, count 사용 금지 (예약어)
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator

import aiosqlite

logger = logging.getLogger(__name__)

# 쓰기 잠금 대기 시간 (밀리초)
BUSY_TIMEOUT_MS = 30000


async def create_connection(db_path: Path | str) -> aiosqlite.Connection:
    """SQLite 연결 생성 (WAL 모드)

    Args:
        db_path: DB 파일 경로 (":memory:" 허용)

    Returns:
        aiosqlite 연결 객체
    """
    db_path_str = str(db_path)

    # 디렉토리가 없으면 생성
    if db_path_str != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    conn = await aiosqlite.connect(db_path_str)

    # WAL 모드 설정
    await conn.execute("PRAGMA journal_mode=WAL")

    # 동시 접근 설정
    await conn.execute(f"PRAGMA busy_timeout={BUSY_TIMEOUT_MS}")

    # 외래 키 제약 활성화
    await conn.execute("PRAGMA foreign_keys=ON")

    logger.debug("SQLite 연결 생성", extra={"db_path": db_path_str})

    return conn


class SQLiteAdapter:
    """SQLite 어댑터

    연결 하나를 감싸고 트랜잭션 컨텍스트 매니저 제공.

    Args:
        db_path: DB 파일 경로

    사용 예시:
    ```python
    async with SQLiteAdapter(db_path) as db:
        async with db.transaction():
            await db.execute("INSERT INTO ...")
    ```
    """

    def __init__(self, db_path: Path | str):
        self.db_path = db_path if str(db_path) == ":memory:" else Path(db_path)
        self._conn: aiosqlite.Connection | None = None

    @property
    def is_connected(self) -> bool:
        """연결 상태 확인"""
        return self._conn is not None

    @property
    def in_transaction(self) -> bool:
        """트랜잭션 진행 중 여부"""
        return self._conn is not None and self._conn.in_transaction

    async def connect(self) -> None:
        """연결 생성"""
        if self._conn is not None:
            return

        self._conn = await create_connection(self.db_path)

    async def close(self) -> None:
        """연결 종료

        커밋되지 않은 트랜잭션은 롤백 후 종료.
        """
        if self._conn is not None:
            try:
                if self._conn.in_transaction:
                    await self._conn.rollback()
            finally:
                await self._conn.close()
                self._conn = None
            logger.debug("SQLite 연결 종료")

    async def execute(
        self,
        sql: str,
        parameters: tuple[Any, ...] | None = None,
    ) -> aiosqlite.Cursor:
        """SQL 실행"""
        if self._conn is None:
            raise RuntimeError("Not connected to database")

        if parameters:
            return await self._conn.execute(sql, parameters)
        return await self._conn.execute(sql)

    async def fetchone(
        self,
        sql: str,
        parameters: tuple[Any, ...] | None = None,
    ) -> tuple[Any, ...] | None:
        """단일 행 조회"""
        cursor = await self.execute(sql, parameters)
        try:
            return await cursor.fetchone()
        finally:
            await cursor.close()

    async def fetchall(
        self,
        sql: str,
        parameters: tuple[Any, ...] | None = None,
    ) -> list[tuple[Any, ...]]:
        """전체 행 조회"""
        cursor = await self.execute(sql, parameters)
        try:
            return list(await cursor.fetchall())
        finally:
            await cursor.close()

    async def commit(self) -> None:
        """커밋"""
        if self._conn is not None:
            await self._conn.commit()

    async def rollback(self) -> None:
        """롤백"""
        if self._conn is not None:
            await self._conn.rollback()

    @asynccontextmanager
    async def transaction(self, immediate: bool = True) -> AsyncIterator["SQLiteAdapter"]:
        """트랜잭션 컨텍스트 매니저

        성공 시 자동 커밋, 예외(취소 포함) 시 자동 롤백.
        immediate=True면 BEGIN IMMEDIATE로 쓰기 잠금을 먼저 획득하므로
        블록 안에서 읽은 값은 커밋 전까지 다른 쓰기에 의해 바뀌지 않음.

        사용 예시:
        ```python
        async with adapter.transaction():
            row = await adapter.fetchone("SELECT balance ...")
            await adapter.execute("UPDATE ...")
            # 성공 시 자동 커밋
        ```
        """
        if self._conn is None:
            raise RuntimeError("Not connected to database")

        if self._conn.in_transaction:
            raise RuntimeError("Nested transaction is not supported")

        await self._conn.execute("BEGIN IMMEDIATE" if immediate else "BEGIN")

        try:
            yield self
            await self._conn.commit()
        except BaseException:
            await self._conn.rollback()
            raise

    async def table_exists(self, table_name: str) -> bool:
        """테이블 존재 여부 확인"""
        result = await self.fetchone(
            "SELECT name FROM sqlite_master WHERE type='table' AND name=?",
            (table_name,),
        )
        return result is not None

    # -------------------------------------------------------------------------
    # 컨텍스트 매니저
    # -------------------------------------------------------------------------

    async def __aenter__(self) -> "SQLiteAdapter":
        await self.connect()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()


class SQLiteProvider:
    """DB 연결 제공자

    앱 시작 시 한 번 생성되어 의존성으로 주입됨.
    연결은 전역으로 공유하지 않고 session()마다 새로 열고 반드시 닫음.

    Args:
        db_path: DB 파일 경로
    """

    def __init__(self, db_path: Path | str):
        self.db_path = Path(db_path)
        self._initialized = False

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    async def init(self) -> None:
        """스키마 초기화 (앱 시작 시)"""
        async with SQLiteAdapter(self.db_path) as db:
            await init_schema(db)
        self._initialized = True
        logger.info(f"DB 초기화 완료: {self.db_path}")

    async def close(self) -> None:
        """종료 처리 (앱 종료 시)

        열린 연결은 각 session()이 닫으므로 상태만 정리.
        """
        self._initialized = False
        logger.info("DB provider 종료")

    @asynccontextmanager
    async def session(self) -> AsyncIterator[SQLiteAdapter]:
        """작업 단위 연결

        예외 여부와 관계없이 종료 시 연결을 닫음.
        """
        if not self._initialized:
            raise RuntimeError("SQLiteProvider is not initialized")

        async with SQLiteAdapter(self.db_path) as db:
            yield db


async def init_schema(adapter: SQLiteAdapter) -> None:
    """스키마 초기화 (테이블 생성)

    금액은 Decimal 문자열(TEXT)로 저장.

    Args:
        adapter: 연결된 SQLiteAdapter
    """
    # users
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS users (
            id               INTEGER PRIMARY KEY AUTOINCREMENT,
            name             TEXT NOT NULL,
            phone            TEXT NOT NULL UNIQUE,
            password         TEXT NOT NULL,
            created_at       TEXT NOT NULL DEFAULT (datetime('now'))
        )
    """)

    # users_balance (사용자당 1행)
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS users_balance (
            id               INTEGER PRIMARY KEY AUTOINCREMENT,
            userid           INTEGER NOT NULL UNIQUE,
            balance          TEXT NOT NULL DEFAULT '0',
            updated_at       TEXT NOT NULL DEFAULT (datetime('now')),
            FOREIGN KEY (userid) REFERENCES users(id)
        )
    """)

    # user_spend
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS user_spend (
            spend_id         INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id          INTEGER NOT NULL,
            amount           TEXT NOT NULL,
            for_what         TEXT NOT NULL,
            place            TEXT,
            spend_date       TEXT NOT NULL,
            created_at       TEXT DEFAULT (datetime('now')),
            FOREIGN KEY (user_id) REFERENCES users(id)
        )
    """)

    # user_lend
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS user_lend (
            lend_id          INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id          INTEGER NOT NULL,
            amount           TEXT NOT NULL,
            to_whom          TEXT NOT NULL,
            return_date      TEXT NOT NULL,
            created_at       TEXT DEFAULT (datetime('now')),
            FOREIGN KEY (user_id) REFERENCES users(id)
        )
    """)

    # user_borrow
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS user_borrow (
            borrow_id        INTEGER PRIMARY KEY AUTOINCREMENT,
            userid           INTEGER NOT NULL,
            amount           TEXT NOT NULL,
            for_what         TEXT NOT NULL,
            from_whom        TEXT NOT NULL,
            return_date      TEXT NOT NULL,
            created_at       TEXT DEFAULT (datetime('now')),
            FOREIGN KEY (userid) REFERENCES users(id)
        )
    """)

    # user_deposit
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS user_deposit (
            deposit_id       INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id          INTEGER NOT NULL,
            amount           TEXT NOT NULL,
            source           TEXT NOT NULL,
            deposit_date     TEXT NOT NULL,
            created_at       TEXT DEFAULT (datetime('now')),
            FOREIGN KEY (user_id) REFERENCES users(id)
        )
    """)

    # 인덱스 생성
    await adapter.execute("""
        CREATE INDEX IF NOT EXISTS ix_user_spend_user
        ON user_spend(user_id, spend_date)
    """)

    await adapter.execute("""
        CREATE INDEX IF NOT EXISTS ix_user_lend_user
        ON user_lend(user_id, created_at)
    """)

    await adapter.execute("""
        CREATE INDEX IF NOT EXISTS ix_user_borrow_user
        ON user_borrow(userid, created_at)
    """)

    await adapter.execute("""
        CREATE INDEX IF NOT EXISTS ix_user_deposit_user
        ON user_deposit(user_id, deposit_date)
    """)

    await adapter.commit()

    logger.info("스키마 초기화 완료")
