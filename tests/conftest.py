"""
pytest 공통 fixture 정의

임시 디렉토리, 테스트용 secrets.yaml, 초기화된 DB 등
"""

import tempfile
from pathlib import Path
from typing import AsyncGenerator

import pytest
import pytest_asyncio

from adapters.db.sqlite_adapter import SQLiteAdapter, init_schema
from core.auth.passwords import PasswordHasher
from core.auth.tokens import TokenSigner
from core.storage.user_store import UserStore

TEST_SECRET_KEY = "test_jwt_secret_key_xyz"


@pytest.fixture
def temp_dir() -> Path:
    """OS 독립적인 임시 디렉토리 생성"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_secrets_file(temp_dir: Path) -> Path:
    """테스트용 secrets.yaml 파일 생성"""
    db_path = (temp_dir / "moneytracker_test.db").as_posix()
    secrets_content = f"""# 테스트용 secrets.yaml
web:
  secret_key: "{TEST_SECRET_KEY}"
  token_ttl_days: 7

database:
  path: "{db_path}"

security:
  bcrypt_rounds: 4
"""
    secrets_path = temp_dir / "secrets.yaml"
    secrets_path.write_text(secrets_content, encoding="utf-8")
    return secrets_path


@pytest.fixture
def hasher() -> PasswordHasher:
    """빠른 테스트용 bcrypt (최소 cost)"""
    return PasswordHasher(rounds=4)


@pytest.fixture
def signer() -> TokenSigner:
    return TokenSigner(TEST_SECRET_KEY, ttl_days=7)


@pytest_asyncio.fixture
async def db_path(tmp_path: Path) -> Path:
    """스키마가 초기화된 임시 DB 파일 경로"""
    path = tmp_path / "ledger.db"
    async with SQLiteAdapter(path) as adapter:
        await init_schema(adapter)
    return path


@pytest_asyncio.fixture
async def db(db_path: Path) -> AsyncGenerator[SQLiteAdapter, None]:
    """스키마가 초기화된 연결"""
    adapter = SQLiteAdapter(db_path)
    await adapter.connect()
    yield adapter
    await adapter.close()


@pytest_asyncio.fixture
async def user_id(db: SQLiteAdapter, hasher: PasswordHasher) -> int:
    """등록된 테스트 사용자 ID"""
    user = await UserStore(db, hasher).register("Tester", "9999999999", "secret")
    return user.id
