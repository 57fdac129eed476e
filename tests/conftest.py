"""테스트 인프라 — 인메모리 SQLite DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure — In-memory SQLite database, session, and httpx client fixtures.
Every test gets a fresh application (and therefore a fresh database) built
from test settings; the request handlers share the test's session.
"""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.config import Settings
from storefront.database import Base, get_db
from storefront.main import create_app
from storefront.models import Cart, Profile, User, UserRole
from storefront.utils.jwt import TokenCodec
from storefront.utils.password import hash_password

# bcrypt 최소 cost — 테스트 속도 (Minimum bcrypt cost keeps tests fast)
TEST_ROUNDS = 4


def make_settings(**overrides) -> Settings:
    """테스트용 설정을 생성합니다 (.env 무시)."""
    values = {
        "DATABASE_URL": "sqlite+aiosqlite:///:memory:",
        "AT_SECRET": "test-access-secret",
        "RT_SECRET": "test-refresh-secret",
        "BCRYPT_ROUNDS": TEST_ROUNDS,
        "AXIOM_API_TOKEN": "",
        "AXIOM_DATASET": "",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


# ---------------------------------------------------------------------------
# 앱, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest_asyncio.fixture
async def app(settings: Settings) -> AsyncGenerator[FastAPI, None]:
    """테스트 앱. 생성 시 스키마를 만듭니다."""
    application = create_app(settings)
    async with application.state.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield application
    await application.state.engine.dispose()


@pytest_asyncio.fixture
async def db(app: FastAPI) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    async with app.state.session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(app: FastAPI, db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def codec(app: FastAPI) -> TokenCodec:
    return app.state.token_codec


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
async def create_user(
    db: AsyncSession,
    email: str,
    password: str,
    role: UserRole = UserRole.USER,
) -> User:
    """장바구니와 프로필이 있는 사용자를 생성합니다."""
    user = User(
        email=email,
        password_hash=hash_password(password, TEST_ROUNDS),
        role=role.value,
    )
    db.add(user)
    await db.flush()
    db.add(Cart(user_id=user.id))
    db.add(Profile(user_id=user.id))
    await db.commit()
    await db.refresh(user)
    return user


@pytest_asyncio.fixture
async def alice(db: AsyncSession) -> User:
    return await create_user(db, "alice@example.com", "Secret1")


@pytest_asyncio.fixture
async def bob(db: AsyncSession) -> User:
    return await create_user(db, "bob@example.com", "Secret2")


@pytest_asyncio.fixture
async def admin_user(db: AsyncSession) -> User:
    return await create_user(db, "admin@example.com", "admin123", UserRole.ADMIN)


async def login(client: AsyncClient, email: str, password: str) -> dict[str, str]:
    """로그인하고 토큰 쌍을 반환합니다."""
    res = await client.post("/api/auth/login", json={"email": email, "password": password})
    assert res.status_code == 200, res.text
    return res.json()


async def stored_hash(db: AsyncSession, user: User) -> str | None:
    """DB에 저장된 현재 세션 해시를 읽습니다."""
    await db.refresh(user)
    return user.refresh_token_hash


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
