"""데이터베이스 엔진 및 세션 설정 모듈.

Database engine and session configuration module.
Builds the async SQLAlchemy engine and session factory for a given
database URL, and defines the ORM base class.
"""

from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession, AsyncEngine, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from storefront.config import Settings


class Base(DeclarativeBase):
    """SQLAlchemy 선언적 베이스 클래스.

    Declarative base class for all ORM models.
    """

    pass


def build_engine(settings: Settings) -> AsyncEngine:
    """설정으로부터 비동기 엔진을 생성합니다.

    Create the async engine for ``settings.DATABASE_URL``.
    PostgreSQL gets a bounded connection pool; in-memory SQLite (tests,
    local experiments) shares one connection across the process.

    Args:
        settings: 애플리케이션 설정 (Application settings)

    Returns:
        AsyncEngine: 비동기 데이터베이스 엔진 (Async database engine)
    """
    url: str = settings.DATABASE_URL

    if url.startswith("sqlite"):
        return create_async_engine(
            url,
            echo=settings.DEBUG,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    # pool_pre_ping=True: 커넥션 풀에서 꺼낸 연결의 유효성을 사전 확인 (Validates connections before use)
    return create_async_engine(
        url,
        echo=settings.DEBUG,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
        # 트랜잭션 모드 풀러에서 prepared statement 비활성화
        # Disable prepared statement caches for transaction-mode pooling
        connect_args={"statement_cache_size": 0},
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False: 커밋 후에도 객체 속성 접근 가능 (Allows attribute access after commit without refresh)
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """비동기 데이터베이스 세션을 생성하고 요청 종료 시 닫습니다.

    FastAPI dependency that yields an async database session taken from the
    application's session factory. The session (and its pooled connection)
    is released after the request completes, on success or failure.

    Yields:
        AsyncSession: SQLAlchemy 비동기 세션 인스턴스 (Async session instance)
    """
    factory: async_sessionmaker[AsyncSession] = request.app.state.session_factory
    async with factory() as session:
        try:
            yield session
        finally:
            await session.close()
