"""초기 데이터 시드 스크립트 — 테이블 및 관리자 계정 생성.

Seed script — Creates tables and an initial admin account with its cart and profile.
Run this script once to bootstrap a fresh database.

Usage:
    python -m storefront.seed

Creates:
    - 모든 테이블 (All tables from ORM metadata)
    - 1개 관리자 계정: admin@storefront.local / admin123 (1 admin user with a cart and a profile)
"""

import asyncio

from sqlalchemy import select

from storefront.config import Settings, get_settings
from storefront.database import Base, build_engine, build_session_factory
from storefront.models import Cart, Profile, User, UserRole
from storefront.utils.password import hash_password

ADMIN_EMAIL: str = "admin@storefront.local"
ADMIN_PASSWORD: str = "admin123"


async def seed(settings: Settings | None = None) -> None:
    """데이터베이스를 초기 데이터로 시드합니다.

    Seed the database with initial data.

    Idempotent: 관리자 계정이 이미 있으면 건너뜁니다 (Skips if the admin already exists).
    """
    settings = settings or get_settings()
    engine = build_engine(settings)

    # 테이블 생성 — DDL 실행 (Create all tables from ORM metadata)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with build_session_factory(engine)() as db:
        result = await db.execute(select(User).where(User.email == ADMIN_EMAIL))
        if result.scalar_one_or_none():
            print("Already seeded. Skipping.")
            await engine.dispose()
            return

        admin: User = User(
            email=ADMIN_EMAIL,
            password_hash=hash_password(ADMIN_PASSWORD, settings.BCRYPT_ROUNDS),
            role=UserRole.ADMIN.value,
        )
        db.add(admin)
        await db.flush()  # flush로 admin.id 생성 (Flush to generate admin.id)
        db.add(Cart(user_id=admin.id))
        db.add(Profile(user_id=admin.id))

        await db.commit()
        print(f"Seeded: admin user={ADMIN_EMAIL}/{ADMIN_PASSWORD}")

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(seed())
