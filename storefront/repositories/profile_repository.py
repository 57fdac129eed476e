"""프로필 레포지토리 — 사용자 ID 기준 프로필 조회 및 생성.

Profile Repository — Looks up and creates the one profile each user owns.
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.models.profile import Profile
from storefront.repositories.base import BaseRepository


class ProfileRepository(BaseRepository[Profile]):
    """프로필 테이블 레포지토리 (Repository for the profiles table)."""

    def __init__(self) -> None:
        super().__init__(Profile)

    async def get_by_user_id(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> Profile | None:
        """사용자 ID로 프로필을 조회합니다.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 소유 사용자 UUID (Owner user UUID)

        Returns:
            Profile | None: 조회된 프로필 또는 None (Found profile or None)
        """
        result = await db.execute(select(Profile).where(Profile.user_id == user_id))
        return result.scalar_one_or_none()

    async def create_for_user(self, db: AsyncSession, user_id: UUID) -> Profile:
        return await self.create(db, {"user_id": user_id})


# 싱글턴 인스턴스 — Singleton instance
profile_repository: ProfileRepository = ProfileRepository()
