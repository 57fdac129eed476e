"""프로필 서비스 — 프로필 조회/수정 비즈니스 로직.

Profile Service — Business logic for reading and updating user profiles.
Every user gets a profile at signup; these operations never create one.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from storefront.models.profile import Profile
from storefront.repositories.profile_repository import profile_repository
from storefront.schemas.auth import AccessTokenClaims
from storefront.schemas.profile import ProfileResponse, ProfileUpdate
from storefront.services.access import ensure_self_or_admin
from storefront.utils.exceptions import BadRequestError, NotFoundError


class ProfileService:
    """프로필 관련 비즈니스 로직을 처리하는 서비스.

    Service handling profile business logic.
    Reads and writes are allowed for the profile's owner or an admin.
    """

    def _to_response(self, profile: Profile) -> ProfileResponse:
        """프로필 모델을 응답 스키마로 변환합니다.

        Convert a Profile model instance to a ProfileResponse schema.
        """
        return ProfileResponse(
            id=str(profile.id),
            user_id=str(profile.user_id),
            first_name=profile.first_name,
            last_name=profile.last_name,
            phone_number=profile.phone_number,
            birth_date=profile.birth_date,
            language=profile.language,
            currency=profile.currency,
        )

    async def _get_for_user(self, db: AsyncSession, user_id: UUID) -> Profile:
        profile: Profile | None = await profile_repository.get_by_user_id(db, user_id)
        if profile is None:
            raise NotFoundError("Profile not found")
        return profile

    async def _apply(
        self,
        db: AsyncSession,
        profile: Profile,
        data: ProfileUpdate,
    ) -> ProfileResponse:
        # 전달된 필드만 업데이트 — Only fields present in the request are applied
        update_data: dict = data.model_dump(exclude_unset=True)
        if not update_data:
            raise BadRequestError("At least one field to update must be provided")

        updated: Profile | None = await profile_repository.update(db, profile.id, update_data)
        if updated is None:
            raise NotFoundError("Profile not found")
        return self._to_response(updated)

    async def get_profile(
        self,
        db: AsyncSession,
        user_id: UUID,
        claims: AccessTokenClaims,
    ) -> ProfileResponse:
        """사용자 ID로 프로필을 조회합니다.

        Retrieve a user's profile.

        Raises:
            ForbiddenError: 본인/관리자가 아닐 때 (Not self or admin)
            NotFoundError: 프로필을 찾을 수 없을 때 (Profile not found)
        """
        ensure_self_or_admin(claims, user_id)
        return self._to_response(await self._get_for_user(db, user_id))

    async def get_my_profile(
        self,
        db: AsyncSession,
        claims: AccessTokenClaims,
    ) -> ProfileResponse:
        """현재 사용자의 프로필을 조회합니다."""
        return self._to_response(await self._get_for_user(db, claims.user_id))

    async def update_profile(
        self,
        db: AsyncSession,
        profile_id: UUID,
        data: ProfileUpdate,
        claims: AccessTokenClaims,
    ) -> ProfileResponse:
        """프로필 ID로 프로필을 수정합니다.

        Update a profile by its own id.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            profile_id: 프로필 UUID (Profile UUID)
            data: 수정 데이터 (Update data)
            claims: 호출자 클레임 (Caller's access claims)

        Returns:
            ProfileResponse: 수정된 프로필 (Updated profile)

        Raises:
            NotFoundError: 프로필을 찾을 수 없을 때 (Profile not found)
            ForbiddenError: 본인/관리자가 아닐 때 (Not self or admin)
            BadRequestError: 수정할 필드가 없을 때 (Nothing to update)
        """
        profile: Profile | None = await profile_repository.get_by_id(db, profile_id)
        if profile is None:
            raise NotFoundError("Profile not found")
        ensure_self_or_admin(claims, profile.user_id)
        return await self._apply(db, profile, data)

    async def update_my_profile(
        self,
        db: AsyncSession,
        data: ProfileUpdate,
        claims: AccessTokenClaims,
    ) -> ProfileResponse:
        """현재 사용자의 프로필을 수정합니다 (Update the caller's own profile)."""
        profile: Profile = await self._get_for_user(db, claims.user_id)
        return await self._apply(db, profile, data)


# 싱글턴 인스턴스 — Singleton instance
profile_service: ProfileService = ProfileService()
