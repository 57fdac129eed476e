"""프로필 라우터 — 프로필 조회 및 수정.

Profile Router — Read and update user profiles.

Permission Matrix (역할별 권한 설계):
    - /users/{id}/profile, /profiles/{id}: 본인 또는 admin (Owner or admin)
    - /me/profile: 로그인 사용자 본인 (The caller)
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.deps import AccessClaims
from storefront.database import get_db
from storefront.schemas.profile import ProfileResponse, ProfileUpdate
from storefront.services.profile_service import profile_service

router: APIRouter = APIRouter()


@router.get("/users/{user_id}/profile", response_model=ProfileResponse)
async def get_user_profile(
    user_id: UUID,
    claims: AccessClaims,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ProfileResponse:
    """사용자 프로필 조회 (본인 또는 admin)."""
    return await profile_service.get_profile(db, user_id, claims)


@router.patch("/profiles/{profile_id}", response_model=ProfileResponse)
async def update_profile(
    profile_id: UUID,
    data: ProfileUpdate,
    claims: AccessClaims,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ProfileResponse:
    """프로필 ID로 수정 — 본인 또는 admin.

    Update a profile by id. Owner or admin only.
    """
    result: ProfileResponse = await profile_service.update_profile(db, profile_id, data, claims)
    await db.commit()
    return result


@router.get("/me/profile", response_model=ProfileResponse)
async def get_my_profile(
    claims: AccessClaims,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ProfileResponse:
    return await profile_service.get_my_profile(db, claims)


@router.patch("/me/profile", response_model=ProfileResponse)
async def update_my_profile(
    data: ProfileUpdate,
    claims: AccessClaims,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ProfileResponse:
    """내 프로필 수정 (Update the caller's own profile)."""
    result: ProfileResponse = await profile_service.update_my_profile(db, data, claims)
    await db.commit()
    return result
