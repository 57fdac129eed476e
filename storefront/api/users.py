"""사용자 라우터 — 회원가입, 조회, 수정, 삭제.

User Router — Signup plus read/update/delete endpoints.

Permission Matrix (역할별 권한 설계):
    - 회원가입: 누구나 (Anyone)
    - 목록 조회: admin만 (Admin only)
    - 단일 조회 / 내 정보: 로그인 사용자 (Any authenticated user)
    - 수정/삭제: 본인 또는 admin (Self or admin)
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.deps import AccessClaims, get_user_service
from storefront.database import get_db
from storefront.schemas.user import (
    UserCreate,
    UserResponse,
    UserUpdate,
    UserWithCartResponse,
)
from storefront.services.user_service import UserService

router: APIRouter = APIRouter()


@router.post("", response_model=UserResponse, status_code=201)
async def create_user(
    data: UserCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    """회원가입 — 사용자와 장바구니 생성.

    Sign up. Creates the user and their cart atomically.
    """
    result: UserResponse = await service.signup(db, data)
    await db.commit()
    return result


@router.get("", response_model=list[UserWithCartResponse])
async def list_users(
    claims: AccessClaims,
    db: Annotated[AsyncSession, Depends(get_db)],
    service: Annotated[UserService, Depends(get_user_service)],
) -> list[UserWithCartResponse]:
    """전체 사용자 목록 (admin 전용)."""
    return await service.list_users(db, claims)


@router.get("/me", response_model=UserWithCartResponse)
async def get_current_user(
    claims: AccessClaims,
    db: Annotated[AsyncSession, Depends(get_db)],
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserWithCartResponse:
    """현재 사용자 프로필 조회 (장바구니 포함).

    Get the authenticated user together with their cart.
    """
    return await service.get_me(db, claims)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: UUID,
    claims: AccessClaims,
    db: Annotated[AsyncSession, Depends(get_db)],
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    return await service.get_user(db, user_id)


@router.patch("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: UUID,
    data: UserUpdate,
    claims: AccessClaims,
    db: Annotated[AsyncSession, Depends(get_db)],
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    """이메일 또는 비밀번호 수정. 본인 또는 admin만 가능.

    Update email and/or password. Self or admin only.
    """
    result: UserResponse = await service.update_user(db, user_id, data, claims)
    await db.commit()
    return result


@router.delete("/{user_id}", response_model=UserResponse)
async def delete_user(
    user_id: UUID,
    claims: AccessClaims,
    db: Annotated[AsyncSession, Depends(get_db)],
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    """사용자 삭제 (장바구니 포함). 본인 또는 admin만 가능."""
    result: UserResponse = await service.delete_user(db, user_id, claims)
    await db.commit()
    return result
