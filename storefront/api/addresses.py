"""주소 라우터 — 배송지 생성, 조회, 수정, 삭제.

Address Router — Shipping address endpoints.

Permission Matrix (역할별 권한 설계):
    - /users/{id}/addresses, /addresses/{id}: 본인 또는 admin (Owner or admin)
    - /me/addresses...: 본인 주소만, 타인 주소는 404 (Caller's own; others read as 404)
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.deps import AccessClaims
from storefront.database import get_db
from storefront.schemas.address import AddressCreate, AddressResponse, AddressUpdate
from storefront.services.address_service import address_service

router: APIRouter = APIRouter()


@router.post("/users/{user_id}/addresses", response_model=AddressResponse, status_code=201)
async def create_address(
    user_id: UUID,
    data: AddressCreate,
    claims: AccessClaims,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AddressResponse:
    """사용자에게 주소 추가 — 본인 또는 admin."""
    result: AddressResponse = await address_service.create_address(db, user_id, data, claims)
    await db.commit()
    return result


@router.get("/users/{user_id}/addresses", response_model=list[AddressResponse])
async def list_user_addresses(
    user_id: UUID,
    claims: AccessClaims,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[AddressResponse]:
    return await address_service.list_addresses(db, user_id, claims)


@router.patch("/addresses/{address_id}", response_model=AddressResponse)
async def update_address(
    address_id: UUID,
    data: AddressUpdate,
    claims: AccessClaims,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AddressResponse:
    """주소 ID로 수정 — 소유자 또는 admin."""
    result: AddressResponse = await address_service.update_address(db, address_id, data, claims)
    await db.commit()
    return result


@router.get("/me/addresses", response_model=list[AddressResponse])
async def list_my_addresses(
    claims: AccessClaims,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[AddressResponse]:
    """내 주소 목록 (The caller's addresses, oldest first)."""
    return await address_service.list_my_addresses(db, claims)


@router.patch("/me/addresses/{address_id}", response_model=AddressResponse)
async def update_my_address(
    address_id: UUID,
    data: AddressUpdate,
    claims: AccessClaims,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AddressResponse:
    result: AddressResponse = await address_service.update_my_address(db, address_id, data, claims)
    await db.commit()
    return result


@router.delete("/me/addresses/{address_id}", response_model=AddressResponse)
async def delete_my_address(
    address_id: UUID,
    claims: AccessClaims,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AddressResponse:
    """내 주소 삭제 — 삭제된 주소 반환 (Returns the deleted address)."""
    result: AddressResponse = await address_service.delete_my_address(db, address_id, claims)
    await db.commit()
    return result
