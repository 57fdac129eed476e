"""주소 서비스 — 배송지 생성, 조회, 수정, 삭제 비즈니스 로직.

Address Service — Business logic for user shipping addresses.
``/users/{id}/addresses`` and ``/addresses/{id}`` act for the owner or an
admin; the ``/me/addresses`` variants only ever touch the caller's own rows.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from storefront.models.address import Address
from storefront.repositories.address_repository import address_repository
from storefront.repositories.user_repository import user_repository
from storefront.schemas.address import AddressCreate, AddressResponse, AddressUpdate
from storefront.schemas.auth import AccessTokenClaims
from storefront.services.access import ensure_self_or_admin
from storefront.utils.exceptions import BadRequestError, NotFoundError


class AddressService:
    """주소 관련 비즈니스 로직을 처리하는 서비스.

    Service handling address business logic.
    """

    def _to_response(self, address: Address) -> AddressResponse:
        return AddressResponse(
            id=str(address.id),
            user_id=str(address.user_id),
            label=address.label,
            address_line=address.address_line,
            city=address.city,
            postal_code=address.postal_code,
            country=address.country,
        )

    async def _apply(
        self,
        db: AsyncSession,
        address: Address,
        data: AddressUpdate,
    ) -> AddressResponse:
        update_data: dict = data.model_dump(exclude_unset=True)
        if not update_data:
            raise BadRequestError("At least one field to update must be provided")

        updated: Address | None = await address_repository.update(db, address.id, update_data)
        if updated is None:
            raise NotFoundError("Address not found")
        return self._to_response(updated)

    async def _get_owned(
        self,
        db: AsyncSession,
        address_id: UUID,
        user_id: UUID,
    ) -> Address:
        address: Address | None = await address_repository.get_owned(db, address_id, user_id)
        if address is None:
            raise NotFoundError("Address not found")
        return address

    async def create_address(
        self,
        db: AsyncSession,
        user_id: UUID,
        data: AddressCreate,
        claims: AccessTokenClaims,
    ) -> AddressResponse:
        """사용자에게 새 주소를 추가합니다.

        Add an address to a user.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 소유 사용자 UUID (Owner user UUID)
            data: 주소 데이터 (Address data)
            claims: 호출자 클레임 (Caller's access claims)

        Returns:
            AddressResponse: 생성된 주소 (Created address)

        Raises:
            ForbiddenError: 본인/관리자가 아닐 때 (Not self or admin)
            NotFoundError: 사용자를 찾을 수 없을 때 (User not found)
        """
        ensure_self_or_admin(claims, user_id)
        if not await user_repository.exists(db, {"id": user_id}):
            raise NotFoundError("User not found")

        address: Address = await address_repository.create(
            db, {"user_id": user_id, **data.model_dump()}
        )
        return self._to_response(address)

    async def list_addresses(
        self,
        db: AsyncSession,
        user_id: UUID,
        claims: AccessTokenClaims,
    ) -> list[AddressResponse]:
        """사용자의 주소 목록 (본인 또는 admin)."""
        ensure_self_or_admin(claims, user_id)
        addresses: list[Address] = await address_repository.list_for_user(db, user_id)
        return [self._to_response(a) for a in addresses]

    async def list_my_addresses(
        self,
        db: AsyncSession,
        claims: AccessTokenClaims,
    ) -> list[AddressResponse]:
        addresses: list[Address] = await address_repository.list_for_user(db, claims.user_id)
        return [self._to_response(a) for a in addresses]

    async def update_address(
        self,
        db: AsyncSession,
        address_id: UUID,
        data: AddressUpdate,
        claims: AccessTokenClaims,
    ) -> AddressResponse:
        """주소 ID로 주소를 수정합니다.

        Raises:
            NotFoundError: 주소를 찾을 수 없을 때 (Address not found)
            ForbiddenError: 본인/관리자가 아닐 때 (Not the owner or an admin)
            BadRequestError: 수정할 필드가 없을 때 (Nothing to update)
        """
        address: Address | None = await address_repository.get_by_id(db, address_id)
        if address is None:
            raise NotFoundError("Address not found")
        ensure_self_or_admin(claims, address.user_id)
        return await self._apply(db, address, data)

    async def update_my_address(
        self,
        db: AsyncSession,
        address_id: UUID,
        data: AddressUpdate,
        claims: AccessTokenClaims,
    ) -> AddressResponse:
        """현재 사용자 소유의 주소를 수정합니다.

        Update one of the caller's addresses; anyone else's reads as missing.
        """
        address: Address = await self._get_owned(db, address_id, claims.user_id)
        return await self._apply(db, address, data)

    async def delete_my_address(
        self,
        db: AsyncSession,
        address_id: UUID,
        claims: AccessTokenClaims,
    ) -> AddressResponse:
        """현재 사용자 소유의 주소를 삭제하고 삭제된 주소를 반환합니다.

        Raises:
            NotFoundError: 소유한 주소가 아닐 때 (Not one of the caller's addresses)
        """
        address: Address = await self._get_owned(db, address_id, claims.user_id)
        response: AddressResponse = self._to_response(address)
        await address_repository.delete(db, address.id)
        return response


# 싱글턴 인스턴스 — Singleton instance
address_service: AddressService = AddressService()
