"""주소 레포지토리 — 사용자별 주소 조회.

Address Repository — Per-user address queries. Ownership is part of the
query, so an address belonging to someone else reads as missing.
"""

from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.models.address import Address
from storefront.repositories.base import BaseRepository


class AddressRepository(BaseRepository[Address]):
    """주소 테이블 레포지토리 (Repository for the addresses table)."""

    def __init__(self) -> None:
        super().__init__(Address)

    async def list_for_user(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> list[Address]:
        """사용자의 모든 주소를 생성 순으로 조회합니다 (All addresses of a user, oldest first)."""
        query: Select = (
            select(Address)
            .where(Address.user_id == user_id)
            .order_by(Address.created_at)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def get_owned(
        self,
        db: AsyncSession,
        address_id: UUID,
        user_id: UUID,
    ) -> Address | None:
        """사용자가 소유한 주소를 조회합니다.

        Retrieve an address only if it belongs to ``user_id``.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            address_id: 주소 UUID (Address UUID)
            user_id: 소유 사용자 UUID (Expected owner UUID)

        Returns:
            Address | None: 조회된 주소 또는 None (Owned address or None)
        """
        query: Select = select(Address).where(
            Address.id == address_id,
            Address.user_id == user_id,
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()


# 싱글턴 인스턴스 — Singleton instance
address_repository: AddressRepository = AddressRepository()
