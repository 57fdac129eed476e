"""장바구니 레포지토리 — 회원가입 시 장바구니 생성.

Cart Repository — Creates the cart that every user owns.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from storefront.models.cart import Cart
from storefront.repositories.base import BaseRepository


class CartRepository(BaseRepository[Cart]):
    """장바구니 테이블 레포지토리 (Repository for the carts table)."""

    def __init__(self) -> None:
        super().__init__(Cart)

    async def create_for_user(self, db: AsyncSession, user_id: UUID) -> Cart:
        return await self.create(db, {"user_id": user_id})


# 싱글턴 인스턴스 — Singleton instance
cart_repository: CartRepository = CartRepository()
