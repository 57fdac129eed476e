"""사용자 레포지토리 — 사용자 조회 및 세션 해시 갱신 쿼리.

User Repository — User lookups and session-hash updates.
The user row is the session store: every session transition (login,
rotation, logout) is a single UPDATE statement on ``refresh_token_hash``.
"""

from uuid import UUID

from sqlalchemy import Select, select, update
from sqlalchemy.engine import CursorResult
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from storefront.models.user import User
from storefront.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """사용자 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the users table.
    """

    def __init__(self) -> None:
        super().__init__(User)

    async def get_by_email(
        self,
        db: AsyncSession,
        email: str,
    ) -> User | None:
        """이메일로 사용자를 조회합니다.

        Retrieve a user by email.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            email: 조회할 이메일 (Email to look up)

        Returns:
            User | None: 조회된 사용자 또는 None (Found user or None)
        """
        result = await db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def get_fresh(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> User | None:
        """DB에서 최신 상태로 사용자를 다시 읽습니다.

        Re-read a user from the database, overwriting any copy already held
        by the session, so the session hash compared during refresh is the
        committed one.
        """
        query: Select = (
            select(User)
            .where(User.id == user_id)
            .execution_options(populate_existing=True)
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def get_with_cart(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> User | None:
        """장바구니와 함께 사용자를 조회합니다.

        Retrieve a user with the cart eagerly loaded.
        """
        query: Select = (
            select(User)
            .options(selectinload(User.cart))
            .where(User.id == user_id)
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def get_with_dependents(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> User | None:
        """삭제 전 종속 행(장바구니, 프로필, 주소)과 함께 조회합니다.

        Retrieve a user with every row that is deleted along with it.
        """
        query: Select = (
            select(User)
            .options(
                selectinload(User.cart),
                selectinload(User.profile),
                selectinload(User.addresses),
            )
            .where(User.id == user_id)
            .execution_options(populate_existing=True)
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def list_with_carts(self, db: AsyncSession) -> list[User]:
        """모든 사용자를 장바구니와 함께 조회합니다 (All users with carts, oldest first)."""
        query: Select = (
            select(User)
            .options(selectinload(User.cart))
            .order_by(User.created_at)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def set_refresh_token_hash(
        self,
        db: AsyncSession,
        user_id: UUID,
        token_hash: str | None,
    ) -> None:
        """세션 해시를 무조건 덮어씁니다.

        Unconditionally overwrite the stored refresh-token hash. ``None``
        ends the session (logout). Affecting zero rows is not an error,
        which keeps logout idempotent.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 대상 사용자 ID (Target user UUID)
            token_hash: 새 해시 또는 None (New hash, or None to clear)
        """
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(refresh_token_hash=token_hash)
            .execution_options(synchronize_session="evaluate")
        )
        await db.execute(stmt)
        await db.flush()

    async def swap_refresh_token_hash(
        self,
        db: AsyncSession,
        user_id: UUID,
        expected_hash: str,
        new_hash: str,
    ) -> bool:
        """세션 해시를 조건부로 교체합니다 (compare-and-swap).

        Replace the stored hash only if it still equals ``expected_hash``,
        in one conditional UPDATE. Two concurrent refreshes of the same
        token cannot both succeed: the loser sees zero affected rows.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 대상 사용자 ID (Target user UUID)
            expected_hash: 읽어 온 현재 해시 (Hash read before verification)
            new_hash: 새 해시 (Replacement hash)

        Returns:
            bool: 교체 성공 여부 (True if exactly one row was updated)
        """
        stmt = (
            update(User)
            .where(User.id == user_id, User.refresh_token_hash == expected_hash)
            .values(refresh_token_hash=new_hash)
            .execution_options(synchronize_session="evaluate")
        )
        result: CursorResult = await db.execute(stmt)
        await db.flush()
        return result.rowcount == 1


# 싱글턴 인스턴스 — Singleton instance
user_repository: UserRepository = UserRepository()
