"""사용자 서비스 — 회원가입, 조회, 수정, 삭제 비즈니스 로직.

User Service — Business logic for signup, lookup, update and deletion.
Signup creates the user, its cart and its profile in one transaction; the router
commits, and any failure before the commit rolls both writes back.
"""

from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.models.user import User, UserRole
from storefront.repositories.cart_repository import cart_repository
from storefront.repositories.profile_repository import profile_repository
from storefront.repositories.user_repository import user_repository
from storefront.schemas.auth import AccessTokenClaims
from storefront.schemas.user import (
    CartResponse,
    UserCreate,
    UserResponse,
    UserUpdate,
    UserWithCartResponse,
)
from storefront.services.access import ensure_self_or_admin, is_admin
from storefront.utils.exceptions import (
    BadRequestError,
    DuplicateError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
)
from storefront.utils.password import PasswordHasher


class UserService:
    """사용자 관련 비즈니스 로직을 처리하는 서비스.

    Service handling user business logic.

    Attributes:
        hasher: bcrypt 해셔 (Password hasher)
    """

    def __init__(self, hasher: PasswordHasher) -> None:
        self.hasher: PasswordHasher = hasher

    def _to_response(self, user: User) -> UserResponse:
        return UserResponse(id=str(user.id), email=user.email, role=user.role)

    def _to_cart_response(self, user: User) -> UserWithCartResponse:
        return UserWithCartResponse(
            id=str(user.id),
            email=user.email,
            role=user.role,
            cart=CartResponse(id=user.cart.id, updated_at=user.cart.updated_at),
        )

    async def signup(
        self,
        db: AsyncSession,
        data: UserCreate,
    ) -> UserResponse:
        """회원가입을 처리합니다 — 사용자, 장바구니, 프로필을 함께 생성.

        Create a user (role "user", no session) together with its cart and
        a profile holding the default language and currency.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 회원가입 요청 데이터 (Signup request data)

        Returns:
            UserResponse: 생성된 사용자 (Created user)

        Raises:
            DuplicateError: 이미 등록된 이메일일 때 (Email already registered)
        """
        if await user_repository.exists(db, {"email": data.email}):
            raise DuplicateError("Email already registered")

        password_hash: str = await self.hasher.hash(data.password)

        try:
            user: User = await user_repository.create(
                db,
                {
                    "email": data.email,
                    "password_hash": password_hash,
                    "role": UserRole.USER.value,
                    "refresh_token_hash": None,
                },
            )
            await cart_repository.create_for_user(db, user.id)
            await profile_repository.create_for_user(db, user.id)
        except IntegrityError as exc:
            # 동시 가입 경쟁 — Lost a concurrent signup race on the unique email
            await db.rollback()
            raise DuplicateError("Email already registered") from exc

        return self._to_response(user)

    async def list_users(
        self,
        db: AsyncSession,
        claims: AccessTokenClaims,
    ) -> list[UserWithCartResponse]:
        """모든 사용자를 장바구니와 함께 조회합니다 (관리자 전용).

        List all users with their carts. Admin only.

        Raises:
            ForbiddenError: 관리자가 아닐 때 (Caller is not an admin)
        """
        if not is_admin(claims):
            raise ForbiddenError()
        users: list[User] = await user_repository.list_with_carts(db)
        return [self._to_cart_response(u) for u in users]

    async def get_user(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> UserResponse:
        """사용자를 조회합니다.

        Raises:
            NotFoundError: 사용자를 찾을 수 없을 때 (User not found)
        """
        user: User | None = await user_repository.get_by_id(db, user_id)
        if user is None:
            raise NotFoundError("User not found")
        return self._to_response(user)

    async def get_me(
        self,
        db: AsyncSession,
        claims: AccessTokenClaims,
    ) -> UserWithCartResponse:
        """현재 로그인한 사용자와 장바구니를 반환합니다.

        Return the authenticated user together with their cart.

        Raises:
            NotFoundError: 토큰의 사용자가 삭제된 경우 (Token subject no longer exists)
        """
        user: User | None = await user_repository.get_with_cart(db, claims.user_id)
        if user is None or user.cart is None:
            raise NotFoundError("User not found")
        return self._to_cart_response(user)

    async def update_user(
        self,
        db: AsyncSession,
        user_id: UUID,
        data: UserUpdate,
        claims: AccessTokenClaims,
    ) -> UserResponse:
        """이메일 및/또는 비밀번호를 수정합니다.

        Update the email and/or the password. A new password is accepted only
        together with the correct current password.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 대상 사용자 ID (Target user UUID)
            data: 수정 데이터 (Update data)
            claims: 호출자 클레임 (Caller's access claims)

        Returns:
            UserResponse: 수정된 사용자 (Updated user)

        Raises:
            ForbiddenError: 본인/관리자가 아닐 때 (Not self or admin)
            BadRequestError: 수정할 필드가 없을 때 (Nothing to update)
            UnauthorizedError: 현재 비밀번호 누락 또는 불일치 (Missing or wrong current password)
            NotFoundError: 사용자를 찾을 수 없을 때 (User not found)
            DuplicateError: 이미 사용 중인 이메일 (Email already taken)
        """
        ensure_self_or_admin(claims, user_id)

        if data.email is None and data.new_password is None:
            raise BadRequestError("At least one field to update must be provided")

        if data.new_password is not None and data.current_password is None:
            raise UnauthorizedError("Current password is required to update password")

        user: User | None = await user_repository.get_by_id(db, user_id)
        if user is None:
            raise NotFoundError("User not found")

        update_data: dict[str, str] = {}

        if data.new_password is not None:
            if not await self.hasher.verify(data.current_password, user.password_hash):
                raise UnauthorizedError("Invalid password")
            update_data["password_hash"] = await self.hasher.hash(data.new_password)

        if data.email is not None and data.email != user.email:
            if await user_repository.exists(db, {"email": data.email}):
                raise DuplicateError("Email already registered")
            update_data["email"] = data.email

        updated: User | None = await user_repository.update(db, user_id, update_data)
        if updated is None:
            raise NotFoundError("User not found")
        return self._to_response(updated)

    async def delete_user(
        self,
        db: AsyncSession,
        user_id: UUID,
        claims: AccessTokenClaims,
    ) -> UserResponse:
        """사용자와 장바구니를 삭제합니다.

        Delete a user; the cart, profile and addresses go with it.

        Raises:
            ForbiddenError: 본인/관리자가 아닐 때 (Not self or admin)
            NotFoundError: 사용자를 찾을 수 없을 때 (User not found)
        """
        ensure_self_or_admin(claims, user_id)

        user: User | None = await user_repository.get_with_dependents(db, user_id)
        if user is None:
            raise NotFoundError("User not found")

        response: UserResponse = self._to_response(user)
        await db.delete(user)
        await db.flush()
        return response
