"""인증 서비스 — 로그인, 토큰 갱신(회전), 로그아웃 비즈니스 로직.

Auth Service — Business logic for login, refresh-token rotation and logout.

Session state per user lives in ``users.refresh_token_hash``:
    NoSession (None) --login--> Active (hash)
    Active --refresh--> Active (hash replaced, previous refresh token dead)
    Active --logout--> NoSession
A refresh token whose hash does not match the stored one is rejected and
the state is left as is. With REVOKE_ON_REFRESH_REUSE enabled the session is
cleared instead and ``RefreshTokenReuseError`` is raised; the router commits
that revocation before the 401 goes out.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from storefront.models.user import User
from storefront.repositories.user_repository import user_repository
from storefront.schemas.auth import AccessTokenClaims, RefreshTokenClaims, TokenResponse
from storefront.utils.exceptions import RefreshTokenReuseError, UnauthorizedError
from storefront.utils.jwt import TokenCodec
from storefront.utils.password import PasswordHasher


class SessionService:
    """인증 세션 관련 비즈니스 로직을 처리하는 서비스.

    Service orchestrating login, refresh and logout against the password
    hasher, the token codec and the session column on the user row.

    Attributes:
        codec: JWT 코덱 (Token codec)
        hasher: bcrypt 해셔 (Password hasher)
        revoke_on_reuse: 불일치 토큰 제시 시 세션 폐기 여부
                         (Clear the session when a stale refresh token is presented)
    """

    def __init__(
        self,
        codec: TokenCodec,
        hasher: PasswordHasher,
        revoke_on_reuse: bool = False,
    ) -> None:
        self.codec: TokenCodec = codec
        self.hasher: PasswordHasher = hasher
        self.revoke_on_reuse: bool = revoke_on_reuse

    async def _issue_tokens(self, user: User) -> tuple[TokenResponse, str]:
        """새 토큰 쌍과 저장할 리프레시 토큰 해시를 생성합니다.

        Issue a fresh pair and compute the hash to persist for its refresh token.

        Returns:
            tuple[TokenResponse, str]: (토큰 응답, 리프레시 토큰 해시)
                                       (Token response, refresh token hash)
        """
        access_token, refresh_token = await self.codec.issue_pair(
            user.id, user.email, user.role
        )
        refresh_hash: str = await self.hasher.hash(refresh_token)
        return (
            TokenResponse(access_token=access_token, refresh_token=refresh_token),
            refresh_hash,
        )

    async def login(
        self,
        db: AsyncSession,
        email: str,
        password: str,
    ) -> TokenResponse:
        """로그인을 처리합니다.

        Verify credentials, issue a new pair and overwrite any previous
        session hash. Unknown email and wrong password produce the same
        error so the endpoint cannot be used to discover accounts.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            email: 로그인 이메일 (Login email)
            password: 평문 비밀번호 (Plain text password)

        Returns:
            TokenResponse: 토큰 응답 (Token pair)

        Raises:
            UnauthorizedError: 잘못된 인증 정보일 때 (Invalid credentials)
        """
        user: User | None = await user_repository.get_by_email(db, email)
        if user is None:
            raise UnauthorizedError("Invalid email or password")

        if not await self.hasher.verify(password, user.password_hash):
            raise UnauthorizedError("Invalid email or password")

        tokens, refresh_hash = await self._issue_tokens(user)

        # 기존 세션 무조건 덮어쓰기 — Overwrite any previous session unconditionally
        await user_repository.set_refresh_token_hash(db, user.id, refresh_hash)
        return tokens

    async def refresh(
        self,
        db: AsyncSession,
        claims: RefreshTokenClaims,
        raw_token: str,
    ) -> TokenResponse:
        """리프레시 토큰으로 새 토큰 쌍을 발급하고 저장된 해시를 회전합니다.

        Redeem a refresh token for a new pair and rotate the stored hash.
        The swap is a conditional UPDATE on the hash that was verified, so
        only one of two concurrent redemptions of the same token wins.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            claims: 검증된 리프레시 토큰 클레임 (Verified refresh token claims)
            raw_token: 요청의 원본 베어러 토큰 (Raw bearer token from the request)

        Returns:
            TokenResponse: 새 토큰 응답 (New token pair)

        Raises:
            UnauthorizedError: 세션 없음, 해시 불일치, 회전 충돌
                               (No session, hash mismatch, or rotation conflict)
            RefreshTokenReuseError: 재사용 감지로 세션 폐기됨, 커밋 필요
                                    (Session revoked on reuse; caller must commit)
        """
        user: User | None = await user_repository.get_fresh(db, claims.user_id)
        if user is None:
            raise UnauthorizedError("User not found")

        stored_hash: str | None = user.refresh_token_hash
        if stored_hash is None:
            raise UnauthorizedError("Please, use login instead")

        if not await self.hasher.verify(raw_token, stored_hash):
            if self.revoke_on_reuse:
                await user_repository.set_refresh_token_hash(db, user.id, None)
                raise RefreshTokenReuseError()
            raise UnauthorizedError("Invalid refresh token")

        tokens, refresh_hash = await self._issue_tokens(user)

        swapped: bool = await user_repository.swap_refresh_token_hash(
            db, user.id, stored_hash, refresh_hash
        )
        if not swapped:
            raise UnauthorizedError("Refresh token has already been rotated")
        return tokens

    async def logout(
        self,
        db: AsyncSession,
        claims: AccessTokenClaims,
    ) -> None:
        """로그아웃 처리 — 저장된 세션 해시를 제거합니다.

        Clear the authenticated user's session hash. Idempotent.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            claims: 검증된 액세스 토큰 클레임 (Verified access token claims)
        """
        await user_repository.set_refresh_token_hash(db, claims.user_id, None)
