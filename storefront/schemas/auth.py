"""인증 관련 Pydantic 요청/응답 및 클레임 스키마 정의.

Authentication-related Pydantic schemas: login request, token pair response
and the claim sets carried inside access and refresh tokens.
"""

from uuid import UUID

from pydantic import BaseModel, EmailStr, field_validator


def _uuid_subject(value: str) -> str:
    # sub는 사용자 UUID여야 함 — Subject must be a user UUID
    UUID(value)
    return value


class LoginRequest(BaseModel):
    """로그인 요청 스키마.

    Login request schema.

    Attributes:
        email: 로그인 이메일 (Login email)
        password: 비밀번호 (Plain text password, verified against bcrypt hash)
    """

    email: EmailStr  # 로그인 이메일 (Login email)
    password: str  # 비밀번호 — 평문, 서버에서 bcrypt 해시와 비교 (Plain text, compared to bcrypt hash)


class TokenResponse(BaseModel):
    """JWT 토큰 쌍 응답 스키마.

    Token pair returned after successful login or refresh. Never persisted;
    only the refresh token's hash is stored.

    Attributes:
        access_token: JWT 액세스 토큰 (Short-lived access token)
        refresh_token: JWT 리프레시 토큰 (Long-lived refresh token)
        token_type: 토큰 유형 (Always "bearer" for Authorization header)
    """

    access_token: str  # JWT 액세스 토큰 — 만료: 5분 기본 (Access token, default TTL: 5min)
    refresh_token: str  # JWT 리프레시 토큰 — 만료: 7일 기본 (Refresh token, default TTL: 7 days)
    token_type: str = "bearer"  # 토큰 유형 — 항상 "bearer" (Token type for Authorization header)


class AccessTokenClaims(BaseModel):
    """액세스 토큰 클레임.

    Claims of a short-lived access token. Validity is decided by signature
    and expiry alone; no server-side lookup is involved.

    Attributes:
        sub: 사용자 UUID 문자열 (Subject user id)
        email: 사용자 이메일 (User email)
        role: 역할 태그 (Role tag)
        exp: 만료 UNIX 타임스탬프 (Expiry, seconds since epoch)
    """

    sub: str
    email: str
    role: str
    exp: int

    @field_validator("sub")
    @classmethod
    def check_sub(cls, value: str) -> str:
        return _uuid_subject(value)

    @property
    def user_id(self) -> UUID:
        return UUID(self.sub)


class RefreshTokenClaims(BaseModel):
    """리프레시 토큰 클레임.

    Claims of a long-lived refresh token. Redemption additionally requires
    the token's hash to match the one stored on the user row.

    Attributes:
        sub: 사용자 UUID 문자열 (Subject user id)
        exp: 만료 UNIX 타임스탬프 (Expiry, seconds since epoch)
        jti: 토큰 고유 ID (Random token id, keeps tokens minted in the same second distinct)
    """

    sub: str
    exp: int
    jti: str

    @field_validator("sub")
    @classmethod
    def check_sub(cls, value: str) -> str:
        return _uuid_subject(value)

    @property
    def user_id(self) -> UUID:
        return UUID(self.sub)
