"""JWT 토큰 생성 및 검증 유틸리티 모듈.

JWT token creation and verification utility module.
``TokenCodec`` signs and verifies claim sets with a per-token-kind secret:
access tokens use ``AT_SECRET``, refresh tokens use ``RT_SECRET``, so one
kind can never be replayed as the other.

JWT Payload Structure:
    Access:  {"sub": "user_uuid", "email": "...", "role": "user", "exp": 1234567890}
    Refresh: {"sub": "user_uuid", "exp": 1234567890, "jti": "hex"}

Signing and verification run on a worker thread (``asyncio.to_thread``).
"""

import asyncio
import enum
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, TypeVar

import jwt
from pydantic import BaseModel, ValidationError

from storefront.config import Settings
from storefront.schemas.auth import AccessTokenClaims, RefreshTokenClaims
from storefront.utils.exceptions import InvalidTokenError, MissingSecretError, TokenCreationError

ClaimsT = TypeVar("ClaimsT", bound=BaseModel)


class TokenKind(str, enum.Enum):
    """토큰 종류 — 서명 키 선택자 (Secret selector)."""

    ACCESS = "access"
    REFRESH = "refresh"


def _expiry(delta: timedelta) -> int:
    return int((datetime.now(timezone.utc) + delta).timestamp())


class TokenCodec:
    """JWT 인코더/디코더.

    Encodes and decodes signed, expiring claim sets.

    Attributes:
        algorithm: 서명 알고리즘 (Signing algorithm, HS256 by default)
        access_ttl: 액세스 토큰 유효 기간 (Access token lifetime)
        refresh_ttl: 리프레시 토큰 유효 기간 (Refresh token lifetime)
        leeway: 만료 검증 허용 오차(초) (Expiry leeway in seconds)
    """

    def __init__(self, settings: Settings) -> None:
        """설정으로 코덱을 초기화합니다. 서명 키가 없으면 즉시 실패합니다.

        Initialise the codec from settings. Fails fast when either secret
        is missing, so a misconfigured process never starts serving.

        Raises:
            MissingSecretError: AT_SECRET 또는 RT_SECRET 미설정 (A secret is empty)
        """
        self._secrets: dict[TokenKind, str] = {
            TokenKind.ACCESS: settings.AT_SECRET,
            TokenKind.REFRESH: settings.RT_SECRET,
        }
        for kind in TokenKind:
            self.secret_for(kind)

        self.algorithm: str = settings.JWT_ALGORITHM
        self.access_ttl: timedelta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        self.refresh_ttl: timedelta = timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)
        self.leeway: int = settings.TOKEN_LEEWAY_SECONDS

    def secret_for(self, kind: TokenKind) -> str:
        """토큰 종류에 해당하는 서명 키를 반환합니다.

        Raises:
            MissingSecretError: 서명 키가 비어 있을 때 (The secret is empty)
        """
        secret: str = self._secrets.get(kind, "")
        if not secret:
            name = "AT_SECRET" if kind is TokenKind.ACCESS else "RT_SECRET"
            raise MissingSecretError(f"{name} not set")
        return secret

    def _encode_sync(self, payload: dict[str, Any], secret: str) -> str:
        try:
            return jwt.encode(payload, secret, algorithm=self.algorithm)
        except (jwt.PyJWTError, TypeError, ValueError) as exc:
            raise TokenCreationError() from exc

    def _decode_sync(self, token: str, secret: str) -> dict[str, Any]:
        # exp 필수, 허용 오차는 설정값 (exp required; leeway from settings)
        return jwt.decode(
            token,
            secret,
            algorithms=[self.algorithm],
            leeway=self.leeway,
            options={"require": ["exp", "sub"]},
        )

    async def encode(self, claims: BaseModel, secret: str) -> str:
        """클레임을 서명된 JWT 문자열로 인코딩합니다.

        Serialise ``claims`` into a compact signed token.

        Args:
            claims: 클레임 모델 (Claims model)
            secret: 서명 키 (Signing secret)

        Returns:
            str: 인코딩된 JWT 문자열 (Encoded JWT token string)

        Raises:
            MissingSecretError: 서명 키가 비어 있을 때 (Empty secret)
            TokenCreationError: 직렬화/서명 실패 (Serialisation or signing failure)
        """
        if not secret:
            raise MissingSecretError()
        return await asyncio.to_thread(self._encode_sync, claims.model_dump(), secret)

    async def decode(self, token: str, secret: str, claims_type: type[ClaimsT]) -> ClaimsT:
        """JWT를 검증하고 클레임 모델로 디코딩합니다.

        Verify signature and expiry, then validate the payload against
        ``claims_type``.

        Args:
            token: JWT 토큰 문자열 (Encoded JWT token string)
            secret: 검증 키 (Verification secret)
            claims_type: 클레임 모델 클래스 (Claims model class)

        Returns:
            ClaimsT: 검증된 클레임 (Validated claims)

        Raises:
            MissingSecretError: 검증 키가 비어 있을 때 (Empty secret)
            InvalidTokenError: 서명 불일치, 형식 오류, 만료 (Bad signature, malformed or expired)
        """
        if not secret:
            raise MissingSecretError()
        try:
            payload: dict[str, Any] = await asyncio.to_thread(self._decode_sync, token, secret)
        except jwt.ExpiredSignatureError as exc:
            raise InvalidTokenError("Token has expired") from exc
        except jwt.PyJWTError as exc:
            raise InvalidTokenError() from exc

        try:
            return claims_type.model_validate(payload)
        except ValidationError as exc:
            raise InvalidTokenError("Invalid token payload") from exc

    def access_claims(self, user_id: uuid.UUID, email: str, role: str) -> AccessTokenClaims:
        return AccessTokenClaims(
            sub=str(user_id),
            email=email,
            role=role,
            exp=_expiry(self.access_ttl),
        )

    def refresh_claims(self, user_id: uuid.UUID) -> RefreshTokenClaims:
        return RefreshTokenClaims(
            sub=str(user_id),
            exp=_expiry(self.refresh_ttl),
            jti=uuid.uuid4().hex,
        )

    async def issue_pair(self, user_id: uuid.UUID, email: str, role: str) -> tuple[str, str]:
        """액세스/리프레시 토큰 쌍을 동시에 발급합니다.

        Issue an access and a refresh token concurrently; both must
        complete before the pair is returned.

        Returns:
            tuple[str, str]: (액세스 토큰, 리프레시 토큰) (access token, refresh token)
        """
        access_token, refresh_token = await asyncio.gather(
            self.encode(self.access_claims(user_id, email, role), self.secret_for(TokenKind.ACCESS)),
            self.encode(self.refresh_claims(user_id), self.secret_for(TokenKind.REFRESH)),
        )
        return access_token, refresh_token
