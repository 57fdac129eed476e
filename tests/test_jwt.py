"""JWT 코덱 테스트 — 서명, 만료, 키 분리, 클레임 검증.

TokenCodec tests — Signing, expiry, per-kind secrets and claim validation.
"""

import time
import uuid

import jwt
import pytest

from storefront.schemas.auth import AccessTokenClaims, RefreshTokenClaims
from storefront.utils.exceptions import InvalidTokenError, MissingSecretError
from storefront.utils.jwt import TokenCodec, TokenKind

from tests.conftest import make_settings


@pytest.fixture
def token_codec() -> TokenCodec:
    return TokenCodec(make_settings())


def _access(exp: int, sub: str | None = None) -> AccessTokenClaims:
    return AccessTokenClaims(
        sub=sub or str(uuid.uuid4()),
        email="alice@example.com",
        role="user",
        exp=exp,
    )


class TestCodecConstruction:
    """코덱 생성 테스트."""

    def test_missing_access_secret(self):
        """AT_SECRET이 비어 있으면 생성 실패."""
        with pytest.raises(MissingSecretError) as exc_info:
            TokenCodec(make_settings(AT_SECRET=""))
        assert exc_info.value.detail == "AT_SECRET not set"

    def test_missing_refresh_secret(self):
        """RT_SECRET이 비어 있으면 생성 실패."""
        with pytest.raises(MissingSecretError) as exc_info:
            TokenCodec(make_settings(RT_SECRET=""))
        assert exc_info.value.detail == "RT_SECRET not set"

    def test_lifetimes_from_settings(self):
        codec = TokenCodec(make_settings(ACCESS_TOKEN_EXPIRE_MINUTES=1, REFRESH_TOKEN_EXPIRE_DAYS=2))
        assert codec.access_ttl.total_seconds() == 60
        assert codec.refresh_ttl.days == 2


class TestEncodeDecode:
    """인코딩/디코딩 테스트."""

    async def test_round_trip(self, token_codec: TokenCodec):
        """인코딩 후 디코딩하면 같은 클레임."""
        claims = _access(int(time.time()) + 3600)
        secret = token_codec.secret_for(TokenKind.ACCESS)
        token = await token_codec.encode(claims, secret)
        decoded = await token_codec.decode(token, secret, AccessTokenClaims)
        assert decoded == claims

    async def test_expired_one_second_ago(self, token_codec: TokenCodec):
        """exp가 1초 전이면 만료."""
        secret = token_codec.secret_for(TokenKind.ACCESS)
        token = await token_codec.encode(_access(int(time.time()) - 1), secret)
        with pytest.raises(InvalidTokenError) as exc_info:
            await token_codec.decode(token, secret, AccessTokenClaims)
        assert exc_info.value.detail == "Token has expired"

    async def test_leeway_accepts_recently_expired(self):
        """허용 오차 안의 만료는 통과."""
        codec = TokenCodec(make_settings(TOKEN_LEEWAY_SECONDS=30))
        secret = codec.secret_for(TokenKind.ACCESS)
        token = await codec.encode(_access(int(time.time()) - 1), secret)
        decoded = await codec.decode(token, secret, AccessTokenClaims)
        assert decoded.email == "alice@example.com"

    async def test_wrong_secret(self, token_codec: TokenCodec):
        """다른 키로 서명된 토큰 거부."""
        claims = _access(int(time.time()) + 3600)
        token = await token_codec.encode(claims, "some-other-secret")
        with pytest.raises(InvalidTokenError) as exc_info:
            await token_codec.decode(token, token_codec.secret_for(TokenKind.ACCESS), AccessTokenClaims)
        assert exc_info.value.status_code == 401

    async def test_access_token_is_not_a_refresh_token(self, token_codec: TokenCodec):
        """액세스 토큰은 리프레시 키로 검증되지 않음."""
        access_token, _ = await token_codec.issue_pair(uuid.uuid4(), "alice@example.com", "user")
        with pytest.raises(InvalidTokenError):
            await token_codec.decode(
                access_token, token_codec.secret_for(TokenKind.REFRESH), RefreshTokenClaims
            )

    async def test_garbage_token(self, token_codec: TokenCodec):
        with pytest.raises(InvalidTokenError):
            await token_codec.decode("not.a.jwt", token_codec.secret_for(TokenKind.ACCESS), AccessTokenClaims)

    async def test_payload_missing_claim(self, token_codec: TokenCodec):
        """필수 클레임이 없으면 페이로드 오류."""
        secret = token_codec.secret_for(TokenKind.ACCESS)
        token = jwt.encode(
            {"sub": str(uuid.uuid4()), "exp": int(time.time()) + 3600},
            secret,
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenError) as exc_info:
            await token_codec.decode(token, secret, AccessTokenClaims)
        assert exc_info.value.detail == "Invalid token payload"

    async def test_non_uuid_subject_rejected(self, token_codec: TokenCodec):
        secret = token_codec.secret_for(TokenKind.REFRESH)
        token = jwt.encode(
            {"sub": "not-a-uuid", "exp": int(time.time()) + 3600, "jti": "x"},
            secret,
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenError):
            await token_codec.decode(token, secret, RefreshTokenClaims)

    async def test_missing_exp_rejected(self, token_codec: TokenCodec):
        """exp 없는 토큰은 거부."""
        secret = token_codec.secret_for(TokenKind.REFRESH)
        token = jwt.encode({"sub": str(uuid.uuid4()), "jti": "x"}, secret, algorithm="HS256")
        with pytest.raises(InvalidTokenError):
            await token_codec.decode(token, secret, RefreshTokenClaims)

    async def test_empty_secret_rejected(self, token_codec: TokenCodec):
        with pytest.raises(MissingSecretError):
            await token_codec.encode(_access(int(time.time()) + 60), "")


class TestIssuePair:
    """토큰 쌍 발급 테스트."""

    async def test_pair_claims(self, token_codec: TokenCodec):
        """쌍의 각 토큰이 자기 키로 검증되고 같은 사용자를 가리킴."""
        user_id = uuid.uuid4()
        access_token, refresh_token = await token_codec.issue_pair(user_id, "alice@example.com", "seller")

        access = await token_codec.decode(
            access_token, token_codec.secret_for(TokenKind.ACCESS), AccessTokenClaims
        )
        refresh = await token_codec.decode(
            refresh_token, token_codec.secret_for(TokenKind.REFRESH), RefreshTokenClaims
        )
        assert access.user_id == user_id
        assert access.role == "seller"
        assert refresh.user_id == user_id

    async def test_default_lifetimes(self, token_codec: TokenCodec):
        """기본 만료: 액세스 5분, 리프레시 7일."""
        now = int(time.time())
        access_token, refresh_token = await token_codec.issue_pair(uuid.uuid4(), "a@example.com", "user")
        access = jwt.decode(access_token, options={"verify_signature": False})
        refresh = jwt.decode(refresh_token, options={"verify_signature": False})
        assert abs(access["exp"] - (now + 5 * 60)) <= 2
        assert abs(refresh["exp"] - (now + 7 * 24 * 3600)) <= 2

    async def test_refresh_tokens_unique_within_same_second(self, token_codec: TokenCodec):
        """같은 초에 발급된 리프레시 토큰도 서로 다름."""
        user_id = uuid.uuid4()
        _, first = await token_codec.issue_pair(user_id, "a@example.com", "user")
        _, second = await token_codec.issue_pair(user_id, "a@example.com", "user")
        assert first != second
