"""인증 API 테스트 — 로그인, 토큰 갱신(회전), 로그아웃.

Auth API tests — Login, refresh-token rotation and logout, including the
session state machine edge cases (reuse of a rotated token, logout, re-login).
"""

import time
import uuid

import pytest
from fastapi import FastAPI
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.repositories.user_repository import user_repository
from storefront.schemas.auth import AccessTokenClaims, RefreshTokenClaims
from storefront.utils.exceptions import RefreshTokenReuseError
from storefront.utils.jwt import TokenCodec, TokenKind

from tests.conftest import auth_header, login, make_settings, stored_hash

AUTH = "/api/auth"


# ===== Login =====

class TestLogin:
    """로그인 테스트."""

    async def test_login_success(self, client: AsyncClient, alice, db: AsyncSession):
        """로그인 성공 — 토큰 쌍과 저장된 세션 해시."""
        res = await client.post(f"{AUTH}/login", json={
            "email": "alice@example.com",
            "password": "Secret1",
        })
        assert res.status_code == 200
        data = res.json()
        assert data["access_token"]
        assert data["refresh_token"]
        assert data["token_type"] == "bearer"
        assert await stored_hash(db, alice) is not None

    async def test_login_access_token_claims(self, client: AsyncClient, alice, codec: TokenCodec):
        """액세스 토큰의 sub/email/role 확인."""
        tokens = await login(client, "alice@example.com", "Secret1")
        claims = await codec.decode(
            tokens["access_token"], codec.secret_for(TokenKind.ACCESS), AccessTokenClaims
        )
        assert claims.user_id == alice.id
        assert claims.email == "alice@example.com"
        assert claims.role == "user"

    async def test_login_wrong_password(self, client: AsyncClient, alice, db: AsyncSession):
        """잘못된 비밀번호로 로그인 실패."""
        res = await client.post(f"{AUTH}/login", json={
            "email": "alice@example.com",
            "password": "wrong-password",
        })
        assert res.status_code == 401
        assert res.json()["detail"] == "Invalid email or password"
        assert await stored_hash(db, alice) is None

    async def test_login_unknown_email(self, client: AsyncClient):
        """존재하지 않는 이메일 — 비밀번호 오류와 같은 응답."""
        res = await client.post(f"{AUTH}/login", json={
            "email": "nobody@example.com",
            "password": "Secret1",
        })
        assert res.status_code == 401
        assert res.json()["detail"] == "Invalid email or password"

    async def test_login_long_password(self, client: AsyncClient, alice):
        """72바이트를 넘는 비밀번호는 단순 불일치로 401."""
        res = await client.post(f"{AUTH}/login", json={
            "email": "alice@example.com",
            "password": "x" * 100,
        })
        assert res.status_code == 401
        assert res.json()["detail"] == "Invalid email or password"

    async def test_login_invalid_email_format(self, client: AsyncClient):
        """이메일 형식 오류는 422."""
        res = await client.post(f"{AUTH}/login", json={"email": "alice", "password": "Secret1"})
        assert res.status_code == 422

    async def test_wrong_password_keeps_existing_session(self, client: AsyncClient, alice):
        """잘못된 로그인 시도는 기존 세션에 영향 없음."""
        tokens = await login(client, "alice@example.com", "Secret1")
        res = await client.post(f"{AUTH}/login", json={
            "email": "alice@example.com",
            "password": "wrong-password",
        })
        assert res.status_code == 401

        res = await client.post(f"{AUTH}/refresh", headers=auth_header(tokens["refresh_token"]))
        assert res.status_code == 200

    async def test_relogin_replaces_session(self, client: AsyncClient, alice):
        """재로그인하면 이전 리프레시 토큰은 무효."""
        first = await login(client, "alice@example.com", "Secret1")
        second = await login(client, "alice@example.com", "Secret1")

        res = await client.post(f"{AUTH}/refresh", headers=auth_header(first["refresh_token"]))
        assert res.status_code == 401
        assert res.json()["detail"] == "Invalid refresh token"

        res = await client.post(f"{AUTH}/refresh", headers=auth_header(second["refresh_token"]))
        assert res.status_code == 200


# ===== Refresh =====

class TestRefresh:
    """토큰 갱신 테스트."""

    async def test_refresh_success(self, client: AsyncClient, alice, db: AsyncSession):
        """갱신 성공 — 새 토큰 쌍, 저장된 해시 교체."""
        tokens = await login(client, "alice@example.com", "Secret1")
        before = await stored_hash(db, alice)

        res = await client.post(f"{AUTH}/refresh", headers=auth_header(tokens["refresh_token"]))
        assert res.status_code == 200
        data = res.json()
        assert data["refresh_token"] != tokens["refresh_token"]
        assert await stored_hash(db, alice) not in (None, before)

    async def test_rotated_token_cannot_be_reused(self, client: AsyncClient, alice):
        """회전된 토큰 재사용 실패, 새 토큰은 사용 가능."""
        r1 = (await login(client, "alice@example.com", "Secret1"))["refresh_token"]

        res = await client.post(f"{AUTH}/refresh", headers=auth_header(r1))
        assert res.status_code == 200
        r2 = res.json()["refresh_token"]

        res = await client.post(f"{AUTH}/refresh", headers=auth_header(r1))
        assert res.status_code == 401
        assert res.json()["detail"] == "Invalid refresh token"

        res = await client.post(f"{AUTH}/refresh", headers=auth_header(r2))
        assert res.status_code == 200

    async def test_refresh_without_token(self, client: AsyncClient):
        """Authorization 헤더 없이 갱신 시 401."""
        res = await client.post(f"{AUTH}/refresh")
        assert res.status_code == 401
        assert res.headers["www-authenticate"] == "Bearer"

    async def test_refresh_with_access_token(self, client: AsyncClient, alice):
        """액세스 토큰으로 갱신 시도 시 401."""
        tokens = await login(client, "alice@example.com", "Secret1")
        res = await client.post(f"{AUTH}/refresh", headers=auth_header(tokens["access_token"]))
        assert res.status_code == 401

    async def test_refresh_with_garbage_token(self, client: AsyncClient):
        res = await client.post(f"{AUTH}/refresh", headers=auth_header("garbage"))
        assert res.status_code == 401

    async def test_refresh_before_login(self, client: AsyncClient, alice, codec: TokenCodec):
        """세션이 없는 사용자의 유효한 토큰 — 로그인 필요."""
        _, refresh_token = await codec.issue_pair(alice.id, alice.email, alice.role)
        res = await client.post(f"{AUTH}/refresh", headers=auth_header(refresh_token))
        assert res.status_code == 401
        assert res.json()["detail"] == "Please, use login instead"

    async def test_refresh_unknown_user(self, client: AsyncClient, codec: TokenCodec):
        """존재하지 않는 사용자의 토큰."""
        _, refresh_token = await codec.issue_pair(uuid.uuid4(), "ghost@example.com", "user")
        res = await client.post(f"{AUTH}/refresh", headers=auth_header(refresh_token))
        assert res.status_code == 401
        assert res.json()["detail"] == "User not found"

    async def test_rotation_conflict(
        self, app: FastAPI, client: AsyncClient, alice, db: AsyncSession, monkeypatch
    ):
        """검증과 교체 사이에 다른 요청이 먼저 회전하면 401."""
        tokens = await login(client, "alice@example.com", "Secret1")
        hasher = app.state.session_service.hasher
        verify = hasher.verify

        async def verify_then_rotate_elsewhere(plaintext: str, digest: str) -> bool:
            matched = await verify(plaintext, digest)
            await user_repository.set_refresh_token_hash(db, alice.id, "rotated-elsewhere")
            return matched

        monkeypatch.setattr(hasher, "verify", verify_then_rotate_elsewhere)
        res = await client.post(f"{AUTH}/refresh", headers=auth_header(tokens["refresh_token"]))
        assert res.status_code == 401
        assert res.json()["detail"] == "Refresh token has already been rotated"
        assert await stored_hash(db, alice) == "rotated-elsewhere"


class TestSwapRefreshTokenHash:
    """세션 해시 compare-and-swap 테스트."""

    async def test_swap_matching_hash(self, db: AsyncSession, alice):
        await user_repository.set_refresh_token_hash(db, alice.id, "h1")
        assert await user_repository.swap_refresh_token_hash(db, alice.id, "h1", "h2") is True
        assert await stored_hash(db, alice) == "h2"

    async def test_swap_stale_hash(self, db: AsyncSession, alice):
        """이미 교체된 해시로는 교체 불가."""
        await user_repository.set_refresh_token_hash(db, alice.id, "h1")
        await user_repository.swap_refresh_token_hash(db, alice.id, "h1", "h2")
        assert await user_repository.swap_refresh_token_hash(db, alice.id, "h1", "h3") is False
        assert await stored_hash(db, alice) == "h2"


class TestRevokeOnReuse:
    """REVOKE_ON_REFRESH_REUSE 활성화 시 재사용 탐지."""

    @pytest.fixture
    def settings(self):
        return make_settings(REVOKE_ON_REFRESH_REUSE=True)

    async def test_reuse_revokes_session(self, client: AsyncClient, alice, db: AsyncSession):
        """회전된 토큰 재사용 시 세션 전체 폐기."""
        r1 = (await login(client, "alice@example.com", "Secret1"))["refresh_token"]
        res = await client.post(f"{AUTH}/refresh", headers=auth_header(r1))
        r2 = res.json()["refresh_token"]

        res = await client.post(f"{AUTH}/refresh", headers=auth_header(r1))
        assert res.status_code == 401
        assert await stored_hash(db, alice) is None

        res = await client.post(f"{AUTH}/refresh", headers=auth_header(r2))
        assert res.status_code == 401
        assert res.json()["detail"] == "Please, use login instead"

    async def test_service_raises_reuse_error(
        self, app: FastAPI, client: AsyncClient, alice, db: AsyncSession, codec: TokenCodec
    ):
        """서비스는 커밋하지 않고 전용 예외로 폐기를 알림."""
        r1 = (await login(client, "alice@example.com", "Secret1"))["refresh_token"]
        await client.post(f"{AUTH}/refresh", headers=auth_header(r1))
        claims = await codec.decode(r1, codec.secret_for(TokenKind.REFRESH), RefreshTokenClaims)

        with pytest.raises(RefreshTokenReuseError) as exc_info:
            await app.state.session_service.refresh(db, claims, r1)
        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Invalid refresh token"
        assert await stored_hash(db, alice) is None


# ===== Logout =====

class TestLogout:
    """로그아웃 테스트."""

    async def test_logout_clears_session(self, client: AsyncClient, alice, db: AsyncSession):
        """로그아웃 후 갱신 불가."""
        tokens = await login(client, "alice@example.com", "Secret1")

        res = await client.post(f"{AUTH}/logout", headers=auth_header(tokens["access_token"]))
        assert res.status_code == 200
        assert res.content == b""
        assert await stored_hash(db, alice) is None

        res = await client.post(f"{AUTH}/refresh", headers=auth_header(tokens["refresh_token"]))
        assert res.status_code == 401
        assert res.json()["detail"] == "Please, use login instead"

    async def test_logout_twice(self, client: AsyncClient, alice):
        """로그아웃은 멱등."""
        tokens = await login(client, "alice@example.com", "Secret1")
        for _ in range(2):
            res = await client.post(f"{AUTH}/logout", headers=auth_header(tokens["access_token"]))
            assert res.status_code == 200

    async def test_logout_without_token(self, client: AsyncClient):
        res = await client.post(f"{AUTH}/logout")
        assert res.status_code == 401

    async def test_logout_with_refresh_token(self, client: AsyncClient, alice):
        """리프레시 토큰으로 로그아웃 시도 시 401."""
        tokens = await login(client, "alice@example.com", "Secret1")
        res = await client.post(f"{AUTH}/logout", headers=auth_header(tokens["refresh_token"]))
        assert res.status_code == 401

    async def test_access_token_outlives_logout(self, client: AsyncClient, alice):
        """액세스 토큰은 만료 전까지 유효 (서버 조회 없음)."""
        tokens = await login(client, "alice@example.com", "Secret1")
        await client.post(f"{AUTH}/logout", headers=auth_header(tokens["access_token"]))

        res = await client.get("/api/users/me", headers=auth_header(tokens["access_token"]))
        assert res.status_code == 200

    async def test_expired_access_token(self, client: AsyncClient, alice, codec: TokenCodec):
        """만료된 액세스 토큰은 401."""
        claims = AccessTokenClaims(
            sub=str(alice.id),
            email=alice.email,
            role=alice.role,
            exp=int(time.time()) - 1,
        )
        token = await codec.encode(claims, codec.secret_for(TokenKind.ACCESS))
        res = await client.post(f"{AUTH}/logout", headers=auth_header(token))
        assert res.status_code == 401
        assert res.json()["detail"] == "Token has expired"


# ===== Full session scenario =====

class TestSessionLifecycle:
    """로그인 → 갱신 → 로그아웃 → 재로그인 전체 흐름."""

    async def test_full_cycle(self, client: AsyncClient, alice):
        tokens = await login(client, "alice@example.com", "Secret1")

        res = await client.post(f"{AUTH}/refresh", headers=auth_header(tokens["refresh_token"]))
        assert res.status_code == 200
        rotated = res.json()

        res = await client.post(f"{AUTH}/logout", headers=auth_header(rotated["access_token"]))
        assert res.status_code == 200

        res = await client.post(f"{AUTH}/refresh", headers=auth_header(rotated["refresh_token"]))
        assert res.status_code == 401

        tokens = await login(client, "alice@example.com", "Secret1")
        res = await client.post(f"{AUTH}/refresh", headers=auth_header(tokens["refresh_token"]))
        assert res.status_code == 200
