"""비밀번호 해셔 테스트 — bcrypt 해싱/검증 및 리프레시 토큰 해시.

PasswordHasher tests — bcrypt hashing and verification, refresh-token digests.
"""

import pytest

from storefront.utils.exceptions import HashingError
from storefront.utils.password import PasswordHasher, hash_password, prehash, verify_password

from tests.conftest import TEST_ROUNDS


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=TEST_ROUNDS)


class TestPasswordHashing:
    """비밀번호 해싱 테스트."""

    async def test_hash_then_verify(self, hasher: PasswordHasher):
        """해시 후 같은 평문으로 검증 성공."""
        digest = await hasher.hash("Secret1")
        assert digest != "Secret1"
        assert await hasher.verify("Secret1", digest) is True

    async def test_verify_wrong_password(self, hasher: PasswordHasher):
        """다른 평문은 False — 예외 아님."""
        digest = await hasher.hash("Secret1")
        assert await hasher.verify("Secret2", digest) is False

    async def test_same_input_different_salts(self, hasher: PasswordHasher):
        """같은 입력도 솔트가 달라 다른 해시."""
        first = await hasher.hash("Secret1")
        second = await hasher.hash("Secret1")
        assert first != second
        assert await hasher.verify("Secret1", second) is True

    async def test_cost_factor_is_applied(self, hasher: PasswordHasher):
        """설정된 cost가 다이제스트에 기록됨."""
        digest = await hasher.hash("Secret1")
        assert digest.startswith("$2b$04$")

    async def test_malformed_digest_raises(self, hasher: PasswordHasher):
        """형식이 잘못된 다이제스트는 HashingError, 원인 메시지는 숨김."""
        with pytest.raises(HashingError) as exc_info:
            await hasher.verify("Secret1", "not-a-bcrypt-hash")
        assert exc_info.value.status_code == 500
        assert exc_info.value.detail == "Invalid hash"

    async def test_long_input_is_a_plain_mismatch(self, hasher: PasswordHasher):
        """72바이트를 넘는 입력도 예외 없이 불일치."""
        digest = await hasher.hash("Secret1")
        assert await hasher.verify("x" * 100, digest) is False

    async def test_multibyte_password(self, hasher: PasswordHasher):
        """멀티바이트 비밀번호(120바이트) 해시/검증."""
        password = "비밀번호" * 10
        digest = await hasher.hash(password)
        assert await hasher.verify(password, digest) is True
        assert await hasher.verify("비밀번호" * 9, digest) is False

    def test_sync_helpers_interoperate(self):
        """동기 헬퍼와 비동기 해셔가 같은 형식 사용."""
        digest = hash_password("Secret1", TEST_ROUNDS)
        assert verify_password("Secret1", digest)
        assert not verify_password("secret1", digest)


class TestLongSecrets:
    """72바이트를 넘는 비밀 값(리프레시 토큰) 테스트."""

    async def test_long_token_round_trip(self, hasher: PasswordHasher):
        """긴 토큰도 해시/검증 가능."""
        token = "a" * 300
        digest = await hasher.hash(token)
        assert await hasher.verify(token, digest) is True

    async def test_tokens_differing_after_72_bytes(self, hasher: PasswordHasher):
        """앞 72바이트가 같아도 다른 토큰은 구분됨."""
        prefix = "x" * 100
        digest = await hasher.hash(prefix + "first")
        assert await hasher.verify(prefix + "second", digest) is False

    def test_prehash_is_fixed_length_hex(self):
        digest = prehash("header.payload.signature")
        assert len(digest) == 64
        assert int(digest, 16) >= 0
