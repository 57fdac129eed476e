"""비밀번호 해싱 및 검증 유틸리티 모듈.

Password hashing and verification utility module.
Uses bcrypt directly for secure credential storage. bcrypt is deliberately
slow, so the async ``PasswordHasher`` runs every call in a worker thread to
keep the event loop free.

bcrypt only reads the first 72 bytes of its input (bcrypt 5 rejects anything
longer). Every secret, password or refresh token, is therefore reduced to a
64-character SHA-256 hex digest (``prehash``) before it reaches bcrypt, so
length and encoding never change the outcome.
"""

import asyncio
import hashlib

import bcrypt

from storefront.utils.exceptions import HashingError

DEFAULT_ROUNDS: int = 12


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """평문 비밀번호를 bcrypt 해시로 변환합니다.

    Hash a plain text password using bcrypt.
    The resulting hash includes a random salt, making each hash unique
    even for identical passwords.

    Args:
        password: 평문 비밀번호 (Plain text password to hash)
        rounds: bcrypt 작업 계수 (bcrypt cost factor)

    Returns:
        str: bcrypt 해시 문자열 (Bcrypt hash string, ~60 chars)

    Example:
        hashed = hash_password("my-secret-password")
        # "$2b$12$LJ3m4ys3..."
    """
    return bcrypt.hashpw(
        prehash(password).encode("ascii"), bcrypt.gensalt(rounds=rounds)
    ).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """평문 비밀번호와 bcrypt 해시를 비교 검증합니다.

    Verify a plain text password against a bcrypt hash.
    Uses constant-time comparison to prevent timing attacks.

    Args:
        plain_password: 검증할 평문 비밀번호 (Plain text password to verify)
        hashed_password: 저장된 bcrypt 해시 (Stored bcrypt hash to compare against)

    Returns:
        bool: 일치하면 True, 불일치하면 False (True if password matches hash)

    Raises:
        ValueError: 해시 형식이 잘못된 경우 (Malformed hash)
    """
    return bcrypt.checkpw(
        prehash(plain_password).encode("ascii"), hashed_password.encode("utf-8")
    )


def prehash(secret: str) -> str:
    """비밀 값을 bcrypt 입력 길이(72바이트) 안으로 축약합니다.

    Reduce an arbitrary-length secret to a 64-character SHA-256 hex digest.
    """
    return hashlib.sha256(secret.encode("utf-8")).hexdigest()


class PasswordHasher:
    """비동기 bcrypt 해셔 — 워커 스레드에서 해싱을 수행.

    Async bcrypt wrapper. ``hash`` and ``verify`` run on a worker thread
    via ``asyncio.to_thread`` and translate primitive failures into
    ``HashingError``.

    Attributes:
        rounds: bcrypt 작업 계수 (bcrypt cost factor)
    """

    def __init__(self, rounds: int = DEFAULT_ROUNDS) -> None:
        self.rounds: int = rounds

    async def hash(self, plaintext: str) -> str:
        """평문을 솔트가 포함된 bcrypt 다이제스트로 변환합니다.

        Args:
            plaintext: 해싱할 평문 (Plain text to hash)

        Returns:
            str: bcrypt 다이제스트 (bcrypt digest)

        Raises:
            HashingError: bcrypt가 입력을 거부한 경우 (bcrypt rejected the input)
        """
        try:
            return await asyncio.to_thread(hash_password, plaintext, self.rounds)
        except ValueError as exc:
            raise HashingError() from exc

    async def verify(self, plaintext: str, digest: str) -> bool:
        """평문이 다이제스트와 일치하는지 검증합니다.

        Args:
            plaintext: 검증할 평문 (Plain text to verify)
            digest: 저장된 bcrypt 다이제스트 (Stored bcrypt digest)

        Returns:
            bool: 일치 여부 (False on mismatch)

        Raises:
            HashingError: 다이제스트 형식이 잘못된 경우 (Malformed digest)
        """
        try:
            return await asyncio.to_thread(verify_password, plaintext, digest)
        except ValueError as exc:
            raise HashingError("Invalid hash") from exc
