"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Provides pre-configured HTTPException subclasses for common error patterns,
including the authentication failures raised by the password hasher, the
token codec, the bearer guards and the session service.

Usage:
    from storefront.utils.exceptions import NotFoundError, InvalidTokenError
    raise NotFoundError("User not found")
    raise InvalidTokenError()
"""

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """404 Not Found 예외 — 요청한 리소스를 찾을 수 없을 때 사용.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource not found")
    """

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class DuplicateError(HTTPException):
    """409 Conflict 예외 — 중복 리소스 생성 시도 시 사용.

    Raised when attempting to create a resource that violates a uniqueness
    constraint (e.g. an email that is already registered).

    Args:
        detail: 오류 메시지 (Error message, default: "Resource already exists")
    """

    def __init__(self, detail: str = "Resource already exists") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class ForbiddenError(HTTPException):
    """403 Forbidden 예외 — 권한 부족 시 사용.

    Args:
        detail: 오류 메시지 (Error message, default: "Insufficient permissions")
    """

    def __init__(self, detail: str = "Insufficient permissions") -> None:
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class UnauthorizedError(HTTPException):
    """401 Unauthorized 예외 — 인증 실패 시 사용.

    401 Unauthorized exception.
    Raised for wrong credentials and for sessions that cannot be refreshed.
    Carries the ``WWW-Authenticate: Bearer`` challenge header.

    Args:
        detail: 오류 메시지 (Error message, default: "Authentication required")
    """

    def __init__(self, detail: str = "Authentication required") -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class InvalidTokenError(UnauthorizedError):
    """401 — 토큰 누락, 서명 불일치, 형식 오류 또는 만료.

    Missing or malformed bearer header, bad signature, malformed payload
    or expired token.
    """

    def __init__(self, detail: str = "Invalid token") -> None:
        super().__init__(detail=detail)


class BadRequestError(HTTPException):
    """400 Bad Request 예외 — 잘못된 요청 데이터 시 사용.

    Raised when the request data is invalid beyond what Pydantic validation catches.

    Args:
        detail: 오류 메시지 (Error message, default: "Bad request")
    """

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class InternalError(HTTPException):
    """500 Internal Server Error 예외 — 복구 불가능한 서버 측 오류.

    Base class for server-side failures that end the current request.

    Args:
        detail: 오류 메시지 (Error message, default: "Internal server error")
    """

    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


class HashingError(InternalError):
    """500 — bcrypt 해싱/검증 실패 (malformed digest or primitive failure)."""

    def __init__(self, detail: str = "Hashing failed") -> None:
        super().__init__(detail=detail)


class TokenCreationError(InternalError):
    """500 — JWT 직렬화/서명 실패 (Token serialisation or signing failed)."""

    def __init__(self, detail: str = "Token creation error") -> None:
        super().__init__(detail=detail)


class MissingSecretError(InternalError):
    """500 — 토큰 서명 키 미설정 (Token signing secret is not configured)."""

    def __init__(self, detail: str = "Token secret must be set") -> None:
        super().__init__(detail=detail)


class RefreshTokenReuseError(UnauthorizedError):
    """401 — 회전된 리프레시 토큰 재사용으로 세션이 폐기됨.

    A stale refresh token was presented and the session was cleared. The
    revocation is pending in the session; the handler commits it before the
    error propagates.
    """

    def __init__(self, detail: str = "Invalid refresh token") -> None:
        super().__init__(detail=detail)
