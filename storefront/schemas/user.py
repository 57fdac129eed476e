"""사용자 관련 Pydantic 요청/응답 스키마 정의.

User Pydantic request/response schema definitions.
Covers signup, partial update (email and/or password), and the "safe"
user views that never expose password or session hashes.
"""

from datetime import date
from typing import Annotated

from pydantic import AfterValidator, BaseModel, EmailStr, Field

# users.email 컬럼 길이 — Width of the users.email column
EMAIL_MAX_LENGTH: int = 40


def _check_email_length(value: str) -> str:
    if len(value) > EMAIL_MAX_LENGTH:
        raise ValueError(f"Email must be at most {EMAIL_MAX_LENGTH} characters")
    return value


# 저장 가능한 이메일 — An email address that fits the users table
Email = Annotated[EmailStr, AfterValidator(_check_email_length)]


class UserCreate(BaseModel):
    """회원가입 요청 스키마.

    Signup request schema. Creates a user with the default "user" role and
    an empty cart.

    Attributes:
        email: 이메일 (Email address, globally unique)
        password: 비밀번호 (Plain text, will be bcrypt-hashed, 6-50 chars)
    """

    email: Email  # 이메일 — 전역 고유, 최대 40자 (Login email, unique, max 40 chars)
    password: str = Field(
        min_length=6,
        max_length=50,
        description="Your password should be at least 6 symbols long",
    )


class UserUpdate(BaseModel):
    """사용자 수정 요청 스키마 (부분 업데이트).

    User update request schema (partial update).
    Changing the password requires the current password.

    Attributes:
        email: 새 이메일 (New email, optional)
        current_password: 현재 비밀번호 (Current password, required with new_password)
        new_password: 새 비밀번호 (New password, optional)
    """

    email: Email | None = None
    current_password: str | None = Field(default=None, min_length=6)
    new_password: str | None = Field(default=None, min_length=6, max_length=50)


class CartResponse(BaseModel):
    """장바구니 응답 스키마 (Cart summary)."""

    id: int
    updated_at: date


class UserResponse(BaseModel):
    """사용자 응답 스키마 — 비밀번호/세션 해시 제외.

    Safe user view returned from the API.

    Attributes:
        id: 사용자 UUID (User unique identifier)
        email: 이메일 (Email address)
        role: 역할 태그 (Role tag)
    """

    id: str
    email: str
    role: str


class UserWithCartResponse(UserResponse):
    """사용자 + 장바구니 응답 스키마 (GET /users, GET /users/me)."""

    cart: CartResponse
