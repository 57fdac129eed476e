"""프로필 관련 Pydantic 요청/응답 스키마 정의.

Profile request/response schemas. Updates are partial; language and currency
may be changed but never cleared.
"""

from datetime import date

from pydantic import BaseModel, Field, field_validator


class ProfileUpdate(BaseModel):
    """프로필 수정 요청 스키마 (부분 업데이트).

    Profile update request schema (partial update). Name, phone and birth
    date may be set to null to clear them.
    """

    first_name: str | None = Field(default=None, max_length=50)
    last_name: str | None = Field(default=None, max_length=50)
    phone_number: str | None = Field(default=None, max_length=20)
    birth_date: date | None = None
    language: str | None = Field(default=None, min_length=2, max_length=10)
    currency: str | None = Field(default=None, min_length=3, max_length=10)

    @field_validator("language", "currency")
    @classmethod
    def not_null(cls, value: str | None) -> str:
        # 명시적 null 거부 — Explicit null is rejected; omit the field instead
        if value is None:
            raise ValueError("Field cannot be null")
        return value


class ProfileResponse(BaseModel):
    """프로필 응답 스키마.

    Attributes:
        id: 프로필 UUID (Profile unique identifier)
        user_id: 소유 사용자 UUID (Owner user UUID)
        language: 표시 언어 코드 (Display language code)
        currency: 표시 통화 코드 (Display currency code)
    """

    id: str
    user_id: str
    first_name: str | None = None
    last_name: str | None = None
    phone_number: str | None = None
    birth_date: date | None = None
    language: str
    currency: str
