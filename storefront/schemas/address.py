"""주소 관련 Pydantic 요청/응답 스키마 정의.

Address request/response schemas. Field widths match the addresses table.
"""

from pydantic import BaseModel, Field, field_validator


class AddressCreate(BaseModel):
    """주소 생성 요청 스키마.

    Attributes:
        label: 별칭 (Optional label, max 50 chars)
        address_line: 주소 본문 (Street address, required)
        city: 도시 (City, max 30 chars)
        postal_code: 우편번호 (Postal code, max 30 chars)
        country: 국가 (Country, max 30 chars)
    """

    label: str | None = Field(default=None, max_length=50)
    address_line: str = Field(min_length=1)
    city: str | None = Field(default=None, max_length=30)
    postal_code: str | None = Field(default=None, max_length=30)
    country: str | None = Field(default=None, max_length=30)


class AddressUpdate(BaseModel):
    """주소 수정 요청 스키마 (부분 업데이트)."""

    label: str | None = Field(default=None, max_length=50)
    address_line: str | None = Field(default=None, min_length=1)
    city: str | None = Field(default=None, max_length=30)
    postal_code: str | None = Field(default=None, max_length=30)
    country: str | None = Field(default=None, max_length=30)

    @field_validator("address_line")
    @classmethod
    def not_null(cls, value: str | None) -> str:
        if value is None:
            raise ValueError("Field cannot be null")
        return value


class AddressResponse(BaseModel):
    """주소 응답 스키마 (Address view)."""

    id: str
    user_id: str
    label: str | None = None
    address_line: str
    city: str | None = None
    postal_code: str | None = None
    country: str | None = None
