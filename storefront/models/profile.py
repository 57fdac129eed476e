"""프로필 모델 — 사용자당 하나의 프로필.

Profile model — Personal details and display preferences, one row per user,
created together with the user at signup.
"""

import uuid
from datetime import date, datetime, timezone

from sqlalchemy import Date, DateTime, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storefront.database import Base

DEFAULT_LANGUAGE: str = "en"
DEFAULT_CURRENCY: str = "USD"


class Profile(Base):
    """프로필 테이블.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        user_id: 소유 사용자 ID (Owner user UUID, unique)
        first_name: 이름 (Given name)
        last_name: 성 (Family name)
        phone_number: 전화번호 (Phone number)
        birth_date: 생년월일 (Date of birth)
        language: 표시 언어 코드 (Display language code)
        currency: 표시 통화 코드 (Display currency code)
    """

    __tablename__ = "profiles"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    first_name: Mapped[str | None] = mapped_column(String(50), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(50), nullable=True)
    phone_number: Mapped[str | None] = mapped_column(String(20), nullable=True)
    birth_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    language: Mapped[str] = mapped_column(String(10), nullable=False, default=DEFAULT_LANGUAGE)
    currency: Mapped[str] = mapped_column(String(10), nullable=False, default=DEFAULT_CURRENCY)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    # Relationships
    user = relationship("User", back_populates="profile")
