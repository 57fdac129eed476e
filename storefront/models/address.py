"""주소 모델 — 사용자별 배송지 목록.

Address model — Shipping addresses; a user may own any number of them.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storefront.database import Base


class Address(Base):
    """주소 테이블.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        user_id: 소유 사용자 ID (Owner user UUID)
        label: 별칭, 예: "집" (Optional label such as "home")
        address_line: 주소 본문 (Street address, required)
        city: 도시 (City)
        postal_code: 우편번호 (Postal code)
        country: 국가 (Country)
    """

    __tablename__ = "addresses"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    label: Mapped[str | None] = mapped_column(String(50), nullable=True)
    address_line: Mapped[str] = mapped_column(Text, nullable=False)
    city: Mapped[str | None] = mapped_column(String(30), nullable=True)
    postal_code: Mapped[str | None] = mapped_column(String(30), nullable=True)
    country: Mapped[str | None] = mapped_column(String(30), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    # Relationships
    user = relationship("User", back_populates="addresses")
