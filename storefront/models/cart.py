"""장바구니 모델 — 사용자당 하나의 장바구니.

Cart model — One cart per user, created together with the user at signup.
"""

import uuid
from datetime import date, datetime, timezone

from sqlalchemy import Date, ForeignKey, Integer, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storefront.database import Base


class Cart(Base):
    """장바구니 테이블.

    Cart table. Rows are created by signup and removed with their user.

    Attributes:
        id: 고유 식별자 (Autoincrement primary key)
        user_id: 소유 사용자 ID (Owner user UUID, unique)
        updated_at: 마지막 변경 일자 (Date of the last change)
    """

    __tablename__ = "carts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    updated_at: Mapped[date] = mapped_column(
        Date, default=lambda: datetime.now(timezone.utc).date()
    )

    # Relationships
    user = relationship("User", back_populates="cart")
