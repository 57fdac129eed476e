"""사용자 관련 SQLAlchemy ORM 모델 정의.

User SQLAlchemy ORM model definition.
The user row doubles as the session store: ``refresh_token_hash`` holds the
hash of the single refresh token currently redeemable for this user.

Tables:
    - users: 사용자 계정 및 세션 상태 (User accounts and session state)
"""

import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storefront.database import Base


class UserRole(str, enum.Enum):
    """사용자 역할 — 액세스 토큰 클레임에 포함되는 권한 태그.

    Coarse authorization tag embedded in access-token claims.
    """

    USER = "user"
    SELLER = "seller"
    ADMIN = "admin"


class User(Base):
    """사용자 모델 — 계정 정보와 현재 세션 해시.

    User model — Account information and the current session hash.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        email: 이메일, 전역 고유 (Email address, globally unique)
        password_hash: bcrypt 해시된 비밀번호 (bcrypt-hashed password)
        refresh_token_hash: 현재 리프레시 토큰 해시, None이면 세션 없음
                            (Hash of the current refresh token; None means no active session)
        role: 역할 태그 (Role tag, see UserRole)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)

    Relationships:
        cart: 사용자 장바구니 (The user's cart, cascade delete)
        profile: 사용자 프로필 (The user's profile, cascade delete)
        addresses: 배송지 목록 (Shipping addresses, cascade delete)
    """

    __tablename__ = "users"

    # 사용자 고유 식별자 — User unique identifier (UUID v4, auto-generated)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 이메일 — Login identifier (전역 고유, globally unique)
    email: Mapped[str] = mapped_column(String(40), unique=True, nullable=False)
    # 비밀번호 해시 — bcrypt hashed password (평문 저장 금지, never store plaintext)
    password_hash: Mapped[str] = mapped_column(String(100), nullable=False)
    # 리프레시 토큰 해시 — 사용자당 최대 하나 (At most one valid hash per user)
    refresh_token_hash: Mapped[str | None] = mapped_column(Text, nullable=True)
    # 역할 — Role tag
    role: Mapped[str] = mapped_column(String(10), nullable=False, default=UserRole.USER.value)
    # 생성 일시 — Record creation timestamp (UTC)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    # 수정 일시 — Last modification timestamp (UTC, auto-updated)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    # 관계 — Relationships
    cart = relationship("Cart", back_populates="user", uselist=False, cascade="all, delete-orphan")
    profile = relationship("Profile", back_populates="user", uselist=False, cascade="all, delete-orphan")
    addresses = relationship("Address", back_populates="user", cascade="all, delete-orphan")
