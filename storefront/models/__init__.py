"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package ensures all models are registered with the
SQLAlchemy metadata, which is required for ``create_all`` and
relationship resolution.

Modules:
    user: 사용자 및 세션 상태 (Users and their session state)
    cart: 장바구니 (One cart per user)
    profile: 프로필 (One profile per user)
    address: 배송지 (Any number of addresses per user)
"""

from storefront.models.user import User, UserRole
from storefront.models.cart import Cart
from storefront.models.profile import Profile
from storefront.models.address import Address

__all__ = [
    "User", "UserRole",
    "Cart",
    "Profile",
    "Address",
]
