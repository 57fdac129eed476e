"""접근 제어 헬퍼 — 본인 또는 관리자 확인.

Access helpers shared by the user, profile and address services.
"""

from uuid import UUID

from storefront.models.user import UserRole
from storefront.schemas.auth import AccessTokenClaims
from storefront.utils.exceptions import ForbiddenError


def is_admin(claims: AccessTokenClaims) -> bool:
    return claims.role == UserRole.ADMIN.value


def ensure_self_or_admin(claims: AccessTokenClaims, user_id: UUID) -> None:
    """본인 또는 관리자만 허용합니다 (Only the user themself or an admin).

    Raises:
        ForbiddenError: 권한 부족 (Caller is neither the user nor an admin)
    """
    if claims.user_id != user_id and not is_admin(claims):
        raise ForbiddenError()
