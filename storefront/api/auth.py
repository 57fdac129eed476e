"""인증 라우터 — 로그인, 토큰 갱신, 로그아웃.

Auth Router — Login, token refresh and logout endpoints.
Refresh takes the refresh token as its bearer credential; logout takes the
access token.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.deps import (
    AccessClaims,
    RefreshClaims,
    get_bearer_token,
    get_session_service,
)
from storefront.database import get_db
from storefront.schemas.auth import LoginRequest, TokenResponse
from storefront.services.auth_service import SessionService
from storefront.utils.exceptions import RefreshTokenReuseError

router: APIRouter = APIRouter()


@router.post("/login", response_model=TokenResponse)
async def login(
    data: LoginRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    service: Annotated[SessionService, Depends(get_session_service)],
) -> TokenResponse:
    """로그인 — 이메일/비밀번호로 토큰 쌍 발급.

    Login endpoint. Issues an access/refresh pair and starts a new session,
    replacing any previous one.
    """
    result: TokenResponse = await service.login(db, data.email, data.password)
    await db.commit()
    return result


@router.post("/refresh", response_model=TokenResponse)
async def refresh_token(
    claims: RefreshClaims,
    token: Annotated[str, Depends(get_bearer_token)],
    db: Annotated[AsyncSession, Depends(get_db)],
    service: Annotated[SessionService, Depends(get_session_service)],
) -> TokenResponse:
    """토큰 갱신 — 리프레시 토큰으로 새 토큰 쌍 발급 (회전).

    Refresh endpoint. Redeems the bearer refresh token for a new pair and
    invalidates it.
    """
    try:
        result: TokenResponse = await service.refresh(db, claims, token)
    except RefreshTokenReuseError:
        # 폐기는 요청 실패와 무관하게 저장 — The revocation outlives the failed request
        await db.commit()
        raise
    await db.commit()
    return result


@router.post("/logout")
async def logout(
    claims: AccessClaims,
    db: Annotated[AsyncSession, Depends(get_db)],
    service: Annotated[SessionService, Depends(get_session_service)],
) -> Response:
    """로그아웃 — 저장된 세션 해시 제거.

    Logout endpoint. Ends the caller's session; calling it twice is harmless.
    """
    await service.logout(db, claims)
    await db.commit()
    return Response(status_code=status.HTTP_200_OK)
