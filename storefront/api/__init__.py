"""API 라우터 패키지 — 모든 엔드포인트 통합.

API Router package — Aggregates all endpoints into a single router for
inclusion in the FastAPI application under ``/api``.

Included routers:
    - auth: 로그인, 토큰 갱신, 로그아웃 (Login, refresh, logout)
    - users: 회원가입 및 사용자 관리 (Signup and user management)
    - profiles: 프로필 조회/수정 (Profiles)
    - addresses: 배송지 관리 (Shipping addresses)
"""

from fastapi import APIRouter

from storefront.api.addresses import router as addresses_router
from storefront.api.auth import router as auth_router
from storefront.api.profiles import router as profiles_router
from storefront.api.users import router as users_router

api_router: APIRouter = APIRouter()

api_router.include_router(auth_router, prefix="/auth", tags=["Auth"])
api_router.include_router(users_router, prefix="/users", tags=["Users"])
api_router.include_router(profiles_router, tags=["Profiles"])
api_router.include_router(addresses_router, tags=["Addresses"])
