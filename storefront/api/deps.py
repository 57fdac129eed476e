"""FastAPI 의존성 주입 모듈 — 베어러 토큰 가드 및 서비스 제공자.

FastAPI dependency injection module — Bearer token guards and service providers.

Authentication Flow:
    1. 클라이언트가 Authorization: Bearer <token> 헤더를 전송
       (Client sends Authorization: Bearer <token> header)
    2. HTTPBearer가 토큰을 추출, 없거나 형식이 틀리면 401
       (HTTPBearer extracts the token; missing or malformed header → 401)
    3. TokenCodec이 토큰 종류에 맞는 키로 서명/만료를 검증
       (TokenCodec verifies signature and expiry with the kind's secret)
    4. 검증된 클레임을 핸들러에 주입 — DB 조회 없음
       (Validated claims are injected into the handler; no database access)

``BearerGuard`` is written once and instantiated twice: ``access_guard``
for protected routes and ``refresh_guard`` for the refresh endpoint.
"""

from typing import Annotated, Generic, TypeVar

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from storefront.schemas.auth import AccessTokenClaims, RefreshTokenClaims
from storefront.services.auth_service import SessionService
from storefront.services.user_service import UserService
from storefront.utils.exceptions import InvalidTokenError
from storefront.utils.jwt import TokenCodec, TokenKind

ClaimsT = TypeVar("ClaimsT", AccessTokenClaims, RefreshTokenClaims)

# HTTP Bearer 토큰 추출기 — 오류는 가드가 직접 401로 변환
# (Extracts the bearer token; the guard turns absence into a 401 itself)
security: HTTPBearer = HTTPBearer(auto_error=False)


async def get_bearer_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> str:
    """Authorization 헤더에서 원본 베어러 토큰을 추출합니다.

    Extract the raw bearer token from the Authorization header.

    Raises:
        InvalidTokenError: 헤더가 없거나 Bearer 형식이 아닐 때 (Header absent or not a bearer)
    """
    if credentials is None or not credentials.credentials:
        raise InvalidTokenError("Missing bearer token")
    return credentials.credentials


class BearerGuard(Generic[ClaimsT]):
    """토큰 종류별 베어러 가드.

    Request guard parameterised over the claims type and the token kind
    whose secret verifies it. Rejects the request before the handler runs
    when the token is absent, malformed, wrongly signed or expired.

    Attributes:
        claims_type: 클레임 모델 클래스 (Claims model produced on success)
        kind: 토큰 종류 — 서명 키 선택 (Token kind selecting the secret)
    """

    def __init__(self, claims_type: type[ClaimsT], kind: TokenKind) -> None:
        self.claims_type: type[ClaimsT] = claims_type
        self.kind: TokenKind = kind

    async def __call__(
        self,
        request: Request,
        token: Annotated[str, Depends(get_bearer_token)],
    ) -> ClaimsT:
        codec: TokenCodec = request.app.state.token_codec
        claims: ClaimsT = await codec.decode(token, codec.secret_for(self.kind), self.claims_type)
        # 미들웨어 로깅용 주체 기록 — Record the subject for request logging
        request.state.auth_subject = claims.sub
        return claims


access_guard: BearerGuard[AccessTokenClaims] = BearerGuard(AccessTokenClaims, TokenKind.ACCESS)
refresh_guard: BearerGuard[RefreshTokenClaims] = BearerGuard(RefreshTokenClaims, TokenKind.REFRESH)

# 편의 타입 별칭 — Annotated aliases for handler signatures
AccessClaims = Annotated[AccessTokenClaims, Depends(access_guard)]
RefreshClaims = Annotated[RefreshTokenClaims, Depends(refresh_guard)]


def get_session_service(request: Request) -> SessionService:
    """앱 시작 시 구성된 세션 서비스를 반환합니다 (Session service built at startup)."""
    return request.app.state.session_service


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service
