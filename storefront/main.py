"""FastAPI 애플리케이션 엔트리포인트 — 구성, 미들웨어 및 라우터 등록.

FastAPI application entry point.
``create_app`` builds settings, the database engine, the token codec, the
password hasher and the services exactly once and stores them on
``app.state``; request handlers receive them through dependencies.
Missing token secrets abort start-up with ``MissingSecretError``.

Run with: uvicorn storefront.main:create_app --factory
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from storefront.api import api_router
from storefront.config import Settings, get_settings
from storefront.database import build_engine, build_session_factory
from storefront.middleware.request_logging import RequestLoggingMiddleware
from storefront.services.auth_service import SessionService
from storefront.services.user_service import UserService
from storefront.utils.jwt import TokenCodec
from storefront.utils.password import PasswordHasher


def create_app(settings: Settings | None = None) -> FastAPI:
    """애플리케이션을 생성하고 의존 객체를 연결합니다.

    Build the FastAPI application and wire its collaborators.

    Args:
        settings: 애플리케이션 설정, None이면 환경 변수에서 로드
                  (Application settings; loaded from the environment when None)

    Returns:
        FastAPI: 구성된 애플리케이션 (Configured application)

    Raises:
        MissingSecretError: AT_SECRET 또는 RT_SECRET 미설정 (A token secret is missing)
    """
    settings = settings or get_settings()

    # 서명 키 검증은 여기서 — Secrets are checked here, before anything serves
    codec: TokenCodec = TokenCodec(settings)
    hasher: PasswordHasher = PasswordHasher(rounds=settings.BCRYPT_ROUNDS)
    engine = build_engine(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await engine.dispose()

    app: FastAPI = FastAPI(
        title=settings.APP_NAME,
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.token_codec = codec
    app.state.password_hasher = hasher
    app.state.session_service = SessionService(
        codec, hasher, revoke_on_reuse=settings.REVOKE_ON_REFRESH_REUSE
    )
    app.state.user_service = UserService(hasher)

    # Axiom 요청 로깅 미들웨어 — CORS보다 먼저 등록하여 모든 요청을 캡처
    # (Registered before CORS to capture all requests)
    app.add_middleware(
        RequestLoggingMiddleware,
        api_token=settings.AXIOM_API_TOKEN,
        dataset=settings.AXIOM_DATASET,
    )

    # CORS 미들웨어 — Cross-Origin Resource Sharing middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(SQLAlchemyError)
    async def handle_database_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        """DB 오류 — 원인은 숨기고 500 반환 (Driver text is not echoed to clients)."""
        request.state.db_error = type(exc).__name__
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """서버 상태 확인 엔드포인트 (Health check for load balancers)."""
        return {"status": "ok"}

    app.include_router(api_router, prefix="/api")
    return app
