"""Axiom 요청 로깅 미들웨어.

Axiom request logging middleware.
Sends one structured event per request to Axiom: method, path, status,
duration, masked body, authenticated subject and, for failed requests,
the error detail (e.g. why a bearer token was rejected).
Passwords, tokens and Authorization headers are never logged in clear.
"""

import time
import json
import re
from typing import Any

from axiom_py import Client as AxiomClient
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

# 마스킹 대상 필드 패턴 — Fields to mask in request/response bodies
_SENSITIVE_KEYS = re.compile(
    r"(password|secret|token|authorization|credential|hash)",
    re.IGNORECASE,
)

# 로깅 제외 경로 — Paths excluded from logging
_SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}

_MAX_DETAIL = 500


def mask_sensitive(data: Any, depth: int = 0) -> Any:
    """민감 필드 자동 마스킹 — Recursively mask sensitive fields in dicts/lists."""
    if depth > 5:
        return "..."
    if isinstance(data, dict):
        return {
            k: "***" if _SENSITIVE_KEYS.search(k) else mask_sensitive(v, depth + 1)
            for k, v in data.items()
        }
    if isinstance(data, list):
        return [mask_sensitive(item, depth + 1) for item in data[:20]]
    return data


def _auth_scheme(request: Request) -> str | None:
    """Authorization 헤더의 스킴만 반환 (Only the scheme, never the credential)."""
    header: str | None = request.headers.get("authorization")
    if not header:
        return None
    return header.split(" ", 1)[0]


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """모든 API 요청/응답을 Axiom에 로깅하는 미들웨어.

    Middleware that logs API requests and responses to Axiom. A pass-through
    when no Axiom token/dataset is configured.

    Attributes:
        dataset: Axiom 데이터셋 이름 (Target dataset)
    """

    def __init__(
        self,
        app: ASGIApp,
        api_token: str = "",
        dataset: str = "",
        client: AxiomClient | None = None,
    ) -> None:
        super().__init__(app)
        self.dataset: str = dataset
        self._client: AxiomClient | None = client

        if self._client is None and api_token and dataset:
            self._client = AxiomClient(token=api_token)

    async def _read_error_detail(self, response: Response) -> tuple[Response, str]:
        # 에러 응답 body 소비 후 재구성 — Drain the error body, then re-wrap it
        body = b""
        async for chunk in response.body_iterator:
            body += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")

        try:
            detail: Any = json.loads(body).get("detail", "")
            detail = detail if isinstance(detail, str) else json.dumps(detail)
        except (json.JSONDecodeError, UnicodeDecodeError, AttributeError):
            detail = body.decode("utf-8", errors="replace")

        rebuilt = Response(
            content=body,
            status_code=response.status_code,
            headers=dict(response.headers),
            media_type=response.media_type,
        )
        return rebuilt, detail[:_MAX_DETAIL]

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if self._client is None or request.url.path in _SKIP_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        event: dict[str, Any] = {
            "method": request.method,
            "path": request.url.path,
            "status_code": 500,
        }

        if request.query_params:
            event["query_params"] = mask_sensitive(dict(request.query_params))
        scheme = _auth_scheme(request)
        if scheme:
            event["auth_scheme"] = scheme

        if request.method in ("POST", "PUT", "PATCH"):
            try:
                raw = await request.body()
                if raw:
                    event["request_body"] = mask_sensitive(json.loads(raw))
            except (json.JSONDecodeError, UnicodeDecodeError):
                event["request_body"] = "(non-json body)"

        try:
            response = await call_next(request)
            event["status_code"] = response.status_code
            if response.status_code >= 400:
                response, event["error"] = await self._read_error_detail(response)
        except Exception as exc:
            event["error"] = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            event["duration_ms"] = round((time.perf_counter() - start_time) * 1000, 2)
            subject = getattr(request.state, "auth_subject", None)
            if subject:
                event["subject"] = subject
            db_error = getattr(request.state, "db_error", None)
            if db_error:
                event["db_error"] = db_error
            try:
                self._client.ingest_events(self.dataset, [event])
            except Exception:  # noqa: BLE001
                pass  # 로깅 실패가 요청 처리에 영향주지 않도록 — Never break a request on log failure

        return response
