"""Axiom API 로깅 미들웨어.

Axiom API logging middleware.
Captures request/response data and sends structured logs to Axiom.
Logs: API endpoint, method, data (body/params), status code, error reason.
Credential fields (password, password_hash, token, secret) are masked
before anything leaves the process.
"""

import json
import re
import time
from typing import Any, Protocol

from axiom_py import Client as AxiomClient
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from cms.config import settings

# 마스킹 대상 필드 패턴 — Fields to mask in request/response bodies
_SENSITIVE_KEYS = re.compile(
    r"(password|passwd|secret|token|authorization|api_key|apikey|credential)",
    re.IGNORECASE,
)

# 로깅 제외 경로 — Paths excluded from logging
_SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}


class EventSink(Protocol):
    """로그 이벤트 수신자 — axiom_py.Client와 같은 인터페이스 (Same surface as axiom_py.Client)."""

    def ingest_events(self, dataset: str, events: list[dict[str, Any]]) -> Any: ...


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


def _truncate(value: Any, max_len: int = 2000) -> Any:
    """로그 크기 제한 — Truncate large values to prevent oversized logs."""
    if isinstance(value, str) and len(value) > max_len:
        return value[:max_len] + "...(truncated)"
    return value


def build_log_event(
    method: str,
    path: str,
    status_code: int,
    duration_ms: float,
    query_params: dict[str, Any] | None = None,
    request_body: Any = None,
    error_detail: str | None = None,
) -> dict[str, Any]:
    """Axiom 로그 이벤트를 구성합니다 (Build one Axiom log event)."""
    log_event: dict[str, Any] = {
        "method": method,
        "path": path,
        "status_code": status_code,
        "duration_ms": duration_ms,
    }
    if query_params:
        log_event["query_params"] = mask_sensitive(query_params)
    if request_body is not None:
        log_event["request_body"] = request_body
    if error_detail:
        log_event["error"] = error_detail
    return log_event


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """모든 API 요청/응답을 Axiom에 로깅하는 미들웨어.

    Middleware that logs all API requests and responses to Axiom.
    Without a token/dataset (and no injected sink) it is a pass-through.

    Args:
        app: ASGI 애플리케이션 (Wrapped ASGI app)
        sink: 이벤트 수신자, 테스트용 주입 (Event sink override, e.g. in tests)
        dataset: 데이터셋 이름 (Dataset name override)
    """

    def __init__(self, app: Any, sink: EventSink | None = None, dataset: str | None = None) -> None:
        super().__init__(app)
        self._sink: EventSink | None = sink
        self._dataset: str = dataset or settings.AXIOM_DATASET

        if self._sink is None and settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET:
            self._sink = AxiomClient(token=settings.AXIOM_API_TOKEN)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # 제외 경로 또는 Axiom 미설정시 패스스루 — Skip excluded paths / unconfigured sink
        if request.url.path in _SKIP_PATHS or self._sink is None:
            return await call_next(request)

        start_time = time.time()
        method = request.method
        query_params = dict(request.query_params) if request.query_params else None

        # Request body 읽기 — Read request body (only for methods with body)
        request_body: Any = None
        if method in ("POST", "PUT", "PATCH"):
            try:
                body_bytes = await request.body()
                if body_bytes:
                    request_body = _truncate(mask_sensitive(json.loads(body_bytes)))
            except (json.JSONDecodeError, UnicodeDecodeError):
                request_body = "(non-json body)"

        error_detail: str | None = None
        status_code: int = 500
        try:
            response = await call_next(request)
            status_code = response.status_code

            # 에러 응답시 body에서 사유 추출 — Extract error detail from error responses
            if status_code >= 400:
                resp_body = b""
                async for chunk in response.body_iterator:
                    resp_body += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")

                try:
                    error_data = json.loads(resp_body)
                    error_detail = str(error_data.get("detail", error_data))[:500]
                except (json.JSONDecodeError, UnicodeDecodeError, AttributeError):
                    error_detail = resp_body.decode("utf-8", errors="replace")[:500]

                # 소비한 body를 다시 응답으로 반환 — Re-wrap consumed body
                response = Response(
                    content=resp_body,
                    status_code=status_code,
                    headers=dict(response.headers),
                    media_type=response.media_type,
                )
        except Exception as exc:
            error_detail = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            log_event = build_log_event(
                method,
                request.url.path,
                status_code,
                round((time.time() - start_time) * 1000, 2),
                query_params=query_params,
                request_body=request_body,
                error_detail=error_detail,
            )
            try:
                self._sink.ingest_events(self._dataset, [log_event])
            except Exception:
                pass  # 로깅 실패가 요청 처리에 영향주지 않도록 — Never break request on log failure

        return response
