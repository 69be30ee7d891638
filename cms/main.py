"""FastAPI 애플리케이션 엔트리포인트 — 레지스트리 수명주기 및 미들웨어 등록.

FastAPI application entry point — Repository registry lifecycle and
middleware registration. Content route handlers live outside this package
and reach the data layer through cms.api.deps.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cms.config import Settings, settings
from cms.middleware.axiom_logging import AxiomLoggingMiddleware
from cms.repositories.registry import RepositoryRegistry


def create_app(app_settings: Settings = settings, registry: RepositoryRegistry | None = None) -> FastAPI:
    """FastAPI 앱을 생성합니다.

    Build the FastAPI application. The repository registry is created once
    when the app starts (unless one is injected) and disposed at shutdown.

    Args:
        app_settings: 애플리케이션 설정 (Application settings)
        registry: 미리 구성된 레지스트리, 테스트용 (Pre-built registry, e.g. in tests)

    Returns:
        FastAPI: 애플리케이션 인스턴스 (Application instance)
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        owned: bool = registry is None
        app.state.registry = registry or RepositoryRegistry.from_settings(app_settings)
        try:
            yield
        finally:
            # 주입된 레지스트리는 호출자가 정리 (Injected registries are disposed by their owner)
            if owned:
                await app.state.registry.dispose()

    application: FastAPI = FastAPI(
        title=app_settings.APP_NAME,
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Axiom API 로깅 미들웨어 — CORS보다 먼저 등록하여 모든 요청을 캡처
    # (Registered before CORS to capture all requests)
    application.add_middleware(AxiomLoggingMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """서버 상태 확인 엔드포인트.

        Health check endpoint for load balancers and monitoring.
        """
        return {"status": "ok"}

    return application


app: FastAPI = create_app()
