"""FastAPI 의존성 주입 모듈 — 레포지토리 레지스트리 및 DB 세션.

FastAPI dependency injection module — Repository registry and database
session. Route handlers declare these dependencies instead of reaching
for module-level globals.

Usage:
    @router.get("/posts/{slug}")
    async def get_post(
        slug: str,
        registry: Annotated[RepositoryRegistry, Depends(get_registry)],
        db: Annotated[AsyncSession, Depends(get_db)],
    ): ...
"""

from collections.abc import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from cms.repositories.registry import RepositoryRegistry


def get_registry(request: Request) -> RepositoryRegistry:
    """앱 시작 시 생성된 레지스트리를 반환합니다.

    Return the registry created in the application lifespan.
    """
    return request.app.state.registry


async def get_db(
    registry: RepositoryRegistry = Depends(get_registry),
) -> AsyncGenerator[AsyncSession, None]:
    """비동기 데이터베이스 세션을 생성하고 요청 종료 시 닫습니다.

    Yield an async database session that is closed after the request
    completes. The handler commits its own unit of work; anything left
    uncommitted is rolled back on close.

    Yields:
        AsyncSession: SQLAlchemy 비동기 세션 인스턴스 (Async session instance)
    """
    async with registry.session() as session:
        try:
            yield session
        finally:
            await session.close()
