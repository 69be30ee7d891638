"""레포지토리 레지스트리 — 프로세스 단위 의존성 컨텍스트.

Repository registry — Process-wide dependency context.
Constructed once at startup against a single engine, passed explicitly to
whatever needs data access (route handlers, the seed loader), and disposed
at shutdown.

Usage:
    registry = RepositoryRegistry.from_settings(settings)
    async with registry.session() as db:
        post = await registry.posts.find_by_slug(db, "hello")
    await registry.dispose()
"""

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from cms.config import Settings
from cms.database import Base, build_engine_from_settings, build_session_factory
from cms.repositories.category_repository import CategoryRepository
from cms.repositories.page_repository import PageRepository
from cms.repositories.post_repository import PostRepository
from cms.repositories.tag_repository import TagRepository
from cms.repositories.user_repository import UserRepository


class RepositoryRegistry:
    """엔티티별 레포지토리 인스턴스 모음.

    One instance of each entity repository plus the engine and session
    factory they run against.

    Attributes:
        engine: 비동기 DB 엔진 (Async database engine)
        session_factory: 세션 팩토리 (Async session factory)
        users: 사용자 레포지토리 (User repository)
        posts: 게시글 레포지토리 (Post repository)
        pages: 페이지 레포지토리 (Page repository)
        categories: 카테고리 레포지토리 (Category repository)
        tags: 태그 레포지토리 (Tag repository)
    """

    def __init__(self, engine: AsyncEngine) -> None:
        self.engine: AsyncEngine = engine
        self.session_factory: async_sessionmaker[AsyncSession] = build_session_factory(engine)

        self.users: UserRepository = UserRepository()
        self.posts: PostRepository = PostRepository()
        self.pages: PageRepository = PageRepository()
        self.categories: CategoryRepository = CategoryRepository()
        self.tags: TagRepository = TagRepository()

    @classmethod
    def from_settings(cls, settings: Settings) -> "RepositoryRegistry":
        """설정으로부터 엔진과 레지스트리를 생성합니다 (Build engine and registry from settings)."""
        return cls(build_engine_from_settings(settings))

    def session(self) -> AsyncSession:
        """새 비동기 세션을 엽니다 — 트랜잭션은 호출자가 관리.

        Open a new async session. The caller owns commit/rollback.
        """
        return self.session_factory()

    async def create_schema(self) -> None:
        """ORM 메타데이터로 테이블을 생성합니다 (Create all tables from ORM metadata)."""
        import cms.models  # noqa: F401 — register all models with metadata

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        """커넥션 풀을 정리합니다 (Dispose of the engine's connection pool)."""
        await self.engine.dispose()
