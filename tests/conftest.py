"""테스트 인프라 — 인메모리 SQLite DB, 레지스트리, 세션 픽스처.

Test infrastructure — In-memory SQLite database, registry and session fixtures.
Every test gets a fresh engine and schema; foreign keys are enforced so
referential violations behave as they do on PostgreSQL.
"""

import os

# 설정 로드 전에 환경 변수 지정 — Must be set before cms.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from collections.abc import AsyncGenerator  # noqa: E402
from datetime import datetime, timedelta, timezone  # noqa: E402

import pytest_asyncio  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402

from cms.database import build_engine  # noqa: E402
from cms.models import Category, Post, Tag, User, UserRole  # noqa: E402
from cms.models.content import ContentStatus  # noqa: E402
from cms.repositories.registry import RepositoryRegistry  # noqa: E402
from cms.schemas.content import PostCreate  # noqa: E402
from cms.schemas.taxonomy import CategoryCreate, TagCreate  # noqa: E402
from cms.schemas.user import UserCreate  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite://"


def days_ago(days: int) -> datetime:
    """현재 시각 기준 N일 전 (UTC), 음수면 미래 (Negative days point to the future)."""
    return datetime.now(timezone.utc) - timedelta(days=days)


# ---------------------------------------------------------------------------
# Function-scoped: 레지스트리, 세션
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def registry() -> AsyncGenerator[RepositoryRegistry, None]:
    """테스트용 레지스트리 — 새 인메모리 DB와 스키마를 생성합니다."""
    reg = RepositoryRegistry(build_engine(TEST_DATABASE_URL))
    await reg.create_schema()
    yield reg
    await reg.dispose()


@pytest_asyncio.fixture
async def db(registry: RepositoryRegistry) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    async with registry.session() as session:
        yield session
        await session.rollback()


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def author(registry: RepositoryRegistry, db: AsyncSession) -> User:
    """작성자 사용자를 생성합니다."""
    return await registry.users.create_user(
        db,
        UserCreate(email="author@test.com", name="Test Author", password="author123!", role=UserRole.AUTHOR),
    )


@pytest_asyncio.fixture
async def react(registry: RepositoryRegistry, db: AsyncSession) -> Category:
    """react 카테고리를 생성합니다."""
    return await registry.categories.create_category(
        db, CategoryCreate(name="React", slug="react", description="Posts about React")
    )


@pytest_asyncio.fixture
async def frontend(registry: RepositoryRegistry, db: AsyncSession) -> Tag:
    """frontend 태그를 생성합니다."""
    return await registry.tags.create_tag(db, TagCreate(name="Frontend", slug="frontend"))


@pytest_asyncio.fixture
async def make_post(registry: RepositoryRegistry, db: AsyncSession, author: User):
    """게시글 생성 헬퍼 — 기본값은 DRAFT."""

    async def _make(
        slug: str,
        title: str | None = None,
        content: str = "Body",
        excerpt: str | None = None,
        status: ContentStatus = ContentStatus.DRAFT,
        published_at: datetime | None = None,
    ) -> Post:
        return await registry.posts.create_post(
            db,
            PostCreate(
                title=title or slug.title(),
                slug=slug,
                content=content,
                excerpt=excerpt,
                status=status,
                published_at=published_at,
                author_id=author.id,
            ),
        )

    return _make
