"""게시글 레포지토리 — 게시글 조회, 필터링, 검색, 게시 상태 전이.

Post Repository — The richest query surface of the layer.
Every listing eager-loads a minimal author projection (id, name, email)
together with the post's categories and tags.
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.orm.interfaces import LoaderOption

from cms.models.content import ContentStatus, Post
from cms.models.taxonomy import Category, Tag
from cms.models.user import User
from cms.repositories.publishable import PublishableRepository, utcnow
from cms.schemas.content import PostCreate, PostUpdate


class PostRepository(PublishableRepository[Post]):
    """게시글 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the posts table.
    Category/tag listings and search only ever return PUBLISHED posts,
    newest publication first.
    """

    def __init__(self) -> None:
        """PostRepository를 초기화합니다 (Initialize with the Post model)."""
        super().__init__(Post)

    def _load_options(self) -> Sequence[LoaderOption]:
        return (
            selectinload(Post.author).load_only(User.id, User.name, User.email),
            selectinload(Post.categories),
            selectinload(Post.tags),
        )

    def _published_query(self) -> Select:
        """PUBLISHED 게시글 — 게시일 최신순 (PUBLISHED posts, newest publication first)."""
        return (
            self._listing_query()
            .where(Post.status == ContentStatus.PUBLISHED)
            .order_by(Post.published_at.desc())
        )

    async def find_by_slug(
        self,
        db: AsyncSession,
        slug: str,
    ) -> Post | None:
        """슬러그로 게시글을 조회합니다 — 연관 데이터 미포함.

        Retrieve a post by slug. No relations are eager-loaded.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            slug: 게시글 슬러그 (Post slug)

        Returns:
            Post | None: 게시글 또는 None (Post or None)
        """
        result = await db.execute(select(Post).where(Post.slug == slug))
        return result.scalar_one_or_none()

    async def find_published(
        self,
        db: AsyncSession,
        skip: int | None = None,
        take: int | None = None,
    ) -> list[Post]:
        """게시된 게시글 목록을 조회합니다.

        Retrieve PUBLISHED posts whose published_at is not in the future,
        ordered by published_at descending.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            skip: 건너뛸 수 (Offset)
            take: 최대 개수 (Limit)

        Returns:
            list[Post]: 게시글 목록 (Published posts)
        """
        query: Select = self._published_query().where(Post.published_at <= utcnow())
        return await self._list(db, self._paginate(query, skip, take))

    async def find_by_author(
        self,
        db: AsyncSession,
        author_id: UUID,
        skip: int | None = None,
        take: int | None = None,
    ) -> list[Post]:
        """작성자의 게시글 목록 — 모든 상태, 생성일 최신순.

        Retrieve all posts of an author regardless of status, newest first.
        """
        query: Select = (
            self._listing_query()
            .where(Post.author_id == author_id)
            .order_by(Post.created_at.desc())
        )
        return await self._list(db, self._paginate(query, skip, take))

    async def find_by_category(
        self,
        db: AsyncSession,
        category_slug: str,
        skip: int | None = None,
        take: int | None = None,
    ) -> list[Post]:
        """카테고리 슬러그로 게시된 게시글을 조회합니다.

        Retrieve PUBLISHED posts linked to the category with the given slug.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            category_slug: 카테고리 슬러그 (Category slug)
            skip: 건너뛸 수 (Offset)
            take: 최대 개수 (Limit)

        Returns:
            list[Post]: 게시글 목록 (Posts in the category)
        """
        query: Select = self._published_query().where(
            Post.categories.any(Category.slug == category_slug)
        )
        return await self._list(db, self._paginate(query, skip, take))

    async def find_by_tag(
        self,
        db: AsyncSession,
        tag_slug: str,
        skip: int | None = None,
        take: int | None = None,
    ) -> list[Post]:
        """태그 슬러그로 게시된 게시글을 조회합니다 (PUBLISHED posts having the tag)."""
        query: Select = self._published_query().where(Post.tags.any(Tag.slug == tag_slug))
        return await self._list(db, self._paginate(query, skip, take))

    async def search_posts(
        self,
        db: AsyncSession,
        query: str,
        skip: int | None = None,
        take: int | None = None,
    ) -> list[Post]:
        """제목, 본문, 요약에서 게시글을 검색합니다.

        Search PUBLISHED posts whose title, content or excerpt contains the
        trimmed query as a literal substring (LIKE wildcards are escaped).
        Case sensitivity follows the database's LIKE operator.

        An empty or whitespace-only query is still a substring match and
        therefore returns every published post.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            query: 검색어 (Search text)
            skip: 건너뛸 수 (Offset)
            take: 최대 개수 (Limit)

        Returns:
            list[Post]: 검색 결과 (Matching posts)
        """
        term: str = query.strip()
        stmt: Select = self._published_query().where(
            or_(
                Post.title.contains(term, autoescape=True),
                Post.content.contains(term, autoescape=True),
                Post.excerpt.contains(term, autoescape=True),
            )
        )
        return await self._list(db, self._paginate(stmt, skip, take))

    async def create_post(
        self,
        db: AsyncSession,
        data: PostCreate,
    ) -> Post:
        """게시글을 생성하고 작성자/카테고리/태그와 함께 반환합니다.

        Create a post and return it eager-loaded.
        An unknown author_id or a duplicate slug raises IntegrityError.
        """
        return await self._create_content(db, data.model_dump())

    async def update_post(
        self,
        db: AsyncSession,
        post_id: UUID,
        data: PostUpdate,
    ) -> Post:
        """게시글 부분 수정 (Partially update a post; NotFoundError if missing)."""
        return await self._update_content(db, post_id, data.model_dump(exclude_unset=True))

    async def publish_post(
        self,
        db: AsyncSession,
        post_id: UUID,
    ) -> Post:
        """게시글을 게시합니다 (status=PUBLISHED, published_at=now)."""
        return await self._publish(db, post_id)

    async def unpublish_post(
        self,
        db: AsyncSession,
        post_id: UUID,
    ) -> Post:
        """게시글 게시를 취소합니다 (status=DRAFT, published_at=None)."""
        return await self._unpublish(db, post_id)
