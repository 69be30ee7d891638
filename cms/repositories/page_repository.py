"""페이지 레포지토리 — 페이지 조회, 생성, 게시 상태 전이.

Page Repository — Lookup, listing, creation and publish/unpublish
transitions for standalone pages. Results carry a minimal author
projection (id and name only).
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.orm.interfaces import LoaderOption

from cms.models.content import ContentStatus, Page
from cms.models.user import User
from cms.repositories.publishable import PublishableRepository
from cms.schemas.content import PageCreate, PageUpdate


class PageRepository(PublishableRepository[Page]):
    """페이지 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the pages table.
    """

    def __init__(self) -> None:
        """PageRepository를 초기화합니다 (Initialize with the Page model)."""
        super().__init__(Page)

    def _load_options(self) -> Sequence[LoaderOption]:
        # 작성자 최소 투영 — id, name만 로드 (Minimal author projection)
        return (selectinload(Page.author).load_only(User.id, User.name),)

    async def find_by_slug(
        self,
        db: AsyncSession,
        slug: str,
    ) -> Page | None:
        """슬러그로 페이지를 작성자 정보와 함께 조회합니다.

        Retrieve a page by slug with the author's id and name loaded.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            slug: 페이지 슬러그 (Page slug)

        Returns:
            Page | None: 페이지 또는 None (Page or None)
        """
        result = await db.execute(self._listing_query().where(Page.slug == slug))
        return result.scalar_one_or_none()

    async def find_published(
        self,
        db: AsyncSession,
        skip: int | None = None,
        take: int | None = None,
    ) -> list[Page]:
        """게시된 페이지 목록을 제목순으로 조회합니다.

        Retrieve PUBLISHED pages ordered by title ascending.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            skip: 건너뛸 수 (Offset)
            take: 최대 개수 (Limit)

        Returns:
            list[Page]: 게시된 페이지 목록 (Published pages)
        """
        query = (
            self._listing_query()
            .where(Page.status == ContentStatus.PUBLISHED)
            .order_by(Page.title.asc())
        )
        return await self._list(db, self._paginate(query, skip, take))

    async def find_by_author(
        self,
        db: AsyncSession,
        author_id: UUID,
        skip: int | None = None,
        take: int | None = None,
    ) -> list[Page]:
        """작성자의 페이지 목록 — 모든 상태, 최신순 (All statuses, newest first)."""
        query = (
            self._listing_query()
            .where(Page.author_id == author_id)
            .order_by(Page.created_at.desc())
        )
        return await self._list(db, self._paginate(query, skip, take))

    async def create_page(
        self,
        db: AsyncSession,
        data: PageCreate,
    ) -> Page:
        """페이지를 생성하고 작성자 정보와 함께 반환합니다.

        Create a page and return it with the author projection loaded.
        An unknown author_id raises IntegrityError; a duplicate slug too.
        """
        return await self._create_content(db, data.model_dump())

    async def update_page(
        self,
        db: AsyncSession,
        page_id: UUID,
        data: PageUpdate,
    ) -> Page:
        """페이지를 부분 수정합니다.

        Partially update a page and return it with the author projection.

        Raises:
            NotFoundError: 페이지를 찾을 수 없을 때 (Page not found)
        """
        return await self._update_content(db, page_id, data.model_dump(exclude_unset=True))

    async def publish_page(
        self,
        db: AsyncSession,
        page_id: UUID,
    ) -> Page:
        """페이지를 게시합니다 (status=PUBLISHED, published_at=now)."""
        return await self._publish(db, page_id)

    async def unpublish_page(
        self,
        db: AsyncSession,
        page_id: UUID,
    ) -> Page:
        """페이지 게시를 취소합니다 (status=DRAFT, published_at=None)."""
        return await self._unpublish(db, page_id)
