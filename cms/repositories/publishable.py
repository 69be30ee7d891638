"""게시 가능한 콘텐츠 공통 레포지토리 — 게시글과 페이지의 상태 전이.

Shared repository for publishable content (posts and pages).
Owns the DRAFT ↔ PUBLISHED transitions and keeps published_at consistent
with the status: it is set only while PUBLISHED.
"""

from datetime import datetime, timezone
from typing import Any, Sequence, TypeVar
from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.interfaces import LoaderOption

from cms.models.content import ContentStatus, Page, Post
from cms.repositories.base import BaseRepository

ContentType = TypeVar("ContentType", Post, Page)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def normalize_publication(obj_data: dict[str, Any]) -> dict[str, Any]:
    """생성 데이터의 status/published_at 조합을 정규화합니다.

    Normalize status and published_at on a creation payload:
    DRAFT drops published_at, PUBLISHED without a timestamp gets now.
    """
    status: ContentStatus = obj_data.get("status") or ContentStatus.DRAFT
    obj_data["status"] = status

    if status is ContentStatus.PUBLISHED:
        if obj_data.get("published_at") is None:
            obj_data["published_at"] = utcnow()
    else:
        obj_data["published_at"] = None
    return obj_data


class PublishableRepository(BaseRepository[ContentType]):
    """게시글/페이지 레포지토리의 부모 클래스.

    Parent class of the post and page repositories.
    Subclasses declare which relations a detail/listing query eager-loads.
    """

    def _load_options(self) -> Sequence[LoaderOption]:
        """즉시 로딩 옵션 — 하위 클래스에서 정의 (Eager-load options, per subclass)."""
        return ()

    def _listing_query(self) -> Select:
        """즉시 로딩이 적용된 기본 SELECT 쿼리.

        Base SELECT with eager loading. populate_existing refreshes
        instances already in the session so association collections
        reflect join rows written since they were first loaded.
        """
        return (
            select(self.model)
            .options(*self._load_options())
            .execution_options(populate_existing=True)
        )

    async def _list(self, db: AsyncSession, query: Select) -> list[ContentType]:
        result = await db.execute(query)
        return list(result.scalars().unique().all())

    async def _get_loaded(self, db: AsyncSession, record_id: UUID) -> ContentType:
        """즉시 로딩된 단건 조회 — 방금 쓴 레코드 재조회용 (Reload a just-written record)."""
        result = await db.execute(self._listing_query().where(self.model.id == record_id))
        return result.scalar_one()

    async def _create_content(self, db: AsyncSession, obj_data: dict[str, Any]) -> ContentType:
        record: ContentType = await self.create(db, normalize_publication(obj_data))
        return await self._get_loaded(db, record.id)

    async def _update_content(
        self,
        db: AsyncSession,
        record_id: UUID,
        update_data: dict[str, Any],
    ) -> ContentType:
        await self.update(db, record_id, update_data)
        return await self._get_loaded(db, record_id)

    async def _publish(self, db: AsyncSession, record_id: UUID) -> ContentType:
        """PUBLISHED로 전이 — 호출마다 published_at을 현재 시각으로 갱신.

        Transition to PUBLISHED. published_at is refreshed to now on every
        call, including on already-published records.
        """
        return await self._update_content(
            db, record_id, {"status": ContentStatus.PUBLISHED, "published_at": utcnow()}
        )

    async def _unpublish(self, db: AsyncSession, record_id: UUID) -> ContentType:
        """DRAFT로 전이 — published_at 제거 (Transition to DRAFT, clearing published_at)."""
        return await self._update_content(
            db, record_id, {"status": ContentStatus.DRAFT, "published_at": None}
        )
