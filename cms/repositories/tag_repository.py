"""태그 레포지토리 — 태그 CRUD 및 게시글 연결 관리.

Tag Repository — CRUD for tags and management of the post_tags join table.
"""

from typing import Any
from uuid import UUID

from sqlalchemy import Select, delete, func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from cms.models.taxonomy import PostTag, Tag
from cms.repositories.base import BaseRepository
from cms.schemas.taxonomy import TagCreate, TagUpdate, TagWithPostCount
from cms.utils.exceptions import NotFoundError


class TagRepository(BaseRepository[Tag]):
    """태그 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for tags and their links to posts.
    """

    def __init__(self) -> None:
        super().__init__(Tag)

    async def find_by_slug(
        self,
        db: AsyncSession,
        slug: str,
    ) -> Tag | None:
        """슬러그로 태그를 조회합니다 (Retrieve a tag by its unique slug)."""
        result = await db.execute(select(Tag).where(Tag.slug == slug))
        return result.scalar_one_or_none()

    async def create_tag(
        self,
        db: AsyncSession,
        data: TagCreate,
    ) -> Tag:
        return await self.create(db, data.model_dump())

    async def update_tag(
        self,
        db: AsyncSession,
        tag_id: UUID,
        data: TagUpdate,
    ) -> Tag:
        return await self.update(db, tag_id, data.model_dump(exclude_unset=True))

    async def find_all_with_post_count(
        self,
        db: AsyncSession,
    ) -> list[TagWithPostCount]:
        """모든 태그를 게시글 수와 함께 조회합니다.

        Retrieve every tag with the number of linked posts, ordered by name.
        Unused tags are reported with a count of zero.
        """
        query: Select = (
            select(Tag, func.count(PostTag.post_id).label("post_count"))
            .outerjoin(PostTag, PostTag.tag_id == Tag.id)
            .group_by(Tag.id)
            .order_by(Tag.name)
        )
        result = await db.execute(query)

        return [
            TagWithPostCount(
                id=tag.id,
                name=tag.name,
                slug=tag.slug,
                created_at=tag.created_at,
                updated_at=tag.updated_at,
                post_count=post_count,
            )
            for tag, post_count in result.all()
        ]

    async def add_post_to_tag(
        self,
        db: AsyncSession,
        tag_id: UUID,
        post_id: UUID,
    ) -> None:
        """게시글에 태그를 연결합니다.

        Link a post to a tag.

        Raises:
            IntegrityError: 이미 연결되었거나 ID가 유효하지 않을 때
                            (Pair already linked, or unknown post/tag id)
        """
        await db.execute(insert(PostTag).values(post_id=post_id, tag_id=tag_id))

    async def remove_post_from_tag(
        self,
        db: AsyncSession,
        tag_id: UUID,
        post_id: UUID,
    ) -> None:
        """게시글과 태그의 연결을 해제합니다.

        Unlink a post from a tag.

        Raises:
            NotFoundError: 연결이 존재하지 않을 때 (Link does not exist)
        """
        result: Any = await db.execute(
            delete(PostTag).where(PostTag.post_id == post_id, PostTag.tag_id == tag_id)
        )
        if result.rowcount == 0:
            raise NotFoundError("Post does not have this tag", entity="PostTag", key=(post_id, tag_id))

    async def get_tags_for_post(
        self,
        db: AsyncSession,
        post_id: UUID,
    ) -> list[Tag]:
        query: Select = (
            select(Tag)
            .join(PostTag, PostTag.tag_id == Tag.id)
            .where(PostTag.post_id == post_id)
            .order_by(Tag.name)
        )
        result = await db.execute(query)
        return list(result.scalars().all())
