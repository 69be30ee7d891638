"""카테고리/태그 레포지토리 테스트.

Category and Tag repository tests — slug lookup, post counts, and the
attach/detach lifecycle of post_categories / post_tags join rows.
"""

import uuid

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from cms.models import Category, Tag
from cms.repositories.registry import RepositoryRegistry
from cms.schemas.taxonomy import CategoryCreate, CategoryUpdate, TagCreate
from cms.utils.exceptions import NotFoundError


class TestCategoryLookup:
    """카테고리 조회 테스트."""

    async def test_find_by_slug(self, registry: RepositoryRegistry, db: AsyncSession, react: Category):
        found = await registry.categories.find_by_slug(db, "react")
        assert found is not None
        assert found.id == react.id

    async def test_find_by_slug_missing(self, registry: RepositoryRegistry, db: AsyncSession):
        """존재하지 않는 슬러그는 None."""
        assert await registry.categories.find_by_slug(db, "nope") is None
        assert await registry.tags.find_by_slug(db, "nope") is None

    async def test_update_category(self, registry: RepositoryRegistry, db: AsyncSession, react: Category):
        updated = await registry.categories.update_category(db, react.id, CategoryUpdate(description=None))
        assert updated.description is None
        assert updated.name == "React"


class TestCategoryAssociation:
    """게시글-카테고리 연결 테스트."""

    async def test_attach_then_detach(self, registry: RepositoryRegistry, db: AsyncSession, react: Category, make_post):
        """연결 후 조회에 포함, 해제 후 제외."""
        post = await make_post("hello")

        await registry.categories.add_post_to_category(db, react.id, post.id)
        assert [c.id for c in await registry.categories.get_categories_for_post(db, post.id)] == [react.id]

        await registry.categories.remove_post_from_category(db, react.id, post.id)
        assert await registry.categories.get_categories_for_post(db, post.id) == []

        # 해제는 게시글/카테고리를 삭제하지 않음 (Detaching keeps both records)
        assert await registry.posts.find_by_id(db, post.id) is not None
        assert await registry.categories.find_by_id(db, react.id) is not None

    async def test_reattach_after_detach(self, registry: RepositoryRegistry, db: AsyncSession, react: Category, make_post):
        """해제 후 재연결 성공."""
        post = await make_post("hello")
        await registry.categories.add_post_to_category(db, react.id, post.id)
        await registry.categories.remove_post_from_category(db, react.id, post.id)
        await registry.categories.add_post_to_category(db, react.id, post.id)
        assert len(await registry.categories.get_categories_for_post(db, post.id)) == 1

    async def test_duplicate_attach_fails(self, registry: RepositoryRegistry, db: AsyncSession, react: Category, make_post):
        """이미 연결된 쌍을 다시 연결하면 IntegrityError."""
        post = await make_post("hello")
        await registry.categories.add_post_to_category(db, react.id, post.id)
        with pytest.raises(IntegrityError):
            await registry.categories.add_post_to_category(db, react.id, post.id)

    async def test_attach_unknown_post(self, registry: RepositoryRegistry, db: AsyncSession, react: Category):
        """존재하지 않는 게시글 연결 시 IntegrityError."""
        with pytest.raises(IntegrityError):
            await registry.categories.add_post_to_category(db, react.id, uuid.uuid4())

    async def test_detach_missing_pair(self, registry: RepositoryRegistry, db: AsyncSession, react: Category, make_post):
        """연결되지 않은 쌍 해제 시 NotFoundError."""
        post = await make_post("hello")
        with pytest.raises(NotFoundError) as exc_info:
            await registry.categories.remove_post_from_category(db, react.id, post.id)
        assert exc_info.value.key == (post.id, react.id)

    async def test_post_count(self, registry: RepositoryRegistry, db: AsyncSession, react: Category, make_post):
        """카테고리별 게시글 수 — 미사용 카테고리는 0."""
        empty = await registry.categories.create_category(db, CategoryCreate(name="Empty", slug="empty"))
        for slug in ("one", "two"):
            post = await make_post(slug)
            await registry.categories.add_post_to_category(db, react.id, post.id)

        counts = {c.slug: c.post_count for c in await registry.categories.find_all_with_post_count(db)}
        assert counts == {"react": 2, "empty": 0}

        rows = await registry.categories.find_all_with_post_count(db)
        assert [r.name for r in rows] == ["Empty", "React"]
        assert rows[0].id == empty.id


class TestTagAssociation:
    """게시글-태그 연결 테스트."""

    async def test_attach_then_detach(self, registry: RepositoryRegistry, db: AsyncSession, frontend: Tag, make_post):
        post = await make_post("hello")

        await registry.tags.add_post_to_tag(db, frontend.id, post.id)
        assert [t.slug for t in await registry.tags.get_tags_for_post(db, post.id)] == ["frontend"]

        await registry.tags.remove_post_from_tag(db, frontend.id, post.id)
        assert await registry.tags.get_tags_for_post(db, post.id) == []

        await registry.tags.add_post_to_tag(db, frontend.id, post.id)
        assert len(await registry.tags.get_tags_for_post(db, post.id)) == 1

    async def test_duplicate_attach_fails(self, registry: RepositoryRegistry, db: AsyncSession, frontend: Tag, make_post):
        post = await make_post("hello")
        await registry.tags.add_post_to_tag(db, frontend.id, post.id)
        with pytest.raises(IntegrityError):
            await registry.tags.add_post_to_tag(db, frontend.id, post.id)

    async def test_attach_unknown_tag(self, registry: RepositoryRegistry, db: AsyncSession, make_post):
        post = await make_post("hello")
        with pytest.raises(IntegrityError):
            await registry.tags.add_post_to_tag(db, uuid.uuid4(), post.id)

    async def test_detach_missing_pair(self, registry: RepositoryRegistry, db: AsyncSession, frontend: Tag, make_post):
        post = await make_post("hello")
        with pytest.raises(NotFoundError):
            await registry.tags.remove_post_from_tag(db, frontend.id, post.id)

    async def test_post_count(self, registry: RepositoryRegistry, db: AsyncSession, frontend: Tag, make_post):
        await registry.tags.create_tag(db, TagCreate(name="Backend", slug="backend"))
        post = await make_post("hello")
        await registry.tags.add_post_to_tag(db, frontend.id, post.id)

        rows = await registry.tags.find_all_with_post_count(db)
        assert [(t.slug, t.post_count) for t in rows] == [("backend", 0), ("frontend", 1)]
