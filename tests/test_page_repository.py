"""페이지 레포지토리 테스트.

Page repository tests — author projection, published listing, author
listing, and the publish/unpublish transitions.
"""

import uuid
from datetime import timedelta

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from cms.models import User
from cms.models.content import ContentStatus
from cms.repositories.registry import RepositoryRegistry
from cms.schemas.content import PageCreate, PageUpdate
from cms.utils.exceptions import NotFoundError
from tests.conftest import days_ago


def page_data(author: User, slug: str, title: str | None = None, **kwargs) -> PageCreate:
    return PageCreate(title=title or slug.title(), slug=slug, content="Page body", author_id=author.id, **kwargs)


class TestPageCreate:
    """페이지 생성/수정 테스트."""

    async def test_create_includes_author(self, registry: RepositoryRegistry, db: AsyncSession, author: User):
        """생성 결과에 작성자 id/name 포함."""
        page = await registry.pages.create_page(db, page_data(author, "about"))
        assert page.author.id == author.id
        assert page.author.name == "Test Author"
        assert page.status == ContentStatus.DRAFT
        assert page.published_at is None

    async def test_draft_drops_published_at(self, registry: RepositoryRegistry, db: AsyncSession, author: User):
        """DRAFT 생성 시 published_at은 항상 None."""
        page = await registry.pages.create_page(db, page_data(author, "about", published_at=days_ago(1)))
        assert page.published_at is None

    async def test_published_gets_timestamp(self, registry: RepositoryRegistry, db: AsyncSession, author: User):
        """PUBLISHED 생성 시 published_at 자동 설정."""
        page = await registry.pages.create_page(db, page_data(author, "about", status=ContentStatus.PUBLISHED))
        assert page.published_at is not None

    async def test_update_page(self, registry: RepositoryRegistry, db: AsyncSession, author: User):
        page = await registry.pages.create_page(db, page_data(author, "about"))
        updated = await registry.pages.update_page(db, page.id, PageUpdate(title="About Us"))
        assert updated.title == "About Us"
        assert updated.slug == "about"
        assert updated.author.name == "Test Author"

    async def test_update_missing_page(self, registry: RepositoryRegistry, db: AsyncSession):
        with pytest.raises(NotFoundError):
            await registry.pages.update_page(db, uuid.uuid4(), PageUpdate(title="x"))


class TestPageRead:
    """페이지 조회 테스트."""

    async def test_find_by_slug(self, registry: RepositoryRegistry, db: AsyncSession, author: User):
        await registry.pages.create_page(db, page_data(author, "about"))
        page = await registry.pages.find_by_slug(db, "about")
        assert page is not None
        assert page.author.name == "Test Author"
        assert await registry.pages.find_by_slug(db, "missing") is None

    async def test_find_published_ordered_by_title(self, registry: RepositoryRegistry, db: AsyncSession, author: User):
        """게시된 페이지만, 제목 오름차순."""
        for slug, title in (("c", "Contact"), ("a", "About"), ("b", "Blog")):
            await registry.pages.create_page(db, page_data(author, slug, title=title, status=ContentStatus.PUBLISHED))
        await registry.pages.create_page(db, page_data(author, "draft", title="Aardvark"))

        pages = await registry.pages.find_published(db)
        assert [p.title for p in pages] == ["About", "Blog", "Contact"]

        window = await registry.pages.find_published(db, skip=1, take=1)
        assert [p.title for p in window] == ["Blog"]

    async def test_find_by_author_all_statuses(self, registry: RepositoryRegistry, db: AsyncSession, author: User):
        await registry.pages.create_page(db, page_data(author, "one"))
        await registry.pages.create_page(db, page_data(author, "two", status=ContentStatus.PUBLISHED))

        pages = await registry.pages.find_by_author(db, author.id)
        assert {p.slug for p in pages} == {"one", "two"}
        assert await registry.pages.find_by_author(db, uuid.uuid4()) == []


class TestPageTransitions:
    """게시/게시취소 전이 테스트."""

    async def test_publish_twice_refreshes(self, registry: RepositoryRegistry, db: AsyncSession, author: User):
        """이미 게시된 페이지를 다시 게시하면 published_at이 현재 시각으로 갱신됨."""
        page = await registry.pages.create_page(
            db, page_data(author, "about", status=ContentStatus.PUBLISHED, published_at=days_ago(30))
        )
        stale = page.published_at.replace(tzinfo=None)

        first = await registry.pages.publish_page(db, page.id)
        assert first.status == ContentStatus.PUBLISHED
        first_at = first.published_at.replace(tzinfo=None)
        assert first_at - stale > timedelta(days=29)

        # 다시 과거 시각으로 되돌린 뒤 재게시 (Backdate again, then republish)
        await registry.pages.update(db, page.id, {"published_at": days_ago(10)})
        second = await registry.pages.publish_page(db, page.id)
        assert second.status == ContentStatus.PUBLISHED
        second_at = second.published_at.replace(tzinfo=None)
        assert second_at >= first_at
        assert second_at - days_ago(10).replace(tzinfo=None) > timedelta(days=9)

    async def test_unpublish_clears_timestamp(self, registry: RepositoryRegistry, db: AsyncSession, author: User):
        """게시 취소 시 항상 DRAFT + published_at=None."""
        page = await registry.pages.create_page(db, page_data(author, "about", status=ContentStatus.PUBLISHED))

        for _ in range(2):
            draft = await registry.pages.unpublish_page(db, page.id)
            assert draft.status == ContentStatus.DRAFT
            assert draft.published_at is None

        assert await registry.pages.find_published(db) == []

    async def test_publish_missing_page(self, registry: RepositoryRegistry, db: AsyncSession):
        with pytest.raises(NotFoundError):
            await registry.pages.publish_page(db, uuid.uuid4())
