"""게시글 및 페이지 Pydantic 입력 스키마 정의.

Post and Page Pydantic input schema definitions.
Status changes go through the publish/unpublish operations, so update
inputs carry no status or published_at field.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, field_validator

from cms.models.content import ContentStatus
from cms.schemas.validators import not_null


class PostCreate(BaseModel):
    """게시글 생성 입력 스키마.

    Post creation input.
    A PUBLISHED post without published_at is stamped with the current time;
    a DRAFT post never keeps a published_at.

    Attributes:
        title: 제목 (Title)
        slug: URL 식별자 (Unique slug)
        content: 본문 (Body text)
        excerpt: 요약 (Optional summary)
        status: 초기 상태 (Initial status, default DRAFT)
        published_at: 게시 일시 (Publication time, PUBLISHED only)
        author_id: 작성자 UUID (Author identifier)
    """

    title: str
    slug: str
    content: str
    excerpt: str | None = None
    status: ContentStatus = ContentStatus.DRAFT
    published_at: datetime | None = None
    author_id: UUID


class PostUpdate(BaseModel):
    """게시글 수정 입력 스키마 (부분 업데이트)."""

    title: str | None = None
    slug: str | None = None
    content: str | None = None
    excerpt: str | None = None

    @field_validator("title", "slug", "content")
    @classmethod
    def reject_null(cls, value: str | None) -> str:
        return not_null(value)


class PageCreate(BaseModel):
    """페이지 생성 입력 스키마 — PostCreate와 같은 규칙 (Same rules as PostCreate)."""

    title: str
    slug: str
    content: str
    excerpt: str | None = None
    status: ContentStatus = ContentStatus.DRAFT
    published_at: datetime | None = None
    author_id: UUID


class PageUpdate(BaseModel):
    """페이지 수정 입력 스키마 (부분 업데이트)."""

    title: str | None = None
    slug: str | None = None
    content: str | None = None
    excerpt: str | None = None

    @field_validator("title", "slug", "content")
    @classmethod
    def reject_null(cls, value: str | None) -> str:
        return not_null(value)
