"""게시글 및 페이지 SQLAlchemy ORM 모델 정의.

Post and Page SQLAlchemy ORM model definitions.
Both share the DRAFT → PUBLISHED lifecycle; only posts carry categories
and tags.

Tables:
    - posts: 블로그 게시글 (Blog posts)
    - pages: 정적 페이지 (Standalone pages)
"""

import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Enum, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cms.database import Base


class ContentStatus(str, enum.Enum):
    """게시 상태 — DRAFT 또는 PUBLISHED.

    Publication status. published_at is set only while PUBLISHED.
    """

    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"


class Post(Base):
    """게시글 모델.

    Post model — A blog post written by one user, linked to any number of
    categories and tags through the post_categories / post_tags tables.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        title: 제목 (Title)
        slug: URL 식별자 (URL-safe identifier, unique among posts)
        content: 본문 (Body text)
        excerpt: 요약 (Short summary, optional)
        status: 게시 상태 (Publication status)
        published_at: 게시 일시 (Publication timestamp, None unless PUBLISHED)
        author_id: 작성자 FK (Author foreign key)

    Relationships:
        author: 작성자 (Author)
        categories: 카테고리 목록 (Categories, read-only through post_categories)
        tags: 태그 목록 (Tags, read-only through post_tags)
    """

    __tablename__ = "posts"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    # URL 식별자 — 게시글 내 고유 (Unique among posts)
    slug: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    excerpt: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[ContentStatus] = mapped_column(
        Enum(ContentStatus, native_enum=False, length=20), default=ContentStatus.DRAFT, nullable=False
    )
    # 게시 일시 — PUBLISHED 상태에서만 값이 있음 (Only set while PUBLISHED)
    published_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    # 작성자 FK — 글이 남아 있으면 사용자 삭제 불가 (RESTRICT)
    author_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    author = relationship("User", back_populates="posts")
    # 연결 테이블은 레포지토리의 add/remove로만 변경 (Join rows are written by the repositories only)
    categories = relationship("Category", secondary="post_categories", viewonly=True)
    tags = relationship("Tag", secondary="post_tags", viewonly=True)


class Page(Base):
    """페이지 모델.

    Page model — Same shape as Post without categories and tags.
    Slugs are unique among pages only.
    """

    __tablename__ = "pages"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    excerpt: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[ContentStatus] = mapped_column(
        Enum(ContentStatus, native_enum=False, length=20), default=ContentStatus.DRAFT, nullable=False
    )
    published_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    author_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    author = relationship("User", back_populates="pages")
