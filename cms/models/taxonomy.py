"""카테고리, 태그 및 게시글 연결 모델 정의.

Category, Tag and post association model definitions.
Posts link to categories and tags through pure join tables keyed by the
(post, category) / (post, tag) pair.

Tables:
    - categories: 카테고리 (Categories)
    - tags: 태그 (Tags)
    - post_categories: 게시글-카테고리 연결 (Post ↔ Category join rows)
    - post_tags: 게시글-태그 연결 (Post ↔ Tag join rows)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cms.database import Base


class Category(Base):
    """카테고리 모델.

    Category model — Named grouping of posts with a unique slug.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        name: 이름 (Display name)
        slug: URL 식별자 (URL-safe identifier, unique among categories)
        description: 설명 (Optional description)
    """

    __tablename__ = "categories"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    slug: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    posts = relationship("Post", secondary="post_categories", viewonly=True)


class Tag(Base):
    """태그 모델 — Tag model with a unique slug."""

    __tablename__ = "tags"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    slug: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    posts = relationship("Post", secondary="post_tags", viewonly=True)


class PostCategory(Base):
    """게시글-카테고리 연결 테이블.

    Post ↔ Category join row. The composite primary key is the whole
    identity: a row exists exactly when the post has the category.
    """

    __tablename__ = "post_categories"

    post_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True
    )
    category_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )


class PostTag(Base):
    """게시글-태그 연결 테이블 (Post ↔ Tag join row, composite primary key)."""

    __tablename__ = "post_tags"

    post_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True
    )
    tag_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
