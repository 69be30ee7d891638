"""카테고리 및 태그 Pydantic 스키마 정의.

Category and Tag Pydantic schema definitions.
Includes the create/update inputs and the post-count projections returned
by find_all_with_post_count.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, field_validator

from cms.schemas.validators import not_null


# === 카테고리 (Category) 스키마 ===

class CategoryCreate(BaseModel):
    """카테고리 생성 입력 스키마.

    Attributes:
        name: 이름 (Display name)
        slug: URL 식별자 (Unique slug)
        description: 설명 (Optional description)
    """

    name: str
    slug: str
    description: str | None = None


class CategoryUpdate(BaseModel):
    """카테고리 수정 입력 스키마 (부분 업데이트)."""

    name: str | None = None
    slug: str | None = None
    description: str | None = None

    # description만 NULL 허용 (Only description is nullable)
    @field_validator("name", "slug")
    @classmethod
    def reject_null(cls, value: str | None) -> str:
        return not_null(value)


class CategoryWithPostCount(BaseModel):
    """게시글 수가 포함된 카테고리.

    Category projection augmented with the number of linked posts.

    Attributes:
        post_count: 연결된 게시글 수 (Number of posts in the category)
    """

    id: UUID
    name: str
    slug: str
    description: str | None = None
    created_at: datetime
    updated_at: datetime
    post_count: int = 0  # 연결 테이블에서 계산 (Computed from post_categories)


# === 태그 (Tag) 스키마 ===

class TagCreate(BaseModel):
    """태그 생성 입력 스키마."""

    name: str
    slug: str


class TagUpdate(BaseModel):
    """태그 수정 입력 스키마 (부분 업데이트)."""

    name: str | None = None
    slug: str | None = None

    @field_validator("name", "slug")
    @classmethod
    def reject_null(cls, value: str | None) -> str:
        return not_null(value)


class TagWithPostCount(BaseModel):
    """게시글 수가 포함된 태그 (Tag projection with the number of linked posts)."""

    id: UUID
    name: str
    slug: str
    created_at: datetime
    updated_at: datetime
    post_count: int = 0
