"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package ensures all models are registered with the
SQLAlchemy metadata, which is required for relationship resolution.

Modules:
    user: 사용자 및 역할 열거형 (User and UserRole)
    content: 게시글, 페이지, 게시 상태 (Post, Page, ContentStatus)
    taxonomy: 카테고리, 태그, 연결 테이블 (Category, Tag, PostCategory, PostTag)
"""

from cms.models.user import User, UserRole
from cms.models.content import ContentStatus, Page, Post
from cms.models.taxonomy import Category, PostCategory, PostTag, Tag

__all__ = [
    "User", "UserRole",
    "ContentStatus", "Post", "Page",
    "Category", "Tag", "PostCategory", "PostTag",
]
