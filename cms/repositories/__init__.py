"""레포지토리 패키지 — 데이터베이스 쿼리 계층.

Repository package — Database query layer.
Each repository extends BaseRepository for generic CRUD and adds
entity-specific queries. RepositoryRegistry bundles one instance of each
with the engine and session factory they run against.
"""

from cms.repositories.base import BaseRepository
from cms.repositories.category_repository import CategoryRepository
from cms.repositories.page_repository import PageRepository
from cms.repositories.post_repository import PostRepository
from cms.repositories.registry import RepositoryRegistry
from cms.repositories.tag_repository import TagRepository
from cms.repositories.user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "UserRepository", "PostRepository", "PageRepository",
    "CategoryRepository", "TagRepository",
    "RepositoryRegistry",
]
