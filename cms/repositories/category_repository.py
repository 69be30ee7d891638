"""카테고리 레포지토리 — 카테고리 CRUD 및 게시글 연결 관리.

Category Repository — CRUD for categories and management of the
post_categories join table.
"""

from typing import Any
from uuid import UUID

from sqlalchemy import Select, delete, func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from cms.models.taxonomy import Category, PostCategory
from cms.repositories.base import BaseRepository
from cms.schemas.taxonomy import CategoryCreate, CategoryUpdate, CategoryWithPostCount
from cms.utils.exceptions import NotFoundError


class CategoryRepository(BaseRepository[Category]):
    """카테고리 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for categories and their links
    to posts. Duplicate links are rejected by the composite primary key of
    post_categories and surface as IntegrityError.
    """

    def __init__(self) -> None:
        """CategoryRepository를 초기화합니다 (Initialize with the Category model)."""
        super().__init__(Category)

    async def find_by_slug(
        self,
        db: AsyncSession,
        slug: str,
    ) -> Category | None:
        """슬러그로 카테고리를 조회합니다.

        Retrieve a category by its unique slug.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            slug: 카테고리 슬러그 (Category slug)

        Returns:
            Category | None: 카테고리 또는 None (Category or None)
        """
        result = await db.execute(select(Category).where(Category.slug == slug))
        return result.scalar_one_or_none()

    async def create_category(
        self,
        db: AsyncSession,
        data: CategoryCreate,
    ) -> Category:
        """카테고리 생성 (Create a category; duplicate slug raises IntegrityError)."""
        return await self.create(db, data.model_dump())

    async def update_category(
        self,
        db: AsyncSession,
        category_id: UUID,
        data: CategoryUpdate,
    ) -> Category:
        """카테고리 부분 수정 (Partially update a category)."""
        return await self.update(db, category_id, data.model_dump(exclude_unset=True))

    async def find_all_with_post_count(
        self,
        db: AsyncSession,
    ) -> list[CategoryWithPostCount]:
        """모든 카테고리를 게시글 수와 함께 조회합니다.

        Retrieve every category together with the number of linked posts.
        Categories without posts are included with a count of zero.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)

        Returns:
            list[CategoryWithPostCount]: 이름순 카테고리 목록
                                         (Categories ordered by name)
        """
        query: Select = (
            select(Category, func.count(PostCategory.post_id).label("post_count"))
            .outerjoin(PostCategory, PostCategory.category_id == Category.id)
            .group_by(Category.id)
            .order_by(Category.name)
        )
        result = await db.execute(query)

        return [
            CategoryWithPostCount(
                id=category.id,
                name=category.name,
                slug=category.slug,
                description=category.description,
                created_at=category.created_at,
                updated_at=category.updated_at,
                post_count=post_count,
            )
            for category, post_count in result.all()
        ]

    async def add_post_to_category(
        self,
        db: AsyncSession,
        category_id: UUID,
        post_id: UUID,
    ) -> None:
        """게시글을 카테고리에 연결합니다.

        Link a post to a category by inserting the join row.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            category_id: 카테고리 ID (Category UUID)
            post_id: 게시글 ID (Post UUID)

        Raises:
            IntegrityError: 이미 연결되었거나 ID가 유효하지 않을 때
                            (Pair already linked, or unknown post/category id)
        """
        await db.execute(
            insert(PostCategory).values(post_id=post_id, category_id=category_id)
        )

    async def remove_post_from_category(
        self,
        db: AsyncSession,
        category_id: UUID,
        post_id: UUID,
    ) -> None:
        """게시글과 카테고리의 연결을 해제합니다.

        Unlink a post from a category. The post and the category remain.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            category_id: 카테고리 ID (Category UUID)
            post_id: 게시글 ID (Post UUID)

        Raises:
            NotFoundError: 연결이 존재하지 않을 때 (Link does not exist)
        """
        result: Any = await db.execute(
            delete(PostCategory).where(
                PostCategory.post_id == post_id,
                PostCategory.category_id == category_id,
            )
        )
        if result.rowcount == 0:
            raise NotFoundError(
                "Post is not in this category",
                entity="PostCategory",
                key=(post_id, category_id),
            )

    async def get_categories_for_post(
        self,
        db: AsyncSession,
        post_id: UUID,
    ) -> list[Category]:
        """게시글에 연결된 카테고리 목록 (Categories linked to a post, by name)."""
        query: Select = (
            select(Category)
            .join(PostCategory, PostCategory.category_id == Category.id)
            .where(PostCategory.post_id == post_id)
            .order_by(Category.name)
        )
        result = await db.execute(query)
        return list(result.scalars().all())
