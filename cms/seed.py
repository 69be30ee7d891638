"""초기 데이터 시드 스크립트 — 관리자, 카테고리, 태그, 샘플 콘텐츠 생성.

Seed script — Creates an admin user, categories, tags and sample content.
Everything goes through the public repository API inside one transaction.

Usage:
    python -m cms.seed            # 이미 시드된 경우 건너뜀 (Skips if already seeded)
    python -m cms.seed --reset    # 기존 데이터 삭제 후 시드 (Clear all data first)

Creates:
    - 1개 관리자 계정: admin@reactpress.dev / admin123 (1 admin user)
    - 3개 카테고리: React, Next.js, SQLAlchemy (3 categories)
    - 4개 태그: Frontend, Database, Performance, TypeScript (4 tags)
    - 1개 게시글 + 1개 페이지 (1 published post and 1 published page)
"""

import argparse
import asyncio

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from cms.config import settings
from cms.models import Category, Page, Post, PostCategory, PostTag, Tag, User, UserRole
from cms.models.content import ContentStatus
from cms.repositories.registry import RepositoryRegistry
from cms.schemas.content import PageCreate, PostCreate
from cms.schemas.taxonomy import CategoryCreate, TagCreate
from cms.schemas.user import UserCreate

ADMIN_EMAIL: str = "admin@reactpress.dev"

WELCOME_POST: str = """
# Welcome to ReactPress

This is a sample post to help you get started with ReactPress.

## Getting Started

1. Create your first post
2. Set up categories and tags
3. Publish your content
"""

ABOUT_PAGE: str = """
# About ReactPress

ReactPress is a content management system with a typed data-access layer.

Contact us at info@reactpress.dev for more information.
"""


async def reset(db: AsyncSession) -> None:
    """모든 콘텐츠 테이블을 비웁니다 — 연결 테이블부터.

    Delete every row, join tables first so no foreign key is left dangling.
    Runs inside the caller's transaction.
    """
    for model in (PostTag, PostCategory, Tag, Category, Post, Page, User):
        await db.execute(delete(model))


async def seed(registry: RepositoryRegistry, clear: bool = False) -> bool:
    """데이터베이스를 초기 데이터로 시드합니다.

    Seed the database with initial data.
    Creates tables if they don't exist, then inserts the sample data.

    Args:
        registry: 레포지토리 레지스트리 (Repository registry)
        clear: 기존 데이터 삭제 여부 (Delete existing data first)

    Returns:
        bool: 시드 수행 여부 — 이미 시드되어 건너뛰면 False
              (Whether seeding ran; False when skipped)
    """
    await registry.create_schema()

    async with registry.session() as db, db.begin():
        if clear:
            await reset(db)
        elif await registry.users.exists(db, {"email": ADMIN_EMAIL}):
            print("Already seeded. Skipping.")
            return False

        admin: User = await registry.users.create_user(
            db,
            UserCreate(email=ADMIN_EMAIL, name="Admin User", password="admin123", role=UserRole.ADMIN),
        )

        categories: list[Category] = [
            await registry.categories.create_category(db, CategoryCreate(name=name, slug=slug, description=description))
            for name, slug, description in (
                ("React", "react", "Posts about React.js"),
                ("Next.js", "nextjs", "Posts about Next.js framework"),
                ("SQLAlchemy", "sqlalchemy", "Posts about SQLAlchemy ORM"),
            )
        ]
        tags: list[Tag] = [
            await registry.tags.create_tag(db, TagCreate(name=name, slug=slug))
            for name, slug in (
                ("Frontend", "frontend"),
                ("Database", "database"),
                ("Performance", "performance"),
                ("TypeScript", "typescript"),
            )
        ]

        post: Post = await registry.posts.create_post(
            db,
            PostCreate(
                title="Getting Started with ReactPress",
                slug="getting-started-with-reactpress",
                content=WELCOME_POST,
                excerpt="Learn how to get started with ReactPress",
                status=ContentStatus.PUBLISHED,
                author_id=admin.id,
            ),
        )
        for category in categories[:2]:
            await registry.categories.add_post_to_category(db, category.id, post.id)
        for tag in (tags[0], tags[3]):
            await registry.tags.add_post_to_tag(db, tag.id, post.id)

        await registry.pages.create_page(
            db,
            PageCreate(
                title="About ReactPress",
                slug="about",
                content=ABOUT_PAGE,
                status=ContentStatus.PUBLISHED,
                author_id=admin.id,
            ),
        )

    print(f"Seeded: admin={ADMIN_EMAIL}, post={post.slug}")
    return True


async def main(clear: bool) -> None:
    registry: RepositoryRegistry = RepositoryRegistry.from_settings(settings)
    try:
        await seed(registry, clear=clear)
    finally:
        await registry.dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the CMS database with sample data.")
    parser.add_argument("--reset", action="store_true", help="delete all existing rows first")
    args = parser.parse_args()
    asyncio.run(main(args.reset))
