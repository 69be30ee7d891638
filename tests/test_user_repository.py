"""사용자 레포지토리 및 자격 증명 테스트.

User repository and credential tests — hashing on create/update,
verification, email lookup, role filtering and email uniqueness.
"""

import uuid

import bcrypt
import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from cms.models import User, UserRole
from cms.repositories.registry import RepositoryRegistry
from cms.schemas.content import PageCreate
from cms.schemas.user import UserCreate, UserUpdate
from cms.utils.exceptions import NotFoundError


class TestCreateUser:
    """사용자 생성 테스트."""

    async def test_password_is_hashed(self, registry: RepositoryRegistry, db: AsyncSession):
        """저장된 비밀번호는 평문과 다른 bcrypt 해시."""
        user = await registry.users.create_user(
            db, UserCreate(email="p@test.com", name="P", password="p")
        )
        assert user.password_hash != "p"
        assert user.password_hash.startswith("$2")
        assert bcrypt.checkpw(b"p", user.password_hash.encode("utf-8"))
        assert user.role == UserRole.USER

    async def test_same_password_different_hashes(self, registry: RepositoryRegistry, db: AsyncSession):
        """솔트로 인해 같은 비밀번호도 해시가 다름."""
        a = await registry.users.create_user(db, UserCreate(email="a@test.com", name="A", password="same"))
        b = await registry.users.create_user(db, UserCreate(email="b@test.com", name="B", password="same"))
        assert a.password_hash != b.password_hash

    async def test_duplicate_email(self, registry: RepositoryRegistry, db: AsyncSession, author: User):
        """중복 이메일 생성 실패."""
        with pytest.raises(IntegrityError):
            await registry.users.create_user(
                db, UserCreate(email=author.email, name="Dup", password="whatever")
            )


class TestVerifyPassword:
    """비밀번호 검증 테스트."""

    async def test_round_trip(self, registry: RepositoryRegistry, db: AsyncSession):
        """생성 후 같은 비밀번호로 인증 성공."""
        created = await registry.users.create_user(
            db, UserCreate(email="p@test.com", name="P", password="p")
        )
        verified = await registry.users.verify_password(db, "p@test.com", "p")
        assert verified is not None
        assert verified.id == created.id

    async def test_wrong_password(self, registry: RepositoryRegistry, db: AsyncSession, author: User):
        """잘못된 비밀번호는 None."""
        assert await registry.users.verify_password(db, author.email, "wrong") is None

    async def test_unknown_email(self, registry: RepositoryRegistry, db: AsyncSession):
        """존재하지 않는 이메일도 None — 구분 불가."""
        assert await registry.users.verify_password(db, "ghost@test.com", "author123!") is None


class TestUpdateUser:
    """사용자 수정 테스트."""

    async def test_password_rehashed(self, registry: RepositoryRegistry, db: AsyncSession, author: User):
        """비밀번호 변경 시 재해싱, 이전 비밀번호는 무효."""
        updated = await registry.users.update_user(db, author.id, UserUpdate(password="new-secret"))
        assert updated.password_hash != "new-secret"
        assert await registry.users.verify_password(db, author.email, "new-secret") is not None
        assert await registry.users.verify_password(db, author.email, "author123!") is None

    async def test_other_fields_pass_through(self, registry: RepositoryRegistry, db: AsyncSession, author: User):
        """비밀번호 없는 수정은 해시를 유지."""
        old_hash = author.password_hash
        updated = await registry.users.update_user(db, author.id, UserUpdate(name="Renamed", role=UserRole.EDITOR))
        assert updated.name == "Renamed"
        assert updated.role == UserRole.EDITOR
        assert updated.password_hash == old_hash

    async def test_none_password_ignored(self, registry: RepositoryRegistry, db: AsyncSession, author: User):
        """명시적 None 비밀번호는 무시."""
        old_hash = author.password_hash
        updated = await registry.users.update_user(db, author.id, UserUpdate(password=None, name="Still"))
        assert updated.password_hash == old_hash
        assert updated.name == "Still"

    async def test_update_missing_user(self, registry: RepositoryRegistry, db: AsyncSession):
        with pytest.raises(NotFoundError):
            await registry.users.update_user(db, uuid.uuid4(), UserUpdate(name="x"))


class TestDeleteUser:
    """사용자 삭제 테스트 — 작성한 글이 있으면 거부."""

    async def test_delete_without_content(self, registry: RepositoryRegistry, db: AsyncSession, author: User):
        deleted = await registry.users.delete(db, author.id)
        assert deleted.id == author.id
        assert await registry.users.find_by_id(db, author.id) is None

    async def test_author_with_post_rejected(self, registry: RepositoryRegistry, db: AsyncSession, author: User, make_post):
        """게시글이 남아 있는 작성자는 삭제되지 않음 (게시글이 함께 지워지지 않음)."""
        await make_post("hello")
        with pytest.raises(IntegrityError):
            await registry.users.delete(db, author.id)

    async def test_author_with_page_rejected(self, registry: RepositoryRegistry, db: AsyncSession, author: User):
        await registry.pages.create_page(
            db, PageCreate(title="About", slug="about", content="Body", author_id=author.id)
        )
        with pytest.raises(IntegrityError):
            await registry.users.delete(db, author.id)


class TestLookups:
    """이메일/역할 조회 테스트."""

    async def test_find_by_email(self, registry: RepositoryRegistry, db: AsyncSession, author: User):
        found = await registry.users.find_by_email(db, "author@test.com")
        assert found is not None
        assert found.id == author.id
        assert await registry.users.find_by_email(db, "nobody@test.com") is None

    async def test_find_by_role(self, registry: RepositoryRegistry, db: AsyncSession, author: User):
        admin = await registry.users.create_user(
            db, UserCreate(email="admin@test.com", name="Admin", password="x", role=UserRole.ADMIN)
        )
        admins = await registry.users.find_by_role(db, UserRole.ADMIN)
        assert [u.id for u in admins] == [admin.id]
        assert await registry.users.find_by_role(db, UserRole.EDITOR) == []
