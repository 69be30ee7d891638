"""사용자 레포지토리 — 사용자 CRUD 및 자격 증명 관리.

User Repository — CRUD and credential lifecycle for users.
Extends BaseRepository with email lookup, role filtering, and bcrypt
hashing on create/update. Plain text passwords never reach the database.
"""

from typing import Any
from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from cms.models.user import User, UserRole
from cms.repositories.base import BaseRepository
from cms.schemas.user import UserCreate, UserUpdate
from cms.utils.password import hash_password, verify_password


class UserRepository(BaseRepository[User]):
    """사용자 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the users table.
    Embeds the credential manager: hashing on write, constant-time
    verification on authentication.
    """

    def __init__(self) -> None:
        """UserRepository를 초기화합니다.

        Initialize the UserRepository with the User model.
        """
        super().__init__(User)

    async def find_by_email(
        self,
        db: AsyncSession,
        email: str,
    ) -> User | None:
        """이메일로 사용자를 조회합니다.

        Retrieve a user by exact (case-sensitive) email.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            email: 이메일 주소 (Email address)

        Returns:
            User | None: 사용자 또는 None (User or None)
        """
        query: Select = select(User).where(User.email == email)
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def create_user(
        self,
        db: AsyncSession,
        data: UserCreate,
    ) -> User:
        """비밀번호를 해싱한 뒤 새 사용자를 생성합니다.

        Create a user after hashing the plain text password.
        A duplicate email raises IntegrityError.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 사용자 생성 입력 (User creation input)

        Returns:
            User: 생성된 사용자 (Created user)
        """
        obj_data: dict[str, Any] = data.model_dump(exclude={"password"})
        obj_data["password_hash"] = hash_password(data.password)
        return await self.create(db, obj_data)

    async def update_user(
        self,
        db: AsyncSession,
        user_id: UUID,
        data: UserUpdate,
    ) -> User:
        """사용자 정보를 수정하고, 비밀번호가 있으면 다시 해싱합니다.

        Partially update a user. A string password is re-hashed before the
        update is applied; an explicit None password is ignored since a
        credential cannot be cleared. Other fields pass through unchanged.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 사용자 ID (User UUID)
            data: 사용자 수정 입력 (User update input)

        Returns:
            User: 수정된 사용자 (Updated user)

        Raises:
            NotFoundError: 사용자를 찾을 수 없을 때 (User not found)
        """
        update_data: dict[str, Any] = data.model_dump(exclude_unset=True)

        password: str | None = update_data.pop("password", None)
        if isinstance(password, str):
            update_data["password_hash"] = hash_password(password)

        return await self.update(db, user_id, update_data)

    async def verify_password(
        self,
        db: AsyncSession,
        email: str,
        password: str,
    ) -> User | None:
        """이메일과 비밀번호로 사용자를 인증합니다.

        Authenticate a user by email and password.
        Unknown email and wrong password both return None so callers cannot
        tell them apart.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            email: 이메일 주소 (Email address)
            password: 평문 비밀번호 (Plain text password)

        Returns:
            User | None: 인증된 사용자 또는 None (Authenticated user or None)
        """
        user: User | None = await self.find_by_email(db, email)
        if user is None:
            return None

        if not verify_password(password, user.password_hash):
            return None
        return user

    async def find_by_role(
        self,
        db: AsyncSession,
        role: UserRole,
    ) -> list[User]:
        """역할별 사용자 목록 (Users with the given role, oldest first)."""
        query: Select = select(User).where(User.role == role).order_by(User.created_at)
        result = await db.execute(query)
        return list(result.scalars().all())
