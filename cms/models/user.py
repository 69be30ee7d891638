"""사용자 SQLAlchemy ORM 모델 정의.

User SQLAlchemy ORM model definition.
A user authors posts and pages and authenticates with an email and a
bcrypt-hashed password.

Tables:
    - users: 사용자 계정 (User accounts)
"""

import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Enum, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cms.database import Base


class UserRole(str, enum.Enum):
    """사용자 역할 — 권한 수준 열거형.

    User role enumeration.
    ADMIN manages everything, EDITOR manages all content, AUTHOR manages
    their own content, USER is a registered reader.
    """

    ADMIN = "ADMIN"
    EDITOR = "EDITOR"
    AUTHOR = "AUTHOR"
    USER = "USER"


class User(Base):
    """사용자 모델 — 시스템 사용자 계정 정보.

    User model — System user account information.
    Email is globally unique and matched case-sensitively.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        email: 로그인 이메일 (Login email, unique)
        name: 표시 이름 (Display name)
        password_hash: bcrypt 해시된 비밀번호 (bcrypt-hashed password)
        role: 사용자 역할 (User role)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)

    Relationships:
        posts: 작성한 게시글 (Authored posts)
        pages: 작성한 페이지 (Authored pages)
    """

    __tablename__ = "users"

    # 사용자 고유 식별자 — User unique identifier (UUID v4, auto-generated)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 로그인 이메일 — Login email (전역 고유, globally unique)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    # 표시 이름 — Display name
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    # 비밀번호 해시 — bcrypt hashed password (평문 저장 금지, never store plaintext)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    # 역할 — Role (문자열로 저장, stored as VARCHAR)
    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole, native_enum=False, length=20), default=UserRole.USER, nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    # 관계 — 역참조 전용, 작성한 글이 있으면 DB가 삭제를 거부 (Back-references only; the database rejects deleting an author with content)
    posts = relationship("Post", back_populates="author", passive_deletes="all")
    pages = relationship("Page", back_populates="author", passive_deletes="all")
