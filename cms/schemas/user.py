"""사용자 관련 Pydantic 입력 스키마 정의.

User Pydantic input schema definitions.
Passwords arrive in plain text and are hashed by the user repository
before they reach storage.
"""

from pydantic import BaseModel, field_validator

from cms.models.user import UserRole
from cms.schemas.validators import not_null


class UserCreate(BaseModel):
    """사용자 생성 입력 스키마.

    User creation input.

    Attributes:
        email: 로그인 이메일 (Login email, unique)
        name: 표시 이름 (Display name)
        password: 비밀번호 (Plain text, will be bcrypt-hashed)
        role: 역할 (Role, defaults to USER)
    """

    email: str  # 로그인 이메일 — 전역 고유 (Unique login email)
    name: str
    password: str  # 비밀번호 — 평문, 저장 전 해싱 (Plain text, hashed before insert)
    role: UserRole = UserRole.USER


class UserUpdate(BaseModel):
    """사용자 수정 입력 스키마 (부분 업데이트).

    User update input (partial update).
    Only provided fields are updated; a provided password is re-hashed.
    An explicit None password is ignored; the stored columns reject None.
    """

    email: str | None = None
    name: str | None = None
    password: str | None = None
    role: UserRole | None = None

    @field_validator("email", "name", "role")
    @classmethod
    def reject_null(cls, value):
        return not_null(value)
