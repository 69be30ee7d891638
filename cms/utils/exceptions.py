"""커스텀 예외 클래스 모듈.

Custom exception classes module.
Provides pre-configured HTTPException subclasses so that failures raised
by the repositories surface with the right status code when they reach a
route handler, without a translation layer in between.

Database constraint violations (duplicate slug, duplicate email, duplicate
association pair, unknown foreign key) are not wrapped here: they propagate
as sqlalchemy.exc.IntegrityError.

Usage:
    from cms.utils.exceptions import NotFoundError
    raise NotFoundError("Post not found")
"""

from typing import Any

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """404 Not Found 예외 — 존재해야 할 레코드가 없을 때 사용.

    404 Not Found exception.
    Raised by update, delete, publish/unpublish and detach operations when
    the addressed record does not exist. Lookups return None instead.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource not found")
        entity: 엔티티 이름 (Entity name, e.g. "Post")
        key: 조회 키 (Lookup key: id or composite pair)
    """

    def __init__(self, detail: str = "Resource not found", entity: str | None = None, key: Any = None) -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)
        self.entity: str | None = entity
        self.key: Any = key

