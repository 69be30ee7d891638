"""스키마 공용 검증 함수.

Shared schema validators.
"""

from typing import TypeVar

T = TypeVar("T")


def not_null(value: T | None) -> T:
    """명시적 None 거부 — NOT NULL 컬럼용 (Reject an explicit None for a NOT NULL column).

    Partial-update inputs leave unset fields out via exclude_unset; a field
    that is sent must carry a value.
    """
    if value is None:
        raise ValueError("must not be null")
    return value
