"""Pydantic 입력/출력 스키마 패키지.

Pydantic input and projection schemas.
Each entity has a distinct create shape (required fields enforced) and
update shape (every field optional, applied with exclude_unset).
"""
