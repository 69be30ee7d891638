"""기본 CRUD 레포지토리 — 모든 레포지토리의 부모 클래스.

Base CRUD Repository — Parent class for all entity repositories.
Provides generic Create, Read, Update, Delete and Count operations bound
to one SQLAlchemy model class.

Repositories never commit: the caller owns the transaction. Writes are
flushed so that constraint violations surface as IntegrityError at the
call site.

Usage:
    class TagRepository(BaseRepository[Tag]):
        def __init__(self) -> None:
            super().__init__(Tag)
"""

from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from cms.database import Base
from cms.utils.exceptions import NotFoundError

# 제네릭 타입 변수 — SQLAlchemy 모델을 나타냄
# Generic type variable representing a SQLAlchemy model
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """제네릭 CRUD 레포지토리.

    Generic CRUD repository providing common database operations.
    Lookups report a missing record as None; update and delete expect the
    record to exist and raise NotFoundError otherwise.

    Attributes:
        model: SQLAlchemy 모델 클래스 (The SQLAlchemy model class)
    """

    def __init__(self, model: type[ModelType]) -> None:
        """레포지토리를 초기화합니다.

        Initialize the repository with a model class.

        Args:
            model: 이 레포지토리가 관리할 SQLAlchemy 모델 클래스
                   (SQLAlchemy model class this repository manages)
        """
        self.model: type[ModelType] = model

    @staticmethod
    def _paginate(query: Select, skip: int | None = None, take: int | None = None) -> Select:
        """OFFSET/LIMIT를 쿼리에 적용합니다 (Apply skip/take as OFFSET/LIMIT).

        None은 제한 없음 (None means no offset / no limit).
        """
        if skip is not None:
            query = query.offset(skip)
        if take is not None:
            query = query.limit(take)
        return query

    def _not_found(self, record_id: Any) -> NotFoundError:
        name: str = self.model.__name__
        return NotFoundError(f"{name} not found", entity=name, key=record_id)

    async def find_by_id(
        self,
        db: AsyncSession,
        record_id: UUID,
    ) -> ModelType | None:
        """ID로 단일 레코드를 조회합니다.

        Retrieve a single record by its UUID.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            record_id: 조회할 레코드의 UUID (UUID of the record to retrieve)

        Returns:
            ModelType | None: 조회된 레코드 또는 None (Found record or None)
        """
        query: Select = select(self.model).where(self.model.id == record_id)
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def find_all(
        self,
        db: AsyncSession,
        skip: int | None = None,
        take: int | None = None,
    ) -> list[ModelType]:
        """레코드 목록을 페이지 단위로 조회합니다.

        Retrieve a window of records. No ordering is applied.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            skip: 건너뛸 레코드 수 (Number of records to skip)
            take: 가져올 최대 레코드 수 (Maximum number of records to return)

        Returns:
            list[ModelType]: 조회된 레코드 목록 (List of records)
        """
        query: Select = self._paginate(select(self.model), skip, take)
        result = await db.execute(query)
        return list(result.scalars().all())

    async def create(
        self,
        db: AsyncSession,
        obj_data: dict[str, Any],
    ) -> ModelType:
        """새 레코드를 생성합니다.

        Create a new record in the database.
        A unique-key collision raises IntegrityError at flush.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            obj_data: 생성할 레코드의 데이터 딕셔너리
                      (Dictionary of data for the new record)

        Returns:
            ModelType: 생성된 레코드 (The created record)
        """
        db_obj: ModelType = self.model(**obj_data)
        db.add(db_obj)
        await db.flush()
        await db.refresh(db_obj)
        return db_obj

    async def update(
        self,
        db: AsyncSession,
        record_id: UUID,
        update_data: dict[str, Any],
    ) -> ModelType:
        """기존 레코드를 업데이트합니다.

        Partially update an existing record by its UUID.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            record_id: 업데이트할 레코드의 UUID (UUID of the record to update)
            update_data: 업데이트할 필드와 값의 딕셔너리
                         (Dictionary of fields and values to update)

        Returns:
            ModelType: 업데이트된 레코드 (Updated record)

        Raises:
            NotFoundError: 레코드가 없을 때 (Record does not exist)
        """
        # 먼저 레코드 존재 여부 확인 — First verify record exists
        db_obj: ModelType | None = await self.find_by_id(db, record_id)
        if db_obj is None:
            raise self._not_found(record_id)

        # exclude_unset으로 전달된 필드만 업데이트 (None 값도 허용)
        # Update all fields passed via exclude_unset (allows setting to None)
        for field, value in update_data.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)

        await db.flush()
        await db.refresh(db_obj)
        return db_obj

    async def delete(
        self,
        db: AsyncSession,
        record_id: UUID,
    ) -> ModelType:
        """레코드를 삭제하고 삭제된 레코드를 반환합니다.

        Delete a record by its UUID and return the removed instance.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            record_id: 삭제할 레코드의 UUID (UUID of the record to delete)

        Returns:
            ModelType: 삭제된 레코드 (The deleted record)

        Raises:
            NotFoundError: 레코드가 없을 때 (Record does not exist)
        """
        db_obj: ModelType | None = await self.find_by_id(db, record_id)
        if db_obj is None:
            raise self._not_found(record_id)

        await db.delete(db_obj)
        await db.flush()
        return db_obj

    async def count(
        self,
        db: AsyncSession,
        filters: dict[str, Any] | None = None,
    ) -> int:
        """조건에 일치하는 레코드 수를 반환합니다.

        Count records matching the given column-equality filters.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            filters: 검색 조건 딕셔너리 {'컬럼명': 값}
                     (Filter dict {'column_name': value}); None counts all

        Returns:
            int: 레코드 수 (Number of matching records)
        """
        query: Select = select(func.count()).select_from(self.model)
        for column_name, value in (filters or {}).items():
            if hasattr(self.model, column_name):
                query = query.where(getattr(self.model, column_name) == value)

        return (await db.execute(query)).scalar() or 0

    async def exists(
        self,
        db: AsyncSession,
        filters: dict[str, Any],
    ) -> bool:
        """주어진 조건에 일치하는 레코드가 존재하는지 확인합니다.

        Check if a record matching the given filters exists.
        """
        return await self.count(db, filters) > 0
