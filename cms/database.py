"""데이터베이스 엔진 및 세션 설정 모듈.

Database engine and session configuration module.
Provides builders for the async SQLAlchemy engine and session factory,
and the ORM base class. The engine is owned by the repository registry
rather than created at import time.
"""

from typing import Any

from sqlalchemy import event
from sqlalchemy.engine.interfaces import DBAPIConnection
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import ConnectionPoolEntry, StaticPool

from cms.config import Settings


class Base(DeclarativeBase):
    """SQLAlchemy 선언적 베이스 클래스.

    Declarative base class for all ORM models.
    All models inherit from this class to register with the metadata.
    """

    pass


def _enable_sqlite_foreign_keys(dbapi_connection: DBAPIConnection, connection_record: ConnectionPoolEntry) -> None:
    """SQLite 연결마다 외래 키 검사를 켭니다 (Turn on FK enforcement per SQLite connection)."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str, echo: bool = False, pool_size: int = 5, max_overflow: int = 10) -> AsyncEngine:
    """비동기 데이터베이스 엔진을 생성합니다.

    Create the async database engine.
    PostgreSQL (asyncpg) gets a pre-pinged connection pool; SQLite (aiosqlite)
    gets foreign-key enforcement and, for in-memory URLs, a single shared
    connection so every session sees the same database.

    Args:
        database_url: 비동기 DB URL (Async database URL)
        echo: SQL 로그 출력 여부 (Emit SQL statements to the log)
        pool_size: 커넥션 풀 크기 (Connection pool size)
        max_overflow: 풀 초과 허용 연결 수 (Overflow connections)

    Returns:
        AsyncEngine: 생성된 엔진 (The created engine)
    """
    kwargs: dict[str, Any] = {"echo": echo}

    if database_url.startswith("sqlite"):
        if ":memory:" in database_url or database_url.rstrip("/").endswith("aiosqlite:"):
            kwargs["poolclass"] = StaticPool
            kwargs["connect_args"] = {"check_same_thread": False}
        engine: AsyncEngine = create_async_engine(database_url, **kwargs)
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    # pool_pre_ping=True: 커넥션 풀에서 꺼낸 연결의 유효성을 사전 확인 (Validates connections before use)
    return create_async_engine(
        database_url,
        pool_pre_ping=True,
        pool_size=pool_size,
        max_overflow=max_overflow,
        **kwargs,
    )


def build_engine_from_settings(settings: Settings) -> AsyncEngine:
    """설정 객체로부터 엔진을 생성합니다 (Create the engine from a Settings object)."""
    return build_engine(
        settings.DATABASE_URL,
        echo=settings.DEBUG,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """비동기 세션 팩토리를 생성합니다.

    Create the async session factory.
    expire_on_commit=False: 커밋 후에도 객체 속성 접근 가능
    (Allows attribute access after commit without refresh)
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
