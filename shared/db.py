# shared/db.py
from typing import AsyncIterator

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def build_engine(database_path: str, echo: bool = False) -> AsyncEngine:
    """
    Open the file-backed SQLite store at `database_path`.

    Every pooled connection gets foreign-key enforcement turned on, and the
    driver's implicit BEGIN is replaced by an explicit one so that nested
    transactions (SAVEPOINT) roll back correctly.
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{database_path}", echo=echo)

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")

    return engine


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    # The session factory is owned by the application, see main.create_app
    async with request.app.state.session_factory() as session:
        yield session
