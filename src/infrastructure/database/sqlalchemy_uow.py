"""SQLAlchemy Unit of Work implementation."""

from types import TracebackType
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from infrastructure.database.repositories.sqlalchemy_audit_repo import SQLAlchemyAuditRepository
from infrastructure.database.repositories.sqlalchemy_catalog_repo import (
    SQLAlchemyCategoryRepository,
    SQLAlchemyClientRepository,
    SQLAlchemyProjectRepository,
)
from infrastructure.database.repositories.sqlalchemy_hour_repo import SQLAlchemyHourRepository
from infrastructure.database.repositories.sqlalchemy_tag_repo import SQLAlchemyTagRepository
from infrastructure.database.repositories.sqlalchemy_user_repo import SQLAlchemyUserRepository


class SQLAlchemyUnitOfWork:
    """One session and one transaction per ``async with`` block.

    Repositories are bound to the session on entry. Nothing is committed
    unless ``commit()`` is called; leaving the block on an exception rolls
    back.
    """

    hours: SQLAlchemyHourRepository
    tags: SQLAlchemyTagRepository
    audits: SQLAlchemyAuditRepository
    users: SQLAlchemyUserRepository
    clients: SQLAlchemyClientRepository
    projects: SQLAlchemyProjectRepository
    categories: SQLAlchemyCategoryRepository

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._session: Optional[AsyncSession] = None

    async def __aenter__(self) -> "SQLAlchemyUnitOfWork":
        if self._session is not None:
            raise RuntimeError("Unit of work is already in progress")
        session = self._session = self._session_factory()
        self.hours = SQLAlchemyHourRepository(session)
        self.tags = SQLAlchemyTagRepository(session)
        self.audits = SQLAlchemyAuditRepository(session)
        self.users = SQLAlchemyUserRepository(session)
        self.clients = SQLAlchemyClientRepository(session)
        self.projects = SQLAlchemyProjectRepository(session)
        self.categories = SQLAlchemyCategoryRepository(session)
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        session, self._session = self._session, None
        if session is None:
            return
        try:
            if exc_type is not None:
                await session.rollback()
        finally:
            await session.close()

    async def commit(self) -> None:
        await self._active().commit()

    async def rollback(self) -> None:
        await self._active().rollback()

    def _active(self) -> AsyncSession:
        if self._session is None:
            raise RuntimeError("Unit of work used outside 'async with'")
        return self._session
