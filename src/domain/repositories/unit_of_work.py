"""Unit of Work protocol."""

from typing import Protocol

from domain.repositories.audit_repository import IAuditRepository
from domain.repositories.catalog_repository import (
    ICategoryRepository,
    IClientRepository,
    IProjectRepository,
)
from domain.repositories.hour_repository import IHourRepository
from domain.repositories.tag_repository import ITagRepository
from domain.repositories.user_repository import IUserRepository


class IUnitOfWork(Protocol):
    """Unit of Work interface for managing transactions."""

    hours: IHourRepository
    tags: ITagRepository
    audits: IAuditRepository
    users: IUserRepository
    clients: IClientRepository
    projects: IProjectRepository
    categories: ICategoryRepository

    async def commit(self) -> None:
        """Commit the current transaction."""
        ...

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        ...

    async def __aenter__(self) -> "IUnitOfWork":
        """Enter the context manager."""
        ...

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # type: ignore
        """Exit the context manager."""
        ...
