"""Catalog service layer for clients, projects and categories."""

from collections.abc import Callable
from uuid import UUID

import structlog

from core.exceptions import ClientNotFoundError, DuplicateNameError, ProjectNotFoundError
from domain.entities.category import Category
from domain.entities.project import Client, Project
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class CatalogService:
    """Service layer for the records hours are logged against."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def list_clients(self) -> list[Client]:
        async with self._uow_factory() as uow:
            return await uow.clients.get_all()  # type: ignore[no-any-return]

    async def create_client(self, name: str) -> Client:
        """Create a client. Names are unique ignoring case."""
        async with self._uow_factory() as uow:
            if await uow.clients.get_by_name(name):
                raise DuplicateNameError("client", name)
            created = await uow.clients.create(Client(name=name))
            await uow.commit()
        logger.info("client_created", client_id=str(created.id))
        return created  # type: ignore[no-any-return]

    async def list_projects(self) -> list[Project]:
        async with self._uow_factory() as uow:
            return await uow.projects.get_all()  # type: ignore[no-any-return]

    async def create_project(self, name: str, client_id: UUID | None = None) -> Project:
        """Create a project, optionally billed to an existing client."""
        async with self._uow_factory() as uow:
            if await uow.projects.get_by_name(name):
                raise DuplicateNameError("project", name)
            if client_id and not await uow.clients.get(client_id):
                raise ClientNotFoundError(str(client_id))
            created = await uow.projects.create(Project(name=name, client_id=client_id))
            await uow.commit()
        logger.info("project_created", project_id=str(created.id))
        return created  # type: ignore[no-any-return]

    async def assign_client(self, project_id: UUID, client_id: UUID | None) -> Project:
        """Attach a project to a client, or detach it with ``None``."""
        async with self._uow_factory() as uow:
            project = await uow.projects.get(project_id)
            if not project:
                raise ProjectNotFoundError(str(project_id))
            if client_id and not await uow.clients.get(client_id):
                raise ClientNotFoundError(str(client_id))
            project.client_id = client_id
            updated = await uow.projects.update(project)
            await uow.commit()
            return updated  # type: ignore[no-any-return]

    async def list_categories(self) -> list[Category]:
        async with self._uow_factory() as uow:
            return await uow.categories.get_all()  # type: ignore[no-any-return]

    async def create_category(self, name: str) -> Category:
        """Create a category. Names are unique ignoring case."""
        async with self._uow_factory() as uow:
            if await uow.categories.get_by_name(name):
                raise DuplicateNameError("category", name)
            created = await uow.categories.create(Category(name=name))
            await uow.commit()
        logger.info("category_created", category_id=str(created.id))
        return created  # type: ignore[no-any-return]
