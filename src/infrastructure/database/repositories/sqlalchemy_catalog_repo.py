"""SQLAlchemy implementations of Client, Project and Category repositories."""

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.category import Category
from domain.entities.project import Client, Project
from infrastructure.database.models import CategoryModel, ClientModel, ProjectModel


class SQLAlchemyClientRepository:
    """SQLAlchemy implementation of IClientRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Client | None:
        """Get a client by ID."""
        model = await self._session.get(ClientModel, id)
        return self._to_entity(model) if model else None

    async def get_all(self) -> list[Client]:
        """Get all clients ordered by name."""
        stmt = select(ClientModel).order_by(ClientModel.name)
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def get_by_name(self, name: str) -> Client | None:
        """Get a client by case-insensitive name."""
        stmt = select(ClientModel).where(func.lower(ClientModel.name) == name.lower()).limit(1)
        result = await self._session.execute(stmt)
        model = result.scalars().first()
        return self._to_entity(model) if model else None

    async def create(self, client: Client) -> Client:
        """Create a new client."""
        model = ClientModel(id=client.id, name=client.name, created_at=client.created_at)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    def _to_entity(self, model: ClientModel) -> Client:
        """Convert ORM model to domain entity."""
        return Client(id=model.id, name=model.name, created_at=model.created_at)


class SQLAlchemyProjectRepository:
    """SQLAlchemy implementation of IProjectRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Project | None:
        """Get a project by ID."""
        model = await self._session.get(ProjectModel, id)
        return self._to_entity(model) if model else None

    async def get_all(self) -> list[Project]:
        """Get all projects ordered by name."""
        stmt = select(ProjectModel).order_by(ProjectModel.name)
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def get_by_name(self, name: str) -> Project | None:
        """Get a project by case-insensitive name."""
        stmt = select(ProjectModel).where(func.lower(ProjectModel.name) == name.lower()).limit(1)
        result = await self._session.execute(stmt)
        model = result.scalars().first()
        return self._to_entity(model) if model else None

    async def create(self, project: Project) -> Project:
        """Create a new project."""
        model = ProjectModel(
            id=project.id,
            name=project.name,
            client_id=project.client_id,
            created_at=project.created_at,
        )
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, project: Project) -> Project:
        """Update an existing project."""
        model = await self._session.get(ProjectModel, project.id)

        if not model:
            raise ValueError(f"Project {project.id} not found")

        model.name = project.name
        model.client_id = project.client_id

        await self._session.flush()
        return self._to_entity(model)

    def _to_entity(self, model: ProjectModel) -> Project:
        """Convert ORM model to domain entity."""
        return Project(
            id=model.id,
            name=model.name,
            client_id=model.client_id,
            created_at=model.created_at,
        )


class SQLAlchemyCategoryRepository:
    """SQLAlchemy implementation of ICategoryRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Category | None:
        """Get a category by ID."""
        model = await self._session.get(CategoryModel, id)
        return self._to_entity(model) if model else None

    async def get_all(self) -> list[Category]:
        """Get all categories ordered by name."""
        stmt = select(CategoryModel).order_by(CategoryModel.name)
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def get_by_name(self, name: str) -> Category | None:
        """Get a category by case-insensitive name."""
        stmt = select(CategoryModel).where(func.lower(CategoryModel.name) == name.lower()).limit(1)
        result = await self._session.execute(stmt)
        model = result.scalars().first()
        return self._to_entity(model) if model else None

    async def create(self, category: Category) -> Category:
        """Create a new category."""
        model = CategoryModel(id=category.id, name=category.name, created_at=category.created_at)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    def _to_entity(self, model: CategoryModel) -> Category:
        """Convert ORM model to domain entity."""
        return Category(id=model.id, name=model.name, created_at=model.created_at)
