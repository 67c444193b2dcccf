"""Client, Project and Category repository protocols."""

from typing import Protocol
from uuid import UUID

from domain.entities.category import Category
from domain.entities.project import Client, Project


class IClientRepository(Protocol):
    """Repository interface for Client entities."""

    async def get(self, id: UUID) -> Client | None:
        """Get a client by ID."""
        ...

    async def get_all(self) -> list[Client]:
        """Get all clients ordered by name."""
        ...

    async def get_by_name(self, name: str) -> Client | None:
        """Get a client by case-insensitive name."""
        ...

    async def create(self, client: Client) -> Client:
        """Create a new client."""
        ...


class IProjectRepository(Protocol):
    """Repository interface for Project entities."""

    async def get(self, id: UUID) -> Project | None:
        """Get a project by ID."""
        ...

    async def get_all(self) -> list[Project]:
        """Get all projects ordered by name."""
        ...

    async def get_by_name(self, name: str) -> Project | None:
        """Get a project by case-insensitive name."""
        ...

    async def create(self, project: Project) -> Project:
        """Create a new project."""
        ...

    async def update(self, project: Project) -> Project:
        """Update an existing project."""
        ...


class ICategoryRepository(Protocol):
    """Repository interface for Category entities."""

    async def get(self, id: UUID) -> Category | None:
        """Get a category by ID."""
        ...

    async def get_all(self) -> list[Category]:
        """Get all categories ordered by name."""
        ...

    async def get_by_name(self, name: str) -> Category | None:
        """Get a category by case-insensitive name."""
        ...

    async def create(self, category: Category) -> Category:
        """Create a new category."""
        ...
