"""User repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.user import User


class IUserRepository(Protocol):
    """Repository interface for User entities."""

    async def get(self, id: UUID) -> User | None:
        """Get a user by ID."""
        ...

    async def create(self, user: User) -> User:
        """Create a new user."""
        ...
