"""User service layer."""

from collections.abc import Callable
from uuid import UUID

import structlog

from core.exceptions import UserNotFoundError
from domain.entities.user import User
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class UserService:
    """Service layer for users authenticated through bearer tokens."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def get_by_id(self, user_id: UUID) -> User:
        """Get a specific user."""
        async with self._uow_factory() as uow:
            user = await uow.users.get(user_id)
            if not user:
                raise UserNotFoundError(str(user_id))
            return user

    async def ensure(self, user_id: UUID, email: str, name: str | None = None) -> User:
        """Return the user, creating the row on first sight of a token."""
        async with self._uow_factory() as uow:
            user = await uow.users.get(user_id)
            if user:
                return user
            created = await uow.users.create(User(id=user_id, email=email, name=name))
            await uow.commit()
        logger.info("user_registered", user_id=str(user_id))
        return created  # type: ignore[no-any-return]
