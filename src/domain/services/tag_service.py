"""Tag service layer."""

from typing import Callable, List
from uuid import UUID

from core.exceptions import TagNotFoundError
from domain.entities.hour import Hour, HourQuery
from domain.entities.tag import Tag, TagWithCount
from domain.repositories.unit_of_work import IUnitOfWork


class TagService:
    """Service layer for reading tags derived from hour descriptions.

    Tags are created and linked by ``HourService``; there is no direct
    create or delete here.
    """

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def get_all(self) -> List[TagWithCount]:
        """Get all tags with usage counts. Orphaned tags report zero."""
        async with self._uow_factory() as uow:
            return await uow.tags.list_with_counts()  # type: ignore[no-any-return]

    async def get_by_id(self, tag_id: UUID) -> Tag:
        """Get a specific tag."""
        async with self._uow_factory() as uow:
            tag = await uow.tags.get(tag_id)
            if not tag:
                raise TagNotFoundError(str(tag_id))
            return tag

    async def get_hours(self, tag_id: UUID) -> List[Hour]:
        """Get the hours tagged with a tag, latest starting time first."""
        async with self._uow_factory() as uow:
            tag = await uow.tags.get(tag_id)
            if not tag:
                raise TagNotFoundError(str(tag_id))
            return await uow.hours.find(HourQuery(tag_id=tag_id))  # type: ignore[no-any-return]
