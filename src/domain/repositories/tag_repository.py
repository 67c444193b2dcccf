"""Tag repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.tag import Tag, TagWithCount


class ITagRepository(Protocol):
    """Tags derived from hashtags, and their links to hours.

    Tags are only ever added or renamed; removing a hashtag from a
    description drops the link and leaves the tag itself in place.
    """

    async def get(self, tag_id: UUID) -> Tag | None: ...

    async def find_by_name(self, name: str) -> Tag | None:
        """Look a tag up by name, ignoring case."""
        ...

    async def for_hour(self, hour_id: UUID) -> list[Tag]: ...

    async def list_with_counts(self) -> list[TagWithCount]: ...

    async def add(self, tag: Tag) -> Tag: ...

    async def rename(self, tag_id: UUID, name: str) -> Tag: ...

    async def tag(self, tag_id: UUID, hour_id: UUID) -> None:
        """Link a tag to an hour; linking twice is a no-op."""
        ...

    async def untag(self, tag_id: UUID, hour_id: UUID) -> None: ...
