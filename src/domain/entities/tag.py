"""Tag domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


@dataclass
class Tag:
    """Domain entity for a Tag derived from a hashtag."""

    name: str
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Strip a leading hash so '#tdd' and 'tdd' name the same tag."""
        self.name = self.name.lstrip("#")

    @staticmethod
    def key_for(name: str) -> str:
        """Lookup key shared by every casing of a name."""
        return name.lstrip("#").lower()

    @property
    def key(self) -> str:
        return self.key_for(self.name)

    def matches(self, name: str) -> bool:
        """Case-insensitive name comparison."""
        return self.key == self.key_for(name)


@dataclass(frozen=True, slots=True)
class TagWithCount:
    """A tag and the number of hours currently linked to it."""

    tag: Tag
    hours_count: int
