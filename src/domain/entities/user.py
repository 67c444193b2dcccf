"""User domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


@dataclass
class User:
    """Domain entity for a user who logs hours."""

    id: UUID = field(default_factory=uuid4)
    email: str = ""
    name: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def display_name(self) -> str:
        """Name for reports, falling back to the email address."""
        return self.name or self.email
