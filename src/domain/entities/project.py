"""Client and Project domain entities."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


@dataclass
class Client:
    """Domain entity for a client that projects are billed to."""

    name: str
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class Project:
    """Domain entity for a Project. ``client_id`` is optional."""

    name: str
    id: UUID = field(default_factory=uuid4)
    client_id: UUID | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)
