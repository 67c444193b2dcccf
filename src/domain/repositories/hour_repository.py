"""Hour repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.hour import Hour, HourEntry, HourFilter, HourQuery


class IHourRepository(Protocol):
    """Repository interface for Hour entities and their named scopes."""

    async def get(self, id: UUID) -> Hour | None:
        """Get an hour by ID, tags included."""
        ...

    async def create(self, hour: Hour) -> Hour:
        """Create a new hour."""
        ...

    async def update(self, hour: Hour) -> Hour:
        """Update an existing hour."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete an hour and return success status."""
        ...

    async def by_last_created_at(self) -> list[Hour]:
        """All hours, most recently created first."""
        ...

    async def by_starting_time(self) -> list[Hour]:
        """All hours, latest starting time first."""
        ...

    async def with_clients(self) -> list[Hour]:
        """Hours whose project belongs to a client."""
        ...

    async def open_per_user(self, user_id: UUID) -> list[Hour]:
        """Hours of a user that have no ending time yet."""
        ...

    async def query(self, entry_filter: HourFilter) -> list[Hour]:
        """Hours matching every predicate of the filter."""
        ...

    async def search_by_description(self, term: str) -> list[Hour]:
        """Hours whose description contains every word of the term."""
        ...

    async def find(self, hour_query: HourQuery) -> list[Hour]:
        """Hours matching a composition of scopes."""
        ...

    async def find_entries(self, hour_query: HourQuery) -> list[HourEntry]:
        """Like find, with user/project/client/category names resolved."""
        ...
