"""Authentication provider protocol and the user it yields."""

from dataclasses import dataclass
from typing import Optional, Protocol
from uuid import UUID


@dataclass
class TokenUser:
    """The caller identified by a bearer token.

    Also the acting user every audited change is attributed to.
    """

    id: UUID
    email: str
    display_name: Optional[str] = None
    role: Optional[str] = None


class IAuthProvider(Protocol):
    """Protocol for authentication providers."""

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """Return the token's user, or None when it is invalid or expired."""
        ...

    def create_token(self, user: TokenUser) -> str:
        """Issue a token for ``user``."""
        ...
