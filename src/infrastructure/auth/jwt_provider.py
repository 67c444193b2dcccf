"""HS256 bearer tokens signed with the shared secret from settings.

Claims read and written::

    sub    user UUID (required)
    email  user email (required)
    name   display name, used when the user row is first created
    role   optional
    exp    expiry
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional
from uuid import UUID

import structlog
from jose import ExpiredSignatureError, JWTError, jwt

from core.config import settings
from infrastructure.auth.provider import TokenUser

logger = structlog.get_logger()


class JWTAuthProvider:
    """IAuthProvider backed by python-jose."""

    def __init__(
        self,
        secret_key: str = settings.jwt_secret_key,
        algorithm: str = settings.jwt_algorithm,
        expire_minutes: int = settings.jwt_expire_minutes,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._lifetime = timedelta(minutes=expire_minutes)

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        try:
            claims = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except ExpiredSignatureError:
            logger.info("token_expired")
            return None
        except JWTError as exc:
            logger.debug("token_rejected", reason=str(exc))
            return None
        return self._user_from_claims(claims)

    def create_token(self, user: TokenUser) -> str:
        claims: dict[str, Any] = {
            "sub": str(user.id),
            "email": user.email,
            "exp": datetime.now(timezone.utc) + self._lifetime,
        }
        optional = {"name": user.display_name, "role": user.role}
        claims.update({key: value for key, value in optional.items() if value})
        return jwt.encode(claims, self._secret_key, algorithm=self._algorithm)

    @staticmethod
    def _user_from_claims(claims: dict[str, Any]) -> Optional[TokenUser]:
        """A user for well-formed claims, None when sub or email is unusable."""
        subject, email = claims.get("sub"), claims.get("email")
        if not subject or not email:
            return None
        try:
            user_id = UUID(str(subject))
        except ValueError:
            return None
        return TokenUser(
            id=user_id,
            email=email,
            display_name=claims.get("name"),
            role=claims.get("role"),
        )
