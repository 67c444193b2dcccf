"""Authentication dependencies for FastAPI."""

from typing import Annotated

import structlog
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from api.v1.dependencies import get_user_service
from core.exceptions import AuthenticationError, ErrorCode
from domain.services.user_service import UserService
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import IAuthProvider, TokenUser

# Security scheme for OpenAPI docs
security = HTTPBearer(auto_error=False)

_auth_provider: JWTAuthProvider | None = None


def get_auth_provider() -> IAuthProvider:
    """Get or create the auth provider singleton."""
    global _auth_provider
    if _auth_provider is None:
        _auth_provider = JWTAuthProvider()
    return _auth_provider


async def get_current_user(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None,
        Depends(security),
    ],
    auth_provider: IAuthProvider = Depends(get_auth_provider),
) -> TokenUser:
    """
    Resolve the bearer token to the calling user.

    The user id is bound to the logging context for the rest of the request.

    Raises:
        AuthenticationError: If no token provided or token is invalid
    """
    if credentials is None:
        raise AuthenticationError(
            message="Authorization header required",
            error_code=ErrorCode.UNAUTHORIZED,
        )

    user = await auth_provider.validate_token(credentials.credentials)
    if user is None:
        raise AuthenticationError(
            message="Invalid or expired token",
            error_code=ErrorCode.INVALID_TOKEN,
        )

    structlog.contextvars.bind_contextvars(user_id=str(user.id))
    return user


CurrentUser = Annotated[TokenUser, Depends(get_current_user)]


async def get_acting_user(
    user: CurrentUser,
    user_service: UserService = Depends(get_user_service),
) -> TokenUser:
    """
    The user a mutation is attributed to.

    First use of a token registers its user so audits can reference it.
    """
    await user_service.ensure(user.id, user.email, user.display_name)
    return user


ActingUser = Annotated[TokenUser, Depends(get_acting_user)]
