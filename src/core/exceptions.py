"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"

    # Not found errors (404)
    HOUR_NOT_FOUND = "HOUR_NOT_FOUND"
    TAG_NOT_FOUND = "TAG_NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    PROJECT_NOT_FOUND = "PROJECT_NOT_FOUND"
    CLIENT_NOT_FOUND = "CLIENT_NOT_FOUND"

    # Validation errors (400 / 422)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_FILTER = "INVALID_FILTER"

    # Conflict errors (409)
    DUPLICATE_NAME = "DUPLICATE_NAME"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(
        self,
        message: str = "Authentication required",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
        )


class HourNotFoundError(AppException):
    """Hour entry not found."""

    def __init__(self, hour_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.HOUR_NOT_FOUND,
            message=f"Hour entry not found: {hour_id}",
            status_code=404,
            details={"hour_id": hour_id},
        )


class TagNotFoundError(AppException):
    """Tag not found."""

    def __init__(self, tag_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.TAG_NOT_FOUND,
            message=f"Tag not found: {tag_id}",
            status_code=404,
            details={"tag_id": tag_id},
        )


class UserNotFoundError(AppException):
    """User not found."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.USER_NOT_FOUND,
            message=f"User not found: {user_id}",
            status_code=404,
            details={"user_id": user_id},
        )


class ClientNotFoundError(AppException):
    """Client not found."""

    def __init__(self, client_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.CLIENT_NOT_FOUND,
            message=f"Client not found: {client_id}",
            status_code=404,
            details={"client_id": client_id},
        )


class HourValidationError(AppException):
    """An hour entry is missing required fields or references unknown records."""

    def __init__(self, errors: dict[str, str]) -> None:
        super().__init__(
            error_code=ErrorCode.VALIDATION_ERROR,
            message="Hour entry is invalid: " + ", ".join(sorted(errors)),
            status_code=422,
            details=[{"field": name, "message": msg} for name, msg in sorted(errors.items())],
        )
        self.errors = errors


class InvalidFilterError(AppException):
    """A query filter could not be parsed."""

    def __init__(self, field: str, value: str, expected: str = "DD/MM/YYYY") -> None:
        super().__init__(
            error_code=ErrorCode.INVALID_FILTER,
            message=f"Invalid value for {field}: {value!r} (expected {expected})",
            status_code=400,
            details={"field": field, "value": value},
        )


class DuplicateNameError(AppException):
    """A named record with the same name already exists."""

    def __init__(self, kind: str, name: str) -> None:
        super().__init__(
            error_code=ErrorCode.DUPLICATE_NAME,
            message=f"{kind.capitalize()} '{name}' already exists",
            status_code=409,
            details={"kind": kind, "name": name},
        )


class ProjectNotFoundError(AppException):
    """Project not found."""

    def __init__(self, project_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.PROJECT_NOT_FOUND,
            message=f"Project not found: {project_id}",
            status_code=404,
            details={"project_id": project_id},
        )
