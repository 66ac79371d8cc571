"""Domain errors raised by the user service and repository."""

from enum import StrEnum


class ErrorCode(StrEnum):
    AGE_TOO_YOUNG = "AGE_TOO_YOUNG"
    INVALID_PHONE = "INVALID_PHONE"
    DUPLICATE_EMAIL = "DUPLICATE_EMAIL"
    NOT_FOUND = "NOT_FOUND"


class UserManagementError(Exception):
    """Base class for errors that map onto a client-facing response."""

    def __init__(self, message: str, code: ErrorCode) -> None:
        super().__init__(message)
        self.message = message
        self.code = code


class UserValidationError(UserManagementError):
    """A field failed one of the user validation rules."""


class ConflictError(UserManagementError):
    """A write would violate a uniqueness constraint."""

    def __init__(self, message: str = "Email address must be unique.") -> None:
        super().__init__(message, ErrorCode.DUPLICATE_EMAIL)


class NotFoundError(UserManagementError):
    """No user exists with the requested id."""

    def __init__(self, user_id: str) -> None:
        super().__init__("User not found", ErrorCode.NOT_FOUND)
        self.user_id = user_id
