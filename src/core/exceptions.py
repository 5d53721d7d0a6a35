"""Custom exceptions and error codes."""

from enum import StrEnum


class ErrorCode(StrEnum):
    """Error kinds surfaced by the API."""

    INVALID_ARGUMENT = "INVALID_ARGUMENT"  # 400
    NOT_FOUND = "NOT_FOUND"  # 404
    CONFLICT = "CONFLICT"  # 409
    INTERNAL = "INTERNAL"  # 500


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class InvalidArgumentError(AppException):
    """A precondition or business rule was violated by the caller."""

    def __init__(self, message: str) -> None:
        super().__init__(
            error_code=ErrorCode.INVALID_ARGUMENT,
            message=message,
            status_code=400,
        )


class NotFoundError(AppException):
    """The addressed entity does not exist."""

    def __init__(self, message: str) -> None:
        super().__init__(
            error_code=ErrorCode.NOT_FOUND,
            message=message,
            status_code=404,
        )


class UserProfileNotFoundError(NotFoundError):
    """User profile not found."""

    def __init__(self) -> None:
        super().__init__("User not found")


class UserAddressNotFoundError(NotFoundError):
    """User address not found."""

    def __init__(self) -> None:
        super().__init__("User Address not found")


class ConflictError(AppException):
    """A uniqueness or foreign-key race was lost against another transaction."""

    def __init__(self, message: str) -> None:
        super().__init__(
            error_code=ErrorCode.CONFLICT,
            message=message,
            status_code=409,
        )


# Persistence-layer failures. Repositories raise these instead of leaking
# driver exceptions; services translate them into the kinds above.


class PersistenceError(Exception):
    """Base class for errors reported by the persistence layer."""


class UniqueViolationError(PersistenceError):
    """A unique index rejected the write."""


class ForeignKeyViolationError(PersistenceError):
    """A foreign key rejected the write."""


class ConstraintViolationError(PersistenceError):
    """A column-level constraint (NOT NULL, length, check) rejected the write."""


class RecordNotFoundError(PersistenceError):
    """The row addressed by an update does not exist."""
