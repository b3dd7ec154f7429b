"""Domain exceptions raised by the dynasty services."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldError:
    """A single rejected input field."""

    field: str
    message: str


class DynastyError(Exception):
    """Base exception for dynasty domain errors."""

    kind = "error"

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class InvalidInputError(DynastyError):
    """Raised when a field is malformed or out of range."""

    kind = "invalid_input"

    def __init__(self, errors: list[FieldError], message: str = "Invalid input") -> None:
        super().__init__(message, status_code=422)
        self.errors = errors

    @classmethod
    def for_field(cls, field: str, message: str) -> "InvalidInputError":
        """Build an error for a single field."""
        return cls([FieldError(field, message)], message=message)


class NotFoundError(DynastyError):
    """Raised when a dynasty, coach or season does not exist (or is not visible)."""

    kind = "not_found"

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, status_code=404)


class ForbiddenError(DynastyError):
    """Raised when editing a locked season or mutating another user's dynasty."""

    kind = "forbidden"

    def __init__(self, message: str = "Operation not allowed"):
        super().__init__(message, status_code=403)


class LimitExceededError(DynastyError):
    """Raised when a dynasty roster is already full."""

    kind = "limit_exceeded"

    def __init__(self, message: str = "Limit exceeded"):
        super().__init__(message, status_code=409)
