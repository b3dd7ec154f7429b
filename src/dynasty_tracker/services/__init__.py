"""Domain services for dynasties, coaches and seasons."""

from dynasty_tracker.services.errors import (
    DynastyError,
    FieldError,
    ForbiddenError,
    InvalidInputError,
    LimitExceededError,
    NotFoundError,
)

__all__ = [
    "DynastyError",
    "FieldError",
    "ForbiddenError",
    "InvalidInputError",
    "LimitExceededError",
    "NotFoundError",
]
