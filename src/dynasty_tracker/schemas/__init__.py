"""Pydantic schemas for request/response validation."""

from dynasty_tracker.schemas.coach import (
    CoachCreate,
    CoachFailureResponse,
    CoachResponse,
    CoachUpdate,
    PositionRecord,
    SeasonResponse,
    SeasonTransitionResponse,
    SeasonUpdate,
)
from dynasty_tracker.schemas.dynasty import (
    DynastyCreate,
    DynastyMember,
    DynastyResponse,
    DynastyShare,
    DynastyUpdate,
)
from dynasty_tracker.schemas.user import (
    FavoriteTeam,
    PasswordUpdate,
    Token,
    UserCreate,
    UserLogin,
    UserResponse,
    UsernameUpdate,
)

__all__ = [
    # User schemas
    "UserCreate",
    "UserResponse",
    "UserLogin",
    "Token",
    "FavoriteTeam",
    "UsernameUpdate",
    "PasswordUpdate",
    # Dynasty schemas
    "DynastyCreate",
    "DynastyUpdate",
    "DynastyShare",
    "DynastyMember",
    "DynastyResponse",
    # Coach and season schemas
    "CoachCreate",
    "CoachUpdate",
    "CoachResponse",
    "SeasonUpdate",
    "SeasonResponse",
    "PositionRecord",
    "CoachFailureResponse",
    "SeasonTransitionResponse",
]
