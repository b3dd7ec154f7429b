"""SQLAlchemy ORM models."""

from dynasty_tracker.models.coach import Coach
from dynasty_tracker.models.dynasty import Dynasty, dynasty_shared_users
from dynasty_tracker.models.season import PlayoffResult, Position, PostSeason, Season
from dynasty_tracker.models.user import User

__all__ = [
    "Coach",
    "Dynasty",
    "PlayoffResult",
    "Position",
    "PostSeason",
    "Season",
    "User",
    "dynasty_shared_users",
]
