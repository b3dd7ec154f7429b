"""Season ORM model and the value sets its fields draw from."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dynasty_tracker.database import Base

if TYPE_CHECKING:
    from dynasty_tracker.models.coach import Coach


class Position(StrEnum):
    """Coaching position held during a season."""

    HEAD_COACH = "HC"
    OFFENSIVE_COORDINATOR = "OC"
    DEFENSIVE_COORDINATOR = "DC"


class PostSeason(StrEnum):
    """Which postseason branch a season took."""

    NONE = "none"
    BOWL = "bowl"
    PLAYOFF = "playoff"


class PlayoffResult(StrEnum):
    """How far a playoff run went."""

    NONE = "none"
    FIRST_ROUND_LOSS = "first_round_loss"
    SECOND_ROUND_LOSS = "second_round_loss"
    SEMIFINAL_LOSS = "semifinal_loss"
    CHAMPIONSHIP_LOSS = "championship_loss"
    CHAMPION = "champion"


class Season(Base):
    """One year's record for a coach."""

    __tablename__ = "seasons"
    __table_args__ = (
        UniqueConstraint("coach_id", "year", name="uq_coach_season_year"),
        CheckConstraint("wins >= 0", name="ck_season_wins_non_negative"),
        CheckConstraint("losses >= 0", name="ck_season_losses_non_negative"),
        CheckConstraint(
            "playoff_seed IS NULL OR playoff_seed BETWEEN 1 AND 12",
            name="ck_season_playoff_seed_range",
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    coach_id: Mapped[int] = mapped_column(ForeignKey("coaches.id", ondelete="CASCADE"), index=True)
    year: Mapped[int] = mapped_column()
    wins: Mapped[int] = mapped_column(default=0)
    losses: Mapped[int] = mapped_column(default=0)
    is_editable: Mapped[bool] = mapped_column(default=True)
    college: Mapped[str] = mapped_column(String(100))
    position: Mapped[str] = mapped_column(String(2), default=Position.HEAD_COACH.value)
    conf_champ: Mapped[bool] = mapped_column(default=False)
    post_season: Mapped[str] = mapped_column(String(10), default=PostSeason.NONE.value)

    # Bowl branch (post_season == "bowl")
    bowl_game: Mapped[str] = mapped_column(String(100), default="")
    bowl_opponent: Mapped[str] = mapped_column(String(100), default="")
    bowl_result: Mapped[bool] = mapped_column(default=False)  # True = won

    # Playoff branch (post_season == "playoff")
    playoff_seed: Mapped[int | None] = mapped_column(nullable=True)
    playoff_result: Mapped[str] = mapped_column(String(20), default=PlayoffResult.NONE.value)

    # Relationships
    coach: Mapped[Coach] = relationship(back_populates="seasons")
