"""Pydantic schemas for coach and season API endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CoachCreate(BaseModel):
    """Schema for creating a coach.

    Blank values and unknown positions are rejected by the lifecycle
    validation so that they are reported like every other season error.
    """

    first_name: str = Field(max_length=50, description="First name")
    last_name: str = Field(max_length=50, description="Last name")
    college: str = Field(max_length=100, description="College for the first season")
    position: str = Field(description="Position for the first season (HC, OC or DC)")


class CoachUpdate(BaseModel):
    """Schema for updating a coach's profile."""

    first_name: str | None = Field(default=None, max_length=50, description="First name")
    last_name: str | None = Field(default=None, max_length=50, description="Last name")
    college: str | None = Field(default=None, max_length=100, description="Display college")
    position: str | None = Field(default=None, description="Display position (HC, OC or DC)")


class SeasonUpdate(BaseModel):
    """Partial update for one season. Only fields sent are changed."""

    # No coercion: true is not a win count and "yes" is not a boolean
    model_config = ConfigDict(strict=True)

    wins: int | None = Field(default=None, description="Wins (>= 0)")
    losses: int | None = Field(default=None, description="Losses (>= 0)")
    college: str | None = Field(default=None, max_length=100, description="College")
    position: str | None = Field(default=None, description="HC, OC or DC")
    conf_champ: bool | None = Field(default=None, description="Won the conference")
    post_season: str | None = Field(default=None, description="none, bowl or playoff")
    bowl_game: str | None = Field(default=None, max_length=100, description="Bowl name")
    bowl_opponent: str | None = Field(default=None, max_length=100, description="Bowl opponent")
    bowl_result: bool | None = Field(default=None, description="True if the bowl was won")
    playoff_seed: int | None = Field(default=None, description="Playoff seed (1-12)")
    playoff_result: str | None = Field(default=None, description="How far the playoff run went")


class SeasonResponse(BaseModel):
    """One season of a coach's history."""

    model_config = ConfigDict(from_attributes=True)

    year: int = Field(description="Season year")
    wins: int = Field(description="Wins")
    losses: int = Field(description="Losses")
    is_editable: bool = Field(description="Whether the season can still be edited")
    college: str = Field(description="College")
    position: str = Field(description="Position")
    conf_champ: bool = Field(description="Won the conference")
    post_season: str = Field(description="none, bowl or playoff")
    bowl_game: str = Field(description="Bowl name")
    bowl_opponent: str = Field(description="Bowl opponent")
    bowl_result: bool = Field(description="True if the bowl was won")
    playoff_seed: int | None = Field(default=None, description="Playoff seed")
    playoff_result: str = Field(description="Playoff result")


class PositionRecord(BaseModel):
    """Win-loss split for one position."""

    wins: int = Field(description="Wins")
    losses: int = Field(description="Losses")
    win_percentage: float = Field(description="Win percentage (one decimal)")


class CoachResponse(BaseModel):
    """Coach with seasons and computed career aggregates."""

    id: int = Field(description="Coach ID")
    dynasty_id: int = Field(description="Dynasty ID")
    first_name: str = Field(description="First name")
    last_name: str = Field(description="Last name")
    college: str = Field(description="Current college")
    position: str = Field(description="Current position")
    current_year: int = Field(description="Current season year")
    seasons: list[SeasonResponse] = Field(default_factory=list, description="Seasons by year")
    wins: int = Field(description="Career wins")
    losses: int = Field(description="Career losses")
    win_percentage: float = Field(description="Career win percentage")
    postseason_wins: int = Field(description="Bowl and playoff wins")
    postseason_losses: int = Field(description="Bowl and playoff losses")
    conference_titles: int = Field(description="Conference championships")
    position_records: dict[str, PositionRecord] = Field(
        default_factory=dict, description="Win-loss split by position"
    )
    created_at: datetime | None = Field(default=None, description="When the coach was created")
    updated_at: datetime | None = Field(default=None, description="When the coach was last updated")


class CoachFailureResponse(BaseModel):
    """A coach that could not be saved during a bulk season operation."""

    coach_id: int = Field(description="Coach ID")
    detail: str = Field(description="Why the save failed")


class SeasonTransitionResponse(BaseModel):
    """Result of starting or rolling back a season across a dynasty."""

    dynasty_id: int = Field(description="Dynasty ID")
    current_year: int = Field(description="Dynasty year after the operation")
    coaches: list[CoachResponse] = Field(default_factory=list, description="Surviving coaches")
    failures: list[CoachFailureResponse] = Field(
        default_factory=list, description="Coaches left out of sync with the dynasty year"
    )
