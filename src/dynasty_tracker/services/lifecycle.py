"""Season lifecycle: creating, editing, locking, advancing and rolling back seasons.

The plain functions mutate ORM objects in memory and never touch the session.
``start_new_season`` and ``rollback_season`` drive them across a whole dynasty
and own the commits.

The bulk operations are not atomic. The dynasty clock is committed first and
each coach is then committed on its own, so a coach that fails to save is left
behind the dynasty year. Such coaches are logged and returned as failures.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from dynasty_tracker.config import get_settings
from dynasty_tracker.models.coach import Coach
from dynasty_tracker.models.dynasty import Dynasty
from dynasty_tracker.models.season import PlayoffResult, Position, PostSeason, Season
from dynasty_tracker.services.errors import (
    FieldError,
    ForbiddenError,
    InvalidInputError,
    LimitExceededError,
    NotFoundError,
)

logger = logging.getLogger(__name__)

MIN_PLAYOFF_SEED = 1
MAX_PLAYOFF_SEED = 12

SEASON_FIELDS = frozenset(
    {
        "wins",
        "losses",
        "college",
        "position",
        "conf_champ",
        "post_season",
        "bowl_game",
        "bowl_opponent",
        "bowl_result",
        "playoff_seed",
        "playoff_result",
    }
)


@dataclass
class CoachFailure:
    """A coach whose save failed during a bulk season operation."""

    coach_id: int
    detail: str


@dataclass
class SeasonTransition:
    """Outcome of a dynasty-wide start-season or rollback-season."""

    dynasty_id: int
    current_year: int
    coaches: list[Coach] = field(default_factory=list)
    failures: list[CoachFailure] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return not self.failures


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _enum_value(enum_cls, value: Any) -> str | None:
    try:
        return enum_cls(value).value
    except ValueError:
        return None


def _blank_season(year: int, college: str, position: str) -> Season:
    """Build a fresh 0-0, editable season with no postseason data."""
    return Season(
        year=year,
        wins=0,
        losses=0,
        is_editable=True,
        college=college,
        position=position,
        conf_champ=False,
        post_season=PostSeason.NONE.value,
        bowl_game="",
        bowl_opponent="",
        bowl_result=False,
        playoff_seed=None,
        playoff_result=PlayoffResult.NONE.value,
    )


def _clear_bowl(season: Season) -> None:
    season.bowl_game = ""
    season.bowl_opponent = ""
    season.bowl_result = False


def _clear_playoff(season: Season) -> None:
    season.playoff_seed = None
    season.playoff_result = PlayoffResult.NONE.value


def validate_coach_fields(values: Mapping[str, Any]) -> dict[str, str]:
    """Validate coach profile fields and return them trimmed.

    Only the keys present in ``values`` are checked.

    Raises:
        InvalidInputError: With one entry per rejected field.
    """
    errors: list[FieldError] = []
    cleaned: dict[str, str] = {}

    for name in ("first_name", "last_name", "college"):
        if name not in values:
            continue
        value = values[name]
        if not isinstance(value, str) or not value.strip():
            errors.append(FieldError(name, f"{name} is required"))
        else:
            cleaned[name] = value.strip()

    if "position" in values:
        position = _enum_value(Position, values["position"])
        if position is None:
            errors.append(FieldError("position", "position must be one of HC, OC, DC"))
        else:
            cleaned["position"] = position

    if errors:
        raise InvalidInputError(errors)
    return cleaned


def new_coach(
    dynasty: Dynasty,
    coach_count: int,
    *,
    first_name: str,
    last_name: str,
    college: str,
    position: str,
    max_coaches: int | None = None,
) -> Coach:
    """Create a coach with a single open season for the dynasty's current year.

    Raises:
        InvalidInputError: If a name, the college or the position is invalid.
        LimitExceededError: If the dynasty roster is already full.
    """
    if max_coaches is None:
        max_coaches = get_settings().max_coaches_per_dynasty

    cleaned = validate_coach_fields(
        {
            "first_name": first_name,
            "last_name": last_name,
            "college": college,
            "position": position,
        }
    )

    if coach_count >= max_coaches:
        raise LimitExceededError(
            f"Maximum number of coaches ({max_coaches}) reached for this dynasty"
        )

    year = dynasty.current_year
    return Coach(
        dynasty_id=dynasty.id,
        first_name=cleaned["first_name"],
        last_name=cleaned["last_name"],
        college=cleaned["college"],
        position=cleaned["position"],
        current_year=year,
        seasons=[_blank_season(year, cleaned["college"], cleaned["position"])],
    )


def validate_season_changes(changes: Mapping[str, Any]) -> dict[str, Any]:
    """Check a partial season update and return it normalized.

    Raises:
        InvalidInputError: With one entry per rejected field. Nothing is
            returned, so nothing can be applied, when any field is bad.
    """
    errors: list[FieldError] = []
    cleaned: dict[str, Any] = {}

    for name, value in changes.items():
        if name not in SEASON_FIELDS:
            errors.append(FieldError(name, f"{name} cannot be updated"))
        elif name in ("wins", "losses"):
            if not _is_int(value) or value < 0:
                errors.append(FieldError(name, f"{name} must be a non-negative integer"))
            else:
                cleaned[name] = value
        elif name == "college":
            if not isinstance(value, str) or not value.strip():
                errors.append(FieldError(name, "college cannot be empty"))
            else:
                cleaned[name] = value.strip()
        elif name == "position":
            position = _enum_value(Position, value)
            if position is None:
                errors.append(FieldError(name, "position must be one of HC, OC, DC"))
            else:
                cleaned[name] = position
        elif name == "post_season":
            post_season = _enum_value(PostSeason, value)
            if post_season is None:
                errors.append(FieldError(name, "post_season must be none, bowl or playoff"))
            else:
                cleaned[name] = post_season
        elif name == "playoff_result":
            result = _enum_value(PlayoffResult, value)
            if result is None:
                errors.append(FieldError(name, "playoff_result is not a known result"))
            else:
                cleaned[name] = result
        elif name == "playoff_seed":
            if value is not None and (
                not _is_int(value) or not MIN_PLAYOFF_SEED <= value <= MAX_PLAYOFF_SEED
            ):
                errors.append(
                    FieldError(
                        name,
                        f"playoff_seed must be an integer between "
                        f"{MIN_PLAYOFF_SEED} and {MAX_PLAYOFF_SEED}",
                    )
                )
            else:
                cleaned[name] = value
        elif name in ("conf_champ", "bowl_result"):
            if not isinstance(value, bool):
                errors.append(FieldError(name, f"{name} must be true or false"))
            else:
                cleaned[name] = value
        else:  # bowl_game, bowl_opponent
            if value is None:
                value = ""
            if not isinstance(value, str):
                errors.append(FieldError(name, f"{name} must be text"))
            else:
                cleaned[name] = value.strip()

    if errors:
        raise InvalidInputError(errors)
    return cleaned


def _require_season(coach: Coach, year: int) -> Season:
    season = coach.get_season(year)
    if season is None:
        raise NotFoundError(f"Season {year} not found")
    return season


def update_season(coach: Coach, year: int, changes: Mapping[str, Any]) -> Season:
    """Apply a partial update to one of the coach's seasons.

    Fields absent from ``changes`` are left alone. After the update, the fields
    of every postseason branch other than the season's ``post_season`` are
    reset, so a season never carries bowl and playoff data at once. Branch
    fields sent for a branch the season is not in are dropped this way.

    Raises:
        NotFoundError: If the coach has no season for ``year``.
        ForbiddenError: If the season is locked.
        InvalidInputError: If any field is invalid.
    """
    season = _require_season(coach, year)
    if not season.is_editable:
        raise ForbiddenError("Season is not editable")

    cleaned = validate_season_changes(changes)
    for name, value in cleaned.items():
        setattr(season, name, value)

    post_season = season.post_season
    if post_season == PostSeason.NONE:
        _clear_bowl(season)
        _clear_playoff(season)
    elif post_season == PostSeason.BOWL:
        _clear_playoff(season)
    elif post_season == PostSeason.PLAYOFF:
        _clear_bowl(season)

    if season.year == coach.current_year:
        coach.college = season.college
        coach.position = season.position

    return season


def toggle_season_editable(coach: Coach, year: int) -> Season:
    """Lock an open season or reopen a locked one.

    Raises:
        NotFoundError: If the coach has no season for ``year``.
    """
    season = _require_season(coach, year)
    season.is_editable = not season.is_editable
    return season


def advance_coach(coach: Coach) -> Season:
    """Lock the coach's current season and open the next one."""
    old_year = coach.current_year
    new_year = old_year + 1

    current = coach.get_season(old_year)
    if current is not None:
        current.is_editable = False

    season = coach.get_season(new_year)
    if season is None:
        season = _blank_season(new_year, coach.college, coach.position)
        coach.seasons.append(season)

    coach.current_year = new_year
    return season


def rollback_coach(coach: Coach) -> bool:
    """Drop the coach's current season and reopen the previous one.

    Returns False when the coach has a single season left, in which case
    nothing is changed and the caller should delete the coach instead.
    """
    if len(coach.seasons) <= 1:
        return False

    old_year = coach.current_year
    current = coach.get_season(old_year)
    if current is not None:
        coach.seasons.remove(current)

    coach.current_year = old_year - 1
    previous = coach.get_season(coach.current_year)
    if previous is not None:
        previous.is_editable = True
        coach.college = previous.college
        coach.position = previous.position
    return True


async def _coach_ids(db: AsyncSession, dynasty_id: int) -> list[int]:
    result = await db.execute(
        select(Coach.id).where(Coach.dynasty_id == dynasty_id).order_by(Coach.id)
    )
    return list(result.scalars().all())


async def _load_coach(db: AsyncSession, coach_id: int) -> Coach | None:
    result = await db.execute(
        select(Coach)
        .where(Coach.id == coach_id)
        .options(selectinload(Coach.seasons))
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def load_roster(db: AsyncSession, dynasty_id: int) -> list[Coach]:
    """Load every coach of a dynasty with seasons, refreshing stale instances."""
    result = await db.execute(
        select(Coach)
        .where(Coach.dynasty_id == dynasty_id)
        .options(selectinload(Coach.seasons))
        .order_by(Coach.id)
        .execution_options(populate_existing=True)
    )
    return list(result.scalars().all())


async def start_new_season(db: AsyncSession, dynasty: Dynasty) -> SeasonTransition:
    """Advance the dynasty clock by one year and open a new season for every coach."""
    dynasty_id = dynasty.id
    new_year = dynasty.current_year + 1
    dynasty.current_year = new_year
    await db.commit()
    logger.info("Dynasty %s advanced to %s", dynasty_id, new_year)

    failures: list[CoachFailure] = []
    for coach_id in await _coach_ids(db, dynasty_id):
        try:
            coach = await _load_coach(db, coach_id)
            if coach is None:
                continue
            advance_coach(coach)
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.warning(
                "Coach %s not advanced; dynasty %s is at %s but the coach is not: %s",
                coach_id,
                dynasty_id,
                new_year,
                e,
            )
            failures.append(CoachFailure(coach_id=coach_id, detail=str(e)))

    coaches = await load_roster(db, dynasty_id)
    return SeasonTransition(dynasty_id, new_year, coaches, failures)


async def rollback_season(db: AsyncSession, dynasty: Dynasty) -> SeasonTransition:
    """Move the dynasty clock back one year and drop every coach's latest season.

    Coaches with only one season are deleted. The returned roster holds the
    surviving coaches only.
    """
    dynasty_id = dynasty.id
    new_year = dynasty.current_year - 1
    dynasty.current_year = new_year
    await db.commit()
    logger.info("Dynasty %s rolled back to %s", dynasty_id, new_year)

    failures: list[CoachFailure] = []
    for coach_id in await _coach_ids(db, dynasty_id):
        try:
            coach = await _load_coach(db, coach_id)
            if coach is None:
                continue
            if not rollback_coach(coach):
                logger.info("Deleting coach %s: rollback removed its only season", coach_id)
                await db.delete(coach)
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.warning(
                "Coach %s not rolled back; dynasty %s is at %s but the coach is not: %s",
                coach_id,
                dynasty_id,
                new_year,
                e,
            )
            failures.append(CoachFailure(coach_id=coach_id, detail=str(e)))

    coaches = await load_roster(db, dynasty_id)
    return SeasonTransition(dynasty_id, new_year, coaches, failures)
