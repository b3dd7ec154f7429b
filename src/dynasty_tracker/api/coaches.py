"""Coach roster API endpoints (nested under a dynasty)."""

import logging
from datetime import UTC, datetime

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from dynasty_tracker.database import get_db
from dynasty_tracker.models.coach import Coach
from dynasty_tracker.schemas.coach import (
    CoachCreate,
    CoachResponse,
    CoachUpdate,
    PositionRecord,
    SeasonResponse,
)
from dynasty_tracker.services import stats
from dynasty_tracker.services.access import get_dynasty_for_user
from dynasty_tracker.services.errors import NotFoundError
from dynasty_tracker.services.lifecycle import new_coach, validate_coach_fields
from dynasty_tracker.utils.security import CurrentUser

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dynasties/{dynasty_id}/coaches", tags=["coaches"])


def coach_to_response(coach: Coach) -> CoachResponse:
    """Convert a Coach model to CoachResponse, computing career aggregates.

    Requires coach.seasons to be loaded.
    """
    seasons = sorted(coach.seasons, key=lambda season: season.year)
    wins, losses = stats.career_record(seasons)
    postseason_wins, postseason_losses = stats.postseason_record(seasons)

    return CoachResponse(
        id=coach.id,
        dynasty_id=coach.dynasty_id,
        first_name=coach.first_name,
        last_name=coach.last_name,
        college=coach.college,
        position=coach.position,
        current_year=coach.current_year,
        seasons=[SeasonResponse.model_validate(season) for season in seasons],
        wins=wins,
        losses=losses,
        win_percentage=stats.win_percentage(wins, losses),
        postseason_wins=postseason_wins,
        postseason_losses=postseason_losses,
        conference_titles=stats.conference_titles(seasons),
        position_records={
            position: PositionRecord(**record)
            for position, record in stats.position_records(seasons).items()
        },
        created_at=coach.created_at,
        updated_at=coach.updated_at,
    )


async def get_coach_in_dynasty(db: AsyncSession, dynasty_id: int, coach_id: int) -> Coach:
    """Load a coach with seasons, requiring it to belong to the given dynasty.

    Raises:
        NotFoundError: If the coach does not exist or belongs to another dynasty.
    """
    result = await db.execute(
        select(Coach)
        .where(Coach.id == coach_id, Coach.dynasty_id == dynasty_id)
        .options(selectinload(Coach.seasons))
    )
    coach = result.scalar_one_or_none()
    if coach is None:
        raise NotFoundError("Coach not found")
    return coach


@router.get("", response_model=list[CoachResponse])
async def list_coaches(
    dynasty_id: int,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_db),
) -> list[CoachResponse]:
    """List the coaches of a dynasty with their seasons and career aggregates."""
    await get_dynasty_for_user(db, dynasty_id, current_user)

    result = await db.execute(
        select(Coach)
        .where(Coach.dynasty_id == dynasty_id)
        .options(selectinload(Coach.seasons))
        .order_by(Coach.id)
    )
    return [coach_to_response(coach) for coach in result.scalars().all()]


@router.get("/{coach_id}", response_model=CoachResponse)
async def get_coach(
    dynasty_id: int,
    coach_id: int,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_db),
) -> CoachResponse:
    """Get one coach of a dynasty."""
    await get_dynasty_for_user(db, dynasty_id, current_user)
    coach = await get_coach_in_dynasty(db, dynasty_id, coach_id)
    return coach_to_response(coach)


@router.post("", response_model=CoachResponse, status_code=201)
async def create_coach(
    dynasty_id: int,
    current_user: CurrentUser,
    coach_data: CoachCreate,
    db: AsyncSession = Depends(get_db),
) -> CoachResponse:
    """Add a coach to a dynasty.

    The coach starts with a single open 0-0 season for the dynasty's current
    year. A dynasty holds at most eight coaches.
    """
    dynasty = await get_dynasty_for_user(db, dynasty_id, current_user)

    count_result = await db.execute(
        select(func.count()).select_from(Coach).where(Coach.dynasty_id == dynasty_id)
    )
    coach_count = count_result.scalar_one()

    coach = new_coach(
        dynasty,
        coach_count,
        first_name=coach_data.first_name,
        last_name=coach_data.last_name,
        college=coach_data.college,
        position=coach_data.position,
    )
    now = datetime.now(UTC)
    coach.created_at = now
    coach.updated_at = now
    db.add(coach)
    await db.flush()

    logger.info("Created coach %s in dynasty %s", coach.id, dynasty_id)
    return coach_to_response(coach)


@router.put("/{coach_id}", response_model=CoachResponse)
async def update_coach(
    dynasty_id: int,
    coach_id: int,
    current_user: CurrentUser,
    coach_data: CoachUpdate,
    db: AsyncSession = Depends(get_db),
) -> CoachResponse:
    """Update a coach's name or display college/position.

    The dynasty, the year clock and the seasons cannot be changed here; seasons
    are edited through the season endpoints.
    """
    await get_dynasty_for_user(db, dynasty_id, current_user)
    coach = await get_coach_in_dynasty(db, dynasty_id, coach_id)

    cleaned = validate_coach_fields(coach_data.model_dump(exclude_unset=True))
    for name, value in cleaned.items():
        setattr(coach, name, value)
    coach.updated_at = datetime.now(UTC)

    await db.flush()
    return coach_to_response(coach)


@router.delete("/{coach_id}", status_code=204)
async def delete_coach(
    dynasty_id: int,
    coach_id: int,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_db),
) -> None:
    """Delete a coach and all of its seasons."""
    await get_dynasty_for_user(db, dynasty_id, current_user)
    coach = await get_coach_in_dynasty(db, dynasty_id, coach_id)
    await db.delete(coach)
    logger.info("Deleted coach %s from dynasty %s", coach_id, dynasty_id)
