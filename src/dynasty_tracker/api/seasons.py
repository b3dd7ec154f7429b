"""Season lifecycle API endpoints.

Start-season and rollback-season act on every coach of a dynasty at once.
They are not atomic: when some coaches fail to save, the response status is
207 and the ``failures`` list names the coaches left out of sync.
"""

import logging
from datetime import UTC, datetime

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from dynasty_tracker.api.coaches import coach_to_response, get_coach_in_dynasty
from dynasty_tracker.database import get_db
from dynasty_tracker.schemas.coach import (
    CoachFailureResponse,
    CoachResponse,
    SeasonTransitionResponse,
    SeasonUpdate,
)
from dynasty_tracker.services import lifecycle
from dynasty_tracker.services.access import get_dynasty_for_user
from dynasty_tracker.utils.security import CurrentUser

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dynasties/{dynasty_id}/coaches", tags=["seasons"])


def transition_to_response(
    transition: lifecycle.SeasonTransition, response: Response
) -> SeasonTransitionResponse:
    """Convert a bulk season result, flagging partial failure with 207."""
    if not transition.succeeded:
        response.status_code = 207

    return SeasonTransitionResponse(
        dynasty_id=transition.dynasty_id,
        current_year=transition.current_year,
        coaches=[coach_to_response(coach) for coach in transition.coaches],
        failures=[
            CoachFailureResponse(coach_id=failure.coach_id, detail=failure.detail)
            for failure in transition.failures
        ],
    )


@router.post("/start-season", response_model=SeasonTransitionResponse)
async def start_season(
    dynasty_id: int,
    current_user: CurrentUser,
    response: Response,
    db: AsyncSession = Depends(get_db),
) -> SeasonTransitionResponse:
    """Advance the dynasty one year.

    Every coach's current season is locked and a new open 0-0 season is added
    for the next year.
    """
    dynasty = await get_dynasty_for_user(db, dynasty_id, current_user)
    transition = await lifecycle.start_new_season(db, dynasty)
    return transition_to_response(transition, response)


@router.post("/rollback-season", response_model=SeasonTransitionResponse)
async def rollback_season(
    dynasty_id: int,
    current_user: CurrentUser,
    response: Response,
    db: AsyncSession = Depends(get_db),
) -> SeasonTransitionResponse:
    """Move the dynasty back one year.

    Every coach loses its latest season and the previous one is reopened for
    editing. Coaches with a single season are deleted and left out of the
    response.
    """
    dynasty = await get_dynasty_for_user(db, dynasty_id, current_user)
    transition = await lifecycle.rollback_season(db, dynasty)
    return transition_to_response(transition, response)


@router.put("/{coach_id}/seasons/{year}", response_model=CoachResponse)
async def update_season(
    dynasty_id: int,
    coach_id: int,
    year: int,
    current_user: CurrentUser,
    season_data: SeasonUpdate,
    db: AsyncSession = Depends(get_db),
) -> CoachResponse:
    """Update one season of a coach.

    Only the fields sent are changed. Locked seasons are rejected with 403.
    Fields of the postseason branch the season is not in are always cleared.
    """
    await get_dynasty_for_user(db, dynasty_id, current_user)
    coach = await get_coach_in_dynasty(db, dynasty_id, coach_id)

    lifecycle.update_season(coach, year, season_data.model_dump(exclude_unset=True))
    coach.updated_at = datetime.now(UTC)
    await db.flush()
    return coach_to_response(coach)


@router.put("/{coach_id}/seasons/{year}/toggle-edit", response_model=CoachResponse)
async def toggle_season_edit(
    dynasty_id: int,
    coach_id: int,
    year: int,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_db),
) -> CoachResponse:
    """Lock an open season, or unlock a locked one."""
    await get_dynasty_for_user(db, dynasty_id, current_user)
    coach = await get_coach_in_dynasty(db, dynasty_id, coach_id)

    season = lifecycle.toggle_season_editable(coach, year)
    logger.info(
        "Season %s of coach %s is now %s",
        year,
        coach_id,
        "editable" if season.is_editable else "locked",
    )
    coach.updated_at = datetime.now(UTC)
    await db.flush()
    return coach_to_response(coach)
