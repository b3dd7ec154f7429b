"""Dynasty API endpoints."""

import logging
from datetime import UTC, datetime

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from dynasty_tracker.database import get_db
from dynasty_tracker.models.dynasty import Dynasty
from dynasty_tracker.models.user import User
from dynasty_tracker.schemas.dynasty import (
    DynastyCreate,
    DynastyMember,
    DynastyResponse,
    DynastyShare,
    DynastyUpdate,
)
from dynasty_tracker.services.access import get_dynasty_for_user
from dynasty_tracker.utils.security import CurrentUser

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dynasties", tags=["dynasties"])


def dynasty_to_response(dynasty: Dynasty) -> DynastyResponse:
    """Convert a Dynasty model to DynastyResponse schema.

    Requires dynasty.owner and dynasty.shared_users to be loaded.
    """
    owner = None
    if dynasty.owner:
        owner = DynastyMember(id=dynasty.owner.id, username=dynasty.owner.username)

    return DynastyResponse(
        id=dynasty.id,
        name=dynasty.name,
        start_date=dynasty.start_date,
        current_year=dynasty.current_year,
        owner_id=dynasty.owner_id,
        owner=owner,
        shared_users=[
            DynastyMember(id=user.id, username=user.username) for user in dynasty.shared_users
        ],
        created_at=dynasty.created_at,
        updated_at=dynasty.updated_at,
    )


@router.get("", response_model=list[DynastyResponse])
async def list_dynasties(
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_db),
) -> list[DynastyResponse]:
    """List dynasties the current user owns or has been given access to.

    Newest first.
    """
    query = (
        select(Dynasty)
        .where(
            or_(
                Dynasty.owner_id == current_user.id,
                Dynasty.shared_users.any(User.id == current_user.id),
            )
        )
        .options(selectinload(Dynasty.owner), selectinload(Dynasty.shared_users))
        .order_by(Dynasty.created_at.desc())
    )
    result = await db.execute(query)
    return [dynasty_to_response(dynasty) for dynasty in result.scalars().all()]


@router.post("", response_model=DynastyResponse, status_code=201)
async def create_dynasty(
    current_user: CurrentUser,
    dynasty_data: DynastyCreate,
    db: AsyncSession = Depends(get_db),
) -> DynastyResponse:
    """Create a dynasty owned by the current user.

    The year clock starts at ``current_year`` if given, otherwise at the
    current calendar year.
    """
    now = datetime.now(UTC)
    dynasty = Dynasty(
        owner_id=current_user.id,
        name=dynasty_data.name,
        start_date=dynasty_data.start_date,
        current_year=dynasty_data.current_year or now.year,
        created_at=now,
        updated_at=now,
    )
    db.add(dynasty)
    await db.flush()
    await db.refresh(dynasty)

    logger.info("User %s created dynasty %s", current_user.id, dynasty.id)

    # A new dynasty is shared with nobody, so skip loading relationships
    return DynastyResponse(
        id=dynasty.id,
        name=dynasty.name,
        start_date=dynasty.start_date,
        current_year=dynasty.current_year,
        owner_id=dynasty.owner_id,
        owner=DynastyMember(id=current_user.id, username=current_user.username),
        shared_users=[],
        created_at=dynasty.created_at,
        updated_at=dynasty.updated_at,
    )


@router.get("/{dynasty_id}", response_model=DynastyResponse)
async def get_dynasty(
    dynasty_id: int,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_db),
) -> DynastyResponse:
    """Get a dynasty. Only the owner and shared users can see it."""
    dynasty = await get_dynasty_for_user(db, dynasty_id, current_user)
    return dynasty_to_response(dynasty)


@router.put("/{dynasty_id}", response_model=DynastyResponse)
async def update_dynasty(
    dynasty_id: int,
    current_user: CurrentUser,
    dynasty_data: DynastyUpdate,
    db: AsyncSession = Depends(get_db),
) -> DynastyResponse:
    """Rename a dynasty or change its start date. Owner only.

    The year clock only moves through the start-season and rollback-season
    operations.
    """
    dynasty = await get_dynasty_for_user(db, dynasty_id, current_user, owner_only=True)

    if dynasty_data.name is not None:
        dynasty.name = dynasty_data.name
    if dynasty_data.start_date is not None:
        dynasty.start_date = dynasty_data.start_date
    dynasty.updated_at = datetime.now(UTC)

    await db.flush()
    return dynasty_to_response(dynasty)


@router.delete("/{dynasty_id}", status_code=204)
async def delete_dynasty(
    dynasty_id: int,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_db),
) -> None:
    """Delete a dynasty and all of its coaches. Owner only."""
    dynasty = await get_dynasty_for_user(db, dynasty_id, current_user, owner_only=True)
    await db.delete(dynasty)
    logger.info("User %s deleted dynasty %s", current_user.id, dynasty_id)


@router.post("/{dynasty_id}/share", response_model=DynastyResponse)
async def share_dynasty(
    dynasty_id: int,
    current_user: CurrentUser,
    share_data: DynastyShare,
    db: AsyncSession = Depends(get_db),
) -> DynastyResponse:
    """Give another user access to a dynasty. Owner only.

    Sharing with a user who already has access is a no-op.
    """
    dynasty = await get_dynasty_for_user(db, dynasty_id, current_user, owner_only=True)

    result = await db.execute(select(User).where(User.username == share_data.username.lower()))
    user = result.scalar_one_or_none()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    if user.id == dynasty.owner_id:
        raise HTTPException(status_code=400, detail="The owner already has access")

    if not dynasty.is_member(user.id):
        dynasty.shared_users.append(user)
        await db.flush()

    return dynasty_to_response(dynasty)


@router.delete("/{dynasty_id}/share/{user_id}", response_model=DynastyResponse)
async def unshare_dynasty(
    dynasty_id: int,
    user_id: int,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_db),
) -> DynastyResponse:
    """Revoke a shared user's access to a dynasty. Owner only."""
    dynasty = await get_dynasty_for_user(db, dynasty_id, current_user, owner_only=True)

    shared = [user for user in dynasty.shared_users if user.id == user_id]
    if not shared:
        raise HTTPException(status_code=404, detail="User does not have shared access")

    dynasty.shared_users.remove(shared[0])
    await db.flush()
    return dynasty_to_response(dynasty)
