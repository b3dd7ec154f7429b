"""Row-level access checks for dynasty-scoped resources."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from dynasty_tracker.models.dynasty import Dynasty
from dynasty_tracker.models.user import User
from dynasty_tracker.services.errors import ForbiddenError, NotFoundError


async def get_dynasty_for_user(
    db: AsyncSession,
    dynasty_id: int,
    user: User,
    *,
    owner_only: bool = False,
) -> Dynasty:
    """Load a dynasty the user may see, with owner and shared users loaded.

    Users who are neither the owner nor a shared user get NotFoundError, so a
    dynasty's existence is not revealed to outsiders.

    Raises:
        NotFoundError: If the dynasty does not exist or the user has no access.
        ForbiddenError: If ``owner_only`` is set and the user is only a shared user.
    """
    result = await db.execute(
        select(Dynasty)
        .where(Dynasty.id == dynasty_id)
        .options(selectinload(Dynasty.owner), selectinload(Dynasty.shared_users))
    )
    dynasty = result.scalar_one_or_none()

    if dynasty is None or not dynasty.is_member(user.id):
        raise NotFoundError("Dynasty not found")

    if owner_only and dynasty.owner_id != user.id:
        raise ForbiddenError("Only the owner can modify this dynasty")

    return dynasty
