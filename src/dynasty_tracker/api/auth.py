"""Account API endpoints: registration, login and profile settings."""

import logging
from datetime import UTC, datetime

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from dynasty_tracker.database import get_db
from dynasty_tracker.models.user import User
from dynasty_tracker.schemas.user import (
    FavoriteTeam,
    PasswordUpdate,
    Token,
    UserCreate,
    UserLogin,
    UsernameUpdate,
    UserResponse,
)
from dynasty_tracker.utils.security import (
    CurrentUser,
    create_access_token,
    hash_password,
    verify_password,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserResponse, status_code=201)
async def register(
    user_data: UserCreate,
    db: AsyncSession = Depends(get_db),
) -> UserResponse:
    """Register a new user.

    The password is hashed with bcrypt before storage.

    Raises:
        HTTPException 409: If username or email already exists
    """
    username_result = await db.execute(select(User).where(User.username == user_data.username))
    if username_result.scalar_one_or_none():
        raise HTTPException(status_code=409, detail="Username already registered")

    email = user_data.email.lower()
    email_result = await db.execute(select(User).where(User.email == email))
    if email_result.scalar_one_or_none():
        raise HTTPException(status_code=409, detail="Email already registered")

    new_user = User(
        username=user_data.username,
        email=email,
        hashed_password=hash_password(user_data.password),
        favorite_team="",
        created_at=datetime.now(UTC),
        is_active=True,
    )
    db.add(new_user)
    await db.flush()
    await db.refresh(new_user)

    logger.info("Registered user %s", new_user.id)
    return UserResponse.model_validate(new_user)


@router.post("/login", response_model=Token)
async def login(
    credentials: UserLogin,
    db: AsyncSession = Depends(get_db),
) -> Token:
    """Authenticate a user and return a bearer token.

    Accepts either username or email in the username field.

    Raises:
        HTTPException 401: If credentials are invalid
        HTTPException 403: If user account is inactive
    """
    identifier = credentials.username.strip().lower()
    result = await db.execute(
        select(User).where(or_(User.username == identifier, User.email == identifier))
    )
    user = result.scalar_one_or_none()

    if not user or not verify_password(credentials.password, user.hashed_password):
        raise HTTPException(status_code=401, detail="Invalid username or password")

    if not user.is_active:
        raise HTTPException(status_code=403, detail="User account is inactive")

    return Token(access_token=create_access_token(user.id), token_type="bearer")


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(current_user: CurrentUser) -> UserResponse:
    """Get the current authenticated user's profile (excluding password)."""
    return UserResponse.model_validate(current_user)


@router.get("/favorite-team", response_model=FavoriteTeam)
async def get_favorite_team(current_user: CurrentUser) -> FavoriteTeam:
    """Get the current user's favorite team."""
    return FavoriteTeam(favorite_team=current_user.favorite_team or "")


@router.put("/favorite-team", response_model=FavoriteTeam)
async def update_favorite_team(
    current_user: CurrentUser,
    team_data: FavoriteTeam,
    db: AsyncSession = Depends(get_db),
) -> FavoriteTeam:
    """Set the current user's favorite team."""
    current_user.favorite_team = team_data.favorite_team
    await db.flush()
    return FavoriteTeam(favorite_team=current_user.favorite_team)


@router.put("/username", response_model=UserResponse)
async def update_username(
    current_user: CurrentUser,
    username_data: UsernameUpdate,
    db: AsyncSession = Depends(get_db),
) -> UserResponse:
    """Change the current user's username.

    Raises:
        HTTPException 409: If the username belongs to another user
    """
    result = await db.execute(select(User).where(User.username == username_data.new_username))
    existing = result.scalar_one_or_none()
    if existing and existing.id != current_user.id:
        raise HTTPException(status_code=409, detail="Username already taken")

    current_user.username = username_data.new_username
    await db.flush()
    return UserResponse.model_validate(current_user)


@router.put("/password")
async def update_password(
    current_user: CurrentUser,
    password_data: PasswordUpdate,
    db: AsyncSession = Depends(get_db),
) -> dict[str, str]:
    """Change the current user's password.

    Raises:
        HTTPException 401: If the old password is wrong
    """
    if not verify_password(password_data.old_password, current_user.hashed_password):
        raise HTTPException(status_code=401, detail="Old password is incorrect")

    current_user.hashed_password = hash_password(password_data.new_password)
    await db.flush()
    logger.info("Password changed for user %s", current_user.id)
    return {"message": "Password updated"}
