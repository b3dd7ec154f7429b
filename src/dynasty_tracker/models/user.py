"""User ORM model."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dynasty_tracker.database import Base
from dynasty_tracker.models.dynasty import dynasty_shared_users

if TYPE_CHECKING:
    from dynasty_tracker.models.dynasty import Dynasty


class User(Base):
    """User account model for authentication and dynasty ownership."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    username: Mapped[str] = mapped_column(String(50), unique=True, index=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    hashed_password: Mapped[str] = mapped_column(String(255))
    favorite_team: Mapped[str] = mapped_column(String(100), default="")
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
    is_active: Mapped[bool] = mapped_column(default=True)

    # Relationships
    owned_dynasties: Mapped[list[Dynasty]] = relationship(
        back_populates="owner", cascade="all, delete-orphan"
    )
    shared_dynasties: Mapped[list[Dynasty]] = relationship(
        secondary=dynasty_shared_users, back_populates="shared_users"
    )
