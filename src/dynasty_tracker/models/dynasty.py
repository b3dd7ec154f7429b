"""Dynasty ORM model and sharing association table."""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import TYPE_CHECKING

from sqlalchemy import Column, ForeignKey, String, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dynasty_tracker.database import Base

if TYPE_CHECKING:
    from dynasty_tracker.models.coach import Coach
    from dynasty_tracker.models.user import User


def _this_year() -> int:
    return datetime.now(UTC).year


dynasty_shared_users = Table(
    "dynasty_shared_users",
    Base.metadata,
    Column("dynasty_id", ForeignKey("dynasties.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)


class Dynasty(Base):
    """A user's career-tracking session with its own year clock."""

    __tablename__ = "dynasties"

    id: Mapped[int] = mapped_column(primary_key=True)
    owner_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    name: Mapped[str] = mapped_column(String(100))
    start_date: Mapped[date] = mapped_column()
    # Only moved by start-season / rollback-season
    current_year: Mapped[int] = mapped_column(default=_this_year)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    owner: Mapped[User] = relationship(back_populates="owned_dynasties")
    shared_users: Mapped[list[User]] = relationship(
        secondary=dynasty_shared_users, back_populates="shared_dynasties"
    )
    coaches: Mapped[list[Coach]] = relationship(
        back_populates="dynasty", cascade="all, delete-orphan", passive_deletes=True
    )

    def is_member(self, user_id: int) -> bool:
        """Return True if the user owns the dynasty or has been granted access."""
        if self.owner_id == user_id:
            return True
        return any(user.id == user_id for user in self.shared_users)
