"""Coach ORM model."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dynasty_tracker.database import Base
from dynasty_tracker.models.season import Season

if TYPE_CHECKING:
    from dynasty_tracker.models.dynasty import Dynasty


class Coach(Base):
    """One tracked coaching career within a dynasty."""

    __tablename__ = "coaches"

    id: Mapped[int] = mapped_column(primary_key=True)
    dynasty_id: Mapped[int] = mapped_column(
        ForeignKey("dynasties.id", ondelete="CASCADE"), index=True
    )
    first_name: Mapped[str] = mapped_column(String(50))
    last_name: Mapped[str] = mapped_column(String(50))
    # Mirrors the current season for display
    college: Mapped[str] = mapped_column(String(100))
    position: Mapped[str] = mapped_column(String(2))
    current_year: Mapped[int] = mapped_column()
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    dynasty: Mapped[Dynasty] = relationship(back_populates="coaches")
    seasons: Mapped[list[Season]] = relationship(
        back_populates="coach",
        cascade="all, delete-orphan",
        order_by=Season.year,
    )

    def get_season(self, year: int) -> Season | None:
        """Return the season recorded for ``year``, if any."""
        for season in self.seasons:
            if season.year == year:
                return season
        return None
