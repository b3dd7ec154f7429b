"""Pydantic schemas for dynasty API endpoints."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DynastyMember(BaseModel):
    """Minimal user info for dynasty ownership and sharing display."""

    id: int = Field(description="User ID")
    username: str = Field(description="Username")


class DynastyCreate(BaseModel):
    """Schema for creating a dynasty."""

    name: str = Field(min_length=1, max_length=100, description="Dynasty name")
    start_date: date = Field(description="When the dynasty started")
    current_year: int | None = Field(
        default=None,
        description="Starting season year (defaults to the current calendar year)",
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Reject names that are only whitespace."""
        v = v.strip()
        if not v:
            msg = "Name cannot be empty"
            raise ValueError(msg)
        return v

    @field_validator("current_year")
    @classmethod
    def validate_year(cls, v: int | None) -> int | None:
        """Validate year is reasonable."""
        if v is not None and not 1900 <= v <= 2100:
            msg = "Year must be between 1900 and 2100"
            raise ValueError(msg)
        return v


class DynastyUpdate(BaseModel):
    """Schema for updating a dynasty. The year clock is not editable here."""

    name: str | None = Field(default=None, max_length=100, description="Dynasty name")
    start_date: date | None = Field(default=None, description="When the dynasty started")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        """Reject names that are only whitespace."""
        if v is None:
            return v
        v = v.strip()
        if not v:
            msg = "Name cannot be empty"
            raise ValueError(msg)
        return v


class DynastyShare(BaseModel):
    """Schema for granting another user access to a dynasty."""

    username: str = Field(description="Username to share with")


class DynastyResponse(BaseModel):
    """Response schema for a dynasty."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(description="Dynasty ID")
    name: str = Field(description="Dynasty name")
    start_date: date = Field(description="When the dynasty started")
    current_year: int = Field(description="Current season year")
    owner_id: int = Field(description="Owner user ID")
    owner: DynastyMember | None = Field(default=None, description="Owner information")
    shared_users: list[DynastyMember] = Field(
        default_factory=list, description="Users granted access"
    )
    created_at: datetime = Field(description="When the dynasty was created")
    updated_at: datetime = Field(description="When the dynasty was last updated")
