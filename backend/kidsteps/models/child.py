"""
Child profile model definitions.

A child is owned by exactly one parent account.
"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from kidsteps.utils.datetime_utils import now_utc


class ChildProfile(BaseModel):
    """Traits a parent records about a child."""

    challenges: list[str] = Field(default_factory=list)
    personality: list[str] = Field(default_factory=list)
    preferred_style: str = Field("", description="Preferred learning style")
    favorite_theme: list[str] = Field(default_factory=list)
    routine: str = ""
    energy: str = Field("", description="Typical energy level")


class ChildBase(BaseModel):
    """Base child fields."""

    name: str = Field(..., min_length=1, max_length=100, description="Child's name")
    nickname: Optional[str] = Field(None, max_length=100, description="Optional nickname")
    profile: ChildProfile = Field(default_factory=ChildProfile)


class ChildCreate(ChildBase):
    """Schema for creating a child profile."""

    birthdate: date = Field(..., description="Date of birth")

    @field_validator("birthdate")
    @classmethod
    def birthdate_not_in_future(cls, value: date) -> date:
        if value > now_utc().date():
            raise ValueError("Birthdate cannot be in the future")
        return value


class Child(ChildBase):
    """Complete child model."""

    id: str
    parent_id: str = Field(..., description="Owning parent user ID")
    # None when the stored value could not be read; the age then degrades to 0
    birthdate: Optional[date] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ChildDetail(Child):
    """Child profile with its current age."""

    age_in_months: int = 0
