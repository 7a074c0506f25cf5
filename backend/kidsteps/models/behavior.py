"""
Behavior log model definitions.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from kidsteps.models.enums import BehaviorLocation, BehaviorType


class BehaviorLogCreate(BaseModel):
    """Schema for logging a behavior."""

    type: BehaviorType
    mood: str = Field("", max_length=50, description="Mood or emoji")
    notes: str = Field("", max_length=500)
    location: Optional[BehaviorLocation] = None


class BehaviorLog(BaseModel):
    """Stored behavior log.

    ``type`` stays a plain string so that logs written with a behavior type
    that is no longer offered can still be read (they count as "Other").
    """

    id: str
    child_id: str
    parent_id: str
    type: str
    mood: str = ""
    notes: str = ""
    location: Optional[str] = None
    timestamp: Optional[datetime] = None


class BehaviorTrendPoint(BaseModel):
    """Behavior counts for one calendar day."""

    date: str = Field(..., description="ISO date, yyyy-mm-dd")
    label: str = Field(..., description='Display label, e.g. "Mar 4"')
    counts: dict[str, int] = Field(default_factory=dict)
