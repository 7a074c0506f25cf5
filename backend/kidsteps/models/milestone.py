"""
Milestone model definitions.

Templates are catalog entries shared by every child. Progress records are
owned by a child and keyed by the template id, so there is at most one
progress record per (child, template). Combined and grouped milestones are
derived views and are never persisted.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, computed_field, model_validator

from kidsteps.models.child import Child
from kidsteps.models.enums import MilestoneStatus


class MilestoneTemplate(BaseModel):
    """Catalog entry for a developmental checkpoint."""

    id: str
    age_range: str = Field("", description='Display label, e.g. "12-18 months"')
    category: str = Field("", description="Category label")
    description: str = Field(..., description="Milestone text")
    min_age_months: int = Field(..., ge=0, description="Inclusive lower age bound")
    # Inclusive upper bound. Not used by the eligibility filter.
    max_age_months: Optional[int] = Field(None, ge=0)


class MilestoneProgress(BaseModel):
    """Per-child progress against one milestone template."""

    milestone_id: str = Field(..., description="Template ID, also this record's own ID")
    status: MilestoneStatus = MilestoneStatus.NOT_STARTED
    date_achieved: Optional[datetime] = None
    notes: Optional[str] = None

    @model_validator(mode="after")
    def check_achieved_date(self) -> "MilestoneProgress":
        if self.status == MilestoneStatus.ACHIEVED and self.date_achieved is None:
            raise ValueError("date_achieved is required when status is Achieved")
        if self.status != MilestoneStatus.ACHIEVED and self.date_achieved is not None:
            raise ValueError("date_achieved must be empty unless status is Achieved")
        return self


class MilestoneStatusUpdate(BaseModel):
    """Schema for changing a milestone's status."""

    status: MilestoneStatus


class CombinedMilestone(MilestoneTemplate):
    """A template joined with the child's progress record, if any."""

    current_status: MilestoneStatus = MilestoneStatus.NOT_STARTED
    date_achieved: Optional[datetime] = None
    progress_id: Optional[str] = None


class GroupStats(BaseModel):
    """Status counts for a set of milestones."""

    achieved: int = 0
    in_progress: int = 0
    not_started: int = 0
    total: int = 0

    @computed_field
    @property
    def percent_achieved(self) -> int:
        if not self.total:
            return 0
        return round(self.achieved * 100 / self.total)

    def count(self, status: MilestoneStatus) -> None:
        """Add one milestone with the given status."""
        if status == MilestoneStatus.ACHIEVED:
            self.achieved += 1
        elif status == MilestoneStatus.IN_PROGRESS:
            self.in_progress += 1
        else:
            self.not_started += 1
        self.total += 1


class GroupedMilestone(BaseModel):
    """Milestones sharing an age-range bucket."""

    age_range: str
    min_age_months: Optional[int] = None
    milestones: list[CombinedMilestone] = Field(default_factory=list)
    group_stats: GroupStats = Field(default_factory=GroupStats)


class MilestoneBoard(BaseModel):
    """Everything the milestone page renders for one child."""

    child: Child
    age_in_months: int
    groups: list[GroupedMilestone] = Field(default_factory=list)
    stats: GroupStats = Field(default_factory=GroupStats)


class BulkStatusUpdate(BaseModel):
    """Result of marking a whole group as achieved."""

    updated_count: int
    milestone_ids: list[str] = Field(default_factory=list)
    date_achieved: Optional[datetime] = None


class GroupAchieveRequest(BaseModel):
    """Request body for marking an age-range group as achieved."""

    age_range: str
