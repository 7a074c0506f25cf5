"""Pydantic models (schemas) for the application."""

from kidsteps.models.enums import BehaviorLocation, BehaviorType, MilestoneStatus
from kidsteps.models.child import Child, ChildCreate, ChildProfile
from kidsteps.models.milestone import (
    BulkStatusUpdate,
    CombinedMilestone,
    GroupedMilestone,
    GroupStats,
    MilestoneBoard,
    MilestoneProgress,
    MilestoneTemplate,
)
from kidsteps.models.behavior import BehaviorLog, BehaviorLogCreate, BehaviorTrendPoint

__all__ = [
    "BehaviorLocation",
    "BehaviorType",
    "MilestoneStatus",
    "Child",
    "ChildCreate",
    "ChildProfile",
    "BulkStatusUpdate",
    "CombinedMilestone",
    "GroupedMilestone",
    "GroupStats",
    "MilestoneBoard",
    "MilestoneProgress",
    "MilestoneTemplate",
    "BehaviorLog",
    "BehaviorLogCreate",
    "BehaviorTrendPoint",
]
