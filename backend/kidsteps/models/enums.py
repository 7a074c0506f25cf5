"""
Enum definitions for the application.

These enums are used across models and provide type-safe status values.
Values match what is stored in documents.
"""

from enum import Enum


class MilestoneStatus(str, Enum):
    """Progress status of a milestone for one child."""

    NOT_STARTED = "Not Started"
    IN_PROGRESS = "In Progress"
    ACHIEVED = "Achieved"


class BehaviorType(str, Enum):
    """Behavior categories a parent can log."""

    TANTRUM = "Tantrum"
    HAPPY_MOMENT = "Happy Moment"
    MEALTIME_BEHAVIOR = "Mealtime Behavior"
    SLEEP_RELATED = "Sleep Related"
    SOCIAL_INTERACTION = "Social Interaction"
    LEARNING_ACTIVITY = "Learning Activity"
    AGGRESSION = "Aggression"
    ANXIETY_FEAR = "Anxiety/Fear"
    SELF_REGULATION = "Self-Regulation"
    REFUSED_FOOD = "Refused Food"
    OVERSTIMULATED = "Overstimulated"
    PLAYFUL = "Playful"
    FOCUSED = "Focused"
    IRRITABLE = "Irritable"
    OTHER = "Other"


class BehaviorLocation(str, Enum):
    """Where a behavior was observed."""

    HOME = "Home"
    SCHOOL = "School"
    DAYCARE = "Daycare"
    OUTDOORS = "Outdoors"
    RELATIVES_HOUSE = "Relative's House"
    OTHER = "Other"
