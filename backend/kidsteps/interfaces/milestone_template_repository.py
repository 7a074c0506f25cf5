"""
Milestone template repository interface.

Defines the contract for reading the milestone catalog.
"""

from abc import ABC, abstractmethod
from typing import Sequence

from kidsteps.models.milestone import MilestoneTemplate


class IMilestoneTemplateRepository(ABC):
    """Interface for milestone template repository operations."""

    @abstractmethod
    async def list_eligible(self, max_age_months: int) -> list[MilestoneTemplate]:
        """
        List templates with min_age_months <= max_age_months, ordered by
        (min_age_months, description).

        The template's own max_age_months is not applied: a milestone stays
        visible once the child has reached it.

        Raises:
            QueryConfigurationError: the catalog index is not provisioned
        """
        pass

    @abstractmethod
    async def seed(self, templates: Sequence[MilestoneTemplate]) -> int:
        """Write catalog entries in one batch. Returns the number written."""
        pass
