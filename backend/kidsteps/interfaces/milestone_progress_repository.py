"""
Milestone progress repository interface.

Progress records live under the child and use the milestone template ID as
their own document ID, which makes the (child, template) pair unique.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Sequence

from kidsteps.interfaces.document_store import ISnapshotStream
from kidsteps.models.enums import MilestoneStatus
from kidsteps.models.milestone import MilestoneProgress


class IMilestoneProgressRepository(ABC):
    """Interface for milestone progress repository operations."""

    @abstractmethod
    async def observe(self, child_id: str) -> ISnapshotStream[list[MilestoneProgress]]:
        """Subscribe to all progress records of a child. Each emission is a full snapshot."""
        pass

    @abstractmethod
    async def get(self, child_id: str, milestone_id: str) -> MilestoneProgress | None:
        """Get one progress record."""
        pass

    @abstractmethod
    async def set_status(
        self,
        child_id: str,
        milestone_id: str,
        status: MilestoneStatus,
        date_achieved: datetime | None,
    ) -> None:
        """Merge-upsert status and achieved date, leaving other fields untouched."""
        pass

    @abstractmethod
    async def set_statuses(
        self,
        child_id: str,
        milestone_ids: Sequence[str],
        status: MilestoneStatus,
        date_achieved: datetime | None,
    ) -> None:
        """Same as set_status for several milestones, committed atomically."""
        pass
