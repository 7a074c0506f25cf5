"""
Behavior log repository interface.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from kidsteps.models.behavior import BehaviorLog, BehaviorLogCreate


class IBehaviorRepository(ABC):
    """Interface for behavior log repository operations."""

    @abstractmethod
    async def create(
        self,
        parent_id: str,
        child_id: str,
        log: BehaviorLogCreate,
        timestamp: datetime,
    ) -> BehaviorLog:
        """Store a behavior log."""
        pass

    @abstractmethod
    async def list_for_child(self, parent_id: str, child_id: str) -> list[BehaviorLog]:
        """List a child's behavior logs, oldest first."""
        pass
