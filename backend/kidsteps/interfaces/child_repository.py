"""
Child repository interface.

Defines the contract for child profile data operations.
"""

from abc import ABC, abstractmethod

from kidsteps.models.child import Child, ChildCreate


class IChildRepository(ABC):
    """Interface for child repository operations."""

    @abstractmethod
    async def create(self, parent_id: str, child: ChildCreate) -> Child:
        """Create a child profile owned by parent_id."""
        pass

    @abstractmethod
    async def get(self, child_id: str) -> Child | None:
        """Get a child by ID regardless of owner. Ownership is checked by the caller."""
        pass

    @abstractmethod
    async def list_by_parent(self, parent_id: str) -> list[Child]:
        """List the children owned by parent_id."""
        pass
