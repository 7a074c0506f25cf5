from __future__ import annotations

import logging

from kidsteps.core.exceptions import ForbiddenError, NotFoundError
from kidsteps.interfaces.child_repository import IChildRepository
from kidsteps.models.child import Child, ChildCreate

logger = logging.getLogger(__name__)

PERMISSION_DENIED = "You do not have permission to access this child."


async def get_owned_child(user_id: str, child_id: str, child_repo: IChildRepository) -> Child:
    """
    Load a child and check that user_id owns it.

    Raises:
        NotFoundError: no child with this ID
        ForbiddenError: the child belongs to someone else (generic message)
    """
    child = await child_repo.get(child_id)
    if child is None:
        raise NotFoundError("Child profile not found.")
    if child.parent_id != user_id:
        logger.warning(f"User {user_id} denied access to child {child_id}")
        raise ForbiddenError(PERMISSION_DENIED)
    return child


class ChildService:
    """Child profile operations scoped to the requesting parent."""

    def __init__(self, child_repo: IChildRepository):
        self._child_repo = child_repo

    async def create_child(self, user_id: str, child: ChildCreate) -> Child:
        created = await self._child_repo.create(user_id, child)
        logger.info(f"Created child {created.id} for user {user_id}")
        return created

    async def list_children(self, user_id: str) -> list[Child]:
        return await self._child_repo.list_by_parent(user_id)

    async def get_child(self, user_id: str, child_id: str) -> Child:
        return await get_owned_child(user_id, child_id, self._child_repo)
