"""
Milestone board: the age-eligible templates of a child merged with its live
progress, grouped by age range.

Templates are loaded once per subscription; every progress snapshot re-runs
merge and grouping synchronously.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import AsyncIterator, Callable, Optional

from kidsteps.interfaces.child_repository import IChildRepository
from kidsteps.interfaces.document_store import ISnapshotStream
from kidsteps.interfaces.milestone_progress_repository import IMilestoneProgressRepository
from kidsteps.interfaces.milestone_template_repository import IMilestoneTemplateRepository
from kidsteps.models.child import Child
from kidsteps.models.milestone import MilestoneBoard, MilestoneProgress, MilestoneTemplate
from kidsteps.services.age_calculator import age_in_months
from kidsteps.services.child_service import get_owned_child
from kidsteps.services.milestone_grouping import group_milestones, summarize
from kidsteps.services.milestone_merge import merge_milestones
from kidsteps.utils.datetime_utils import now_utc

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BoardContext:
    """Everything about a board that does not change with progress."""

    child: Child
    age_in_months: int
    templates: tuple[MilestoneTemplate, ...]


def build_board(context: BoardContext, progress: list[MilestoneProgress]) -> MilestoneBoard:
    combined = merge_milestones(context.templates, progress)
    return MilestoneBoard(
        child=context.child,
        age_in_months=context.age_in_months,
        groups=group_milestones(combined),
        stats=summarize(combined),
    )


class MilestoneBoardService:
    """Builds milestone boards for a parent's child."""

    def __init__(
        self,
        child_repo: IChildRepository,
        template_repo: IMilestoneTemplateRepository,
        progress_repo: IMilestoneProgressRepository,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._child_repo = child_repo
        self._template_repo = template_repo
        self._progress_repo = progress_repo
        self._clock = clock

    async def load(self, user_id: str, child_id: str) -> BoardContext:
        """
        Check ownership, compute the child's age and fetch eligible templates.

        Raises:
            NotFoundError, ForbiddenError: child missing or not owned by user_id
            QueryConfigurationError: the template index is missing
        """
        child = await get_owned_child(user_id, child_id, self._child_repo)
        age = age_in_months(child.birthdate, self._clock())
        templates = await self._template_repo.list_eligible(age)
        return BoardContext(child=child, age_in_months=age, templates=tuple(templates))

    async def observe(self, child_id: str) -> ISnapshotStream[list[MilestoneProgress]]:
        return await self._progress_repo.observe(child_id)

    async def get_board(self, user_id: str, child_id: str) -> MilestoneBoard:
        """Build the board from the current progress snapshot."""
        context = await self.load(user_id, child_id)
        async with await self.observe(child_id) as stream:
            progress = await stream.__anext__()
        return build_board(context, progress)


class MilestoneBoardWatcher:
    """
    Holds at most one live board subscription.

    Opening a board for a new (user, child) pair first closes the previous
    subscription. The owner must call ``close()`` on teardown.
    """

    def __init__(self, service: MilestoneBoardService):
        self._service = service
        self._stream: Optional[ISnapshotStream[list[MilestoneProgress]]] = None
        self._key: Optional[tuple[str, str]] = None

    @property
    def key(self) -> Optional[tuple[str, str]]:
        """(user_id, child_id) of the active subscription."""
        return self._key if self._stream is not None else None

    async def open(self, user_id: str, child_id: str) -> AsyncIterator[MilestoneBoard]:
        """Subscribe to a child's board, replacing any active subscription."""
        await self.close()
        context = await self._service.load(user_id, child_id)
        stream = await self._service.observe(child_id)
        self._stream = stream
        self._key = (user_id, child_id)
        logger.info(f"Watching milestones of child {child_id} for user {user_id}")
        return self._boards(context, stream)

    async def close(self) -> None:
        stream, self._stream = self._stream, None
        if stream is not None:
            await stream.close()
            logger.info(f"Stopped watching milestones for {self._key}")

    @staticmethod
    async def _boards(
        context: BoardContext,
        stream: ISnapshotStream[list[MilestoneProgress]],
    ) -> AsyncIterator[MilestoneBoard]:
        async for progress in stream:
            yield build_board(context, progress)
