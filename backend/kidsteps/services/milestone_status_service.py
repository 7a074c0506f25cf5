"""
Milestone status transitions.

Every write keeps the achieved-date invariant: ``dateAchieved`` is set when
the status is Achieved and cleared otherwise. Writes are merge-upserts, so
fields such as ``notes`` on an existing record survive.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from kidsteps.interfaces.child_repository import IChildRepository
from kidsteps.interfaces.milestone_progress_repository import IMilestoneProgressRepository
from kidsteps.models.enums import MilestoneStatus
from kidsteps.models.milestone import BulkStatusUpdate, GroupedMilestone, MilestoneProgress
from kidsteps.services.child_service import get_owned_child
from kidsteps.utils.datetime_utils import now_utc

logger = logging.getLogger(__name__)


class MilestoneStatusService:
    """Apply single and bulk milestone status changes for a child."""

    def __init__(
        self,
        child_repo: IChildRepository,
        progress_repo: IMilestoneProgressRepository,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._child_repo = child_repo
        self._progress_repo = progress_repo
        self._clock = clock

    async def set_status(
        self,
        user_id: str,
        child_id: str,
        milestone_id: str,
        status: MilestoneStatus,
    ) -> MilestoneProgress:
        """
        Upsert one progress record.

        Returns the status and achieved date that were written. Store errors
        propagate to the caller.
        """
        await get_owned_child(user_id, child_id, self._child_repo)

        date_achieved = self._clock() if status == MilestoneStatus.ACHIEVED else None
        await self._progress_repo.set_status(child_id, milestone_id, status, date_achieved)
        logger.info(f"Milestone {milestone_id} of child {child_id} set to {status.value}")
        return MilestoneProgress(
            milestone_id=milestone_id,
            status=status,
            date_achieved=date_achieved,
        )

    async def mark_group_achieved(
        self,
        user_id: str,
        child_id: str,
        group: GroupedMilestone,
    ) -> BulkStatusUpdate:
        """
        Mark every milestone of a group as Achieved in one atomic batch.

        Milestones already Achieved are skipped and keep their original date.
        All updated records share one timestamp. Nothing is written when the
        whole group is already Achieved.
        """
        await get_owned_child(user_id, child_id, self._child_repo)

        pending = [
            milestone.id
            for milestone in group.milestones
            if milestone.current_status != MilestoneStatus.ACHIEVED
        ]
        if not pending:
            return BulkStatusUpdate(updated_count=0)

        achieved_at = self._clock()
        await self._progress_repo.set_statuses(child_id, pending, MilestoneStatus.ACHIEVED, achieved_at)
        logger.info(
            f"Marked {len(pending)} milestones in '{group.age_range}' achieved for child {child_id}"
        )
        return BulkStatusUpdate(
            updated_count=len(pending),
            milestone_ids=pending,
            date_achieved=achieved_at,
        )
