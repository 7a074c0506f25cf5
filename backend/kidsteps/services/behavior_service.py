"""
Behavior logging and daily trend data for the behavior chart.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Iterable

from kidsteps.interfaces.behavior_repository import IBehaviorRepository
from kidsteps.interfaces.child_repository import IChildRepository
from kidsteps.models.behavior import BehaviorLog, BehaviorLogCreate, BehaviorTrendPoint
from kidsteps.models.enums import BehaviorType
from kidsteps.services.child_service import get_owned_child
from kidsteps.utils.datetime_utils import now_utc

logger = logging.getLogger(__name__)

CHART_TYPES: tuple[str, ...] = tuple(member.value for member in BehaviorType)


def build_behavior_trend(logs: Iterable[BehaviorLog]) -> list[BehaviorTrendPoint]:
    """
    Count logs per calendar day (UTC) and behavior type.

    Every day carries a counter for every behavior type. Types that are not
    charted count as "Other"; logs without a timestamp are skipped.
    """
    days: dict[str, BehaviorTrendPoint] = {}
    for log in logs:
        if log.timestamp is None:
            logger.warning(f"Skipping behavior log {log.id} without a timestamp")
            continue
        day = log.timestamp.date()
        key = day.isoformat()
        point = days.get(key)
        if point is None:
            point = BehaviorTrendPoint(
                date=key,
                label=f"{day:%b} {day.day}",
                counts={name: 0 for name in CHART_TYPES},
            )
            days[key] = point
        name = log.type if log.type in point.counts else BehaviorType.OTHER.value
        point.counts[name] += 1
    return [days[key] for key in sorted(days)]


class BehaviorService:
    """Behavior log operations scoped to the requesting parent."""

    def __init__(
        self,
        child_repo: IChildRepository,
        behavior_repo: IBehaviorRepository,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._child_repo = child_repo
        self._behavior_repo = behavior_repo
        self._clock = clock

    async def log_behavior(self, user_id: str, child_id: str, log: BehaviorLogCreate) -> BehaviorLog:
        await get_owned_child(user_id, child_id, self._child_repo)
        return await self._behavior_repo.create(user_id, child_id, log, self._clock())

    async def behavior_trend(self, user_id: str, child_id: str) -> list[BehaviorTrendPoint]:
        await get_owned_child(user_id, child_id, self._child_repo)
        logs = await self._behavior_repo.list_for_child(user_id, child_id)
        return build_behavior_trend(logs)
