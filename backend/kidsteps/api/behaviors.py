"""
Behavior log API endpoints.
"""

from fastapi import APIRouter, status

from kidsteps.api.deps import BehaviorSvc, CurrentUser
from kidsteps.api.errors import to_http_exception
from kidsteps.core.exceptions import KidStepsError
from kidsteps.models.behavior import BehaviorLog, BehaviorLogCreate, BehaviorTrendPoint

router = APIRouter(prefix="/children/{child_id}/behaviors", tags=["behaviors"])


@router.post("", response_model=BehaviorLog, status_code=status.HTTP_201_CREATED)
async def log_behavior(
    child_id: str,
    log: BehaviorLogCreate,
    user: CurrentUser,
    service: BehaviorSvc,
) -> BehaviorLog:
    """Log a behavior for a child."""
    try:
        return await service.log_behavior(user.id, child_id, log)
    except KidStepsError as exc:
        raise to_http_exception(exc) from exc


@router.get("/trend", response_model=list[BehaviorTrendPoint])
async def behavior_trend(child_id: str, user: CurrentUser, service: BehaviorSvc) -> list[BehaviorTrendPoint]:
    """Daily behavior counts for the behavior chart."""
    try:
        return await service.behavior_trend(user.id, child_id)
    except KidStepsError as exc:
        raise to_http_exception(exc) from exc
