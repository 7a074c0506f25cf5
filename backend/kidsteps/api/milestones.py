"""
Milestone API endpoints.

Serves the milestone board of a child, its live stream, and status changes.
"""

import asyncio
import json
from typing import AsyncGenerator

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import StreamingResponse

from kidsteps.api.deps import CurrentUser, MilestoneBoardSvc, MilestoneStatusSvc
from kidsteps.api.errors import to_http_exception
from kidsteps.core.config import get_settings
from kidsteps.core.exceptions import KidStepsError
from kidsteps.models.milestone import (
    BulkStatusUpdate,
    GroupAchieveRequest,
    MilestoneBoard,
    MilestoneProgress,
    MilestoneStatusUpdate,
)
from kidsteps.services.milestone_board_service import MilestoneBoardWatcher

router = APIRouter(prefix="/children/{child_id}/milestones", tags=["milestones"])


@router.get("", response_model=MilestoneBoard)
async def get_milestone_board(
    child_id: str,
    user: CurrentUser,
    service: MilestoneBoardSvc,
) -> MilestoneBoard:
    """Milestones eligible for the child's age, grouped by age range."""
    try:
        return await service.get_board(user.id, child_id)
    except KidStepsError as exc:
        raise to_http_exception(exc) from exc


@router.get("/stream")
async def stream_milestone_board(
    child_id: str,
    user: CurrentUser,
    service: MilestoneBoardSvc,
    request: Request,
) -> StreamingResponse:
    """Server-sent events: one board per progress change."""
    watcher = MilestoneBoardWatcher(service)
    try:
        boards = await watcher.open(user.id, child_id)
    except KidStepsError as exc:
        raise to_http_exception(exc) from exc
    keepalive = get_settings().STREAM_KEEPALIVE_SECONDS

    async def event_generator() -> AsyncGenerator[str, None]:
        next_board: asyncio.Future | None = None
        try:
            while True:
                if await request.is_disconnected():
                    break
                if next_board is None:
                    next_board = asyncio.ensure_future(boards.__anext__())
                done, _ = await asyncio.wait({next_board}, timeout=keepalive)
                if not done:
                    yield ": keep-alive\n\n"
                    continue
                finished, next_board = next_board, None
                try:
                    board = finished.result()
                except StopAsyncIteration:
                    break
                except KidStepsError as exc:
                    payload = json.dumps({"type": "error", "message": exc.message})
                    yield f"event: error\ndata: {payload}\n\n"
                    break
                yield f"data: {board.model_dump_json()}\n\n"
        finally:
            if next_board is not None:
                next_board.cancel()
            await watcher.close()

    return StreamingResponse(event_generator(), media_type="text/event-stream")


@router.put("/{milestone_id}", response_model=MilestoneProgress)
async def set_milestone_status(
    child_id: str,
    milestone_id: str,
    update: MilestoneStatusUpdate,
    user: CurrentUser,
    service: MilestoneStatusSvc,
) -> MilestoneProgress:
    """Set the status of one milestone."""
    try:
        return await service.set_status(user.id, child_id, milestone_id, update.status)
    except KidStepsError as exc:
        raise to_http_exception(exc) from exc


@router.post("/groups/achieve", response_model=BulkStatusUpdate)
async def mark_group_achieved(
    child_id: str,
    request_body: GroupAchieveRequest,
    user: CurrentUser,
    board_service: MilestoneBoardSvc,
    status_service: MilestoneStatusSvc,
) -> BulkStatusUpdate:
    """Mark every milestone of an age-range group as achieved."""
    try:
        board = await board_service.get_board(user.id, child_id)
        group = next((g for g in board.groups if g.age_range == request_body.age_range), None)
        if group is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Age range '{request_body.age_range}' not found",
            )
        return await status_service.mark_group_achieved(user.id, child_id, group)
    except KidStepsError as exc:
        raise to_http_exception(exc) from exc
