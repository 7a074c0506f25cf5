"""
Document store implementation of the milestone progress repository.

Records live at ``children/{child_id}/milestoneProgress/{milestone_id}``.
The document ID doubles as the milestone template ID.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Sequence

from pydantic import ValidationError as PydanticValidationError

from kidsteps.interfaces.document_store import (
    Document,
    IDocumentStore,
    ISnapshotStream,
    Snapshot,
    WriteOp,
    join_path,
)
from kidsteps.interfaces.milestone_progress_repository import IMilestoneProgressRepository
from kidsteps.models.enums import MilestoneStatus
from kidsteps.models.milestone import MilestoneProgress
from kidsteps.utils.datetime_utils import from_store_timestamp, to_store_timestamp

logger = logging.getLogger(__name__)


def progress_collection(child_id: str) -> str:
    return join_path("children", child_id, "milestoneProgress")


def status_fields(milestone_id: str, status: MilestoneStatus, date_achieved: datetime | None) -> dict:
    return {
        "milestoneId": milestone_id,
        "status": status.value,
        "dateAchieved": to_store_timestamp(date_achieved) if date_achieved else None,
    }


class DocumentMilestoneProgressRepository(IMilestoneProgressRepository):
    """Milestone progress backed by a per-child sub-collection."""

    def __init__(self, store: IDocumentStore):
        self._store = store

    def _doc_to_model(self, doc: Document) -> MilestoneProgress | None:
        data = doc.data
        try:
            return MilestoneProgress(
                milestone_id=data.get("milestoneId") or doc.id,
                status=data.get("status") or MilestoneStatus.NOT_STARTED,
                date_achieved=from_store_timestamp(data.get("dateAchieved")),
                notes=data.get("notes"),
            )
        except PydanticValidationError as exc:
            # Treated as absent, i.e. Not Started
            logger.warning(f"Ignoring malformed progress record {doc.path}: {exc}")
            return None

    def _snapshot_to_models(self, snapshot: Snapshot) -> list[MilestoneProgress]:
        records = (self._doc_to_model(doc) for doc in snapshot)
        return [record for record in records if record is not None]

    async def observe(self, child_id: str) -> ISnapshotStream[list[MilestoneProgress]]:
        stream = await self._store.subscribe(progress_collection(child_id))
        return stream.map(self._snapshot_to_models)

    async def get(self, child_id: str, milestone_id: str) -> MilestoneProgress | None:
        doc = await self._store.get(join_path(progress_collection(child_id), milestone_id))
        return self._doc_to_model(doc) if doc else None

    async def set_status(
        self,
        child_id: str,
        milestone_id: str,
        status: MilestoneStatus,
        date_achieved: datetime | None,
    ) -> None:
        await self._store.upsert(
            join_path(progress_collection(child_id), milestone_id),
            status_fields(milestone_id, status, date_achieved),
            merge=True,
        )

    async def set_statuses(
        self,
        child_id: str,
        milestone_ids: Sequence[str],
        status: MilestoneStatus,
        date_achieved: datetime | None,
    ) -> None:
        collection = progress_collection(child_id)
        await self._store.batch_write(
            [
                WriteOp(
                    path=join_path(collection, milestone_id),
                    fields=status_fields(milestone_id, status, date_achieved),
                )
                for milestone_id in milestone_ids
            ]
        )
