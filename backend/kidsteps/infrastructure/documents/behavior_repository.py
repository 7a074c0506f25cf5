"""
Document store implementation of the behavior log repository.
"""

from __future__ import annotations

from datetime import datetime

from kidsteps.interfaces.behavior_repository import IBehaviorRepository
from kidsteps.interfaces.document_store import Document, FieldFilter, IDocumentStore, OrderBy
from kidsteps.models.behavior import BehaviorLog, BehaviorLogCreate
from kidsteps.utils.datetime_utils import from_store_timestamp, to_store_timestamp

COLLECTION = "behaviors"


class DocumentBehaviorRepository(IBehaviorRepository):
    """Behavior logs backed by the top-level ``behaviors`` collection."""

    def __init__(self, store: IDocumentStore):
        self._store = store

    def _doc_to_model(self, doc: Document) -> BehaviorLog:
        data = doc.data
        return BehaviorLog(
            id=doc.id,
            child_id=data.get("childId") or "",
            parent_id=data.get("parentId") or "",
            type=data.get("type") or "Other",
            mood=data.get("mood") or "",
            notes=data.get("notes") or "",
            location=data.get("location"),
            timestamp=from_store_timestamp(data.get("timestamp")),
        )

    async def create(
        self,
        parent_id: str,
        child_id: str,
        log: BehaviorLogCreate,
        timestamp: datetime,
    ) -> BehaviorLog:
        doc = await self._store.add(
            COLLECTION,
            {
                "childId": child_id,
                "parentId": parent_id,
                "type": log.type.value,
                "mood": log.mood,
                "notes": log.notes,
                "location": log.location.value if log.location else None,
                "timestamp": to_store_timestamp(timestamp),
            },
        )
        return self._doc_to_model(doc)

    async def list_for_child(self, parent_id: str, child_id: str) -> list[BehaviorLog]:
        docs = await self._store.query(
            COLLECTION,
            filters=[
                FieldFilter("childId", "==", child_id),
                FieldFilter("parentId", "==", parent_id),
            ],
            order_by=[OrderBy("timestamp")],
        )
        return [self._doc_to_model(doc) for doc in docs]
