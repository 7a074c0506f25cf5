"""
Document store implementation of the milestone template repository.
"""

from __future__ import annotations

import logging
from typing import Sequence

from kidsteps.interfaces.document_store import (
    Document,
    FieldFilter,
    IDocumentStore,
    OrderBy,
    WriteOp,
    join_path,
)
from kidsteps.interfaces.milestone_template_repository import IMilestoneTemplateRepository
from kidsteps.models.milestone import MilestoneTemplate

logger = logging.getLogger(__name__)

COLLECTION = "milestoneTemplates"


def template_to_fields(template: MilestoneTemplate) -> dict:
    return {
        "ageRange": template.age_range,
        "category": template.category,
        "description": template.description,
        "minAgeMonths": template.min_age_months,
        "maxAgeMonths": template.max_age_months,
    }


class DocumentMilestoneTemplateRepository(IMilestoneTemplateRepository):
    """Milestone catalog backed by the ``milestoneTemplates`` collection."""

    def __init__(self, store: IDocumentStore):
        self._store = store

    def _doc_to_model(self, doc: Document) -> MilestoneTemplate:
        data = doc.data
        return MilestoneTemplate(
            id=doc.id,
            age_range=data.get("ageRange") or "",
            category=data.get("category") or "",
            description=data.get("description") or "",
            min_age_months=data["minAgeMonths"],
            max_age_months=data.get("maxAgeMonths"),
        )

    async def list_eligible(self, max_age_months: int) -> list[MilestoneTemplate]:
        docs = await self._store.query(
            COLLECTION,
            filters=[FieldFilter("minAgeMonths", "<=", max_age_months)],
            order_by=[OrderBy("minAgeMonths"), OrderBy("description")],
        )
        if not docs:
            logger.info(f"No milestone templates found for age {max_age_months} months")
        return [self._doc_to_model(doc) for doc in docs]

    async def seed(self, templates: Sequence[MilestoneTemplate]) -> int:
        writes = [
            WriteOp(path=join_path(COLLECTION, template.id), fields=template_to_fields(template))
            for template in templates
        ]
        await self._store.batch_write(writes)
        return len(writes)
