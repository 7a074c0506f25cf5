"""
Document store implementation of the child repository.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from kidsteps.interfaces.child_repository import IChildRepository
from kidsteps.interfaces.document_store import Document, FieldFilter, IDocumentStore, join_path
from kidsteps.models.child import Child, ChildCreate, ChildProfile
from kidsteps.services.age_calculator import coerce_birthdate
from kidsteps.utils.datetime_utils import from_store_timestamp, now_utc, to_store_timestamp

logger = logging.getLogger(__name__)

COLLECTION = "children"


def profile_to_fields(profile: ChildProfile) -> dict:
    return {
        "challenges": list(profile.challenges),
        "personality": list(profile.personality),
        "preferredStyle": profile.preferred_style,
        "favoriteTheme": list(profile.favorite_theme),
        "routine": profile.routine,
        "energy": profile.energy,
    }


def profile_from_fields(child_id: str, value: Any) -> ChildProfile:
    """Read a stored profile. Missing keys take their defaults; an unreadable profile is empty."""
    if not isinstance(value, dict):
        if value is not None:
            logger.warning(f"Child {child_id} has an unreadable profile: {value!r}")
        return ChildProfile()
    try:
        return ChildProfile(
            challenges=value.get("challenges") or [],
            personality=value.get("personality") or [],
            preferred_style=value.get("preferredStyle") or "",
            favorite_theme=value.get("favoriteTheme") or [],
            routine=value.get("routine") or "",
            energy=value.get("energy") or "",
        )
    except PydanticValidationError as exc:
        logger.warning(f"Child {child_id} has an unreadable profile: {exc}")
        return ChildProfile()


class DocumentChildRepository(IChildRepository):
    """Child repository backed by the ``children`` collection."""

    def __init__(self, store: IDocumentStore):
        self._store = store

    def _doc_to_model(self, doc: Document) -> Child:
        """Convert a stored document to a Child."""
        data = doc.data
        birthdate = coerce_birthdate(data.get("birthdate"))
        if birthdate is None:
            logger.warning(f"Child {doc.id} has a missing or unreadable birthdate: {data.get('birthdate')!r}")
        return Child(
            id=doc.id,
            parent_id=data.get("parentId") or "",
            name=data.get("name") or "Unnamed Child",
            nickname=data.get("nickname") or None,
            profile=profile_from_fields(doc.id, data.get("profile")),
            birthdate=birthdate,
            created_at=from_store_timestamp(data.get("createdAt")),
        )

    async def create(self, parent_id: str, child: ChildCreate) -> Child:
        doc = await self._store.add(
            COLLECTION,
            {
                "parentId": parent_id,
                "name": child.name,
                "nickname": child.nickname or "",
                "birthdate": child.birthdate.isoformat(),
                "profile": profile_to_fields(child.profile),
                "createdAt": to_store_timestamp(now_utc()),
            },
        )
        return self._doc_to_model(doc)

    async def get(self, child_id: str) -> Child | None:
        doc = await self._store.get(join_path(COLLECTION, child_id))
        return self._doc_to_model(doc) if doc else None

    async def list_by_parent(self, parent_id: str) -> list[Child]:
        docs = await self._store.query(
            COLLECTION,
            filters=[FieldFilter("parentId", "==", parent_id)],
        )
        children = [self._doc_to_model(doc) for doc in docs]
        return sorted(children, key=lambda child: (child.name.lower(), child.id))
