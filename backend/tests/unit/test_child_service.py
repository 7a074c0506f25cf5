"""
Unit tests for child profiles and ownership checks.
"""

from datetime import date

import pytest
from pydantic import ValidationError

from kidsteps.core.exceptions import ForbiddenError, NotFoundError
from kidsteps.models.child import ChildCreate, ChildProfile
from kidsteps.services.child_service import PERMISSION_DENIED, ChildService, get_owned_child


@pytest.fixture
def child_service(child_repo):
    return ChildService(child_repo)


@pytest.mark.asyncio
async def test_create_and_get_child(child_service):
    created = await child_service.create_child(
        "parent-1", ChildCreate(name="Mia", nickname="Mimi", birthdate=date(2024, 3, 15))
    )

    fetched = await child_service.get_child("parent-1", created.id)

    assert fetched.name == "Mia"
    assert fetched.nickname == "Mimi"
    assert fetched.parent_id == "parent-1"
    assert fetched.birthdate == date(2024, 3, 15)
    assert fetched.created_at is not None


@pytest.mark.asyncio
async def test_list_children_is_scoped_and_sorted(child_service):
    await child_service.create_child("parent-1", ChildCreate(name="zoe", birthdate=date(2023, 1, 1)))
    await child_service.create_child("parent-1", ChildCreate(name="Adam", birthdate=date(2022, 1, 1)))
    await child_service.create_child("parent-2", ChildCreate(name="Bea", birthdate=date(2022, 1, 1)))

    children = await child_service.list_children("parent-1")

    assert [c.name for c in children] == ["Adam", "zoe"]


@pytest.mark.asyncio
async def test_other_parents_child_is_forbidden(child_service):
    created = await child_service.create_child("parent-1", ChildCreate(name="Mia", birthdate=date(2024, 3, 15)))

    with pytest.raises(ForbiddenError) as exc_info:
        await child_service.get_child("parent-2", created.id)

    assert exc_info.value.message == PERMISSION_DENIED


@pytest.mark.asyncio
async def test_missing_child_is_not_found(child_repo):
    with pytest.raises(NotFoundError):
        await get_owned_child("parent-1", "missing", child_repo)


@pytest.mark.asyncio
async def test_unreadable_birthdate_is_loaded_as_none(store, child_repo):
    await store.upsert("children/c1", {"parentId": "parent-1", "name": "Mia", "birthdate": "someday"})

    child = await child_repo.get("c1")

    assert child.birthdate is None
    assert child.name == "Mia"


@pytest.mark.asyncio
async def test_missing_name_gets_placeholder(store, child_repo):
    await store.upsert("children/c1", {"parentId": "parent-1", "birthdate": "2024-03-15"})

    child = await child_repo.get("c1")

    assert child.name == "Unnamed Child"


def test_future_birthdate_rejected():
    with pytest.raises(ValidationError):
        ChildCreate(name="Mia", birthdate=date(2999, 1, 1))


@pytest.mark.asyncio
async def test_profile_round_trip(store, child_service):
    profile = ChildProfile(
        challenges=["Transitions"],
        personality=["Curious", "Shy"],
        preferred_style="Visual",
        favorite_theme=["Dinosaurs"],
        routine="Nap at 1pm",
        energy="High",
    )
    created = await child_service.create_child(
        "parent-1", ChildCreate(name="Mia", birthdate=date(2024, 3, 15), profile=profile)
    )

    fetched = await child_service.get_child("parent-1", created.id)
    doc = await store.get(f"children/{created.id}")

    assert fetched.profile == profile
    assert doc.data["profile"]["preferredStyle"] == "Visual"
    assert doc.data["profile"]["favoriteTheme"] == ["Dinosaurs"]


@pytest.mark.asyncio
async def test_partial_stored_profile_gets_defaults(store, child_repo):
    await store.upsert(
        "children/c1",
        {"parentId": "parent-1", "name": "Mia", "birthdate": "2024-03-15", "profile": {"personality": ["Calm"]}},
    )

    child = await child_repo.get("c1")

    assert child.profile.personality == ["Calm"]
    assert child.profile.challenges == []
    assert child.profile.preferred_style == ""


@pytest.mark.asyncio
async def test_missing_or_unreadable_profile_is_empty(store, child_repo):
    await store.upsert("children/c1", {"parentId": "parent-1", "name": "Mia", "birthdate": "2024-03-15"})
    await store.upsert(
        "children/c2",
        {"parentId": "parent-1", "name": "Leo", "birthdate": "2024-03-15", "profile": {"challenges": "not a list"}},
    )

    assert (await child_repo.get("c1")).profile == ChildProfile()
    assert (await child_repo.get("c2")).profile == ChildProfile()
