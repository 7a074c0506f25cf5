"""
Unit tests for the milestone progress repository.
"""

import asyncio
from datetime import datetime, timezone

import pytest

from kidsteps.models.enums import MilestoneStatus

ACHIEVED_AT = datetime(2025, 2, 1, 10, 0, tzinfo=timezone.utc)


@pytest.mark.asyncio
async def test_set_status_and_get(progress_repo):
    await progress_repo.set_status("c1", "walks", MilestoneStatus.ACHIEVED, ACHIEVED_AT)

    record = await progress_repo.get("c1", "walks")

    assert record.milestone_id == "walks"
    assert record.status == MilestoneStatus.ACHIEVED
    assert record.date_achieved == ACHIEVED_AT


@pytest.mark.asyncio
async def test_record_is_keyed_by_template_id(store, progress_repo):
    await progress_repo.set_status("c1", "walks", MilestoneStatus.IN_PROGRESS, None)

    doc = await store.get("children/c1/milestoneProgress/walks")

    assert doc.data == {"milestoneId": "walks", "status": "In Progress", "dateAchieved": None}


@pytest.mark.asyncio
async def test_status_change_keeps_notes(store, progress_repo):
    await store.upsert(
        "children/c1/milestoneProgress/walks",
        {"milestoneId": "walks", "status": "In Progress", "dateAchieved": None, "notes": "holds the sofa"},
    )

    await progress_repo.set_status("c1", "walks", MilestoneStatus.ACHIEVED, ACHIEVED_AT)

    record = await progress_repo.get("c1", "walks")
    assert record.notes == "holds the sofa"
    assert record.status == MilestoneStatus.ACHIEVED


@pytest.mark.asyncio
async def test_get_missing(progress_repo):
    assert await progress_repo.get("c1", "walks") is None


@pytest.mark.asyncio
async def test_set_statuses_writes_shared_timestamp(progress_repo):
    await progress_repo.set_statuses("c1", ["a", "b"], MilestoneStatus.ACHIEVED, ACHIEVED_AT)

    a = await progress_repo.get("c1", "a")
    b = await progress_repo.get("c1", "b")
    assert a.date_achieved == b.date_achieved == ACHIEVED_AT


@pytest.mark.asyncio
async def test_observe_emits_progress_models(progress_repo):
    await progress_repo.set_status("c1", "a", MilestoneStatus.IN_PROGRESS, None)

    async with await progress_repo.observe("c1") as stream:
        first = await asyncio.wait_for(stream.__anext__(), 1.0)
        await progress_repo.set_status("c1", "b", MilestoneStatus.ACHIEVED, ACHIEVED_AT)
        second = await asyncio.wait_for(stream.__anext__(), 1.0)

    assert [(r.milestone_id, r.status) for r in first] == [("a", MilestoneStatus.IN_PROGRESS)]
    assert {r.milestone_id for r in second} == {"a", "b"}


@pytest.mark.asyncio
async def test_malformed_records_are_skipped(store, progress_repo):
    """Test that unreadable records are treated as if they did not exist."""
    base = "children/c1/milestoneProgress"
    await store.upsert(f"{base}/bogus-status", {"status": "Done-ish"})
    await store.upsert(f"{base}/no-date", {"status": "Achieved", "dateAchieved": None})
    await store.upsert(f"{base}/ok", {"status": "In Progress"})

    async with await progress_repo.observe("c1") as stream:
        records = await asyncio.wait_for(stream.__anext__(), 1.0)

    assert [r.milestone_id for r in records] == ["ok"]
    assert await progress_repo.get("c1", "bogus-status") is None


@pytest.mark.asyncio
async def test_timestamp_mapping_is_accepted(store, progress_repo):
    await store.upsert(
        "children/c1/milestoneProgress/walks",
        {"status": "Achieved", "dateAchieved": {"seconds": 1738404000, "nanoseconds": 0}},
    )

    record = await progress_repo.get("c1", "walks")

    assert record.date_achieved == ACHIEVED_AT
