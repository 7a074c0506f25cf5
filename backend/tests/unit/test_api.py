"""
API tests for child, milestone and behavior endpoints.
"""

from datetime import date

import pytest
from httpx import ASGITransport, AsyncClient

from kidsteps.api.deps import get_document_store
from kidsteps.infrastructure.local.database import get_session_factory
from kidsteps.infrastructure.local.document_store import SqliteDocumentStore
from kidsteps.models.milestone import MilestoneTemplate
from main import app

CATALOG = [
    MilestoneTemplate(id="smiles", age_range="0-3 months", description="Smiles", min_age_months=0, max_age_months=3),
    MilestoneTemplate(id="coos", age_range="0-3 months", description="Coos", min_age_months=0, max_age_months=3),
    MilestoneTemplate(id="drives", age_range="Adult", description="Drives", min_age_months=600),
]


@pytest.fixture
async def client(store, template_repo):
    await template_repo.seed(CATALOG)
    app.dependency_overrides[get_document_store] = lambda: store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def child_id(client):
    response = await client.post("/api/children", json={"name": "Mia", "birthdate": "2024-01-01"})
    assert response.status_code == 201
    return response.json()["id"]


@pytest.mark.asyncio
async def test_create_and_get_child(client, child_id):
    response = await client.get(f"/api/children/{child_id}")

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Mia"
    assert data["parent_id"] == "dev_user"
    assert data["age_in_months"] >= 12


@pytest.mark.asyncio
async def test_create_child_rejects_future_birthdate(client):
    response = await client.post(
        "/api/children", json={"name": "Mia", "birthdate": date(2999, 1, 1).isoformat()}
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_list_children(client, child_id):
    response = await client.get("/api/children")

    assert response.status_code == 200
    assert [c["id"] for c in response.json()] == [child_id]


@pytest.mark.asyncio
async def test_get_board(client, child_id):
    response = await client.get(f"/api/children/{child_id}/milestones")

    assert response.status_code == 200
    board = response.json()
    assert [g["age_range"] for g in board["groups"]] == ["0-3 months"]
    assert [m["description"] for m in board["groups"][0]["milestones"]] == ["Coos", "Smiles"]
    assert board["stats"]["not_started"] == 2
    assert board["groups"][0]["group_stats"]["percent_achieved"] == 0
    assert board["stats"]["percent_achieved"] == 0


@pytest.mark.asyncio
async def test_set_status(client, child_id):
    response = await client.put(f"/api/children/{child_id}/milestones/smiles", json={"status": "Achieved"})

    assert response.status_code == 200
    assert response.json()["status"] == "Achieved"
    assert response.json()["date_achieved"] is not None

    board = (await client.get(f"/api/children/{child_id}/milestones")).json()
    assert board["stats"]["achieved"] == 1
    assert board["groups"][0]["group_stats"]["percent_achieved"] == 50


@pytest.mark.asyncio
async def test_set_status_rejects_unknown_value(client, child_id):
    response = await client.put(f"/api/children/{child_id}/milestones/smiles", json={"status": "Done"})

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_mark_group_achieved(client, child_id):
    url = f"/api/children/{child_id}/milestones/groups/achieve"

    first = await client.post(url, json={"age_range": "0-3 months"})
    second = await client.post(url, json={"age_range": "0-3 months"})

    assert first.status_code == 200
    assert first.json()["updated_count"] == 2
    assert second.json()["updated_count"] == 0


@pytest.mark.asyncio
async def test_mark_unknown_group(client, child_id):
    response = await client.post(
        f"/api/children/{child_id}/milestones/groups/achieve", json={"age_range": "99-100 months"}
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_other_parents_child_is_forbidden(client, store):
    await store.upsert("children/theirs", {"parentId": "someone-else", "name": "Kai", "birthdate": "2024-01-01"})

    board = await client.get("/api/children/theirs/milestones")
    update = await client.put("/api/children/theirs/milestones/smiles", json={"status": "Achieved"})

    assert board.status_code == 403
    assert update.status_code == 403
    assert await store.get("children/theirs/milestoneProgress/smiles") is None


@pytest.mark.asyncio
async def test_missing_child_is_404(client):
    response = await client.get("/api/children/missing/milestones")

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_missing_index_returns_remediation(client, db_engine, child_id):
    app.dependency_overrides[get_document_store] = lambda: SqliteDocumentStore(
        get_session_factory(db_engine), composite_indexes={}
    )

    response = await client.get(f"/api/children/{child_id}/milestones")

    assert response.status_code == 500
    detail = response.json()["detail"]
    assert "minAgeMonths" in detail["remediation"]
    assert "milestoneTemplates" in detail["remediation"]


@pytest.mark.asyncio
async def test_log_behavior_and_trend(client, child_id):
    created = await client.post(
        f"/api/children/{child_id}/behaviors", json={"type": "Tantrum", "mood": "😠", "location": "Home"}
    )
    trend = await client.get(f"/api/children/{child_id}/behaviors/trend")

    assert created.status_code == 201
    assert created.json()["type"] == "Tantrum"
    assert trend.status_code == 200
    assert len(trend.json()) == 1
    assert trend.json()[0]["counts"]["Tantrum"] == 1


@pytest.mark.asyncio
async def test_child_profile_round_trip(client):
    profile = {
        "challenges": ["Transitions"],
        "personality": ["Curious"],
        "preferred_style": "Visual",
        "favorite_theme": ["Space", "Trains"],
        "routine": "Bath before bed",
        "energy": "Medium",
    }
    created = await client.post(
        "/api/children", json={"name": "Mia", "birthdate": "2024-01-01", "profile": profile}
    )

    fetched = await client.get(f"/api/children/{created.json()['id']}")

    assert created.status_code == 201
    assert fetched.json()["profile"] == profile


@pytest.mark.asyncio
async def test_child_without_profile_gets_empty_profile(client, child_id):
    response = await client.get(f"/api/children/{child_id}")

    assert response.json()["profile"] == {
        "challenges": [],
        "personality": [],
        "preferred_style": "",
        "favorite_theme": [],
        "routine": "",
        "energy": "",
    }
