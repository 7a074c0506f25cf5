"""Shared fixtures: an in-memory document store and repositories on top of it."""

import pytest
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from kidsteps.infrastructure.documents.behavior_repository import DocumentBehaviorRepository
from kidsteps.infrastructure.documents.child_repository import DocumentChildRepository
from kidsteps.infrastructure.documents.milestone_progress_repository import (
    DocumentMilestoneProgressRepository,
)
from kidsteps.infrastructure.documents.milestone_template_repository import (
    DocumentMilestoneTemplateRepository,
)
from kidsteps.infrastructure.local.database import get_session_factory, init_db
from kidsteps.infrastructure.local.document_store import SqliteDocumentStore

TEST_INDEXES = {
    "milestoneTemplates": [["minAgeMonths", "description"]],
    "behaviors": [["childId", "parentId", "timestamp"]],
}


@pytest.fixture
async def db_engine():
    """In-memory SQLite engine with the schema created."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def store(db_engine):
    return SqliteDocumentStore(get_session_factory(db_engine), composite_indexes=TEST_INDEXES)


@pytest.fixture
def child_repo(store):
    return DocumentChildRepository(store)


@pytest.fixture
def template_repo(store):
    return DocumentMilestoneTemplateRepository(store)


@pytest.fixture
def progress_repo(store):
    return DocumentMilestoneProgressRepository(store)


@pytest.fixture
def behavior_repo(store):
    return DocumentBehaviorRepository(store)
