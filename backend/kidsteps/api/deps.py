"""
Dependency injection for API endpoints.

This module provides FastAPI dependencies that inject the correct
infrastructure implementations based on environment configuration.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Header, HTTPException, status

from kidsteps.core.config import get_settings
from kidsteps.core.exceptions import AuthenticationError
from kidsteps.interfaces.auth_provider import IAuthProvider, User
from kidsteps.interfaces.behavior_repository import IBehaviorRepository
from kidsteps.interfaces.child_repository import IChildRepository
from kidsteps.interfaces.document_store import IDocumentStore
from kidsteps.interfaces.milestone_progress_repository import IMilestoneProgressRepository
from kidsteps.interfaces.milestone_template_repository import IMilestoneTemplateRepository
from kidsteps.services.behavior_service import BehaviorService
from kidsteps.services.child_service import ChildService
from kidsteps.services.milestone_board_service import MilestoneBoardService
from kidsteps.services.milestone_status_service import MilestoneStatusService


# ===========================================
# Store and Repository Dependencies
# ===========================================


@lru_cache()
def get_document_store() -> IDocumentStore:
    """Get document store instance."""
    from kidsteps.infrastructure.local.document_store import SqliteDocumentStore

    return SqliteDocumentStore()


DocumentStore = Annotated[IDocumentStore, Depends(get_document_store)]


def get_child_repository(store: DocumentStore) -> IChildRepository:
    """Get child repository instance."""
    from kidsteps.infrastructure.documents.child_repository import DocumentChildRepository

    return DocumentChildRepository(store)


def get_milestone_template_repository(store: DocumentStore) -> IMilestoneTemplateRepository:
    """Get milestone template repository instance."""
    from kidsteps.infrastructure.documents.milestone_template_repository import (
        DocumentMilestoneTemplateRepository,
    )

    return DocumentMilestoneTemplateRepository(store)


def get_milestone_progress_repository(store: DocumentStore) -> IMilestoneProgressRepository:
    """Get milestone progress repository instance."""
    from kidsteps.infrastructure.documents.milestone_progress_repository import (
        DocumentMilestoneProgressRepository,
    )

    return DocumentMilestoneProgressRepository(store)


def get_behavior_repository(store: DocumentStore) -> IBehaviorRepository:
    """Get behavior repository instance."""
    from kidsteps.infrastructure.documents.behavior_repository import DocumentBehaviorRepository

    return DocumentBehaviorRepository(store)


ChildRepo = Annotated[IChildRepository, Depends(get_child_repository)]
MilestoneTemplateRepo = Annotated[IMilestoneTemplateRepository, Depends(get_milestone_template_repository)]
MilestoneProgressRepo = Annotated[IMilestoneProgressRepository, Depends(get_milestone_progress_repository)]
BehaviorRepo = Annotated[IBehaviorRepository, Depends(get_behavior_repository)]


# ===========================================
# Service Dependencies
# ===========================================


def get_child_service(child_repo: ChildRepo) -> ChildService:
    return ChildService(child_repo)


def get_milestone_board_service(
    child_repo: ChildRepo,
    template_repo: MilestoneTemplateRepo,
    progress_repo: MilestoneProgressRepo,
) -> MilestoneBoardService:
    return MilestoneBoardService(child_repo, template_repo, progress_repo)


def get_milestone_status_service(
    child_repo: ChildRepo,
    progress_repo: MilestoneProgressRepo,
) -> MilestoneStatusService:
    return MilestoneStatusService(child_repo, progress_repo)


def get_behavior_service(child_repo: ChildRepo, behavior_repo: BehaviorRepo) -> BehaviorService:
    return BehaviorService(child_repo, behavior_repo)


# ===========================================
# User Authentication
# ===========================================


@lru_cache()
def get_auth_provider() -> IAuthProvider:
    """Get auth provider instance."""
    settings = get_settings()
    from kidsteps.infrastructure.local.mock_auth import MockAuthProvider

    return MockAuthProvider(enabled=settings.AUTH_ENABLED)


async def get_current_user(
    authorization: Annotated[str | None, Header()] = None,
    auth_provider: IAuthProvider = Depends(get_auth_provider),
) -> User:
    """
    Get current authenticated user.

    With authentication disabled, returns the development user.
    """
    if not auth_provider.is_enabled():
        return User(id="dev_user", email="dev@example.com", display_name="Developer")

    if not authorization:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization header required",
        )

    # Extract token from "Bearer <token>"
    try:
        scheme, token = authorization.split()
        if scheme.lower() != "bearer":
            raise ValueError("Invalid scheme")
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authorization header format",
        )

    try:
        return await auth_provider.verify_token(token)
    except AuthenticationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
        )


# ===========================================
# Type Aliases for Dependency Injection
# ===========================================

ChildSvc = Annotated[ChildService, Depends(get_child_service)]
MilestoneBoardSvc = Annotated[MilestoneBoardService, Depends(get_milestone_board_service)]
MilestoneStatusSvc = Annotated[MilestoneStatusService, Depends(get_milestone_status_service)]
BehaviorSvc = Annotated[BehaviorService, Depends(get_behavior_service)]
CurrentUser = Annotated[User, Depends(get_current_user)]
