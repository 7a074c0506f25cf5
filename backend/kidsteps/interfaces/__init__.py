"""Abstract interfaces for infrastructure abstraction."""

from kidsteps.interfaces.auth_provider import IAuthProvider
from kidsteps.interfaces.behavior_repository import IBehaviorRepository
from kidsteps.interfaces.child_repository import IChildRepository
from kidsteps.interfaces.document_store import IDocumentStore, ISnapshotStream
from kidsteps.interfaces.milestone_progress_repository import IMilestoneProgressRepository
from kidsteps.interfaces.milestone_template_repository import IMilestoneTemplateRepository

__all__ = [
    "IAuthProvider",
    "IBehaviorRepository",
    "IChildRepository",
    "IDocumentStore",
    "ISnapshotStream",
    "IMilestoneProgressRepository",
    "IMilestoneTemplateRepository",
]
