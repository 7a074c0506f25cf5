"""
Child profile API endpoints.
"""

from fastapi import APIRouter, status

from kidsteps.api.deps import ChildSvc, CurrentUser
from kidsteps.api.errors import to_http_exception
from kidsteps.core.exceptions import KidStepsError
from kidsteps.models.child import Child, ChildCreate, ChildDetail
from kidsteps.services.age_calculator import age_in_months

router = APIRouter(prefix="/children", tags=["children"])


@router.post("", response_model=Child, status_code=status.HTTP_201_CREATED)
async def create_child(child: ChildCreate, user: CurrentUser, service: ChildSvc) -> Child:
    """Create a child profile for the current user."""
    try:
        return await service.create_child(user.id, child)
    except KidStepsError as exc:
        raise to_http_exception(exc) from exc


@router.get("", response_model=list[Child])
async def list_children(user: CurrentUser, service: ChildSvc) -> list[Child]:
    """List the current user's children."""
    try:
        return await service.list_children(user.id)
    except KidStepsError as exc:
        raise to_http_exception(exc) from exc


@router.get("/{child_id}", response_model=ChildDetail)
async def get_child(child_id: str, user: CurrentUser, service: ChildSvc) -> ChildDetail:
    """Get one of the current user's children, with its age."""
    try:
        child = await service.get_child(user.id, child_id)
    except KidStepsError as exc:
        raise to_http_exception(exc) from exc
    return ChildDetail(**child.model_dump(), age_in_months=age_in_months(child.birthdate))
