"""API routers."""

from kidsteps.api import behaviors, children, milestones

__all__ = [
    "behaviors",
    "children",
    "milestones",
]
