"""
Join milestone templates with a child's progress records.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from kidsteps.models.enums import MilestoneStatus
from kidsteps.models.milestone import CombinedMilestone, MilestoneProgress, MilestoneTemplate


def merge_milestones(
    templates: Sequence[MilestoneTemplate],
    progress: Iterable[MilestoneProgress],
) -> list[CombinedMilestone]:
    """
    Left outer join of templates and progress, keyed by template ID.

    Templates define the result: every template appears exactly once, in
    input order, and progress records without a template are dropped. A
    template without progress is Not Started.
    """
    progress_by_id = {record.milestone_id: record for record in progress}

    combined: list[CombinedMilestone] = []
    for template in templates:
        record = progress_by_id.get(template.id)
        combined.append(
            CombinedMilestone(
                **template.model_dump(),
                current_status=record.status if record else MilestoneStatus.NOT_STARTED,
                date_achieved=record.date_achieved if record else None,
                progress_id=record.milestone_id if record else None,
            )
        )
    return combined
