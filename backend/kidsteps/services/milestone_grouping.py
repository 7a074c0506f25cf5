"""
Group combined milestones into age-range buckets and count statuses.

Groups are ordered by the ``min_age_months`` carried on their milestones.
Parsing the leading number out of the age-range label is only a fallback for
groups that do not carry it; a label that cannot be parsed sorts last.
"""

from __future__ import annotations

import math
import re
from typing import Iterable, Optional

from kidsteps.models.milestone import CombinedMilestone, GroupedMilestone, GroupStats

_LEADING_NUMBER = re.compile(r"^\D*?(\d+)")


def group_key(milestone: CombinedMilestone) -> str:
    """Age-range label of a milestone, with a generated label when it is empty."""
    if milestone.age_range:
        return milestone.age_range
    max_age = milestone.max_age_months if milestone.max_age_months is not None else ""
    return f"Age {milestone.min_age_months}-{max_age} months"


def parse_age_range_start(label: str) -> Optional[int]:
    """Lower bound of a label such as "12-18 months", or None if there is none."""
    match = _LEADING_NUMBER.match(label or "")
    return int(match.group(1)) if match else None


def _milestone_order(milestone: CombinedMilestone) -> tuple[str, str]:
    return (milestone.description, milestone.id)


def _group_order(group: GroupedMilestone) -> tuple[float, str]:
    start = group.min_age_months
    if start is None:
        start = parse_age_range_start(group.age_range)
    return (start if start is not None else math.inf, group.age_range)


def summarize(milestones: Iterable[CombinedMilestone]) -> GroupStats:
    """Status counts over a set of milestones."""
    stats = GroupStats()
    for milestone in milestones:
        stats.count(milestone.current_status)
    return stats


def group_milestones(combined: Iterable[CombinedMilestone]) -> list[GroupedMilestone]:
    """
    Bucket milestones by age-range label.

    Milestones inside a group are sorted by description (case-sensitive),
    groups by the first milestone's min_age_months. The result does not
    depend on the input order.
    """
    buckets: dict[str, list[CombinedMilestone]] = {}
    for milestone in combined:
        buckets.setdefault(group_key(milestone), []).append(milestone)

    groups: list[GroupedMilestone] = []
    for label, milestones in buckets.items():
        milestones.sort(key=_milestone_order)
        groups.append(
            GroupedMilestone(
                age_range=label,
                min_age_months=milestones[0].min_age_months,
                milestones=milestones,
                group_stats=summarize(milestones),
            )
        )

    groups.sort(key=_group_order)
    return groups
