import random

import pytest

from kidsteps.models.enums import MilestoneStatus
from kidsteps.models.milestone import CombinedMilestone
from kidsteps.services.milestone_grouping import (
    group_key,
    group_milestones,
    parse_age_range_start,
    summarize,
)


def _milestone(
    milestone_id: str,
    age_range: str,
    min_age: int,
    description: str,
    status: MilestoneStatus = MilestoneStatus.NOT_STARTED,
    max_age: int | None = None,
) -> CombinedMilestone:
    return CombinedMilestone(
        id=milestone_id,
        age_range=age_range,
        description=description,
        min_age_months=min_age,
        max_age_months=max_age,
        current_status=status,
    )


@pytest.fixture
def board_milestones() -> list[CombinedMilestone]:
    return [
        _milestone("m1", "0-3 months", 0, "Smiles", MilestoneStatus.ACHIEVED),
        _milestone("m2", "0-3 months", 0, "Coos", MilestoneStatus.IN_PROGRESS),
        _milestone("m3", "4-6 months", 4, "Rolls over"),
        _milestone("m4", "12-18 months", 12, "Walks"),
        _milestone("m5", "4-6 months", 4, "Babbles", MilestoneStatus.ACHIEVED),
    ]


def test_groups_sorted_by_min_age_and_milestones_by_description(board_milestones):
    groups = group_milestones(board_milestones)

    assert [g.age_range for g in groups] == ["0-3 months", "4-6 months", "12-18 months"]
    assert [m.description for m in groups[0].milestones] == ["Coos", "Smiles"]
    assert [m.description for m in groups[1].milestones] == ["Babbles", "Rolls over"]


def test_group_stats(board_milestones):
    groups = {g.age_range: g for g in group_milestones(board_milestones)}

    first = groups["0-3 months"].group_stats
    assert (first.achieved, first.in_progress, first.not_started, first.total) == (1, 1, 0, 2)
    assert first.percent_achieved == 50
    assert first.model_dump()["percent_achieved"] == 50
    assert groups["12-18 months"].group_stats.percent_achieved == 0


def test_group_counts_add_up(board_milestones):
    groups = group_milestones(board_milestones)

    assert sum(len(g.milestones) for g in groups) == len(board_milestones)
    for group in groups:
        stats = group.group_stats
        assert stats.achieved + stats.in_progress + stats.not_started == stats.total
        assert stats.total == len(group.milestones)


def test_grouping_does_not_depend_on_input_order(board_milestones):
    expected = group_milestones(board_milestones)

    shuffled = list(board_milestones)
    random.Random(7).shuffle(shuffled)

    assert group_milestones(shuffled) == expected


def test_description_ties_break_on_id():
    groups = group_milestones(
        [
            _milestone("b", "0-3 months", 0, "Same"),
            _milestone("a", "0-3 months", 0, "Same"),
        ]
    )

    assert [m.id for m in groups[0].milestones] == ["a", "b"]


def test_missing_label_gets_generated_key():
    milestone = _milestone("m1", "", 6, "Sits", max_age=9)

    assert group_key(milestone) == "Age 6-9 months"
    assert group_key(_milestone("m2", "", 24, "Runs")) == "Age 24- months"
    assert group_milestones([milestone])[0].age_range == "Age 6-9 months"


def test_empty_input():
    assert group_milestones([]) == []
    assert summarize([]).total == 0


@pytest.mark.parametrize(
    "label, expected",
    [
        ("12-18 months", 12),
        ("0-3 months", 0),
        ("Age 6-9 months", 6),
        ("Newborn", None),
        ("", None),
    ],
)
def test_parse_age_range_start(label, expected):
    assert parse_age_range_start(label) == expected
