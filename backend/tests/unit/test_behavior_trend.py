from datetime import datetime, timezone

from kidsteps.models.behavior import BehaviorLog
from kidsteps.services.behavior_service import CHART_TYPES, build_behavior_trend


def _log(log_id: str, behavior_type: str, timestamp: datetime | None) -> BehaviorLog:
    return BehaviorLog(
        id=log_id,
        child_id="child-1",
        parent_id="parent-1",
        type=behavior_type,
        timestamp=timestamp,
    )


def test_counts_per_day_and_type():
    logs = [
        _log("1", "Tantrum", datetime(2025, 3, 4, 8, 0, tzinfo=timezone.utc)),
        _log("2", "Tantrum", datetime(2025, 3, 4, 19, 0, tzinfo=timezone.utc)),
        _log("3", "Happy Moment", datetime(2025, 3, 5, 12, 0, tzinfo=timezone.utc)),
    ]

    trend = build_behavior_trend(logs)

    assert [p.date for p in trend] == ["2025-03-04", "2025-03-05"]
    assert trend[0].label == "Mar 4"
    assert trend[0].counts["Tantrum"] == 2
    assert trend[1].counts["Happy Moment"] == 1
    assert trend[1].counts["Tantrum"] == 0


def test_every_day_has_a_counter_for_every_type():
    trend = build_behavior_trend([_log("1", "Playful", datetime(2025, 3, 4, tzinfo=timezone.utc))])

    assert set(trend[0].counts) == set(CHART_TYPES)
    assert sum(trend[0].counts.values()) == 1


def test_unknown_type_counts_as_other():
    trend = build_behavior_trend([_log("1", "Retired type", datetime(2025, 3, 4, tzinfo=timezone.utc))])

    assert trend[0].counts["Other"] == 1
    assert "Retired type" not in trend[0].counts


def test_logs_without_timestamp_are_skipped():
    trend = build_behavior_trend(
        [
            _log("1", "Tantrum", None),
            _log("2", "Tantrum", datetime(2025, 3, 4, tzinfo=timezone.utc)),
        ]
    )

    assert len(trend) == 1
    assert trend[0].counts["Tantrum"] == 1


def test_output_sorted_by_date_regardless_of_input_order():
    logs = [
        _log("1", "Tantrum", datetime(2025, 3, 10, tzinfo=timezone.utc)),
        _log("2", "Tantrum", datetime(2025, 2, 28, tzinfo=timezone.utc)),
    ]

    assert [p.date for p in build_behavior_trend(logs)] == ["2025-02-28", "2025-03-10"]
