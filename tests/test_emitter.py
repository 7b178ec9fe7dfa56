from datetime import date

from study_planner.emitter import (
    daily_load, emit_plan, first_high_priority_block, format_duration, plan_to_frame,
)
from study_planner.models import DayPlan, ScheduleEntry


def _plan():
    return [
        DayPlan(date=date(2025, 1, 6), entries=[
            ScheduleEntry("Essay", 2.0, "high", "t1"),
            ScheduleEntry("Urgent buffer / review", 0.5, "buffer"),
        ]),
        DayPlan(date=date(2025, 1, 7), entries=[]),
        DayPlan(date=date(2025, 1, 8), entries=[
            ScheduleEntry("Quiz", 5 / 3, "medium", "t2"),
        ]),
    ]


def test_format_duration():
    assert format_duration(2) == "2 hrs"
    assert format_duration(2.0) == "2 hrs"
    assert format_duration(0.5) == "0.5 hrs"
    assert format_duration(1.5) == "1.5 hrs"
    assert format_duration(5 / 3) == "1.7 hrs"
    assert format_duration(4 - 1e-12) == "4 hrs"
    assert format_duration(3.00002) == "3.0 hrs"
    assert format_duration(2.96) == "3.0 hrs"


def test_emit_plan_shape_and_order():
    assert emit_plan(_plan()) == [
        {
            "date": "2025-01-06",
            "tasks": [
                {"task": "Essay", "duration": "2 hrs", "priority": "high"},
                {"task": "Urgent buffer / review", "duration": "0.5 hrs", "priority": "buffer"},
            ],
        },
        {
            "date": "2025-01-08",
            "tasks": [{"task": "Quiz", "duration": "1.7 hrs", "priority": "medium"}],
        },
    ]


def test_emit_empty_plan():
    assert emit_plan([]) == []


def test_plan_to_frame_and_daily_load():
    frame = plan_to_frame(_plan())
    assert list(frame.columns) == ["date", "task", "hours", "duration", "priority"]
    assert frame["task"].tolist() == ["Essay", "Urgent buffer / review", "Quiz"]

    load = daily_load(_plan())
    assert load.index.tolist() == ["2025-01-06", "2025-01-08"]
    assert load.loc["2025-01-06"] == 2.5


def test_daily_load_of_empty_plan():
    assert daily_load([]).empty


def test_first_high_priority_block():
    schedule = emit_plan(_plan())
    assert first_high_priority_block(schedule) == ("2025-01-06", "Essay")
    assert first_high_priority_block(schedule[1:]) is None
