import pandas as pd

from study_planner.classroom import (
    ClassroomAssignment, assignment_to_task, merge_pending_assignments, resolve_priority,
)
from study_planner.normalizer import normalize_tasks

NOW = pd.Timestamp("2025-01-06T12:00:00Z")


def _assignment(aid, due, status="pending"):
    return ClassroomAssignment(id=aid, course_id="c1", course_name="Algorithms",
                               title=f"Homework {aid}", due_date_time=due, status=status)


def test_resolve_priority_by_time_left():
    assert resolve_priority("2025-01-07T12:00:00Z", NOW) == "high"
    assert resolve_priority("2025-01-08T12:00:00Z", NOW) == "high"
    assert resolve_priority("2025-01-10T12:00:00Z", NOW) == "medium"
    assert resolve_priority("2025-01-20T12:00:00Z", NOW) == "low"
    assert resolve_priority(None, NOW) == "medium"
    assert resolve_priority("garbage", NOW) == "medium"


def test_assignment_to_task():
    task = assignment_to_task(_assignment("a1", "2025-01-07T09:00:00Z"), NOW)

    assert task["name"] == "Homework a1"
    assert task["deadline"] == "2025-01-07T09:00:00Z"
    assert task["estimatedHours"] == 2
    assert task["priority"] == "high"
    assert task["source"] == "google-classroom"
    assert task["source_assignment_id"] == "a1"
    assert task["course_name"] == "Algorithms"
    assert task["id"]


def test_missing_due_date_falls_back_three_days_out():
    task = assignment_to_task(_assignment("a2", None), NOW)

    assert pd.Timestamp(task["deadline"]) == NOW + pd.Timedelta(days=3)
    assert task["priority"] == "medium"
    tasks, dropped = normalize_tasks([task])
    assert dropped == []
    assert tasks[0].name == "Homework a2"


def test_merge_skips_known_and_non_pending():
    existing = [{"name": "Mine", "deadline": "2025-01-09", "estimatedHours": 1},
                {"name": "Homework a1", "source_assignment_id": "a1"}]
    assignments = [
        _assignment("a1", "2025-01-07T09:00:00Z"),
        _assignment("a2", "2025-01-09T09:00:00Z"),
        _assignment("a3", "2025-01-09T09:00:00Z", status="completed"),
        _assignment("a2", "2025-01-09T09:00:00Z"),
    ]
    merged, added = merge_pending_assignments(existing, assignments, NOW)

    assert added == 1
    assert [t.get("source_assignment_id") for t in merged] == [None, "a1", "a2"]
    assert len(existing) == 2


def test_from_dict_reads_camel_case():
    a = ClassroomAssignment.from_dict({
        "id": 7, "courseId": "c9", "courseName": "Physics", "title": "Lab report",
        "dueDateTime": "2025-02-01T17:00:00Z", "status": "upcoming", "maxPoints": 10,
    })
    assert a.id == "7"
    assert a.course_name == "Physics"
    assert a.due_date_time == "2025-02-01T17:00:00Z"
    assert a.status == "upcoming"
    assert a.max_points == 10


def test_relative_due_words_fall_back_to_medium():
    assert resolve_priority("now", NOW) == "medium"
    assert resolve_priority("today", NOW) == "medium"
