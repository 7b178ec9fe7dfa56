from datetime import date

import pytest

from study_planner.models import PlannerPolicy, Task


def test_policy_defaults():
    policy = PlannerPolicy()
    assert policy.max_hours_per_day == 3
    assert policy.urgent_capacity == 4
    assert policy.max_chunk == {"high": 2, "medium": 1.5, "low": 1}
    assert policy.buffer_hours == 0.5
    assert policy.max_days == 365


def test_policy_defaults_are_not_shared():
    a, b = PlannerPolicy(), PlannerPolicy()
    a.max_chunk["high"] = 5
    assert b.max_chunk["high"] == 2


@pytest.mark.parametrize("kwargs", [
    {"max_hours_per_day": 0},
    {"max_hours_per_day": 5, "urgent_capacity": 4},
    {"buffer_hours": -1},
    {"max_days": 0},
    {"max_chunk": {"high": 2, "medium": 1.5}},
    {"default_priority": "urgent"},
])
def test_policy_rejects_bad_values(kwargs):
    with pytest.raises(ValueError):
        PlannerPolicy(**kwargs)


def test_policy_from_env(monkeypatch):
    monkeypatch.setenv("PLANNER_MAX_HOURS_PER_DAY", "2.5")
    monkeypatch.setenv("PLANNER_MAX_DAYS", "30")
    monkeypatch.delenv("PLANNER_URGENT_CAPACITY", raising=False)
    monkeypatch.delenv("PLANNER_BUFFER_HOURS", raising=False)

    policy = PlannerPolicy.from_env()
    assert policy.max_hours_per_day == 2.5
    assert policy.max_days == 30
    assert policy.urgent_capacity == 4


def test_working_copy_resets_remaining():
    t = Task(id=1, name="A", priority="low", deadline=date(2025, 1, 1),
             estimated_hours=3, remaining_hours=0.5)
    copy = t.working_copy()
    assert copy.remaining_hours == 3
    assert copy is not t
