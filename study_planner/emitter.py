# study_planner/emitter.py
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import pandas as pd

from .models import DayPlan

PLAN_COLUMNS = ["date", "task", "hours", "duration", "priority"]


def format_duration(hours: float) -> str:
    """2.0 -> "2 hrs", 1.6666 -> "1.7 hrs"."""
    if np.isclose(hours, round(hours), rtol=0, atol=1e-9):
        return f"{int(round(hours))} hrs"
    return f"{hours:.1f} hrs"


def emit_plan(plan: List[DayPlan]) -> List[Dict[str, Any]]:
    """Render DayPlans into the plain dict schedule handed to callers."""
    return [
        {
            "date": day.date.isoformat(),
            "tasks": [
                {
                    "task": e.task,
                    "duration": format_duration(e.hours),
                    "priority": e.priority,
                }
                for e in day.entries
            ],
        }
        for day in plan
        if day.entries
    ]


def plan_to_frame(plan: List[DayPlan]) -> pd.DataFrame:
    """One row per scheduled block, in plan order."""
    rows = [
        (day.date.isoformat(), e.task, e.hours, format_duration(e.hours), e.priority)
        for day in plan
        for e in day.entries
    ]
    return pd.DataFrame(rows, columns=PLAN_COLUMNS)


def daily_load(plan: List[DayPlan]) -> pd.Series:
    """Total scheduled hours per day, indexed by YYYY-MM-DD."""
    frame = plan_to_frame(plan)
    if frame.empty:
        return pd.Series(dtype=float, name="hours")
    return frame.groupby("date", sort=False)["hours"].sum()


def first_high_priority_block(schedule: List[Dict[str, Any]]) -> Optional[Tuple[str, str]]:
    """(date, task name) of the earliest high-priority block in an emitted schedule."""
    for day in schedule:
        for entry in day["tasks"]:
            if entry["priority"] == "high":
                return day["date"], entry["task"]
    return None
