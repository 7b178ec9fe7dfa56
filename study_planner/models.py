# study_planner/models.py
import os
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional, Union


PRIORITIES = ("high", "medium", "low")
BUFFER_PRIORITY = "buffer"


def _default_max_chunk() -> Dict[str, float]:
    return {"high": 2.0, "medium": 1.5, "low": 1.0}


def _default_priority_rank() -> Dict[str, int]:
    return {"high": 3, "medium": 2, "low": 1}


@dataclass
class PlannerPolicy:
    max_hours_per_day: float = 3.0     # ordinary daily capacity
    urgent_capacity: float = 4.0       # capacity on an urgent day
    max_chunk: Dict[str, float] = field(default_factory=_default_max_chunk)
    buffer_hours: float = 0.5
    buffer_label: str = "Urgent buffer / review"
    min_task_hours: float = 0.5        # floor for estimated effort
    urgency_window_days: int = 1
    max_days: int = 365                # loop safety bound
    priority_rank: Dict[str, int] = field(default_factory=_default_priority_rank)
    default_priority: str = "medium"

    def __post_init__(self):
        if self.max_hours_per_day <= 0:
            raise ValueError("max_hours_per_day must be positive")
        if self.urgent_capacity < self.max_hours_per_day:
            raise ValueError("urgent_capacity must be >= max_hours_per_day")
        if self.buffer_hours < 0:
            raise ValueError("buffer_hours must not be negative")
        if self.max_days <= 0:
            raise ValueError("max_days must be positive")
        missing = [p for p in PRIORITIES if p not in self.max_chunk]
        if missing:
            raise ValueError(f"max_chunk is missing priorities: {missing}")
        if self.default_priority not in PRIORITIES:
            raise ValueError(f"default_priority must be one of {PRIORITIES}")

    @classmethod
    def from_env(cls) -> "PlannerPolicy":
        """Defaults, with capacity overrides taken from PLANNER_* variables."""
        overrides: Dict[str, Any] = {}
        for key, cast in [
            ("max_hours_per_day", float),
            ("urgent_capacity", float),
            ("buffer_hours", float),
            ("max_days", int),
        ]:
            raw = os.getenv(f"PLANNER_{key.upper()}")
            if raw:
                overrides[key] = cast(raw)
        return cls(**overrides)


@dataclass
class Task:
    id: Union[str, int]
    name: str
    priority: str
    deadline: date                 # local calendar day
    estimated_hours: float
    remaining_hours: float

    def working_copy(self) -> "Task":
        return Task(
            id=self.id,
            name=self.name,
            priority=self.priority,
            deadline=self.deadline,
            estimated_hours=self.estimated_hours,
            remaining_hours=self.estimated_hours,
        )


@dataclass
class ScheduleEntry:
    task: str
    hours: float
    priority: str
    task_id: Optional[Union[str, int]] = None  # None for buffer blocks


@dataclass
class DayPlan:
    date: date
    entries: List[ScheduleEntry] = field(default_factory=list)

    @property
    def total_hours(self) -> float:
        return sum(e.hours for e in self.entries)


@dataclass
class DroppedTask:
    index: int
    reason: str
    record: Any


@dataclass
class ScheduleResult:
    plan: List[DayPlan]
    dropped: List[DroppedTask] = field(default_factory=list)
    days_simulated: int = 0
    truncated: bool = False
