# study_planner/classroom.py
"""
Turn Google Classroom assignments into planner task records.

Fetching assignments from the Classroom API happens elsewhere; these
helpers only convert payloads that were already retrieved.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional, Tuple

import pandas as pd

DEFAULT_ESTIMATED_HOURS = 2
FALLBACK_DUE_DAYS = 3
SOURCE = "google-classroom"


@dataclass
class ClassroomAssignment:
    id: str
    course_id: str
    course_name: str
    title: str
    due_date_time: Optional[str] = None   # ISO-8601
    status: str = "pending"               # pending | upcoming | completed
    description: Optional[str] = None
    alternate_link: Optional[str] = None
    max_points: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ClassroomAssignment":
        """Accepts the camelCase keys used by the Classroom panel."""
        return cls(
            id=str(data["id"]),
            course_id=str(data.get("courseId", "")),
            course_name=data.get("courseName", ""),
            title=data.get("title", ""),
            due_date_time=data.get("dueDateTime"),
            status=data.get("status", "pending"),
            description=data.get("description"),
            alternate_link=data.get("alternateLink"),
            max_points=data.get("maxPoints"),
        )


def _now(now: Optional[pd.Timestamp]) -> pd.Timestamp:
    return pd.Timestamp.now(tz="UTC") if now is None else pd.Timestamp(now)


def _parse_due(value: Any) -> Optional[pd.Timestamp]:
    if not value:
        return None
    ts = pd.to_datetime(value, errors="coerce", utc=True, format="ISO8601")
    return None if pd.isna(ts) else ts


def resolve_priority(due: Any, now: Optional[datetime] = None) -> str:
    """high when due within 48h, medium within a week, low after that."""
    due_ts = _parse_due(due)
    if due_ts is None:
        return "medium"
    now_ts = _now(now)
    if now_ts.tzinfo is None:
        now_ts = now_ts.tz_localize("UTC")
    diff_hours = (due_ts - now_ts).total_seconds() / 3600
    if diff_hours <= 48:
        return "high"
    if diff_hours <= 24 * 7:
        return "medium"
    return "low"


def fallback_due_date(now: Optional[datetime] = None) -> str:
    return (_now(now) + timedelta(days=FALLBACK_DUE_DAYS)).isoformat()


def assignment_to_task(assignment: ClassroomAssignment,
                       now: Optional[datetime] = None) -> Dict[str, Any]:
    due = assignment.due_date_time or fallback_due_date(now)
    return {
        "id": uuid.uuid4().hex,
        "name": assignment.title,
        "deadline": due,
        "estimatedHours": DEFAULT_ESTIMATED_HOURS,
        "priority": resolve_priority(due, now),
        "source": SOURCE,
        "source_assignment_id": assignment.id,
        "course_name": assignment.course_name,
    }


def merge_pending_assignments(tasks: List[Dict[str, Any]],
                              assignments: Iterable[ClassroomAssignment],
                              now: Optional[datetime] = None
                              ) -> Tuple[List[Dict[str, Any]], int]:
    """
    Append pending assignments that are not in `tasks` yet.

    Returns the merged list (a new list) and how many tasks were added.
    """
    seen = {t.get("source_assignment_id") for t in tasks if t.get("source_assignment_id")}
    added = []
    for a in assignments:
        if a.status != "pending" or a.id in seen:
            continue
        seen.add(a.id)
        added.append(assignment_to_task(a, now))
    return list(tasks) + added, len(added)
