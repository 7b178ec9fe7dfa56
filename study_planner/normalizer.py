# study_planner/normalizer.py
import logging
import math
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any, Iterable, List, Optional, Tuple

import pandas as pd

from .models import PRIORITIES, DroppedTask, PlannerPolicy, Task

logger = logging.getLogger(__name__)


def _field(record: Any, *names: str) -> Any:
    """Read the first present field from a mapping or an attribute-style record."""
    for name in names:
        if isinstance(record, Mapping):
            if name in record:
                return record[name]
        elif hasattr(record, name):
            return getattr(record, name)
    return None


def to_local_day(value: Any) -> Optional[date]:
    """
    Truncate a timestamp-like value to its local calendar day.

    Accepts ISO-8601 strings, date, datetime and pandas Timestamp. Aware
    values are converted to the machine's local time first, so
    "2025-03-01T23:30:00Z" lands on whatever day that is locally.
    Returns None when the value is missing or cannot be parsed.
    """
    if value is None:
        return None
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    if not isinstance(value, (str, datetime)):
        return None
    if isinstance(value, str) and not value.strip():
        return None

    if isinstance(value, str):
        # relative words such as "today" or "now" are not deadlines
        ts = pd.to_datetime(value.strip(), errors="coerce", format="ISO8601")
    else:
        ts = pd.to_datetime(value, errors="coerce")
    if pd.isna(ts):
        return None
    if ts.tzinfo is not None:
        return ts.to_pydatetime().astimezone().date()
    return ts.normalize().date()


def _parse_hours(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        hours = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(hours):
        return None
    return hours


def _parse_priority(value: Any, policy: PlannerPolicy) -> str:
    if isinstance(value, str):
        p = value.strip().lower()
        if p in PRIORITIES:
            return p
    return policy.default_priority


def normalize_tasks(records: Optional[Iterable[Any]],
                    policy: Optional[PlannerPolicy] = None
                    ) -> Tuple[List[Task], List[DroppedTask]]:
    """
    Validate raw task records and turn them into working Tasks.

    Malformed records never raise: they are skipped and returned in the
    second list with a short reason. Kept tasks without an id get
    "task-<n>", n being the position among kept tasks.
    """
    policy = policy or PlannerPolicy()
    tasks: List[Task] = []
    dropped: List[DroppedTask] = []

    for idx, record in enumerate(records or []):
        reason = None
        raw_name = _field(record, "name")
        name = raw_name.strip() if isinstance(raw_name, str) else ""
        raw_deadline = _field(record, "deadline")
        deadline = to_local_day(raw_deadline)
        hours = _parse_hours(_field(record, "estimatedHours", "estimated_hours"))

        if not name:
            reason = "missing-name"
        elif raw_deadline is None or raw_deadline == "":
            reason = "missing-deadline"
        elif deadline is None:
            reason = "invalid-deadline"
        elif hours is None:
            reason = "invalid-hours"
        elif hours <= 0:
            reason = "non-positive-hours"

        if reason:
            logger.debug("Dropping task record %s: %s", idx, reason)
            dropped.append(DroppedTask(index=idx, reason=reason, record=record))
            continue

        task_id = _field(record, "id")
        if task_id is None or task_id == "":
            task_id = f"task-{len(tasks)}"

        hours = max(policy.min_task_hours, hours)
        tasks.append(Task(
            id=task_id,
            name=name,
            priority=_parse_priority(_field(record, "priority"), policy),
            deadline=deadline,
            estimated_hours=hours,
            remaining_hours=hours,
        ))

    if dropped:
        logger.info("Normalized %s task(s), dropped %s malformed record(s)",
                    len(tasks), len(dropped))
    return tasks, dropped
