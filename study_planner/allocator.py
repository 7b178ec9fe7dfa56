# study_planner/allocator.py
import logging
from datetime import date, timedelta
from typing import List, Optional, Tuple

from .models import BUFFER_PRIORITY, DayPlan, PlannerPolicy, ScheduleEntry, Task

logger = logging.getLogger(__name__)

# float residue below this is treated as zero hours
EPSILON = 1e-9


def days_between(start: date, end: date) -> int:
    return (end - start).days


def sort_by_priority(tasks: List[Task], policy: PlannerPolicy) -> List[Task]:
    """Highest priority first, earlier deadline breaks ties."""
    return sorted(
        tasks,
        key=lambda t: (-policy.priority_rank.get(t.priority, 0), t.deadline),
    )


def _candidates(tasks: List[Task], cursor: date) -> List[Task]:
    pending = [t for t in tasks if t.remaining_hours > EPSILON]
    on_time = [t for t in pending if t.deadline >= cursor]
    # overdue fallback: nothing left that is still in time
    return on_time or pending


def _is_urgent(candidates: List[Task], cursor: date, policy: PlannerPolicy) -> bool:
    return any(
        t.priority == "high"
        and days_between(cursor, t.deadline) <= policy.urgency_window_days
        for t in candidates
    )


def plan_day(candidates: List[Task],
             cursor: date,
             policy: PlannerPolicy) -> List[ScheduleEntry]:
    """
    Fill one calendar day from the candidate tasks.

    Decrements remaining_hours on the given tasks in place.
    """
    urgent = _is_urgent(candidates, cursor, policy)
    capacity = policy.urgent_capacity if urgent else policy.max_hours_per_day
    entries: List[ScheduleEntry] = []

    for task in sort_by_priority(candidates, policy):
        if capacity <= EPSILON:
            break
        days_left = max(0, days_between(cursor, task.deadline))
        required_today = task.remaining_hours / (days_left + 1)
        capacity_limit = min(task.remaining_hours, capacity)
        normal_chunk = min(capacity_limit, policy.max_chunk.get(task.priority, capacity_limit))
        # even pacing beats the soft per-priority ceiling
        chunk = max(required_today, normal_chunk)
        applied = min(capacity_limit, chunk)
        if applied <= EPSILON:
            continue

        entries.append(ScheduleEntry(
            task=task.name, hours=applied, priority=task.priority, task_id=task.id,
        ))
        task.remaining_hours -= applied
        capacity -= applied

    if urgent and capacity + EPSILON >= policy.buffer_hours > 0:
        entries.append(ScheduleEntry(
            task=policy.buffer_label, hours=policy.buffer_hours, priority=BUFFER_PRIORITY,
        ))
        capacity -= policy.buffer_hours

    return entries


def allocate(tasks: List[Task],
             policy: Optional[PlannerPolicy] = None,
             today: Optional[date] = None) -> Tuple[List[DayPlan], int, bool]:
    """
    Walk calendar days from `today` and pack work into each of them.

    The input tasks are not modified; each call works on its own copies.

    Returns:
        plan: DayPlans for days that received at least one block
        days_simulated: loop iterations used, empty days included
        truncated: True if the max_days bound stopped the loop with work left
    """
    policy = policy or PlannerPolicy()
    if not tasks:
        return [], 0, False

    working = [t.working_copy() for t in tasks]
    cursor = today or date.today()
    last_deadline = max([cursor] + [t.deadline for t in working])

    def has_remaining_work() -> bool:
        return any(t.remaining_hours > EPSILON for t in working)

    plan: List[DayPlan] = []
    days = 0
    while (cursor <= last_deadline or has_remaining_work()) and days < policy.max_days:
        candidates = _candidates(working, cursor)
        if not candidates:
            break

        entries = plan_day(candidates, cursor, policy)
        if entries:
            plan.append(DayPlan(date=cursor, entries=entries))
            logger.debug("%s: %s block(s), %.2f h", cursor.isoformat(),
                         len(entries), sum(e.hours for e in entries))

        cursor += timedelta(days=1)
        days += 1

    truncated = has_remaining_work()
    if truncated:
        logger.warning(
            "Stopped after %s simulated day(s) with %.2f h still unscheduled",
            days, sum(max(0.0, t.remaining_hours) for t in working),
        )
    return plan, days, truncated
