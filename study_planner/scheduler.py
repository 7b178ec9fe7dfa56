# study_planner/scheduler.py
import logging
from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from .models import PlannerPolicy, ScheduleResult
from .normalizer import normalize_tasks
from .allocator import allocate
from .emitter import emit_plan

logger = logging.getLogger(__name__)


def build_schedule(tasks: Optional[Iterable[Any]],
                   policy: Optional[PlannerPolicy] = None,
                   today: Optional[date] = None) -> ScheduleResult:
    """
    Run the full planning pass and keep the diagnostics.

    tasks: raw task records (dicts or objects with name/priority/deadline/
           estimatedHours). Malformed ones are dropped, not raised.
    today: first day to plan. Defaults to the current local date; pass it
           explicitly for reproducible plans.
    """
    policy = policy or PlannerPolicy()

    # 1) Validate and canonicalize input
    normalized, dropped = normalize_tasks(tasks, policy)
    if not normalized:
        return ScheduleResult(plan=[], dropped=dropped)

    # 2) Pack work into calendar days
    plan, days, truncated = allocate(normalized, policy, today=today)

    logger.info("Planned %s task(s) over %s day(s) (%s simulated)",
                len(normalized), len(plan), days)
    return ScheduleResult(plan=plan, dropped=dropped,
                          days_simulated=days, truncated=truncated)


def generate_schedule(tasks: Optional[Iterable[Any]],
                      policy: Optional[PlannerPolicy] = None,
                      today: Optional[date] = None) -> List[Dict[str, Any]]:
    """
    Plan tasks into days and return [{date, tasks: [{task, duration, priority}]}].

    An empty or fully malformed input gives [].
    """
    return emit_plan(build_schedule(tasks, policy, today).plan)
