from .models import PlannerPolicy, ScheduleResult
from .scheduler import build_schedule, generate_schedule

__all__ = ["PlannerPolicy", "ScheduleResult", "build_schedule", "generate_schedule"]
