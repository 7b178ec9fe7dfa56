# study_planner/metrics.py
"""
Process-wide Prometheus metrics for the planner front ends.

Streamlit re-runs the app script for every session and interaction, so
collectors and the exporter are created once per process here instead of
in the script body.
"""
import logging
from dataclasses import dataclass
from typing import Optional, Set

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Summary, start_http_server

from .models import ScheduleResult

logger = logging.getLogger(__name__)


@dataclass
class PlannerMetrics:
    schedule_time: Summary
    dropped_records: Counter
    truncated_runs: Counter

    @classmethod
    def create(cls, registry: CollectorRegistry = REGISTRY) -> "PlannerMetrics":
        return cls(
            schedule_time=Summary(
                "study_schedule_generation_seconds",
                "Time spent generating a study plan",
                registry=registry,
            ),
            dropped_records=Counter(
                "study_schedule_dropped_records_total",
                "Task records dropped during normalization, by reason",
                ["reason"],
                registry=registry,
            ),
            truncated_runs=Counter(
                "study_schedule_truncated_total",
                "Plans that hit the day limit with work still unscheduled",
                registry=registry,
            ),
        )

    def record(self, result: ScheduleResult) -> None:
        for d in result.dropped:
            self.dropped_records.labels(reason=d.reason).inc()
        if result.truncated:
            self.truncated_runs.inc()


_metrics: Optional[PlannerMetrics] = None
_served_ports: Set[int] = set()


def get_metrics() -> PlannerMetrics:
    """The metrics registered on the default registry, created on first use."""
    global _metrics
    if _metrics is None:
        _metrics = PlannerMetrics.create()
    return _metrics


def serve_metrics(port: int = 8000) -> None:
    """Start the /metrics exporter on `port` unless this process already did."""
    if port in _served_ports:
        return
    start_http_server(port)
    _served_ports.add(port)
    logger.info("Serving Prometheus metrics on port %s", port)
