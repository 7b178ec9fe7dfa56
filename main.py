# demo.py
import logging
from datetime import date, timedelta

import matplotlib.pyplot as plt

from study_planner.models import PlannerPolicy
from study_planner.scheduler import build_schedule
from study_planner.emitter import daily_load, emit_plan, plan_to_frame


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    today = date.today()
    policy = PlannerPolicy.from_env()

    tasks = [
        {
            "name": "DSA Assignment",
            "priority": "high",
            "deadline": (today + timedelta(days=1)).isoformat() + "T18:00",
            "estimatedHours": 5,
        },
        {
            "name": "AI Quiz prep",
            "priority": "Medium",
            "deadline": (today + timedelta(days=4)).isoformat() + "T09:00",
            "estimatedHours": 4,
        },
        {
            "name": "Read OS chapter 6",
            "priority": "low",
            "deadline": (today + timedelta(days=6)).isoformat(),
            "estimatedHours": 2.5,
        },
        {
            # no deadline, gets dropped
            "name": "Someday project",
            "estimatedHours": 10,
        },
    ]

    result = build_schedule(tasks, policy=policy, today=today)

    print("=== Schedule ===")
    print(plan_to_frame(result.plan).to_string(index=False))

    if result.dropped:
        print("\nDropped records:")
        for d in result.dropped:
            print(f"  #{d.index}: {d.reason}")
    if result.truncated:
        print(f"\nWarning: stopped after {result.days_simulated} days with work left over")

    print("\n=== JSON view (first day) ===")
    schedule = emit_plan(result.plan)
    print(schedule[0] if schedule else [])

    # Plot daily load against the ordinary capacity
    load = daily_load(result.plan)
    plt.figure(figsize=(10, 3))
    plt.bar(load.index, load.values)
    plt.axhline(policy.max_hours_per_day, color="grey", linestyle="--")
    plt.title("Planned study hours per day")
    plt.xlabel("Day")
    plt.ylabel("Hours")
    plt.tight_layout()
    plt.show()


if __name__ == "__main__":
    main()
