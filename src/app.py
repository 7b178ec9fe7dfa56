import json
import logging
from datetime import datetime, timedelta

import streamlit as st
import pandas as pd
import plotly.express as px

from streamlit_calendar import calendar

from study_planner.models import PlannerPolicy
from study_planner.scheduler import build_schedule
from study_planner.emitter import daily_load, emit_plan, first_high_priority_block, plan_to_frame
from study_planner.classroom import ClassroomAssignment, merge_pending_assignments

from study_planner.metrics import get_metrics, serve_metrics

logging.basicConfig(level=logging.INFO)


# ✅ Metrics and exporter are per process, shared by every session
METRICS = get_metrics()
serve_metrics(8000)


def datetime_input(label: str, key: str, default: datetime):
    """date_input + time_input pair, returns a naive local datetime."""
    col_date, col_time = st.columns(2)
    with col_date:
        d = st.date_input(label + " date", value=default.date(), key=key + "_date")
    with col_time:
        t = st.time_input(label + " time", value=default.time(), key=key + "_time")
    return datetime.combine(d, t)


# Session State Setup
if "policy" not in st.session_state:
    st.session_state.policy = PlannerPolicy.from_env()

if "tasks" not in st.session_state:
    st.session_state.tasks = []         # list[dict]

if "schedule" not in st.session_state:
    st.session_state.schedule = []      # emitted plan

if "plan_df" not in st.session_state:
    st.session_state.plan_df = pd.DataFrame(
        columns=["date", "task", "hours", "duration", "priority"]
    )

if "load" not in st.session_state:
    st.session_state.load = pd.Series(dtype=float)


def run_planner(tasks):
    with METRICS.schedule_time.time():
        result = build_schedule(tasks, policy=st.session_state.policy)
    METRICS.record(result)

    st.session_state.schedule = emit_plan(result.plan)
    st.session_state.plan_df = plan_to_frame(result.plan)
    st.session_state.load = daily_load(result.plan)
    return result


# Sidebar: Inputs
st.sidebar.title("AI Study Planner")

# Capacity settings
st.sidebar.subheader("Capacity")
max_hours = st.sidebar.number_input("Hours per day", 0.5, 12.0, step=0.5,
                                    value=float(st.session_state.policy.max_hours_per_day))
urgent_hours = st.sidebar.number_input("Hours on urgent days", 0.5, 16.0, step=0.5,
                                       value=float(st.session_state.policy.urgent_capacity))
if urgent_hours < max_hours:
    st.sidebar.error("Urgent capacity must be at least the daily capacity.")
else:
    st.session_state.policy.max_hours_per_day = float(max_hours)
    st.session_state.policy.urgent_capacity = float(urgent_hours)

# Add Task
st.sidebar.subheader("Add Task")
with st.sidebar.form("task_form"):
    t_name = st.text_input("Task name", key="t_name", placeholder="e.g., DSA Assignment, AI Quiz")
    default_deadline = datetime.combine(datetime.now().date(), datetime.min.time()) + timedelta(hours=18)
    t_deadline = datetime_input("Deadline", key="t_deadline", default=default_deadline)
    t_hours = st.number_input("Estimated hours", min_value=0.5, max_value=40.0, step=0.5, value=1.5)
    t_priority = st.selectbox("Priority", ["high", "medium", "low"], index=1)
    add_task = st.form_submit_button("Add Task")
    if add_task:
        if t_name.strip():
            st.session_state.tasks.append({
                "id": f"t{len(st.session_state.tasks)}",
                "name": t_name.strip(),
                "deadline": t_deadline.isoformat(),
                "estimatedHours": float(t_hours),
                "priority": t_priority,
            })
        else:
            st.sidebar.error("Please enter a task name.")

# Classroom import
st.sidebar.subheader("Google Classroom")
upload = st.sidebar.file_uploader("Assignments JSON", type=["json"])
if upload is not None and st.sidebar.button("Add pending assignments and plan"):
    try:
        payload = json.load(upload)
        assignments = [ClassroomAssignment.from_dict(a) for a in payload]
    except (ValueError, KeyError, TypeError) as e:
        st.sidebar.error(f"Could not read assignments: {e}")
    else:
        merged, added = merge_pending_assignments(st.session_state.tasks, assignments)
        if added:
            st.session_state.tasks = merged
            run_planner(merged)
            st.sidebar.success(f"Added {added} assignment(s) and rebuilt the plan.")
        else:
            st.sidebar.info("All pending Classroom assignments are already in your planner.")


# Main: Generate Schedule
st.title("Study Plan")

st.markdown("### Pending Tasks")
if st.session_state.tasks:
    tdf = pd.DataFrame(st.session_state.tasks)
    st.dataframe(tdf[["name", "priority", "deadline", "estimatedHours"]])
    st.caption(f"{sum(float(t['estimatedHours']) for t in st.session_state.tasks):g} hours in total")
else:
    st.write("No tasks yet.")


if st.button("Generate Schedule", disabled=not st.session_state.tasks):
    result = run_planner(st.session_state.tasks)
    if result.plan:
        st.success("Study schedule ready. We distributed your workload across the days below.")
    else:
        st.warning("Add at least one task with a deadline to generate a plan.")
    if result.dropped:
        st.info(f"{len(result.dropped)} task(s) were skipped because they were incomplete.")
    if result.truncated:
        st.error("Not everything fits: some work is still unscheduled after a year of days.")

    urgent = first_high_priority_block(st.session_state.schedule)
    if urgent:
        st.error(f"Urgent block scheduled: focus on {urgent[1]} on {urgent[0]}.")


# Calendar UI with FullCalendar
if st.session_state.schedule:
    st.markdown("## Calendar View")

    def priority_color(p):
        return {
            "high": "#d62728",    # red
            "medium": "#ff7f0e",  # orange
            "low": "#2ca02c",     # green
        }.get(p, "#1f77b4")       # buffer: blue

    events = []
    for day in st.session_state.schedule:
        for i, entry in enumerate(day["tasks"]):
            events.append({
                "title": f'{entry["task"]} ({entry["duration"]})',
                "start": day["date"],
                "allDay": True,
                "id": f'{day["date"]}-{i}',
                "color": priority_color(entry["priority"]),
            })

    cal_options = {
        "initialView": "dayGridMonth",
        "weekNumbers": False,
        "firstDay": 1,  # Monday
    }

    calendar(events=events, options=cal_options, key="calendar")

    st.markdown("### Daily Load")
    load_df = st.session_state.load.rename_axis("date").reset_index(name="hours")
    fig = px.bar(load_df, x="date", y="hours", labels={"date": "Day", "hours": "Hours"})
    fig.add_hline(y=st.session_state.policy.max_hours_per_day, line_dash="dash")
    st.plotly_chart(fig, use_container_width=True)

    st.markdown("### Blocks")
    st.dataframe(st.session_state.plan_df)
else:
    st.info("Add a few tasks and click **Generate Schedule** to see study blocks here.")
