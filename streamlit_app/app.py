"""Triathlon Plan Coach: Streamlit dashboard.

Run with:
    streamlit run streamlit_app/app.py

Plans and profiles are stored as JSON files (see config.py).
"""

from __future__ import annotations

import logging
from datetime import timedelta

import streamlit as st

from triathlon_engine.analysis.advisor import (
    calculate_compliance_stats,
    calculate_training_stats,
    generate_recommendations,
    get_week_stats,
)
from triathlon_engine.errors import PlanEngineError, PlanValidationError
from triathlon_engine.math.dates import format_display_date, get_local_today
from triathlon_engine.models.enums import CompletionStatus, Discipline, WorkoutCategory
from triathlon_engine.models.race import RACE_DISTANCES
from triathlon_engine.planning.edits import log_completion, move_workout, swap_workout
from triathlon_engine.serialization import plan_to_json_string
from triathlon_engine.workout_builder.library import (
    get_workouts_by_category,
    get_workouts_by_discipline,
)

from config import LOG_LEVEL, STRENGTH_SESSIONS_PER_WEEK
from helpers import (
    DAY_NAMES,
    DISCIPLINE_COLORS,
    PHASE_LABELS,
    build_profile,
    build_race_config,
    format_duration,
    format_hours,
    format_target_time,
    list_plans,
    list_profiles,
    load_plan,
    load_profile,
    regenerate_plan,
    save_plan,
    save_profile,
    step_bars,
)

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------

st.set_page_config(
    page_title="Triathlon Plan Coach",
    page_icon="🏊",
    layout="wide",
)

today = get_local_today()


# ---------------------------------------------------------------------------
# Rendering helpers (must be defined before use in tabs)
# ---------------------------------------------------------------------------


def _render_steps(workout) -> None:
    """Render workout steps as proportional color-coded bars."""
    for step, width, color in step_bars(workout):
        parts = [f"<strong>{step.name}</strong>", step.duration]
        if step.target_heart_rate_zone:
            parts.append(f"Z{step.target_heart_rate_zone}")
        if step.target_pace:
            parts.append(step.target_pace)
        if step.cadence:
            parts.append(step.cadence)
        st.markdown(
            f'<div style="background:{color};padding:6px 12px;border-radius:4px;'
            f'margin:2px 0;width:{max(width, 25)}%;">{" | ".join(parts)}'
            f'<br><small style="color:#444;">{step.instructions}</small></div>',
            unsafe_allow_html=True,
        )


def _set_plan(plan) -> None:
    st.session_state["plan"] = plan


def _render_workout(workout, week) -> None:
    color = DISCIPLINE_COLORS.get(workout.discipline, "#CCCCCC")
    status = ""
    if workout.completion is not None:
        status = f" · _{workout.completion.status.name.lower()}_"
    st.markdown(
        f'<span style="color:{color};">●</span> **{workout.title}** '
        f"({format_duration(workout.total_duration)}){status}",
        unsafe_allow_html=True,
    )
    if workout.discipline == Discipline.REST:
        return

    with st.expander("Details"):
        st.caption(workout.description)
        _render_steps(workout)
        for tip in workout.tips:
            st.markdown(f"- {tip}")

        plan = st.session_state["plan"]
        key = workout.id

        st.markdown("**Log completion**")
        c1, c2, c3 = st.columns(3)
        status_name = c1.selectbox(
            "Status", [s.name.lower() for s in CompletionStatus], key=f"status_{key}"
        )
        actual = c2.number_input(
            "Minutes", 0, 600, workout.total_duration, key=f"actual_{key}"
        )
        rpe = c3.slider("RPE", 1, 10, 5, key=f"rpe_{key}")
        if st.button("Save completion", key=f"log_{key}"):
            try:
                _set_plan(log_completion(
                    plan, workout.id, CompletionStatus[status_name.upper()],
                    actual_duration=actual, perceived_effort=rpe,
                    replace=workout.completion is not None,
                ))
                st.rerun()
            except (PlanEngineError, ValueError) as e:
                st.error(str(e))

        st.markdown("**Move to another day**")
        dates = [d.date for d in week.days]
        target = st.selectbox(
            "Day", dates, format_func=format_display_date, key=f"move_{key}"
        )
        if st.button("Move", key=f"move_btn_{key}"):
            try:
                _set_plan(move_workout(plan, workout.id, target))
                st.rerun()
            except PlanEngineError as e:
                st.error(str(e))

        if workout.completion is None:
            st.markdown("**Swap with a library workout**")
            options = get_workouts_by_discipline(workout.discipline)
            if options:
                choice = st.selectbox(
                    "Library workout", options, format_func=lambda w: w.title,
                    key=f"swap_{key}",
                )
                if st.button("Swap", key=f"swap_btn_{key}"):
                    _set_plan(swap_workout(plan, workout.id, choice))
                    st.rerun()


# ---------------------------------------------------------------------------
# Sidebar: Race goal & Athlete Profile
# ---------------------------------------------------------------------------

st.sidebar.title("Race Goal")

with st.sidebar.expander("Race", expanded=True):
    distance = st.selectbox(
        "Distance", list(RACE_DISTANCES), index=1,
        format_func=lambda d: RACE_DISTANCES[d].name,
    )
    race_name = st.text_input("Race name", value="My A Race")
    race_date = st.date_input("Race date", value=today + timedelta(weeks=16))
    col_h, col_m = st.columns(2)
    with col_h:
        target_hours = st.number_input("Target hours", 0, 20, 2)
    with col_m:
        target_minutes = st.number_input("Target minutes", 0, 59, 45)
    max_weekly_hours = st.slider("Max weekly hours", 3.0, 30.0, 10.0, 0.5)

st.sidebar.title("Athlete Profile")

with st.sidebar.expander("Baselines"):
    experience = st.selectbox(
        "Experience", ["beginner", "intermediate", "advanced", "elite"], index=1
    )
    age = st.number_input("Age (0 = unknown)", 0, 99, 0)
    swim_css = st.text_input("Swim CSS (m:ss /100m)", value="")
    bike_ftp = st.number_input("Bike FTP (W, 0 = unknown)", 0, 600, 0)
    run_threshold_pace = st.text_input("Run threshold pace (m:ss /km)", value="")

with st.sidebar.expander("Preferences"):
    rest_days = st.multiselect(
        "Preferred rest days",
        ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"],
        default=["monday", "friday"],
    )
    c_swim, c_bike, c_run = st.columns(3)
    swim_pct = c_swim.number_input("Swim %", 0, 100, 20)
    bike_pct = c_bike.number_input("Bike %", 0, 100, 45)
    run_pct = c_run.number_input("Run %", 0, 100, 35)
    strongest = st.selectbox("Strongest", ["", "swim", "bike", "run"])
    weakest = st.selectbox("Weakest", ["", "swim", "bike", "run"])
    injuries = st.text_input("Active injuries (comma separated)", value="")
    strength_sessions = st.number_input(
        "Strength sessions / week", 0, 3, STRENGTH_SESSIONS_PER_WEEK
    )

profile_form = {
    "experience_level": experience,
    "age": age,
    "swim_css": swim_css,
    "bike_ftp": bike_ftp,
    "run_threshold_pace": run_threshold_pace,
    "rest_days": rest_days,
    "discipline_split": {"swim": swim_pct, "bike": bike_pct, "run": run_pct},
    "strongest": strongest,
    "weakest": weakest,
    "injuries": injuries.split(","),
}

with st.sidebar.expander("Save / Load"):
    profiles = list_profiles()
    if profiles:
        selected_profile = st.selectbox("Load profile", ["(none)"] + profiles)
        if st.button("Load profile") and selected_profile != "(none)":
            st.session_state["profile"] = load_profile(selected_profile)
            st.success(f"Loaded '{selected_profile}'")
    save_name = st.text_input("Profile name", value="my_profile")
    if st.button("Save Profile"):
        path = save_profile(save_name, build_profile(profile_form))
        st.success(f"Saved as '{path.stem}'")

    plans = list_plans()
    if plans:
        selected_plan = st.selectbox("Load plan", ["(none)"] + plans)
        if st.button("Load plan") and selected_plan != "(none)":
            _set_plan(load_plan(selected_plan))


# ---------------------------------------------------------------------------
# Plan generation
# ---------------------------------------------------------------------------

st.title("Triathlon Plan Coach")

gen_col, save_col = st.columns(2)
with gen_col:
    if st.button("Generate / Regenerate Plan", type="primary"):
        try:
            race_config = build_race_config({
                "distance": distance,
                "race_name": race_name,
                "race_date": race_date,
                "target_hours": target_hours,
                "target_minutes": target_minutes,
                "max_weekly_hours": max_weekly_hours,
            })
            profile = st.session_state.get("profile") or build_profile(profile_form)
            _set_plan(regenerate_plan(
                race_config, profile, st.session_state.get("plan"),
                strength_sessions_per_week=int(strength_sessions), today=today,
            ))
        except PlanValidationError as e:
            for field, message in e.errors.items():
                st.error(f"{field}: {message}")
        except ValueError as e:
            st.error(f"Invalid profile: {e}")

plan = st.session_state.get("plan")
with save_col:
    if plan is not None and st.button("Save Plan"):
        path = save_plan(plan.race_config.race_name, plan)
        st.success(f"Saved as '{path.stem}'")

if plan is None:
    st.info("Set your race goal in the sidebar and generate a plan.")
    st.stop()

rc = plan.race_config
st.caption(
    f"{rc.race_name} · {rc.distance.name} on {rc.race_date.isoformat()} "
    f"(target {format_target_time(rc.target_time)}) · {plan.total_weeks} weeks: "
    f"base {plan.phases.base}, build {plan.phases.build}, "
    f"peak {plan.phases.peak}, taper {plan.phases.taper}"
)

tab_plan, tab_insights, tab_library, tab_export = st.tabs(
    ["Plan", "Insights", "Workout Library", "Export"]
)

# ---------------------------------------------------------------------------
# Tab: Plan
# ---------------------------------------------------------------------------

with tab_plan:
    week_number = st.number_input("Week", 1, plan.total_weeks, 1)
    week = plan.weeks[week_number - 1]
    stats = get_week_stats(week)

    mc1, mc2, mc3, mc4 = st.columns(4)
    mc1.metric("Phase", f"{PHASE_LABELS[week.phase]} {week.phase_week}")
    mc2.metric("Planned", format_hours(week.total_hours))
    mc3.metric("Completed", f"{stats.completed_workouts}/{stats.total_workouts}")
    mc4.metric("Actual", format_duration(stats.total_actual_minutes))
    st.markdown(f"**Focus:** {week.focus}")

    columns = st.columns(7)
    for col, name, day in zip(columns, DAY_NAMES, week.days):
        with col:
            st.subheader(name)
            st.caption(format_display_date(day.date))
            for workout in day.workouts:
                _render_workout(workout, week)

# ---------------------------------------------------------------------------
# Tab: Insights
# ---------------------------------------------------------------------------

with tab_insights:
    overall = calculate_training_stats(plan)
    compliance = calculate_compliance_stats(plan, today)

    ic1, ic2, ic3 = st.columns(3)
    ic1.metric("Compliance", f"{compliance.score:.0f}%")
    ic2.metric("Workouts due", compliance.due_workouts)
    ic3.metric(
        "RPE vs target",
        f"{overall.rpe_vs_target_diff:+.1f}" if overall.has_rpe else "--",
    )

    st.subheader("Recommendations")
    recommendations = generate_recommendations(plan, today)
    if not recommendations:
        st.write("Log a few workouts to get personalised advice.")
    for rec in recommendations:
        st.markdown(f"**{rec.title}** · {rec.message}")

# ---------------------------------------------------------------------------
# Tab: Workout Library
# ---------------------------------------------------------------------------

with tab_library:
    category = st.selectbox(
        "Category", list(WorkoutCategory), format_func=lambda c: c.name.title()
    )
    for lib in get_workouts_by_category(category):
        with st.expander(f"{lib.title} · {lib.discipline.name.title()}"):
            st.caption(lib.description)
            for variation in lib.variations:
                st.markdown(f"**{variation.label}**")
                for step in variation.steps:
                    st.markdown(f"- {step.name} ({step.duration}): {step.instructions}")

# ---------------------------------------------------------------------------
# Tab: Export
# ---------------------------------------------------------------------------

with tab_export:
    st.download_button(
        "Download plan JSON",
        data=plan_to_json_string(plan),
        file_name=f"{plan.id}.json",
        mime="application/json",
    )
