"""Fit Tracker — Streamlit dashboard.

Run with:
    streamlit run streamlit_app/app.py

Configuration comes from environment variables (see config.py).
"""

from __future__ import annotations

import logging

import streamlit as st

from fit_engine.math.periodization import (
    BUILT_IN_WEEKS,
    DAY_NAMES,
    default_template_weeks,
    phase_counts,
    resize_template_weeks,
)
from fit_engine.models.enums import (
    MAX_RIR,
    MAX_TEMPLATE_WEEKS,
    MIN_TEMPLATE_WEEKS,
    ExerciseCategory,
    MesocyclePhase,
)
from fit_engine.models.mesocycle import DayConfig, MesocycleTemplate, WeekConfig
from fit_engine.storage import JsonFileStore
from fit_engine.tracker import FitTracker
from food_client import FoodClient, FoodClientError, ProductNotFound

from config import DATA_FILE, FOOD_API_BASE_URL, FOOD_API_TIMEOUT_S, LOG_LEVEL
from helpers import (
    CATEGORY_COLORS,
    DAY_SHORT_NAMES,
    PHASE_COLORS,
    PHASE_LABELS,
    format_change_rate,
    format_date,
    format_macros,
    format_set,
    format_weight,
    trend_frame,
)

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------

st.set_page_config(page_title="Fit Tracker", page_icon="🏋️", layout="centered")


# ---------------------------------------------------------------------------
# Cached resources
# ---------------------------------------------------------------------------


@st.cache_resource
def get_food_client() -> FoodClient:
    return FoodClient(base_url=FOOD_API_BASE_URL, timeout_s=FOOD_API_TIMEOUT_S)


def get_tracker() -> FitTracker:
    """One tracker per browser session, loaded once from the data file."""
    if "tracker" not in st.session_state:
        st.session_state["tracker"] = FitTracker(JsonFileStore(DATA_FILE))
    return st.session_state["tracker"]


tracker = get_tracker()

# ---------------------------------------------------------------------------
# Header
# ---------------------------------------------------------------------------

st.title("FIT TRACKER")
st.caption(tracker.now.strftime("%A, %d %B"))

descriptor = tracker.week_descriptor()
totals = tracker.today_totals()
h1, h2, h3 = st.columns(3)
h1.metric("Weight", format_weight(tracker.current_weight))
h2.metric(
    "Today",
    f"{totals.calories:.0f} kcal",
    f"goal {tracker.calorie_goal:.0f}" if tracker.calorie_goal else None,
    delta_color="off",
)
h3.metric("Week", f"{descriptor.week_number} · {PHASE_LABELS[descriptor.phase]}")

if tracker.scheduler.mesocycle_complete:
    st.balloons()
    st.success("Mesocycle complete! Pick a new template or start the cycle again.")
    if st.button("Got it"):
        tracker.acknowledge_mesocycle_complete()
        st.rerun()

tab_workout, tab_cycle, tab_weight, tab_food, tab_archive = st.tabs(
    ["Workout", "Mesocycle", "Weight", "Food", "Archive"]
)


# ---------------------------------------------------------------------------
# Rendering helpers
# ---------------------------------------------------------------------------


def _render_session() -> None:
    """Edit the sets of the open workout session."""
    exercise = tracker.active_exercise
    st.subheader(exercise.name)
    for i, workout_set in enumerate(tracker.current_sets):
        c1, c2, c3, c4 = st.columns([2, 2, 2, 1])
        weight = c1.number_input(
            "kg", min_value=0.0, step=2.5, value=float(workout_set.weight), key=f"w_{i}"
        )
        reps = c2.number_input(
            "reps", min_value=0, step=1, value=int(workout_set.reps), key=f"r_{i}"
        )
        rir = c3.number_input(
            "RIR", min_value=0, max_value=MAX_RIR, step=1, value=int(workout_set.rir), key=f"rir_{i}"
        )
        done = c4.checkbox("✓", value=workout_set.completed, key=f"done_{i}")
        tracker.update_set(i, weight=weight, reps=reps, rir=rir, completed=done)

    finish_col, cancel_col = st.columns(2)
    if finish_col.button("Finish workout", type="primary"):
        log = tracker.complete_workout()
        if log is None:
            st.warning("Tick at least one completed set.")
        else:
            result = tracker.last_completion
            if result.advanced:
                st.toast(f"Day done — moving to {DAY_NAMES[result.new_day]}")
            st.rerun()
    if cancel_col.button("Cancel"):
        tracker.cancel_workout()
        st.rerun()


def _render_exercise_button(exercise, key_prefix: str) -> None:
    target = tracker.next_target(exercise.id)
    color = CATEGORY_COLORS.get(exercise.category, "#6b7280")
    label = f"{exercise.name} — {format_weight(target.weight)} x {target.reps}"
    st.markdown(
        f'<span style="color:{color};font-size:11px;">{exercise.category.value}</span>',
        unsafe_allow_html=True,
    )
    if st.button(label, key=f"{key_prefix}_{exercise.id}"):
        tracker.start_workout(exercise.id)
        st.rerun()


# ---------------------------------------------------------------------------
# Tab 1: Workout
# ---------------------------------------------------------------------------

with tab_workout:
    if tracker.active_exercise is not None:
        _render_session()
    else:
        plan = tracker.today_plan()
        st.subheader(f"{DAY_NAMES[plan.day_index]} — {plan.label or 'Training'}")
        if not plan.has_exercises:
            st.info("Rest day — nothing prescribed.")
        for slot in plan.slots:
            if slot.exercise is None:
                st.markdown(f"~~{slot.name}~~ · _{slot.display_name}_")
            else:
                _render_exercise_button(slot.exercise, "plan")

        with st.expander("All exercises"):
            for category, members in tracker.exercises_by_category().items():
                st.markdown(f"**{category.value}**")
                for exercise in members:
                    _render_exercise_button(exercise, "all")

        with st.form("add_exercise", clear_on_submit=True):
            new_name = st.text_input("New exercise")
            new_category = st.selectbox(
                "Category", list(ExerciseCategory), format_func=lambda c: c.value,
                index=list(ExerciseCategory).index(ExerciseCategory.CUSTOM),
            )
            if st.form_submit_button("Add exercise"):
                if tracker.add_exercise(new_name, new_category) is not None:
                    st.rerun()


# ---------------------------------------------------------------------------
# Tab 2: Mesocycle
# ---------------------------------------------------------------------------


def _render_template_builder(initial: MesocycleTemplate | None = None) -> None:
    """Form for a new template, or for editing *initial* in place."""
    exercise_ids = [e.id for e in tracker.exercises]
    name_of = {e.id: e.name for e in tracker.exercises}
    prefix = f"tb_{initial.id}" if initial is not None else "tb_new"
    start_weeks = (
        min(max(initial.cycle_length, MIN_TEMPLATE_WEEKS), MAX_TEMPLATE_WEEKS)
        if initial is not None
        else MAX_TEMPLATE_WEEKS
    )
    num_weeks = st.slider(
        "Weeks", MIN_TEMPLATE_WEEKS, MAX_TEMPLATE_WEEKS, start_weeks, key=f"{prefix}_weeks"
    )
    if initial is not None:
        seeds = resize_template_weeks(initial.weeks, num_weeks)
    else:
        seeds = default_template_weeks(num_weeks)
    with st.form(f"{prefix}_form"):
        name = st.text_input("Template name", value=initial.name if initial else "")
        description = st.text_area(
            "Description", value=initial.description if initial else ""
        )
        weeks: list[WeekConfig] = []
        for seed in seeds:
            n = seed.week_number
            with st.expander(f"Week {n}"):
                phase = st.selectbox(
                    "Phase", list(MesocyclePhase), index=list(MesocyclePhase).index(seed.phase),
                    format_func=lambda p: PHASE_LABELS[p], key=f"{prefix}_phase_{n}",
                )
                week_desc = st.text_input(
                    "Focus", value=seed.description, key=f"{prefix}_desc_{n}"
                )
                days = []
                for day in seed.days:
                    rest = st.checkbox(
                        f"{day.day_name}: rest", value=day.is_rest_day,
                        key=f"{prefix}_rest_{n}_{day.day_index}",
                    )
                    label = st.text_input(
                        "Workout", value=day.workout, key=f"{prefix}_label_{n}_{day.day_index}"
                    )
                    # Ids of deleted exercises are not valid options
                    picked = st.multiselect(
                        "Exercises", exercise_ids, format_func=name_of.get,
                        default=[i for i in day.exercise_ids if i in name_of],
                        key=f"{prefix}_ex_{n}_{day.day_index}",
                    )
                    days.append(
                        DayConfig(
                            day_index=day.day_index,
                            day_name=day.day_name,
                            workout=label,
                            exercise_ids=() if rest else tuple(picked),
                            is_rest_day=rest,
                        )
                    )
                weeks.append(WeekConfig(n, phase, week_desc, tuple(days)))
        if st.form_submit_button("Save template"):
            try:
                tracker.save_template(
                    name, description, weeks, initial.id if initial is not None else None
                )
            except ValueError as exc:
                st.error(str(exc))
            else:
                if initial is not None:
                    st.session_state.pop("editing_template", None)
                    st.rerun()
                st.success("Template saved")


with tab_cycle:
    template = tracker.active_template
    if template is not None:
        st.markdown(f"Active template: **{template.name}**")
        week_rows = [(w.week_number, w.phase, w.description) for w in template.weeks]
    else:
        st.markdown("Built-in 8-week cycle")
        week_rows = [(w.week_number, w.phase, w.description) for w in BUILT_IN_WEEKS]

    current = tracker.current_week()
    for number, phase, text in week_rows:
        done = "✅" if number in tracker.scheduler.completed_weeks else ""
        marker = "▶" if number == current else ""
        c1, c2 = st.columns([4, 1])
        c1.markdown(
            f'{marker} <span style="color:{PHASE_COLORS[phase]}">**Week {number}** '
            f"{PHASE_LABELS[phase]}</span> {done}<br><small>{text}</small>",
            unsafe_allow_html=True,
        )
        if c2.button("Select", key=f"week_{number}"):
            tracker.select_week(number)
            st.rerun()

    st.subheader("Day")
    day_cols = st.columns(7)
    active_day = tracker.today_plan().day_index
    for i, col in enumerate(day_cols):
        label = f"**{DAY_SHORT_NAMES[i]}**" if i == active_day else DAY_SHORT_NAMES[i]
        if col.button(label, key=f"day_{i}"):
            tracker.select_day(i)
            st.rerun()

    st.subheader("Templates")
    for tpl in tracker.templates:
        counts = ", ".join(
            f"{PHASE_LABELS[p]} {n}" for p, n in phase_counts(tpl.weeks).items()
        )
        with st.expander(f"{tpl.name} ({tpl.cycle_length} weeks)"):
            st.caption(tpl.description or "")
            st.markdown(counts)
            a, e, d = st.columns(3)
            if a.button("Apply", key=f"apply_{tpl.id}"):
                tracker.apply_template(tpl.id)
                st.rerun()
            if e.button("Edit", key=f"edit_{tpl.id}"):
                st.session_state["editing_template"] = tpl.id
                st.rerun()
            if d.button("Delete", key=f"delete_{tpl.id}"):
                tracker.delete_template(tpl.id)
                st.rerun()
    if template is not None and st.button("Use built-in cycle"):
        tracker.clear_active_template()
        st.rerun()

    editing_id = st.session_state.get("editing_template")
    editing = next((t for t in tracker.templates if t.id == editing_id), None)
    # Week editors are expanders, which cannot nest, so the builder sits under a heading
    if editing is not None:
        st.subheader(f"Edit {editing.name}")
        _render_template_builder(editing)
        if st.button("Cancel editing"):
            st.session_state.pop("editing_template", None)
            st.rerun()
    else:
        st.subheader("New template")
        _render_template_builder()


# ---------------------------------------------------------------------------
# Tab 3: Weight
# ---------------------------------------------------------------------------

with tab_weight:
    with st.form("add_weight", clear_on_submit=True):
        value = st.text_input("Body weight (kg)")
        if st.form_submit_button("Log weight"):
            if tracker.add_weight(value) is not None:
                st.rerun()

    w1, w2 = st.columns(2)
    w1.metric("Trend", format_change_rate(tracker.weight_change_rate()))
    to_goal = tracker.weight_to_goal()
    w2.metric("To goal", f"{to_goal:+.1f} kg" if to_goal is not None else "--")
    goal = st.text_input("Weight goal (kg)", value=str(tracker.weight_goal or ""))
    if st.button("Set weight goal"):
        tracker.set_weight_goal(goal)

    weekly = tracker.weekly_weight_trend()
    if weekly:
        st.line_chart(trend_frame(weekly, "kg"))
    for entry in sorted(tracker.weights, key=lambda e: e.date, reverse=True)[:20]:
        st.markdown(f"{format_date(entry.date)} — {format_weight(entry.weight)}")


# ---------------------------------------------------------------------------
# Tab 4: Food
# ---------------------------------------------------------------------------

with tab_food:
    st.markdown(format_macros(totals))
    progress = tracker.calorie_goal_progress()
    if progress is not None:
        st.progress(min(progress, 1.0))

    with st.form("add_meal", clear_on_submit=True):
        meal_name = st.text_input("Meal")
        m1, m2, m3, m4 = st.columns(4)
        kcal = m1.text_input("kcal")
        protein = m2.text_input("Protein")
        carbs = m3.text_input("Carbs")
        fat = m4.text_input("Fat")
        if st.form_submit_button("Log meal"):
            if tracker.add_meal(meal_name, kcal, protein or 0, carbs or 0, fat or 0) is not None:
                st.rerun()

    st.subheader("Barcode")
    barcode = st.text_input("Barcode", key="barcode")
    if st.button("Look up") and barcode:
        try:
            st.session_state["food"] = get_food_client().lookup_barcode(barcode)
        except ProductNotFound:
            st.toast("Product not found")
        except (FoodClientError, ValueError) as exc:
            logger.warning("Barcode lookup failed: %s", exc)
            st.toast("Lookup failed — try again")

    food = st.session_state.get("food")
    if food is not None:
        st.markdown(f"**{food.name}** — {food.calories:.0f} kcal / 100 g")
        quantity = st.number_input("Quantity (g)", min_value=1.0, value=float(food.serving))
        if st.button("Add food"):
            if tracker.add_meal_from_food(food, quantity) is None:
                st.toast("Could not log this product")
            else:
                del st.session_state["food"]
                st.rerun()

    if tracker.saved_meals:
        st.subheader("Saved meals")
        for preset in tracker.saved_meals:
            s1, s2 = st.columns([4, 1])
            s1.markdown(f"{preset.name} — {preset.calories:.0f} kcal")
            if s2.button("+", key=f"saved_{preset.id}"):
                tracker.add_saved_meal(preset.id)
                st.rerun()

    st.subheader("Today")
    for meal in tracker.today_meals():
        t1, t2 = st.columns([4, 1])
        t1.markdown(f"{meal.name} — {meal.calories:.0f} kcal")
        if t2.button("✕", key=f"del_meal_{meal.id}"):
            tracker.delete_meal(meal.id)
            st.rerun()

    cal_goal = st.text_input("Calorie goal", value=str(int(tracker.calorie_goal or 0) or ""))
    if st.button("Set calorie goal"):
        tracker.set_calorie_goal(cal_goal)

    weekly_kcal = tracker.weekly_calorie_trend()
    if weekly_kcal:
        st.line_chart(trend_frame(weekly_kcal, "kcal/day"))
    monthly_kcal = tracker.monthly_calorie_trend()
    if len(monthly_kcal) > 1:
        st.bar_chart(trend_frame(monthly_kcal, "kcal/day"))


# ---------------------------------------------------------------------------
# Tab 5: Archive
# ---------------------------------------------------------------------------

with tab_archive:
    grouped = tracker.history_by_day()
    if not grouped:
        st.info("No workouts logged yet.")
    for day, logs in grouped.items():
        with st.expander(day.strftime("%a %d %b %Y")):
            for log in logs:
                st.markdown(f"**{tracker.exercise_name(log.exercise_id)}**")
                for workout_set in log.sets:
                    note = f" — _{workout_set.note}_" if workout_set.note else ""
                    st.markdown(f"- {format_set(workout_set)}{note}")

    logged_ids = list(dict.fromkeys(log.exercise_id for log in tracker.workouts))
    if logged_ids:
        st.subheader("Exercise history")
        picked = st.selectbox(
            "Exercise", logged_ids, format_func=tracker.exercise_name, key="history_exercise"
        )
        target = tracker.next_target(picked)
        st.caption(f"Next session: {format_weight(target.weight)} x {target.reps}")
        for log in tracker.history_for(picked)[:10]:
            sets = ", ".join(format_set(s) for s in log.sets)
            st.markdown(f"**{format_date(log.date)}** · {sets}")

    dark = st.toggle("Dark mode", value=tracker.dark_mode)
    if dark != tracker.dark_mode:
        tracker.set_dark_mode(dark)
