"""
My Workouts page - Manage workout groups, exercises and weight history
"""

import streamlit as st
import pandas as pd
from datetime import date

from workout_tracker.ui_utils import render_page_header, empty_state, get_workout_store
from workout_tracker.design_system import (
    get_colors,
    get_exercise_summary_html,
    get_history_row_html,
)
from workout_tracker.workout_state import sorted_history


def clean_name(name):
    """Trimmed name, or None when blank."""
    name = (name or "").strip()
    return name or None


def should_rename_group(new_name, current_name):
    cleaned = clean_name(new_name)
    return cleaned is not None and cleaned != current_name


def can_add_exercise(name, sets, reps):
    return all(clean_name(value) for value in (name, sets, reps))


def build_exercise_spec(name, sets, reps, weight):
    """Form values to an exercise spec; a blank initial weight becomes "0"."""
    return {
        "name": name.strip(),
        "sets": sets.strip(),
        "reps": reps.strip(),
        "currentTargetWeight": (weight or "").strip() or "0",
    }


def format_history_date(iso_date):
    try:
        return date.fromisoformat(iso_date).strftime("%d/%m/%Y")
    except ValueError:
        return iso_date


def history_rows(history):
    """Newest-first rows with the most recent entry flagged."""
    rows = []
    for index, entry in enumerate(sorted_history(history)):
        rows.append(
            {
                "date": entry["date"],
                "label": format_history_date(entry["date"]),
                "weight": entry["weight"],
                "is_latest": index == 0,
            }
        )
    return rows


def build_history_frame(history):
    """Chronological DataFrame of numeric weights for charting."""
    if not history:
        return pd.DataFrame(columns=["date", "weight"])

    df = pd.DataFrame(history)
    df["date"] = pd.to_datetime(df["date"], errors="coerce")
    df["weight"] = pd.to_numeric(df["weight"], errors="coerce")
    df = df.dropna(subset=["date", "weight"])
    return df.sort_values("date", kind="stable").reset_index(drop=True)


def _render_add_group_form(store):
    with st.form("add_group_form", clear_on_submit=True):
        col1, col2 = st.columns([4, 1])
        with col1:
            name = st.text_input(
                "Group name",
                placeholder="e.g. Leg Day, Back & Biceps...",
                label_visibility="collapsed",
            )
        with col2:
            submitted = st.form_submit_button("➕ Add Group", use_container_width=True)

    if submitted:
        cleaned = clean_name(name)
        if cleaned:
            store.add_group(cleaned)
            st.rerun()
        else:
            st.warning("Enter a name for the workout group.")


def _render_progress(store, group_id, exercise):
    colors = get_colors()
    rows = history_rows(exercise["history"])

    st.markdown("**Weight History**")
    if rows:
        for row in rows:
            st.markdown(
                get_history_row_html(row["label"], row["weight"], row["is_latest"], colors),
                unsafe_allow_html=True,
            )
        frame = build_history_frame(exercise["history"])
        if len(frame) > 1:
            st.line_chart(frame, x="date", y="weight", height=180)
    else:
        st.caption("No history recorded yet.")

    with st.form(f"weight_form_{exercise['id']}", clear_on_submit=True):
        new_weight = st.text_input("Today's weight (KG)", key=f"new_weight_{exercise['id']}")
        if st.form_submit_button("➕ Register Weight"):
            weight = clean_name(new_weight)
            if weight:
                store.append_weight(group_id, exercise["id"], weight)
                st.rerun()


def _render_exercise_editor(store, group_id, exercise):
    edit_key = f"editing_exercise_{exercise['id']}"
    with st.form(f"edit_exercise_{exercise['id']}"):
        col1, col2, col3, col4 = st.columns([3, 1, 1, 1])
        with col1:
            name = st.text_input("Exercise", value=exercise["name"], key=f"edit_name_{exercise['id']}")
        with col2:
            sets = st.text_input("Sets", value=exercise["sets"], key=f"edit_sets_{exercise['id']}")
        with col3:
            reps = st.text_input("Reps", value=exercise["reps"], key=f"edit_reps_{exercise['id']}")
        with col4:
            weight = st.text_input("KG", value=exercise["currentTargetWeight"], key=f"edit_weight_{exercise['id']}")
        if st.form_submit_button("✔ Save"):
            store.update_exercise(
                group_id,
                {
                    **exercise,
                    "name": name.strip() or exercise["name"],
                    "sets": sets.strip(),
                    "reps": reps.strip(),
                    "currentTargetWeight": weight.strip(),
                },
            )
            st.session_state[edit_key] = False
            st.rerun()


def _render_exercise(store, group_id, exercise):
    colors = get_colors()
    edit_key = f"editing_exercise_{exercise['id']}"

    if st.session_state.get(edit_key):
        _render_exercise_editor(store, group_id, exercise)
    else:
        st.markdown(
            get_exercise_summary_html(
                exercise["name"],
                exercise["sets"],
                exercise["reps"],
                exercise["currentTargetWeight"],
                colors,
            ),
            unsafe_allow_html=True,
        )

    col1, col2, col3 = st.columns(3)
    with col1:
        progress_key = f"show_progress_{exercise['id']}"
        if st.button("📈 Progress", key=f"progress_btn_{exercise['id']}", use_container_width=True):
            st.session_state[progress_key] = not st.session_state.get(progress_key, False)
    with col2:
        if st.button("✏️ Edit", key=f"edit_btn_{exercise['id']}", use_container_width=True):
            st.session_state[edit_key] = not st.session_state.get(edit_key, False)
            st.rerun()
    with col3:
        if st.button("🗑️ Delete", key=f"delete_ex_{exercise['id']}", use_container_width=True):
            store.delete_exercise(group_id, exercise["id"])
            st.rerun()

    if st.session_state.get(f"show_progress_{exercise['id']}"):
        _render_progress(store, group_id, exercise)


def _render_add_exercise_form(store, group_id):
    with st.form(f"add_exercise_{group_id}", clear_on_submit=True):
        col1, col2, col3, col4 = st.columns([3, 1, 1, 1])
        with col1:
            name = st.text_input("Exercise name", key=f"new_ex_name_{group_id}")
        with col2:
            sets = st.text_input("Sets", key=f"new_ex_sets_{group_id}")
        with col3:
            reps = st.text_input("Reps", key=f"new_ex_reps_{group_id}")
        with col4:
            weight = st.text_input("Initial KG", key=f"new_ex_weight_{group_id}")
        submitted = st.form_submit_button("➕ Add Exercise")

    if submitted:
        if can_add_exercise(name, sets, reps):
            store.add_exercise(group_id, build_exercise_spec(name, sets, reps, weight))
            st.rerun()
        else:
            st.warning("Name, sets and reps are required.")


def _render_group(store, group):
    with st.expander(f"🏋️ {group['name']}", expanded=True):
        col1, col2 = st.columns([4, 1])
        with col1:
            new_name = st.text_input(
                "Group name",
                value=group["name"],
                key=f"group_name_{group['id']}",
                label_visibility="collapsed",
            )
            if should_rename_group(new_name, group["name"]):
                store.rename_group(group["id"], clean_name(new_name))
                st.rerun()
        with col2:
            if st.button("🗑️ Delete Group", key=f"delete_group_{group['id']}", use_container_width=True):
                store.delete_group(group["id"])
                st.rerun()

        if group["exercises"]:
            for exercise in group["exercises"]:
                _render_exercise(store, group["id"], exercise)
                st.markdown("")
        else:
            st.caption("No exercises in this group yet.")

        _render_add_exercise_form(store, group["id"])


def show():
    """Render the workouts page"""

    render_page_header("My Workouts", "Organize your training days and track your loads", "💪")

    store = get_workout_store()

    st.markdown("### Add New Workout Group")
    _render_add_group_form(store)

    st.markdown("---")

    if not store.collection:
        empty_state(
            "🗄️",
            "Your gym is empty!",
            "Add your first workout group above or ask our assistant in the \"AI Chat\" tab to build a plan for you.",
        )
        return

    for group in store.collection:
        _render_group(store, group)
