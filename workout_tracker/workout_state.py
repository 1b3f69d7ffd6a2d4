"""
Workout collection model and pure state transitions.

A collection is a list of workout group dicts shaped exactly like the
persisted document:

    [{"id", "name", "exercises": [{"id", "name", "sets", "reps",
      "currentTargetWeight", "history": [{"date", "weight"}]}]}]

Every mutator returns a new list. Groups and exercises that change are
rebuilt; nothing reachable from the input collection is modified.
"""

import json
import uuid
from datetime import date


GROUP_FIELDS = ("id", "name", "exercises")
EXERCISE_FIELDS = ("id", "name", "sets", "reps", "currentTargetWeight", "history")
HISTORY_FIELDS = ("date", "weight")
EDITABLE_EXERCISE_FIELDS = ("name", "sets", "reps", "currentTargetWeight")

NO_WORKOUTS_SUMMARY = "No workouts created yet."


def today_iso():
    """Return today's calendar date as YYYY-MM-DD."""
    return date.today().isoformat()


def new_group_id():
    return f"group-{uuid.uuid4().hex}"


def new_exercise_id():
    return f"ex-{uuid.uuid4().hex}"


def _text(value):
    if value is None:
        return ""
    return str(value)


def _history_entry(weight, today=None):
    return {"date": today or today_iso(), "weight": _text(weight)}


def _replace_group(collection, group_id, transform):
    """Rebuild the collection with ``transform`` applied to one group."""
    return [transform(group) if group["id"] == group_id else group for group in collection]


def _replace_exercise(collection, group_id, exercise_id, transform):
    def rebuild_group(group):
        exercises = [
            transform(exercise) if exercise["id"] == exercise_id else exercise
            for exercise in group["exercises"]
        ]
        return {**group, "exercises": exercises}

    return _replace_group(collection, group_id, rebuild_group)


def add_group(collection, name, initial_exercises=None, today=None):
    """
    Append a new workout group.

    Initial exercises always start at zero: each one gets
    ``currentTargetWeight == "0"`` and a single ``{today, "0"}`` history
    entry, whatever weight the caller supplied. The user raises the weight
    afterwards through ``append_weight``.

    Args:
        collection: Current collection
        name: Group name
        initial_exercises: Optional iterable of dicts with name/sets/reps
        today: ISO date override for the seed history entries

    Returns:
        New collection with the group appended
    """
    exercises = []
    for spec in initial_exercises or []:
        exercises.append(
            {
                "id": new_exercise_id(),
                "name": _text(spec.get("name")),
                "sets": _text(spec.get("sets")),
                "reps": _text(spec.get("reps")),
                "currentTargetWeight": "0",
                "history": [_history_entry("0", today)],
            }
        )

    group = {"id": new_group_id(), "name": _text(name), "exercises": exercises}
    return [*collection, group]


def delete_group(collection, group_id):
    return [group for group in collection if group["id"] != group_id]


def rename_group(collection, group_id, new_name):
    return _replace_group(collection, group_id, lambda group: {**group, "name": _text(new_name)})


def add_exercise(collection, group_id, exercise_spec, today=None):
    """
    Append an exercise to a group.

    A non-empty ``currentTargetWeight`` in the spec seeds one history entry
    dated today; otherwise history starts empty.
    """
    weight = _text(exercise_spec.get("currentTargetWeight"))
    exercise = {
        "id": new_exercise_id(),
        "name": _text(exercise_spec.get("name")),
        "sets": _text(exercise_spec.get("sets")),
        "reps": _text(exercise_spec.get("reps")),
        "currentTargetWeight": weight,
        "history": [_history_entry(weight, today)] if weight else [],
    }

    def append(group):
        return {**group, "exercises": [*group["exercises"], exercise]}

    return _replace_group(collection, group_id, append)


def delete_exercise(collection, group_id, exercise_id):
    def remove(group):
        return {
            **group,
            "exercises": [ex for ex in group["exercises"] if ex["id"] != exercise_id],
        }

    return _replace_group(collection, group_id, remove)


def update_exercise(collection, group_id, updated_exercise):
    """
    Replace an exercise's editable fields, matched by ``updated_exercise["id"]``.

    History is carried over from the stored exercise unless the caller passes
    its own ``history`` list. This never appends history entries; use
    ``append_weight`` for that.
    """
    exercise_id = updated_exercise.get("id")

    def replace(existing):
        replaced = dict(existing)
        for field in EDITABLE_EXERCISE_FIELDS:
            if field in updated_exercise:
                replaced[field] = _text(updated_exercise[field])
        if "history" in updated_exercise:
            replaced["history"] = [dict(entry) for entry in updated_exercise["history"]]
        return replaced

    return _replace_exercise(collection, group_id, exercise_id, replace)


def append_weight(collection, group_id, exercise_id, weight, today=None):
    """Set the target weight and record it in the exercise history."""
    weight = _text(weight)

    def register(exercise):
        return {
            **exercise,
            "currentTargetWeight": weight,
            "history": [*exercise["history"], _history_entry(weight, today)],
        }

    return _replace_exercise(collection, group_id, exercise_id, register)


def sorted_history(history):
    """Return history entries newest first.

    Entries are stored in insertion order, which is not date order when
    the user backfills. ISO dates sort correctly as strings.
    """
    return sorted(history, key=lambda entry: entry["date"], reverse=True)


def summarize_collection(collection):
    """Compact JSON summary of group names and exercise names for prompts."""
    if not collection:
        return NO_WORKOUTS_SUMMARY
    summary = [
        {"name": group["name"], "exercises": [ex["name"] for ex in group["exercises"]]}
        for group in collection
    ]
    return json.dumps(summary, ensure_ascii=False)


def seed_collection(today=None):
    """Example groups shown on first run."""
    today = today or today_iso()

    def seeded(name, sets, reps, weight):
        return {
            "id": new_exercise_id(),
            "name": name,
            "sets": sets,
            "reps": reps,
            "currentTargetWeight": weight,
            "history": [{"date": today, "weight": weight}],
        }

    return [
        {
            "id": new_group_id(),
            "name": "Leg Day",
            "exercises": [
                seeded("Barbell Back Squat", "4", "10", "80"),
                seeded("45° Leg Press", "4", "12", "120"),
            ],
        },
        {
            "id": new_group_id(),
            "name": "Chest & Triceps Day",
            "exercises": [
                seeded("Flat Bench Press", "4", "8", "70"),
            ],
        },
    ]


def _check_fields(item, fields, label):
    if not isinstance(item, dict):
        raise ValueError(f"{label} must be an object")
    if set(item.keys()) != set(fields):
        missing = sorted(set(fields) - set(item.keys()))
        unknown = sorted(set(item.keys()) - set(fields))
        raise ValueError(f"{label} has missing fields {missing} / unknown fields {unknown}")


def _check_string(value, label):
    if not isinstance(value, str):
        raise ValueError(f"{label} must be a string")


def validate_collection(data):
    """
    Strictly validate a decoded collection.

    Raises:
        ValueError: when the shape differs in any way (wrong types, missing
            or unknown fields, malformed dates)
    """
    if not isinstance(data, list):
        raise ValueError("Collection must be a list")

    for group in data:
        _check_fields(group, GROUP_FIELDS, "Workout group")
        _check_string(group["id"], "Group id")
        _check_string(group["name"], "Group name")
        if not isinstance(group["exercises"], list):
            raise ValueError("Group exercises must be a list")

        for exercise in group["exercises"]:
            _check_fields(exercise, EXERCISE_FIELDS, "Exercise")
            for field in EDITABLE_EXERCISE_FIELDS + ("id",):
                _check_string(exercise[field], f"Exercise {field}")
            if not isinstance(exercise["history"], list):
                raise ValueError("Exercise history must be a list")

            for entry in exercise["history"]:
                _check_fields(entry, HISTORY_FIELDS, "History entry")
                _check_string(entry["weight"], "History weight")
                _check_string(entry["date"], "History date")
                date.fromisoformat(entry["date"])

    return data
