"""
Interpret assistant replies as either a workout-creation payload or prose.

The assistant is told to answer with a bare JSON document when the user asks
for a new workout and with plain text otherwise. Nothing is extracted from
replies that mix the two.
"""

import json
import re
from dataclasses import dataclass, field


FENCED_BLOCK_RE = re.compile(r"^```(?:json)?[ \t]*\n(?P<body>.*)\n```$", re.DOTALL | re.IGNORECASE)


@dataclass(frozen=True)
class PlainMessage:
    """Reply meant to be shown to the user as-is."""

    text: str


@dataclass(frozen=True)
class StructuredCreate:
    """Reply asking for a new workout group."""

    group_name: str
    exercises: list = field(default_factory=list)


def _unwrap_fence(text):
    """Return the body when the entire reply is one fenced code block."""
    match = FENCED_BLOCK_RE.match(text)
    if match:
        return match.group("body")
    return text


def _normalize_exercise(item):
    return {
        key: "" if item.get(key) is None else str(item[key]).strip()
        for key in ("name", "sets", "reps")
    }


def interpret_response(raw_text):
    """
    Classify one assistant reply.

    Args:
        raw_text: Text returned by the assistant

    Returns:
        StructuredCreate when the whole reply is a JSON object with a
        non-empty ``groupName`` and an ``exercises`` list of objects,
        otherwise PlainMessage carrying ``raw_text`` unchanged.
    """
    text = (raw_text or "").strip()
    try:
        parsed = json.loads(_unwrap_fence(text))
    except (ValueError, RecursionError):
        return PlainMessage(raw_text)

    if not isinstance(parsed, dict):
        return PlainMessage(raw_text)

    group_name = parsed.get("groupName")
    exercises = parsed.get("exercises")
    if not isinstance(group_name, str) or not group_name.strip():
        return PlainMessage(raw_text)
    if not isinstance(exercises, list) or not all(isinstance(item, dict) for item in exercises):
        return PlainMessage(raw_text)

    return StructuredCreate(
        group_name=group_name.strip(),
        exercises=[_normalize_exercise(item) for item in exercises],
    )


def confirmation_text(group_name):
    return f'Great! I created the workout group "{group_name}" for you. Check it out in the "My Workouts" tab!'


def apply_response(store, response):
    """
    Apply an interpreted reply to the workout store.

    A StructuredCreate adds the group and is replaced by a confirmation
    message; a PlainMessage is returned untouched.

    Returns:
        PlainMessage to append to the conversation
    """
    if isinstance(response, StructuredCreate):
        store.add_group(response.group_name, response.exercises)
        return PlainMessage(confirmation_text(response.group_name))
    return response
