"""
Conversation state and the request/response cycle with the assistant.
"""

import logging
import threading
from dataclasses import dataclass

from workout_tracker.assistant_client import (
    AssistantRequestError,
    EmptyReplyError,
    build_system_instruction,
)
from workout_tracker.response_interpreter import (
    StructuredCreate,
    apply_response,
    interpret_response,
)


logger = logging.getLogger(__name__)

USER_ROLE = "user"
ASSISTANT_ROLE = "assistant"

GREETING = (
    "Hi! I'm Astra, your AI personal trainer. How can I help you today?\n\n"
    "You can ask me to:\n"
    "- **Create a workout:** 'Create a back and biceps workout'\n"
    "- **Explain a workout:** 'How do I do my Leg Day?'\n"
    "- **Answer questions:** 'What's the difference between flat and incline bench press?'"
)
EMPTY_REPLY_MESSAGE = "Sorry, I didn't get a valid response. Try rephrasing your question."
REQUEST_FAILED_MESSAGE = (
    "Sorry, I couldn't process your request right now. "
    "Check your connection or try again later."
)


@dataclass(frozen=True)
class SendResult:
    """Outcome of an accepted ``ChatSession.send`` call."""

    reply: dict
    created_group: str = None

    @property
    def switch_to_workouts(self):
        return self.created_group is not None


class ChatSession:
    """
    Ordered message history plus a single-flight send.

    Only one request may be outstanding at a time; a send attempted while
    another is pending is rejected, not queued. The workout store is not
    locked, so workouts stay editable during a request.
    """

    def __init__(self, assistant, store):
        """
        Args:
            assistant: Object with ``generate(user_text, system_instruction)``
            store: WorkoutStore used for context and group creation
        """
        self.assistant = assistant
        self.store = store
        self.messages = [{"role": ASSISTANT_ROLE, "text": GREETING}]
        self._in_flight = threading.Lock()

    def is_busy(self):
        return self._in_flight.locked()

    def copyable_messages(self):
        """Assistant replies after the greeting, as (index, message) pairs."""
        return [
            (index, message)
            for index, message in enumerate(self.messages)
            if index > 0 and message["role"] == ASSISTANT_ROLE
        ]

    def reset(self):
        if self.is_busy():
            return False
        self.messages = [{"role": ASSISTANT_ROLE, "text": GREETING}]
        return True

    def _append(self, role, text):
        message = {"role": role, "text": text}
        self.messages.append(message)
        return message

    def send(self, user_text):
        """
        Run one user turn through the assistant.

        Returns:
            SendResult, or None when the text is blank or a request is
            already in flight (history is left untouched)
        """
        if not user_text or not user_text.strip():
            return None
        if not self._in_flight.acquire(blocking=False):
            logger.info("Ignoring message while a request is in flight")
            return None

        try:
            self._append(USER_ROLE, user_text)
            system_instruction = build_system_instruction(self.store.collection)

            try:
                raw_reply = self.assistant.generate(user_text, system_instruction)
            except EmptyReplyError:
                return SendResult(reply=self._append(ASSISTANT_ROLE, EMPTY_REPLY_MESSAGE))
            except AssistantRequestError as exc:
                logger.warning("Assistant unavailable: %s", exc)
                return SendResult(reply=self._append(ASSISTANT_ROLE, REQUEST_FAILED_MESSAGE))
            except Exception:
                logger.exception("Unexpected error while contacting the assistant")
                return SendResult(reply=self._append(ASSISTANT_ROLE, REQUEST_FAILED_MESSAGE))

            response = interpret_response(raw_reply)
            created_group = None
            if isinstance(response, StructuredCreate):
                created_group = response.group_name
                logger.info(
                    "Creating workout group %r with %d exercise(s) from chat",
                    response.group_name,
                    len(response.exercises),
                )

            reply = apply_response(self.store, response)
            return SendResult(
                reply=self._append(ASSISTANT_ROLE, reply.text),
                created_group=created_group,
            )
        finally:
            self._in_flight.release()
