"""
Training assistant backed by the Claude API.
"""

import logging

import anthropic

from workout_tracker.workout_state import summarize_collection


logger = logging.getLogger(__name__)

ASSISTANT_NAME = "Astra Train"

SYSTEM_INSTRUCTION_TEMPLATE = """You are an expert personal trainer named "{assistant_name}". Your mission is to help users reach their fitness goals.

1. **Identify the intent.** First decide what the user wants:
   * **Create a workout:** the request asks for a new training plan (e.g. "build me a chest workout").
   * **Explain an existing workout:** the request is about how to perform a workout that already exists in the user's list (e.g. "how do I do my Leg Day?").
   * **General question:** any other fitness question.

2. **How to answer:**
   * **To create a workout:** reply ONLY with one valid JSON object and no other text, no markdown. Structure: {{"groupName": "Name", "exercises": [{{"name": "Exercise 1", "sets": "4", "reps": "10"}}, ...]}}.
   * **To explain an existing workout:** find the group in the user's list. For each exercise give an explanation and the most popular, best rated YouTube tutorial as a direct link in the exact form https://www.youtube.com/watch?v=VIDEO_ID.
   * **For general questions:** answer in a friendly, informative way using Markdown. Never include a JSON object in these answers.

**User context:**
- The user's current workouts are: {workouts}"""


class AssistantRequestError(RuntimeError):
    """Raised when the assistant could not produce a reply."""


class EmptyReplyError(AssistantRequestError):
    """Raised when the assistant answered with no text."""


def build_system_instruction(collection):
    """Fixed behaviour rules plus a name-only snapshot of the user's workouts."""
    return SYSTEM_INSTRUCTION_TEMPLATE.format(
        assistant_name=ASSISTANT_NAME,
        workouts=summarize_collection(collection),
    )


class AssistantClient:
    """Sends one user turn with a system instruction and returns the reply text."""

    def __init__(self, api_key, config, model=None, max_tokens=None, timeout=None, client=None):
        """
        Initialize the assistant client.

        Args:
            api_key: Anthropic API key
            config: Full configuration dictionary
            model: Claude model to use (defaults to config value)
            max_tokens: Maximum tokens for response (defaults to config value)
            timeout: Client timeout in seconds (defaults to config value)
            client: Pre-built Anthropic client, mainly for tests
        """
        assistant_config = config.get("assistant", {}) or {}
        self.client = client or anthropic.Anthropic(
            api_key=api_key,
            timeout=timeout or assistant_config.get("timeout", 60),
        )
        self.model = model or assistant_config["model"]
        self.max_tokens = max_tokens or assistant_config["max_tokens"]

    def generate(self, user_text, system_instruction):
        """
        Ask the assistant for a reply to one user message.

        Returns:
            Reply text (stripped, never empty)

        Raises:
            AssistantRequestError: on API failures or an empty reply
        """
        try:
            message = self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                system=system_instruction,
                messages=[{"role": "user", "content": user_text}],
            )
        except anthropic.APIError as exc:
            logger.error("Assistant request failed: %s", exc)
            raise AssistantRequestError(str(exc)) from exc

        text = "".join(
            getattr(block, "text", "") or ""
            for block in (getattr(message, "content", None) or [])
            if getattr(block, "type", "text") == "text"
        ).strip()
        if not text:
            raise EmptyReplyError("Assistant returned an empty reply")
        return text
