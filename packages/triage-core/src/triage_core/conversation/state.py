"""
Conversation state for one support session.

ConversationState is a plain holder: an append-only message log, the current
workflow phase, the active category and the latest diagnosis and mitigation
summaries. It is created per session, mutated only while a turn is being
processed, and never persisted.

Per project patterns:
- Use str enum for easy JSON serialization
- Frozen dataclass for values that must not change after creation
"""

from dataclasses import dataclass
from enum import Enum

# Number of trailing messages rendered into prompts
RECENT_MESSAGE_WINDOW = 5


class Role(str, Enum):
    """Author of a message."""

    USER = "user"
    AGENT = "agent"


class Phase(str, Enum):
    """Workflow phase of a conversation."""

    INITIAL = "initial"
    DIAGNOSIS = "diagnosis"
    MITIGATION = "mitigation"


@dataclass(frozen=True)
class Message:
    """A single entry in the conversation timeline."""

    role: Role
    content: str


class ConversationState:
    """
    Mutable state of one conversation.

    The message log only grows; messages are never reordered or removed.
    Diagnosis and mitigation results may be overwritten by later attempts.
    Reading an unset result yields an empty string so mitigation prompts can
    always interpolate the diagnosis.

    Example:
        state = ConversationState()
        state.add_user_message("my app can't reach the database")
        state.set_phase(Phase.DIAGNOSIS)
        prompt_text = state.format_for_prompt()
    """

    def __init__(self) -> None:
        self._messages: list[Message] = []
        self._phase = Phase.INITIAL
        self._category: str | None = None
        self._diagnosis_result: str | None = None
        self._mitigation_result: str | None = None

    @property
    def messages(self) -> tuple[Message, ...]:
        """Snapshot of the message log, oldest first."""
        return tuple(self._messages)

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def category(self) -> str | None:
        return self._category

    def add_user_message(self, content: str) -> None:
        self._messages.append(Message(role=Role.USER, content=content))

    def add_agent_message(self, content: str) -> None:
        self._messages.append(Message(role=Role.AGENT, content=content))

    def set_phase(self, phase: Phase) -> None:
        self._phase = Phase(phase)

    def set_category(self, category: str) -> None:
        self._category = category

    def set_diagnosis_result(self, result: str) -> None:
        self._diagnosis_result = result

    def get_diagnosis_result(self) -> str:
        """Return the latest diagnosis, or "" if none was recorded."""
        return self._diagnosis_result or ""

    def set_mitigation_result(self, result: str) -> None:
        self._mitigation_result = result

    def get_mitigation_result(self) -> str:
        """Return the latest mitigation summary, or "" if none was recorded."""
        return self._mitigation_result or ""

    def format_for_prompt(self) -> str:
        """
        Render the state for inclusion in prompts.

        Only the last RECENT_MESSAGE_WINDOW messages are included, oldest
        first, to bound prompt size.

        Returns:
            Multi-line text with phase, optional category and recent messages
        """
        lines = [f"Current phase: {self._phase.value}"]
        if self._category is not None:
            lines.append(f"Current category: {self._category}")

        lines.append("Recent messages:")
        for message in self._messages[-RECENT_MESSAGE_WINDOW:]:
            lines.append(f"{message.role.value}: {message.content}")

        return "\n".join(lines)
