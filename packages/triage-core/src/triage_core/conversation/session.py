"""
Conversation session: sequential turns over one ConversationState.

The session owns the state for its lifetime and serializes turns with an
asyncio.Lock, so a second input waits for the first to finish. A failure
while handling a turn is logged and answered with a fixed apology; the
session stays usable.
"""

import asyncio
import logging
from typing import TYPE_CHECKING

from triage_core.conversation.state import ConversationState

if TYPE_CHECKING:
    from triage_core.agent.coordinator import CoordinatorAgent

logger = logging.getLogger(__name__)

GREETING = "How can I help you with your application today?"

SESSION_APOLOGY = (
    "I apologize, but I encountered an error processing your request. "
    "Could you please try again or rephrase your question?"
)

EXIT_COMMANDS = frozenset({"exit", "quit"})


def is_exit_command(text: str | None) -> bool:
    """Return True if the input ends the session (empty, exit or quit)."""
    if text is None:
        return True
    stripped = text.strip()
    return not stripped or stripped.lower() in EXIT_COMMANDS


class ConversationSession:
    """
    One user's conversation with the coordinator.

    Example:
        session = ConversationSession(coordinator)
        reply = await session.handle("my app can't reach the database")
    """

    def __init__(
        self,
        coordinator: "CoordinatorAgent",
        state: ConversationState | None = None,
    ) -> None:
        self.coordinator = coordinator
        self.state = state or ConversationState()
        self._lock = asyncio.Lock()
        self._turns = 0

    @property
    def turns(self) -> int:
        return self._turns

    async def handle(self, user_input: str) -> str:
        """
        Process one user message.

        Args:
            user_input: Raw user text

        Returns:
            Reply to show the user
        """
        async with self._lock:
            self._turns += 1
            try:
                return await self.coordinator.process_user_input(user_input, self.state)
            except Exception:
                logger.exception("Error processing user input (turn %d)", self._turns)
                return SESSION_APOLOGY
