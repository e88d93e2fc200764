"""
Conversation module.

This module contains:
- state.py: Message log, workflow phase and results for one session
- session.py: Sequential turn loop that owns a ConversationState
"""

from triage_core.conversation.session import (
    EXIT_COMMANDS,
    GREETING,
    SESSION_APOLOGY,
    ConversationSession,
    is_exit_command,
)
from triage_core.conversation.state import (
    RECENT_MESSAGE_WINDOW,
    ConversationState,
    Message,
    Phase,
    Role,
)

__all__ = [
    # State
    "ConversationState",
    "Message",
    "Phase",
    "Role",
    "RECENT_MESSAGE_WINDOW",
    # Session
    "ConversationSession",
    "GREETING",
    "SESSION_APOLOGY",
    "EXIT_COMMANDS",
    "is_exit_command",
]
