"""
Triage Core Library

Two-phase (diagnosis, then mitigation) support agent built on a language-model
completion service. This package provides:

- Conversation: ConversationState and the sequential ConversationSession
- Agents: CoordinatorAgent routing, specialist agents and their factories
- Sentinel protocol: USE_TOOL / DIAGNOSIS / MITIGATION_COMPLETE control lines
- Specializations: Registry of domains with prompts and tool sets
- Tools: Network probes and container tools, ToolInvoker
- CLI infrastructure: Typer-based `triage` command
"""

__version__ = "0.1.0"

from triage_core.agent import (
    CoordinatorAgent,
    DiagnosticAgent,
    DiagnosticAgentFactory,
    MitigationAgent,
    MitigationAgentFactory,
    RoutingDecision,
    SpecialistAgent,
    SpecialistAgentFactory,
)
from triage_core.bootstrap import build_coordinator
from triage_core.config import Settings
from triage_core.conversation import ConversationSession, ConversationState, Message, Phase, Role
from triage_core.exceptions import (
    CompletionError,
    ConfigurationError,
    TriageError,
    UnknownSpecializationError,
)
from triage_core.memory import AgentMemory
from triage_core.specializations import (
    Specialization,
    SpecializationRegistry,
    create_default_registry,
)
from triage_core.tools import Tool, ToolInvoker, ToolRegistry

__all__ = [
    "__version__",
    # Conversation
    "ConversationState",
    "ConversationSession",
    "Message",
    "Phase",
    "Role",
    # Agents
    "CoordinatorAgent",
    "RoutingDecision",
    "SpecialistAgent",
    "DiagnosticAgent",
    "MitigationAgent",
    "SpecialistAgentFactory",
    "DiagnosticAgentFactory",
    "MitigationAgentFactory",
    # Specializations
    "Specialization",
    "SpecializationRegistry",
    "create_default_registry",
    # Tools and memory
    "Tool",
    "ToolInvoker",
    "ToolRegistry",
    "AgentMemory",
    # Configuration and wiring
    "Settings",
    "build_coordinator",
    # Errors
    "TriageError",
    "ConfigurationError",
    "UnknownSpecializationError",
    "CompletionError",
]
