"""
Wiring for a ready-to-use coordinator.

build_coordinator() assembles the object graph from Settings:
specialization registry, tool registry, pattern memory, tool invoker,
completion client and both specialist factories.
"""

import logging
import os

from triage_core.agent.coordinator import CoordinatorAgent
from triage_core.agent.factory import DiagnosticAgentFactory, MitigationAgentFactory
from triage_core.config import Settings
from triage_core.exceptions import ConfigurationError
from triage_core.llm.anthropic_client import AnthropicCompletionClient
from triage_core.memory import AgentMemory
from triage_core.specializations import SpecializationRegistry, create_default_registry
from triage_core.tools.invoker import ToolInvoker
from triage_core.tools.registry import ToolRegistry
from triage_protocols import CompletionClientProtocol

logger = logging.getLogger(__name__)


def load_memory(settings: Settings) -> AgentMemory:
    """Built-in patterns, plus the patterns file when one is configured."""
    if settings.patterns_file is None:
        return AgentMemory()
    return AgentMemory.from_file(settings.patterns_file)


def create_completion_client(settings: Settings) -> AnthropicCompletionClient:
    """
    Create the Anthropic-backed completion client.

    Raises:
        ConfigurationError: If ANTHROPIC_API_KEY is not set
    """
    if not os.environ.get("ANTHROPIC_API_KEY"):
        raise ConfigurationError("ANTHROPIC_API_KEY", "environment variable is not set")
    return AnthropicCompletionClient(timeout=settings.request_timeout_seconds)


def build_coordinator(
    settings: Settings | None = None,
    client: CompletionClientProtocol | None = None,
    specializations: SpecializationRegistry | None = None,
    memory: AgentMemory | None = None,
) -> CoordinatorAgent:
    """
    Assemble a CoordinatorAgent and its collaborators.

    Args:
        settings: Configuration (loaded from the environment if None)
        client: Completion service (Anthropic client created if None)
        specializations: Registry (built-in specializations if None)
        memory: Pattern memory (loaded from settings if None)

    Returns:
        CoordinatorAgent ready to process turns
    """
    settings = settings or Settings()
    client = client or create_completion_client(settings)
    specializations = specializations or create_default_registry()
    memory = memory or load_memory(settings)

    tool_registry = ToolRegistry(specializations)
    invoker = ToolInvoker(timeout=settings.tool_timeout_seconds)
    options = settings.completion_options()

    shared = dict(
        client=client,
        memory=memory,
        specializations=specializations,
        tool_registry=tool_registry,
        invoker=invoker,
        options=options,
        max_tool_rounds=settings.max_tool_rounds,
    )
    logger.debug(
        "Building coordinator: model=%s max_tool_rounds=%d specializations=%s",
        settings.model,
        settings.max_tool_rounds,
        ", ".join(specializations.names()),
    )
    return CoordinatorAgent(
        client=client,
        diagnostic_factory=DiagnosticAgentFactory(**shared),
        mitigation_factory=MitigationAgentFactory(**shared),
        options=options,
    )
