"""
Specialist agent factories with a per-process cache.

Each factory keeps at most one agent per specialization. Names are resolved
through the SpecializationRegistry first, so "Networking", "networking " and
an unknown name that falls back to the default all map to one cache key.

Cache insertion is guarded by a lock with a double-checked read, so
concurrent first requests for a specialization construct a single agent.
"""

import logging
import threading
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from triage_core.agent.specialist import DiagnosticAgent, MitigationAgent, SpecialistAgent
from triage_core.tools.invoker import ToolInvoker
from triage_core.tools.registry import ToolRegistry
from triage_protocols import CompletionClientProtocol, CompletionOptions, PatternSourceProtocol

if TYPE_CHECKING:
    from triage_core.specializations import Specialization, SpecializationRegistry

logger = logging.getLogger(__name__)


class SpecialistAgentFactory(ABC):
    """
    Lazily builds and caches specialist agents.

    Example:
        factory = DiagnosticAgentFactory(client, memory, specializations, tool_registry)
        agent = factory.get_agent("networking")
        assert factory.get_agent("Networking") is agent
    """

    def __init__(
        self,
        client: CompletionClientProtocol,
        memory: PatternSourceProtocol,
        specializations: "SpecializationRegistry",
        tool_registry: ToolRegistry,
        invoker: ToolInvoker | None = None,
        options: CompletionOptions | None = None,
        max_tool_rounds: int = 1,
    ) -> None:
        """
        Initialize factory.

        Args:
            client: Completion service shared by all agents
            memory: Pattern source shared by all agents
            specializations: Registry resolving names to Specializations
            tool_registry: Resolves each specialization's tool set
            invoker: ToolInvoker shared by all agents
            options: Completion options shared by all agents
            max_tool_rounds: Tool rounds allowed per turn
        """
        self.client = client
        self.memory = memory
        self.specializations = specializations
        self.tool_registry = tool_registry
        self.invoker = invoker or ToolInvoker()
        self.options = options or CompletionOptions()
        self.max_tool_rounds = max_tool_rounds
        self._agents: dict[str, SpecialistAgent] = {}
        self._lock = threading.Lock()

    def get_agent(self, specialization: str) -> SpecialistAgent:
        """
        Return the cached agent for a specialization, creating it on first use.

        Args:
            specialization: Category name (unknown names use the default)

        Returns:
            The single agent instance for the resolved specialization
        """
        resolved = self.specializations.resolve(specialization)
        key = resolved.name

        agent = self._agents.get(key)
        if agent is not None:
            return agent

        with self._lock:
            agent = self._agents.get(key)
            if agent is None:
                logger.info(
                    "Creating %s for specialization %s (requested %r)",
                    self.agent_kind,
                    key,
                    specialization,
                )
                agent = self._create_agent(resolved)
                self._agents[key] = agent
        return agent

    def known_specializations(self) -> list[str]:
        return self.specializations.names()

    def cached_specializations(self) -> list[str]:
        return sorted(self._agents)

    @property
    @abstractmethod
    def agent_kind(self) -> str:
        """Human-readable agent flavor for logs."""

    @abstractmethod
    def _create_agent(self, specialization: "Specialization") -> SpecialistAgent:
        """Construct a new agent bound to the shared collaborators."""


class DiagnosticAgentFactory(SpecialistAgentFactory):
    """Factory for DiagnosticAgent instances."""

    agent_kind = "diagnostic agent"

    def _create_agent(self, specialization: "Specialization") -> SpecialistAgent:
        return DiagnosticAgent(
            specialization=specialization,
            client=self.client,
            tools=self.tool_registry.get_tools_for_category(specialization.name),
            memory=self.memory,
            invoker=self.invoker,
            options=self.options,
            max_tool_rounds=self.max_tool_rounds,
        )


class MitigationAgentFactory(SpecialistAgentFactory):
    """Factory for MitigationAgent instances."""

    agent_kind = "mitigation agent"

    def _create_agent(self, specialization: "Specialization") -> SpecialistAgent:
        return MitigationAgent(
            specialization=specialization,
            client=self.client,
            tools=self.tool_registry.get_tools_for_category(specialization.name),
            invoker=self.invoker,
            options=self.options,
            max_tool_rounds=self.max_tool_rounds,
        )
