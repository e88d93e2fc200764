"""
Specialist agents: one turn of diagnosis or mitigation.

A turn runs through fixed steps:
1. Build template parameters (state, user input, tools, domain context)
2. First completion
3. Tool round: if the reply requests a tool, run it and complete again
   with the result filled in (bounded by max_tool_rounds, default 1)
4. Record the outcome sentinel (DIAGNOSIS or MITIGATION_COMPLETE) found in
   the final reply into ConversationState
5. Strip sentinel lines and return the visible text

Any exception raised during the turn is logged and replaced by a fixed
apology, so a failed turn never ends the conversation.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING

from triage_core.agent import sentinel
from triage_core.agent.sentinel import Diagnosis, MitigationComplete, UseTool
from triage_core.conversation.state import ConversationState
from triage_core.tools.invoker import ToolInvoker, format_tool_list
from triage_protocols import (
    CompletionClientProtocol,
    CompletionOptions,
    CompletionRequest,
    PatternSourceProtocol,
    ToolProtocol,
)

if TYPE_CHECKING:
    from triage_core.specializations import Specialization

logger = logging.getLogger(__name__)

DIAGNOSTIC_APOLOGY = (
    "I encountered a problem while diagnosing your issue. "
    "Could you please provide more details or try again?"
)
MITIGATION_APOLOGY = (
    "I encountered a problem while trying to fix your issue. "
    "Could you please provide more details about what you'd like me to do?"
)


class SpecialistAgent(ABC):
    """
    Shared turn logic for diagnostic and mitigation agents.

    Subclasses provide the template, the extra template parameters, the
    outcome sentinel kind and how to record it.
    """

    apology: str = ""
    outcome_kind: type[Diagnosis] | type[MitigationComplete]

    def __init__(
        self,
        specialization: "Specialization",
        client: CompletionClientProtocol,
        tools: Sequence[ToolProtocol],
        invoker: ToolInvoker | None = None,
        options: CompletionOptions | None = None,
        max_tool_rounds: int = 1,
    ) -> None:
        """
        Initialize specialist agent.

        Args:
            specialization: Domain the agent serves
            client: Completion service
            tools: Tool set for the domain
            invoker: ToolInvoker (created without timeout if None)
            options: Per-call completion options
            max_tool_rounds: Tool rounds allowed per turn (0 disables tools)
        """
        self.specialization = specialization
        self.client = client
        self.tools = list(tools)
        self.invoker = invoker or ToolInvoker()
        self.options = options or CompletionOptions()
        self.max_tool_rounds = max_tool_rounds
        self.template = self.build_template()

    @property
    def name(self) -> str:
        return self.specialization.name

    @abstractmethod
    def build_template(self) -> str:
        """Return the prompt template for this agent's specialization."""

    @abstractmethod
    async def extra_parameters(self, state: ConversationState) -> dict[str, str]:
        """Return template parameters specific to the agent flavor."""

    @abstractmethod
    def record_outcome(self, payload: str, state: ConversationState) -> None:
        """Store the outcome payload in the conversation state."""

    async def run(self, user_input: str, state: ConversationState) -> str:
        """
        Process one user turn.

        Args:
            user_input: Current user message
            state: Session state (read for context, written with outcomes)

        Returns:
            User-visible reply with sentinel lines removed, or the fixed
            apology if the turn failed
        """
        try:
            return await self._run_turn(user_input, state)
        except Exception:
            logger.exception(
                "%s agent for %s failed processing turn", type(self).__name__, self.name
            )
            return self.apology

    async def _run_turn(self, user_input: str, state: ConversationState) -> str:
        parameters = {
            "conversationState": state.format_for_prompt(),
            "userInput": user_input,
            "toolResults": "",
            "tools": format_tool_list(self.tools),
        }
        parameters.update(await self.extra_parameters(state))

        response = await self._complete(parameters)

        tool_results: list[str] = []
        for _ in range(self.max_tool_rounds):
            request = sentinel.find(response, UseTool)
            if request is None:
                break
            result = await self.invoker.execute(request.tool_name, request.args_text, self.tools)
            tool_results.append(result)
            parameters["toolResults"] = "\n\n".join(tool_results)
            response = await self._complete(parameters)

        outcome = sentinel.find(response, self.outcome_kind)
        if outcome is not None:
            self.record_outcome(outcome.text, state)

        return sentinel.clean(response)

    async def _complete(self, parameters: dict[str, str]) -> str:
        request = CompletionRequest(
            template=self.template,
            parameters=dict(parameters),
            options=self.options,
        )
        response = await self.client.complete(request)
        return response.text

    def __repr__(self) -> str:
        return f"{type(self).__name__}(specialization={self.name!r}, tools={len(self.tools)})"


class DiagnosticAgent(SpecialistAgent):
    """Identifies the cause of a problem and records a DIAGNOSIS."""

    apology = DIAGNOSTIC_APOLOGY
    outcome_kind = Diagnosis

    def __init__(
        self,
        specialization: "Specialization",
        client: CompletionClientProtocol,
        tools: Sequence[ToolProtocol],
        memory: PatternSourceProtocol,
        invoker: ToolInvoker | None = None,
        options: CompletionOptions | None = None,
        max_tool_rounds: int = 1,
    ) -> None:
        self.memory = memory
        super().__init__(specialization, client, tools, invoker, options, max_tool_rounds)

    def build_template(self) -> str:
        return self.specialization.diagnostic_template()

    async def extra_parameters(self, state: ConversationState) -> dict[str, str]:
        patterns = await self.memory.search_patterns(self.name)
        return {"patterns": "\n".join(f"- {pattern}" for pattern in patterns)}

    def record_outcome(self, payload: str, state: ConversationState) -> None:
        logger.info("Diagnosis recorded for %s: %s", self.name, payload)
        state.set_diagnosis_result(payload)


class MitigationAgent(SpecialistAgent):
    """Applies or proposes a fix and records MITIGATION_COMPLETE."""

    apology = MITIGATION_APOLOGY
    outcome_kind = MitigationComplete

    def build_template(self) -> str:
        return self.specialization.mitigation_template()

    async def extra_parameters(self, state: ConversationState) -> dict[str, str]:
        return {"diagnosisResult": state.get_diagnosis_result()}

    def record_outcome(self, payload: str, state: ConversationState) -> None:
        logger.info("Mitigation recorded for %s: %s", self.name, payload)
        state.set_mitigation_result(payload)
