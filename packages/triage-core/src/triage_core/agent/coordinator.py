"""
Coordinator agent: routes each user turn.

The coordinator asks the completion service to either request more
information or classify the problem. A classification is a JSON object
embedded in the reply:

    {"action": "diagnose", "category": "networking"}

On a classification the coordinator updates phase and category and hands
the turn to the diagnostic or mitigation specialist; the coordinator's own
text is discarded. Without one, the reply goes to the user as is.
"""

import logging

from triage_core.agent.factory import DiagnosticAgentFactory, MitigationAgentFactory
from triage_core.agent.prompts import COORDINATOR_TEMPLATE
from triage_core.agent.routing import RoutingAction, RoutingDecision, parse_routing_decision
from triage_core.conversation.state import ConversationState, Phase
from triage_protocols import CompletionClientProtocol, CompletionOptions, CompletionRequest

logger = logging.getLogger(__name__)

COORDINATOR_APOLOGY = (
    "I encountered an error processing your request. "
    "Could you please try rephrasing or provide more details?"
)


class CoordinatorAgent:
    """
    Entry point for a conversation turn.

    Example:
        coordinator = CoordinatorAgent(client, diagnostic_factory, mitigation_factory)
        state = ConversationState()
        reply = await coordinator.process_user_input("my app can't reach the db", state)
    """

    def __init__(
        self,
        client: CompletionClientProtocol,
        diagnostic_factory: DiagnosticAgentFactory,
        mitigation_factory: MitigationAgentFactory,
        options: CompletionOptions | None = None,
    ) -> None:
        self.client = client
        self.diagnostic_factory = diagnostic_factory
        self.mitigation_factory = mitigation_factory
        self.options = options or CompletionOptions()

    def categories(self) -> list[str]:
        """Categories offered to the model for classification."""
        return self.diagnostic_factory.specializations.categories()

    async def process_user_input(self, user_input: str, state: ConversationState) -> str:
        """
        Handle one user turn.

        The user message is appended to the state before prompting and the
        visible reply after the turn completes.

        Args:
            user_input: Raw user text
            state: Session state

        Returns:
            Text to show the user
        """
        state.add_user_message(user_input)
        reply = await self._route(user_input, state)
        state.add_agent_message(reply)
        return reply

    async def _route(self, user_input: str, state: ConversationState) -> str:
        request = CompletionRequest(
            template=COORDINATOR_TEMPLATE,
            parameters={
                "conversationState": state.format_for_prompt(),
                "userInput": user_input,
                "categories": ", ".join(self.categories()),
            },
            options=self.options,
        )
        try:
            response = await self.client.complete(request)
        except Exception:
            logger.exception("Coordinator completion failed")
            return COORDINATOR_APOLOGY

        decision = parse_routing_decision(response.text)
        if decision is None:
            return response.text
        return await self._delegate(decision, user_input, state)

    async def _delegate(
        self, decision: RoutingDecision, user_input: str, state: ConversationState
    ) -> str:
        if decision.action is RoutingAction.DIAGNOSE:
            factory = self.diagnostic_factory
            state.set_phase(Phase.DIAGNOSIS)
        else:
            factory = self.mitigation_factory
            state.set_phase(Phase.MITIGATION)

        agent = factory.get_agent(decision.category)
        if agent.name != decision.category:
            logger.warning(
                "Unknown category %r from coordinator, using %s specialist",
                decision.category,
                agent.name,
            )
        state.set_category(agent.name)
        logger.info("Routing to %s %s", agent.name, factory.agent_kind)
        return await agent.run(user_input, state)
