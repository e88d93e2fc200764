"""
Completion client backed by the Anthropic Messages API.

Renders the request template locally ({{$name}} substitution) and sends the
result as a single user message. Only text blocks of the reply are returned;
the engine drives tools through sentinel lines, so no native tool definitions
are sent.

Error handling:
- anthropic.APIError (connection, rate limit, status errors) is wrapped in
  CompletionError so callers handle one exception type
- A max_tokens stop is logged and the truncated text is still returned
"""

import logging

import anthropic
from anthropic import AsyncAnthropic

from triage_core.exceptions import CompletionError
from triage_protocols import CompletionRequest, CompletionResponse

logger = logging.getLogger(__name__)


class AnthropicCompletionClient:
    """
    CompletionClientProtocol implementation using AsyncAnthropic.

    Example:
        client = AnthropicCompletionClient(timeout=30.0)
        response = await client.complete(
            CompletionRequest(template="Hello {{$name}}", parameters={"name": "ops"})
        )
        print(response.text)
    """

    def __init__(
        self,
        client: AsyncAnthropic | None = None,
        timeout: float = 60.0,
    ) -> None:
        """
        Initialize completion client.

        Args:
            client: Optional AsyncAnthropic client (created if None; the SDK
                reads ANTHROPIC_API_KEY)
            timeout: Request timeout in seconds for a created client
        """
        self.client = client or AsyncAnthropic(timeout=timeout)

    async def complete(self, request: CompletionRequest) -> CompletionResponse:
        """
        Send one completion request.

        Args:
            request: Template, parameters and options

        Returns:
            CompletionResponse with the concatenated text blocks

        Raises:
            CompletionError: If the API call fails
        """
        options = request.options
        prompt = request.render()

        try:
            response = await self.client.messages.create(
                model=options.model,
                max_tokens=options.max_output_tokens,
                temperature=options.temperature,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APIError as e:
            logger.error("Completion request to %s failed: %s", options.model, e)
            raise CompletionError(options.model, str(e)) from e

        if response.stop_reason == "max_tokens":
            logger.warning(
                "Completion truncated at %d tokens (model %s)",
                options.max_output_tokens,
                options.model,
            )

        text = "".join(
            block.text for block in response.content if getattr(block, "type", None) == "text"
        )
        return CompletionResponse(text=text)
