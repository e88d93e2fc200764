"""
Tool invocation with failure normalization.

ToolInvoker is the only caller of Tool.execute(). Every outcome, including a
missing tool, a raised exception or a timeout, comes back as text so the
specialist's next completion can read it as context. Nothing is raised to the
caller.
"""

import asyncio
import logging
from collections.abc import Sequence

from triage_protocols import ToolProtocol

logger = logging.getLogger(__name__)


def format_tool_list(tools: Sequence[ToolProtocol]) -> str:
    """Render a tool set as "- Name: description" lines for prompts."""
    if not tools:
        return "(no tools available)"
    return "\n".join(f"- {tool.name}: {tool.description}" for tool in tools)


class ToolInvoker:
    """
    Resolves a tool by name and executes it.

    Lookup is case-insensitive. Failures are reported as:
        ERROR: Tool '<name>' not found. Available tools: <a, b>
        ERROR: Failed to execute tool '<name>': <message>

    Example:
        invoker = ToolInvoker(timeout=30.0)
        result = await invoker.execute("CheckDnsResolution", "db.internal", tools)
    """

    def __init__(self, timeout: float | None = None) -> None:
        """
        Initialize invoker.

        Args:
            timeout: Seconds a single tool may run before it is cancelled.
                None disables the limit.
        """
        self.timeout = timeout

    @staticmethod
    def find_tool(tool_name: str, tools: Sequence[ToolProtocol]) -> ToolProtocol | None:
        wanted = tool_name.casefold()
        for tool in tools:
            if tool.name.casefold() == wanted:
                return tool
        return None

    async def execute(
        self, tool_name: str, args_text: str, tools: Sequence[ToolProtocol]
    ) -> str:
        """
        Execute a tool from the given set.

        Args:
            tool_name: Name requested by the model
            args_text: Verbatim argument text
            tools: The specialization's tool set

        Returns:
            Tool output, or an ERROR-prefixed description of the failure
        """
        tool = self.find_tool(tool_name, tools)
        if tool is None:
            available = ", ".join(t.name for t in tools)
            logger.warning("Model requested unknown tool %r (available: %s)", tool_name, available)
            return f"ERROR: Tool '{tool_name}' not found. Available tools: {available}"

        logger.info("Executing tool %s with arguments %r", tool.name, args_text)
        deadline = asyncio.timeout(self.timeout)
        try:
            async with deadline:
                return await tool.execute(args_text)
        except Exception as e:
            if isinstance(e, TimeoutError) and deadline.expired():
                logger.exception(
                    "Tool %s timed out after %ss (arguments %r)", tool.name, self.timeout, args_text
                )
                return f"ERROR: Failed to execute tool '{tool_name}': timed out after {self.timeout}s"
            logger.exception("Error executing tool %s with arguments %r", tool.name, args_text)
            return f"ERROR: Failed to execute tool '{tool_name}': {e}"
