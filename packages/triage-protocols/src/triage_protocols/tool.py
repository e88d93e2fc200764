"""
Tool protocol definition.

A tool is a named external capability. Arguments arrive as one opaque string
(e.g. ``"my-rg my-nsg"``); parsing that string is the tool's own job.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class ToolProtocol(Protocol):
    """
    Protocol for agent-invocable tools.

    Attributes:
        name: Identifier the model uses in USE_TOOL lines
        description: One-line description rendered into prompts
    """

    name: str
    description: str

    async def execute(self, args: str) -> str:
        """
        Execute the tool.

        Args:
            args: Raw argument text, passed verbatim from the model

        Returns:
            Result text the model can read
        """
        ...
