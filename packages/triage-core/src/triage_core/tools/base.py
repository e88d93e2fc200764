"""
Base class for built-in tools.

Built-in tools satisfy triage_protocols.ToolProtocol. Arguments arrive as one
whitespace-separated string; each tool declares a usage line and splits the
string itself. Bad arguments raise ToolArgumentError, which the ToolInvoker
turns into model-readable error text like any other tool fault.
"""

from abc import ABC, abstractmethod
from typing import ClassVar


class ToolArgumentError(ValueError):
    """
    Raised when a tool's argument text does not match its usage.

    Attributes:
        tool_name: Tool that rejected the arguments
        usage: Expected argument format
    """

    def __init__(self, tool_name: str, usage: str, reason: str) -> None:
        self.tool_name = tool_name
        self.usage = usage
        super().__init__(f"{reason}. Usage: {tool_name} {usage}")


class Tool(ABC):
    """
    Named capability with an opaque string interface.

    Subclasses set name, description and usage, and implement execute().
    """

    name: ClassVar[str]
    description: ClassVar[str]
    usage: ClassVar[str] = ""

    def split_args(self, args: str, minimum: int, maximum: int | None = None) -> list[str]:
        """
        Split argument text on whitespace and check the field count.

        Args:
            args: Raw argument text
            minimum: Fewest fields accepted
            maximum: Most fields accepted (defaults to minimum)

        Returns:
            List of fields

        Raises:
            ToolArgumentError: If the field count is out of range
        """
        fields = args.split()
        maximum = minimum if maximum is None else maximum
        if not minimum <= len(fields) <= maximum:
            raise ToolArgumentError(
                self.name,
                self.usage,
                f"expected {minimum}-{maximum} arguments, got {len(fields)}",
            )
        return fields

    @abstractmethod
    async def execute(self, args: str) -> str:
        """Run the tool and return result text."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
