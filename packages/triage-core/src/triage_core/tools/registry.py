"""
Tool registry for per-specialization tool sets.

Each Specialization names a tool factory; the registry builds the tool list
for a category, falling back to the default specialization for names it
does not know.

Example:
    ```python
    registry = ToolRegistry(create_default_registry())
    tools = registry.get_tools_for_category("networking")
    names = registry.list_tool_names("networking")
    ```
"""

import logging
import threading
from typing import TYPE_CHECKING

from triage_protocols import ToolProtocol

if TYPE_CHECKING:
    from triage_core.specializations import SpecializationRegistry

logger = logging.getLogger(__name__)


class ToolRegistry:
    """
    Resolves tool sets by category.

    Tool sets are built on first request and cached; agents are cached by
    their factories as well, so each specialization's tools are constructed
    once per process. The diagnostic and mitigation factories share one
    registry, so cache insertion is locked.
    """

    def __init__(self, specializations: "SpecializationRegistry") -> None:
        self._specializations = specializations
        self._cache: dict[str, list[ToolProtocol]] = {}
        self._lock = threading.Lock()

    def get_tools_for_category(self, category: str) -> list[ToolProtocol]:
        """
        Get the tool set for a category.

        Args:
            category: Specialization name (unknown names use the default)

        Returns:
            List of tools, possibly empty
        """
        specialization = self._specializations.resolve(category)
        key = specialization.name

        tools = self._cache.get(key)
        if tools is None:
            with self._lock:
                tools = self._cache.get(key)
                if tools is None:
                    tools = list(specialization.tool_factory())
                    if not tools:
                        logger.warning("No specialized tools found for category: %s", key)
                    self._cache[key] = tools
        return list(tools)

    def list_tool_names(self, category: str) -> list[str]:
        return [tool.name for tool in self.get_tools_for_category(category)]
