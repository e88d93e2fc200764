"""
Pattern source protocol definition.

A pattern source returns troubleshooting hints for a problem category. An
unknown category yields an empty list, never an error.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class PatternSourceProtocol(Protocol):
    """Protocol for category-keyed troubleshooting knowledge."""

    async def search_patterns(self, category: str) -> list[str]:
        """
        Return the ordered hints for a category.

        Args:
            category: Specialization name (e.g. "networking")

        Returns:
            List of hint strings, empty when the category is unknown
        """
        ...
