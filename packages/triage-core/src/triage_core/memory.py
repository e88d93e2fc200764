"""
Troubleshooting pattern memory.

AgentMemory holds category-keyed hints that diagnostic prompts include as
background knowledge. Built-in patterns cover the standard categories;
more can be merged in from a JSON file of the form:

    {"networking": ["If ...", "If ..."], "storage": ["If ..."]}
"""

import logging
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from triage_core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_PATTERNS: dict[str, list[str]] = {
    "networking": [
        "If application can't connect to database, check firewall rules between app subnet and database subnet",
        "If web application is unreachable, verify inbound rules allow port 80/443",
        "If services in different networks can't communicate, check network peering or service endpoints",
        "If experiencing intermittent connectivity issues, check DNS resolution and network latency",
        "If load balancer endpoints are not responding, verify health probe configuration",
        "If application gateway returns 502 errors, check backend pool health and settings",
    ],
    "database": [
        "If SQL queries are timing out, check resource usage and consider scaling up",
        "If connection pooling errors occur, verify max pool settings in connection string",
        "If database is unreachable, check firewall rules to ensure client IP is allowed",
        "If experiencing deadlocks, review transaction isolation levels and query patterns",
        "If seeing high wait times, check for blocking queries or resource contention",
        "If database size is approaching limit, consider implementing data archiving strategy",
    ],
    "authentication": [
        "If seeing 401 Unauthorized errors, verify token acquisition and validity",
        "If CORS errors appear in browser console, check CORS configuration on the server",
        "If managed identity isn't working, verify service principal assignments",
        "If users can't access resources, check role assignments at every scope",
        "If token acquisition fails, verify app registration and API permissions",
        "If certificate authentication fails, check certificate validity and trust chain",
    ],
    "performance": [
        "If web app is slow, check hosting plan tier and scaling settings",
        "If seeing high memory usage, look for memory leaks or inefficient caching",
        "If CPU spikes occur, identify resource-intensive operations and optimize",
        "If storage operations are slow, check throttling metrics and partition strategy",
        "If application startup is slow, review initialization logic and dependencies",
        "If experiencing timeouts, check connection limits and timeout configurations",
    ],
    "availability": [
        "If the app stops responding under load, check CPU and memory usage of its containers",
        "If a container keeps restarting, read its recent logs for the crash reason",
        "If a new revision never becomes ready, look for image pull failures in the logs",
        "If a container was OOM killed, raise its memory limit or reduce usage",
    ],
}

_PATTERN_FILE_ADAPTER = TypeAdapter(dict[str, list[str]])


class AgentMemory:
    """
    In-process pattern store.

    Category keys are matched case-insensitively. search_patterns() returns a
    copy so callers cannot mutate the store.

    Example:
        memory = AgentMemory.from_file(Path("patterns.json"))
        hints = await memory.search_patterns("networking")
    """

    def __init__(self, patterns: dict[str, list[str]] | None = None) -> None:
        source = DEFAULT_PATTERNS if patterns is None else patterns
        self._patterns: dict[str, list[str]] = {
            category.lower(): list(hints) for category, hints in source.items()
        }

    @classmethod
    def from_file(cls, path: Path, include_defaults: bool = True) -> "AgentMemory":
        """
        Load patterns from a JSON file.

        Args:
            path: JSON object mapping category to list of hints
            include_defaults: Merge file patterns onto the built-in ones.
                File entries are appended to existing categories.

        Returns:
            AgentMemory holding the merged patterns

        Raises:
            ConfigurationError: If the file is missing or malformed
        """
        try:
            loaded = _PATTERN_FILE_ADAPTER.validate_json(path.read_bytes())
        except OSError as e:
            raise ConfigurationError("patterns_file", f"cannot read {path}: {e}") from e
        except ValidationError as e:
            raise ConfigurationError(
                "patterns_file", f"{path} must map categories to lists of strings: {e}"
            ) from e

        memory = cls() if include_defaults else cls({})
        for category, hints in loaded.items():
            for hint in hints:
                memory.add_pattern(category, hint)
        logger.info("Loaded %d pattern categories from %s", len(loaded), path)
        return memory

    async def search_patterns(self, category: str, query: str | None = None) -> list[str]:
        """
        Return the hints for a category.

        Args:
            category: Specialization name
            query: Free-text problem description. Accepted for callers that
                have one; matching is by category only.

        Returns:
            Ordered hints, empty for unknown categories
        """
        logger.debug("Searching patterns for category: %s", category)
        return list(self._patterns.get(category.strip().lower(), []))

    def add_pattern(self, category: str, pattern: str) -> None:
        self._patterns.setdefault(category.strip().lower(), []).append(pattern)

    def categories(self) -> list[str]:
        return sorted(self._patterns)
