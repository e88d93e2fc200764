"""Shared fakes for triage-core tests."""

import pytest

from triage_core.specializations import create_default_registry
from triage_protocols import CompletionRequest, CompletionResponse


class ScriptedClient:
    """Completion client that replays canned replies and records requests."""

    def __init__(self, *replies: str | BaseException) -> None:
        self.replies = list(replies)
        self.requests: list[CompletionRequest] = []

    async def complete(self, request: CompletionRequest) -> CompletionResponse:
        self.requests.append(request)
        if not self.replies:
            raise AssertionError("unexpected completion call")
        reply = self.replies.pop(0)
        if isinstance(reply, BaseException):
            raise reply
        return CompletionResponse(text=reply)


class StubTool:
    """Tool that records its arguments and returns a fixed result."""

    def __init__(
        self,
        name: str,
        result: str = "ok",
        error: Exception | None = None,
        description: str = "stub tool",
    ) -> None:
        self.name = name
        self.description = description
        self.result = result
        self.error = error
        self.calls: list[str] = []

    async def execute(self, args: str) -> str:
        self.calls.append(args)
        if self.error is not None:
            raise self.error
        return self.result


class StaticPatterns:
    """Pattern source backed by a dict."""

    def __init__(self, patterns: dict[str, list[str]] | None = None) -> None:
        self.patterns = patterns or {}
        self.queries: list[str] = []

    async def search_patterns(self, category: str) -> list[str]:
        self.queries.append(category)
        return list(self.patterns.get(category, []))


@pytest.fixture
def scripted_client():
    """Factory: scripted_client("reply 1", "reply 2", RuntimeError(...))."""
    return ScriptedClient


@pytest.fixture
def stub_tool():
    """Factory: stub_tool("CheckNsgRules", result="...")."""
    return StubTool


@pytest.fixture
def static_patterns():
    """Factory: static_patterns({"networking": ["hint"]})."""
    return StaticPatterns


@pytest.fixture
def specializations():
    """Fresh registry of built-in specializations."""
    return create_default_registry()
