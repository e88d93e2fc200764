"""Tests for Settings and coordinator wiring."""

import json

import pytest

from triage_core.bootstrap import build_coordinator, create_completion_client, load_memory
from triage_core.config import Settings
from triage_core.exceptions import ConfigurationError
from triage_core.llm import AnthropicCompletionClient


class TestSettings:
    """Tests for environment-driven configuration."""

    def test_defaults(self, monkeypatch):
        for name in ("TRIAGE_MODEL", "TRIAGE_MAX_TOOL_ROUNDS", "TRIAGE_PATTERNS_FILE"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings()

        assert settings.model == "claude-sonnet-4-5"
        assert settings.max_tool_rounds == 1
        assert settings.patterns_file is None

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("TRIAGE_MODEL", "claude-haiku-4-5")
        monkeypatch.setenv("TRIAGE_MAX_TOOL_ROUNDS", "3")
        monkeypatch.setenv("TRIAGE_TEMPERATURE", "0.5")

        settings = Settings()

        assert settings.max_tool_rounds == 3
        options = settings.completion_options()
        assert options.model == "claude-haiku-4-5"
        assert options.temperature == 0.5

    def test_negative_tool_rounds_rejected(self):
        with pytest.raises(ValueError):
            Settings(max_tool_rounds=-1)


class TestBuildCoordinator:
    """Tests for object graph assembly."""

    def test_missing_api_key_raises(self, monkeypatch):
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)

        with pytest.raises(ConfigurationError) as exc_info:
            create_completion_client(Settings())

        assert exc_info.value.setting == "ANTHROPIC_API_KEY"

    def test_creates_anthropic_client_with_key(self, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-test")

        client = create_completion_client(Settings(request_timeout_seconds=5))

        assert isinstance(client, AnthropicCompletionClient)

    def test_settings_flow_into_factories(self, scripted_client):
        settings = Settings(max_tool_rounds=2, tool_timeout_seconds=5.0, model="claude-haiku-4-5")
        client = scripted_client()

        coordinator = build_coordinator(settings, client=client)

        factory = coordinator.diagnostic_factory
        assert factory.client is client
        assert factory.max_tool_rounds == 2
        assert factory.invoker.timeout == 5.0
        assert factory.options.model == "claude-haiku-4-5"
        assert coordinator.mitigation_factory.invoker is factory.invoker
        assert coordinator.mitigation_factory.tool_registry is factory.tool_registry

    @pytest.mark.asyncio
    async def test_patterns_file_loaded(self, tmp_path):
        path = tmp_path / "patterns.json"
        path.write_text(json.dumps({"storage": ["If blobs throttle, spread partitions"]}))

        memory = load_memory(Settings(patterns_file=path))

        assert await memory.search_patterns("storage") == ["If blobs throttle, spread partitions"]
        assert await memory.search_patterns("networking") != []
