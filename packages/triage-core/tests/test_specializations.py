"""Tests for the specialization registry, tool registry and prompt templates."""

import threading
import time

import pytest

from triage_core.agent.prompts import COORDINATOR_TEMPLATE
from triage_core.exceptions import UnknownSpecializationError
from triage_core.specializations import (
    DEFAULT_SPECIALIZATION,
    Specialization,
    SpecializationRegistry,
)
from triage_core.tools.registry import ToolRegistry
from triage_protocols import render_template


class TestSpecializationRegistry:
    """Tests for name resolution."""

    def test_builtin_categories(self, specializations):
        """All built-in domains are routable; the default is not offered."""
        assert specializations.categories() == [
            "authentication",
            "availability",
            "database",
            "networking",
            "performance",
        ]
        assert DEFAULT_SPECIALIZATION in specializations.names()

    def test_lookup_is_case_insensitive(self, specializations):
        """Names are normalized before lookup."""
        assert specializations.get(" Networking ").name == "networking"
        assert "DATABASE" in specializations

    def test_resolve_unknown_falls_back_to_default(self, specializations):
        """Unknown names resolve to the default specialization."""
        assert specializations.resolve("quantum-flux").name == DEFAULT_SPECIALIZATION

    def test_get_unknown_raises(self, specializations):
        """Strict lookup names the available specializations."""
        with pytest.raises(UnknownSpecializationError) as exc_info:
            specializations.get("quantum-flux")

        assert exc_info.value.name == "quantum-flux"
        assert "networking" in str(exc_info.value)

    def test_register_new_specialization(self, specializations):
        """New domains are added by registration."""
        specializations.register(Specialization(name="Storage", domain="storage"))

        assert "storage" in specializations.categories()
        assert specializations.resolve("storage").domain == "storage"

    def test_missing_default_raises(self):
        """A registry without its default entry cannot resolve unknown names."""
        registry = SpecializationRegistry([Specialization(name="networking")])

        with pytest.raises(UnknownSpecializationError):
            registry.resolve("database")


class TestToolRegistry:
    """Tests for per-category tool sets."""

    def test_networking_tools(self, specializations):
        registry = ToolRegistry(specializations)

        assert registry.list_tool_names("networking") == [
            "TestConnectivity",
            "CheckDnsResolution",
            "CheckHttpEndpoint",
        ]

    def test_availability_tools(self, specializations):
        registry = ToolRegistry(specializations)

        assert registry.list_tool_names("availability") == [
            "InspectContainer",
            "GetContainerLogs",
            "RestartContainer",
            "StartContainer",
        ]

    def test_unknown_category_uses_default_tools(self, specializations):
        """The default specialization provides read-only probes."""
        registry = ToolRegistry(specializations)

        assert registry.list_tool_names("mystery") == registry.list_tool_names("general")

    def test_tool_set_built_once(self, specializations):
        """The tool factory runs once per specialization."""
        calls = []

        def factory():
            calls.append(1)
            return []

        specializations.register(Specialization(name="storage", tool_factory=factory))
        registry = ToolRegistry(specializations)

        registry.get_tools_for_category("storage")
        registry.get_tools_for_category("Storage")

        assert len(calls) == 1

    def test_concurrent_first_access_builds_once(self, specializations):
        """Threads racing on a new category share one tool set."""
        calls = []
        barrier = threading.Barrier(8)

        def factory():
            calls.append(1)
            time.sleep(0.01)
            return []

        specializations.register(Specialization(name="storage", tool_factory=factory))
        registry = ToolRegistry(specializations)

        def worker():
            barrier.wait()
            registry.get_tools_for_category("storage")

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(calls) == 1


class TestTemplates:
    """Tests for prompt template construction."""

    def test_networking_diagnostic_template(self, specializations):
        """Domain templates carry focus areas, examples and placeholders."""
        template = specializations.get("networking").diagnostic_template()

        assert "specialized networking diagnostic agent" in template
        assert "Focus on these common networking issues:" in template
        assert "1. Firewall or security group rules blocking traffic" in template
        assert "USE_TOOL: TestConnectivity" in template
        for placeholder in ("conversationState", "userInput", "toolResults", "patterns", "tools"):
            assert "{{$" + placeholder + "}}" in template

    def test_default_templates_have_no_domain_guidance(self, specializations):
        """The default specialization renders generic templates."""
        general = specializations.get(DEFAULT_SPECIALIZATION)

        diagnostic = general.diagnostic_template()
        mitigation = general.mitigation_template()

        assert "You are a specialized diagnostic agent." in diagnostic
        assert "Focus on these common" not in diagnostic
        assert "Based on the diagnosis, determine the best way to fix the issue." in mitigation

    def test_default_examples_are_neutral(self, specializations):
        """The default specialization's example lines name no host, port or domain."""
        general = specializations.get(DEFAULT_SPECIALIZATION)

        for template in (general.diagnostic_template(), general.mitigation_template()):
            assert "443" not in template
            assert "api.internal" not in template
            assert "Example: USE_TOOL: <ToolName> <arguments>" in template

    def test_mitigation_template_placeholders(self, specializations):
        template = specializations.get("availability").mitigation_template()

        assert "{{$diagnosisResult}}" in template
        assert "MITIGATION_COMPLETE:" in template
        assert "1. If the app is stopped or crashed, start or restart it" in template

    def test_coordinator_template_renders(self):
        """The coordinator prompt accepts state, input and categories."""
        prompt = render_template(
            COORDINATOR_TEMPLATE,
            {
                "conversationState": "Current phase: initial\nRecent messages:",
                "userInput": "my app is slow",
                "categories": "database, networking",
            },
        )

        assert "User query: my app is slow" in prompt
        assert "Available diagnostic categories: database, networking" in prompt
        assert "{{$" not in prompt
