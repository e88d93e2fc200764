"""
Agent module for routing and specialist turns.

This module contains:
- sentinel.py: USE_TOOL / DIAGNOSIS / MITIGATION_COMPLETE line protocol
- routing.py: RoutingDecision parsed from coordinator output
- prompts.py: Coordinator and specialist prompt templates
- specialist.py: DiagnosticAgent and MitigationAgent turn logic
- factory.py: Cached per-specialization agent factories
- coordinator.py: CoordinatorAgent that routes each user turn
"""

from triage_core.agent.sentinel import (
    Diagnosis,
    MitigationComplete,
    SentinelCommand,
    UseTool,
    clean,
    find,
    parse,
)
from triage_core.agent.routing import RoutingAction, RoutingDecision, parse_routing_decision
from triage_core.agent.prompts import (
    COORDINATOR_TEMPLATE,
    build_diagnostic_template,
    build_mitigation_template,
)
from triage_core.agent.specialist import (
    DIAGNOSTIC_APOLOGY,
    MITIGATION_APOLOGY,
    DiagnosticAgent,
    MitigationAgent,
    SpecialistAgent,
)
from triage_core.agent.factory import (
    DiagnosticAgentFactory,
    MitigationAgentFactory,
    SpecialistAgentFactory,
)
from triage_core.agent.coordinator import COORDINATOR_APOLOGY, CoordinatorAgent

__all__ = [
    # Sentinel protocol
    "UseTool",
    "Diagnosis",
    "MitigationComplete",
    "SentinelCommand",
    "parse",
    "find",
    "clean",
    # Routing
    "RoutingAction",
    "RoutingDecision",
    "parse_routing_decision",
    # Prompts
    "COORDINATOR_TEMPLATE",
    "build_diagnostic_template",
    "build_mitigation_template",
    # Specialists
    "SpecialistAgent",
    "DiagnosticAgent",
    "MitigationAgent",
    "DIAGNOSTIC_APOLOGY",
    "MITIGATION_APOLOGY",
    # Factories
    "SpecialistAgentFactory",
    "DiagnosticAgentFactory",
    "MitigationAgentFactory",
    # Coordinator
    "CoordinatorAgent",
    "COORDINATOR_APOLOGY",
]
