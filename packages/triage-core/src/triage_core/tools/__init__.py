"""
Tools module.

This module contains:
- base.py: Tool base class and ToolArgumentError
- invoker.py: ToolInvoker, which runs tools and normalizes failures to text
- registry.py: ToolRegistry, which resolves tool sets per specialization
- network.py: TCP, DNS and HTTP probes
- docker.py: Container inspection, logs and lifecycle tools
"""

from triage_core.tools.base import Tool, ToolArgumentError
from triage_core.tools.docker import (
    GetContainerLogs,
    InspectContainer,
    RestartContainer,
    StartContainer,
)
from triage_core.tools.invoker import ToolInvoker, format_tool_list
from triage_core.tools.network import CheckDnsResolution, CheckHttpEndpoint, TestConnectivity
from triage_core.tools.registry import ToolRegistry

__all__ = [
    # Base
    "Tool",
    "ToolArgumentError",
    # Invocation
    "ToolInvoker",
    "ToolRegistry",
    "format_tool_list",
    # Network probes
    "TestConnectivity",
    "CheckDnsResolution",
    "CheckHttpEndpoint",
    # Container tools
    "InspectContainer",
    "GetContainerLogs",
    "RestartContainer",
    "StartContainer",
]
