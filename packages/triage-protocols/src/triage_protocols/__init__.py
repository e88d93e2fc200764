"""
Protocol definitions for the triage agent system.

This package provides the boundary Protocols the orchestration engine talks
to. It has zero dependencies on other triage-* packages.

Key protocols:
- CompletionClientProtocol: Language-model completion service
- ToolProtocol: Named capability invoked with an opaque argument string
- PatternSourceProtocol: Category-keyed troubleshooting hints

Key types:
- CompletionOptions / CompletionRequest / CompletionResponse
- render_template: Placeholder substitution for {{$name}} markers
"""

from triage_protocols.completion import (
    CompletionClientProtocol,
    CompletionOptions,
    CompletionRequest,
    CompletionResponse,
    render_template,
)
from triage_protocols.memory import PatternSourceProtocol
from triage_protocols.tool import ToolProtocol

__all__ = [
    # Protocols
    "CompletionClientProtocol",
    "ToolProtocol",
    "PatternSourceProtocol",
    # Completion types
    "CompletionOptions",
    "CompletionRequest",
    "CompletionResponse",
    "render_template",
]
