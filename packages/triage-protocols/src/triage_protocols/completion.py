"""
Completion service protocol and wire types.

The completion boundary takes a template with named placeholders, a map of
parameter values and sampling options, and returns free-form text. Placeholders
use the ``{{$name}}`` marker and are substituted by plain text replacement:
no escaping, and unknown placeholders are left untouched.
"""

import re
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

PLACEHOLDER_PATTERN = re.compile(r"\{\{\$([A-Za-z_][A-Za-z0-9_]*)\}\}")


@dataclass(frozen=True)
class CompletionOptions:
    """
    Sampling options for a single completion call.

    Attributes:
        model: Model identifier passed to the provider
        temperature: Sampling temperature
        max_output_tokens: Upper bound on generated tokens
    """

    model: str = "claude-sonnet-4-5"
    temperature: float = 0.2
    max_output_tokens: int = 1500


@dataclass(frozen=True)
class CompletionRequest:
    """
    A prompt template plus the values for its placeholders.

    Attributes:
        template: Prompt text containing {{$name}} placeholders
        parameters: Placeholder name to replacement text
        options: Sampling options for this call
    """

    template: str
    parameters: dict[str, str] = field(default_factory=dict)
    options: CompletionOptions = field(default_factory=CompletionOptions)

    def render(self) -> str:
        """Return the template with all known placeholders substituted."""
        return render_template(self.template, self.parameters)


@dataclass(frozen=True)
class CompletionResponse:
    """Text returned by the completion service."""

    text: str


def render_template(template: str, parameters: dict[str, str]) -> str:
    """
    Substitute {{$name}} placeholders in a single pass.

    Values are inserted verbatim and are not scanned again, so a user message
    that happens to contain a placeholder marker is never expanded.

    Args:
        template: Template text
        parameters: Placeholder values keyed by name

    Returns:
        Rendered prompt text
    """

    def _replace(match: re.Match[str]) -> str:
        name = match.group(1)
        if name in parameters:
            return parameters[name]
        return match.group(0)

    return PLACEHOLDER_PATTERN.sub(_replace, template)


@runtime_checkable
class CompletionClientProtocol(Protocol):
    """
    Protocol for language-model completion services.

    Implementations render the request template, call the provider once and
    return its text. Provider faults (network, timeout, quota) propagate as
    exceptions; callers decide how to recover.
    """

    async def complete(self, request: CompletionRequest) -> CompletionResponse:
        """
        Run one completion.

        Args:
            request: Template, parameters and options

        Returns:
            CompletionResponse carrying the generated text
        """
        ...
