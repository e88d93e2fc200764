"""
Sentinel line protocol embedded in specialist responses.

Specialist prompts ask the model to signal actions with control lines:

    USE_TOOL: <ToolName> <raw argument text>
    DIAGNOSIS: <one-line diagnosis>
    MITIGATION_COMPLETE: <one-line summary>

A line is a command only if, after leading whitespace, it starts with one of
these prefixes. A keyword in the middle of a line is prose, not a command.
Lines are split on line feeds only. A carriage return before the line feed
is dropped with the payload whitespace; any other separator (a lone carriage
return, U+2028 and so on) stays inside its line.
This module is the only place that scans raw text; everything downstream
works with the typed commands it returns.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TypeVar

USE_TOOL_PREFIX = "USE_TOOL:"
DIAGNOSIS_PREFIX = "DIAGNOSIS:"
MITIGATION_COMPLETE_PREFIX = "MITIGATION_COMPLETE:"

SENTINEL_PREFIXES = (USE_TOOL_PREFIX, DIAGNOSIS_PREFIX, MITIGATION_COMPLETE_PREFIX)


@dataclass(frozen=True)
class UseTool:
    """Request to run a tool with verbatim argument text."""

    tool_name: str
    args_text: str = ""


@dataclass(frozen=True)
class Diagnosis:
    """Diagnosis reached by a diagnostic specialist."""

    text: str


@dataclass(frozen=True)
class MitigationComplete:
    """Summary of a mitigation that was carried out."""

    text: str


SentinelCommand = UseTool | Diagnosis | MitigationComplete

CommandT = TypeVar("CommandT", UseTool, Diagnosis, MitigationComplete)


def is_sentinel_line(line: str) -> bool:
    """Return True if the line starts (after indentation) with a sentinel prefix."""
    return line.lstrip().startswith(SENTINEL_PREFIXES)


def _lines(text: str) -> list[str]:
    return text.split("\n")


def _parse_line(line: str) -> SentinelCommand | None:
    stripped = line.lstrip()

    if stripped.startswith(USE_TOOL_PREFIX):
        parts = stripped[len(USE_TOOL_PREFIX):].strip().split(maxsplit=1)
        if not parts:
            # "USE_TOOL:" with nothing after it names no tool
            return None
        args_text = parts[1] if len(parts) > 1 else ""
        return UseTool(tool_name=parts[0], args_text=args_text)

    if stripped.startswith(DIAGNOSIS_PREFIX):
        payload = stripped[len(DIAGNOSIS_PREFIX):].strip()
        return Diagnosis(text=payload) if payload else None

    if stripped.startswith(MITIGATION_COMPLETE_PREFIX):
        payload = stripped[len(MITIGATION_COMPLETE_PREFIX):].strip()
        return MitigationComplete(text=payload) if payload else None

    return None


def iter_commands(text: str) -> Iterator[SentinelCommand]:
    """
    Yield well-formed commands in line order.

    Sentinel lines without a payload (e.g. a bare "DIAGNOSIS:") are skipped.

    Args:
        text: Raw model output

    Yields:
        UseTool, Diagnosis or MitigationComplete commands
    """
    for line in _lines(text):
        command = _parse_line(line)
        if command is not None:
            yield command


def parse(text: str) -> SentinelCommand | None:
    """
    Return the first command in the text, of any kind.

    Args:
        text: Raw model output

    Returns:
        First command found, or None if the text carries no command
    """
    return next(iter_commands(text), None)


def find(text: str, kind: type[CommandT]) -> CommandT | None:
    """
    Return the first command of a specific kind.

    Later commands of the same kind are ignored.

    Args:
        text: Raw model output
        kind: UseTool, Diagnosis or MitigationComplete

    Returns:
        First matching command, or None
    """
    for command in iter_commands(text):
        if isinstance(command, kind):
            return command
    return None


def clean(text: str) -> str:
    """
    Strip every sentinel line so control data never reaches the user.

    Remaining lines keep their order and content. clean() is idempotent.

    Args:
        text: Raw model output

    Returns:
        Text without sentinel lines
    """
    return "\n".join(line for line in _lines(text) if not is_sentinel_line(line))
