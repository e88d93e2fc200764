"""
Exception classes for the triage engine.

Recoverable conditions inside a turn (unknown tools, tool faults, malformed
model output) are never raised: they become text the model or the user can
read. The exceptions below cover configuration mistakes, strict registry
lookups and provider faults that the completion client surfaces to the
turn-level error handler.

Per project patterns:
- Store context data in attributes for error handling
- Include descriptive message with relevant details
"""


class TriageError(Exception):
    """Base class for all triage errors."""


class ConfigurationError(TriageError):
    """
    Raised when required configuration is missing or invalid.

    Attributes:
        setting: Name of the offending setting or environment variable
        reason: What is wrong with it
    """

    def __init__(self, setting: str, reason: str) -> None:
        self.setting = setting
        self.reason = reason
        super().__init__(f"Invalid configuration for {setting}: {reason}")


class UnknownSpecializationError(TriageError):
    """
    Raised by strict specialization lookups.

    The engine itself resolves unknown names to the default specialization;
    this error only escapes from SpecializationRegistry.get().

    Attributes:
        name: The name that was looked up
        available: Registered specialization names
    """

    def __init__(self, name: str, available: list[str]) -> None:
        self.name = name
        self.available = available
        super().__init__(
            f"Unknown specialization '{name}'. "
            f"Available specializations: {', '.join(available)}"
        )


class CompletionError(TriageError):
    """
    Raised when the completion provider fails.

    Attributes:
        model: Model the request was sent to
        reason: Provider error summary
    """

    def __init__(self, model: str, reason: str) -> None:
        self.model = model
        self.reason = reason
        super().__init__(f"Completion request to {model} failed: {reason}")
