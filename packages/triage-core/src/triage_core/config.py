"""Environment-based configuration for the triage agent."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings

from triage_protocols import CompletionOptions


class Settings(BaseSettings):
    """Triage agent configuration.

    All settings can be overridden via environment variables with the
    TRIAGE_ prefix. For example:
        TRIAGE_MODEL=claude-opus-4-1
        TRIAGE_MAX_TOOL_ROUNDS=2

    The Anthropic API key is read by the SDK from ANTHROPIC_API_KEY.
    """

    # Completion service
    model: str = "claude-sonnet-4-5"
    temperature: float = Field(default=0.2, ge=0.0, le=1.0)
    max_output_tokens: int = Field(default=1500, gt=0)
    request_timeout_seconds: float = Field(default=60.0, gt=0)

    # Turn protocol
    max_tool_rounds: int = Field(default=1, ge=0)
    tool_timeout_seconds: float | None = Field(default=60.0, gt=0)

    # Knowledge patterns (JSON object: category -> list of hints)
    patterns_file: Path | None = None

    # Logging
    log_level: str = "WARNING"

    model_config = {"env_prefix": "TRIAGE_"}

    def completion_options(self) -> CompletionOptions:
        """Build the per-call options shared by all agents."""
        return CompletionOptions(
            model=self.model,
            temperature=self.temperature,
            max_output_tokens=self.max_output_tokens,
        )
