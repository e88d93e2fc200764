"""
Completion service clients.

- anthropic_client.py: AnthropicCompletionClient on the anthropic SDK
"""

from triage_core.llm.anthropic_client import AnthropicCompletionClient

__all__ = ["AnthropicCompletionClient"]
