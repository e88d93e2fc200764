"""
Routing decisions extracted from coordinator output.

The coordinator either asks the user a question in plain text or embeds a
JSON classification somewhere in its reply:

    {"action": "diagnose", "category": "networking"}

Anything that cannot be decoded into a RoutingDecision is treated as "no
decision" and the reply is shown to the user as a clarifying question.
"""

import logging
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)


class RoutingAction(str, Enum):
    """What the coordinator wants to do next."""

    DIAGNOSE = "diagnose"
    MITIGATE = "mitigate"


class RoutingDecision(BaseModel):
    """
    Coordinator classification of a turn.

    Attributes:
        action: diagnose or mitigate
        category: Specialization name, normalized to lower case. The value is
            untrusted model text and may not match any registered
            specialization.
    """

    action: RoutingAction = Field(..., description="diagnose or mitigate")
    category: str = Field(..., min_length=1, description="Specialization name")

    @field_validator("action", mode="before")
    @classmethod
    def _normalize_action(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("category")
    @classmethod
    def _normalize_category(cls, value: str) -> str:
        normalized = value.strip().lower()
        if not normalized:
            raise ValueError("category must not be blank")
        return normalized


def parse_routing_decision(text: str) -> RoutingDecision | None:
    """
    Extract a RoutingDecision from free text.

    The text must mention both "action" and "category" keys. The candidate
    JSON object spans from the first "{" to the last "}".

    Args:
        text: Raw coordinator output

    Returns:
        RoutingDecision, or None when the text carries no usable decision
    """
    if '"action"' not in text or '"category"' not in text:
        return None

    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        logger.warning("Routing keys present but no JSON object found in coordinator reply")
        return None

    candidate = text[start : end + 1]
    try:
        return RoutingDecision.model_validate_json(candidate)
    except ValidationError as e:
        logger.warning(
            "Could not parse routing decision from %r: %s",
            candidate[:200],
            e.errors(include_url=False),
        )
        return None
