"""
Prompt templates for the coordinator and the specialist agents.

Templates use {{$name}} placeholders that the completion client fills in:
- conversationState: ConversationState.format_for_prompt()
- userInput: The current user message
- toolResults: Output of the tool round (empty on the first call)
- tools: "- Name: description" lines for the agent's tool set
- patterns: Troubleshooting hints (diagnostic agents)
- diagnosisResult: Latest diagnosis (mitigation agents)
- categories: Known specialization names (coordinator)

Specialist templates are assembled from a Specialization's focus lists and
examples. A specialization without focus lists produces the generic template.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from triage_core.specializations import Specialization


COORDINATOR_TEMPLATE = """
You are a coordinator for an application support system. Your job is to:
1. Understand the user's problem with their application
2. Determine which specialized diagnostic agent to use
3. Gather required information from the user
4. Route the conversation to the appropriate specialist agent

Current conversation state:
{{$conversationState}}

User query: {{$userInput}}

Determine the next action:
- If you need more information, ask the user specific questions
- If ready to diagnose, respond with a JSON classification: {"action": "diagnose", "category": "[category]"}
- If already diagnosed and ready to mitigate, respond with: {"action": "mitigate", "category": "[category]"}

Available diagnostic categories: {{$categories}}

Response:"""


def _numbered(items: tuple[str, ...]) -> str:
    return "\n".join(f"{i}. {item}" for i, item in enumerate(items, 1))


def _agent_title(specialization: "Specialization", role: str) -> str:
    if specialization.domain:
        return f"a specialized {specialization.domain} {role} agent"
    return f"a specialized {role} agent"


def build_diagnostic_template(specialization: "Specialization") -> str:
    """
    Build the diagnostic prompt template for a specialization.

    Args:
        specialization: Specialization providing domain wording and examples

    Returns:
        Template text with placeholders left for the completion client
    """
    domain = f"{specialization.domain} " if specialization.domain else ""
    sections = [
        f"""
You are {_agent_title(specialization, "diagnostic")}. Your job is to diagnose {domain}issues with applications.

Current conversation state:
{{{{$conversationState}}}}

User query: {{{{$userInput}}}}

Tool results: {{{{$toolResults}}}}

Common {domain}troubleshooting patterns:
{{{{$patterns}}}}

Available tools:
{{{{$tools}}}}
"""
    ]

    if specialization.diagnostic_focus:
        sections.append(
            f"Focus on these common {domain}issues:\n"
            f"{_numbered(specialization.diagnostic_focus)}\n"
        )

    sections.append(
        f"""If you need more information, ask the user specific questions.
If you need to run a diagnostic tool, respond with a line starting with USE_TOOL: followed by the tool name and arguments.
Example: USE_TOOL: {specialization.diagnostic_tool_example}

If you've identified the issue, respond with a line starting with DIAGNOSIS: followed by a brief description of the issue.
Example: DIAGNOSIS: {specialization.diagnosis_example}

After any tool usage or diagnosis, provide a clear explanation to the user.

Response:"""
    )
    return "\n".join(sections)


def build_mitigation_template(specialization: "Specialization") -> str:
    """
    Build the mitigation prompt template for a specialization.

    Args:
        specialization: Specialization providing domain wording and examples

    Returns:
        Template text with placeholders left for the completion client
    """
    domain = f"{specialization.domain} " if specialization.domain else ""
    sections = [
        f"""
You are {_agent_title(specialization, "mitigation")}. Your job is to fix {domain}issues with applications.

Current conversation state:
{{{{$conversationState}}}}

Diagnosis result: {{{{$diagnosisResult}}}}

User query: {{{{$userInput}}}}

Tool results: {{{{$toolResults}}}}

Available tools:
{{{{$tools}}}}
"""
    ]

    if specialization.mitigation_guidance:
        sections.append(
            f"Based on the diagnosis, determine the best way to fix the {domain}issue:\n"
            f"{_numbered(specialization.mitigation_guidance)}\n"
        )
    else:
        sections.append("Based on the diagnosis, determine the best way to fix the issue.\n")

    sections.append(
        f"""If you need to execute a fix, respond with a line starting with USE_TOOL: followed by the tool name and arguments.
Example: USE_TOOL: {specialization.mitigation_tool_example}

Present options to the user before making significant changes.
Provide clear explanations for recommended actions.

If you've completed the mitigation, respond with a line starting with MITIGATION_COMPLETE: followed by a brief summary.
Example: MITIGATION_COMPLETE: {specialization.mitigation_example}

Response:"""
    )
    return "\n".join(sections)
