"""Conversation CLI commands.

- chat: Interactive session; empty input, "exit" or "quit" ends it
- ask: Single turn, prints the reply and exits

Environment variables:
    ANTHROPIC_API_KEY: API key for Claude
    TRIAGE_*: Settings overrides (see triage_core.config.Settings)
"""

import asyncio
from pathlib import Path

import typer
from rich.console import Console
from rich.markdown import Markdown

from triage_core.bootstrap import build_coordinator
from triage_core.config import Settings
from triage_core.conversation.session import GREETING, ConversationSession, is_exit_command
from triage_core.exceptions import ConfigurationError

console = Console()

AGENT_LABEL = "[bold cyan]Support Agent[/bold cyan]"


def _load_settings(
    model: str | None, max_tool_rounds: int | None, patterns_file: Path | None
) -> Settings:
    overrides: dict[str, object] = {}
    if model:
        overrides["model"] = model
    if max_tool_rounds is not None:
        overrides["max_tool_rounds"] = max_tool_rounds
    if patterns_file is not None:
        overrides["patterns_file"] = patterns_file
    return Settings(**overrides)


def _create_session(settings: Settings) -> ConversationSession:
    try:
        coordinator = build_coordinator(settings)
    except ConfigurationError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e
    return ConversationSession(coordinator)


def _print_reply(reply: str) -> None:
    console.print()
    console.print(AGENT_LABEL)
    console.print(Markdown(reply))


def chat(
    model: str = typer.Option(None, "--model", "-m", help="Claude model to use"),
    max_tool_rounds: int = typer.Option(
        None, "--max-tool-rounds", min=0, help="Tool rounds allowed per turn"
    ),
    patterns_file: Path = typer.Option(
        None, "--patterns", exists=True, dir_okay=False, help="JSON file of extra patterns"
    ),
) -> None:
    """
    Start an interactive support conversation.

    Type your problem description; enter an empty line, "exit" or "quit" to
    leave.
    """
    settings = _load_settings(model, max_tool_rounds, patterns_file)
    session = _create_session(settings)

    async def _loop() -> None:
        console.print(f"{AGENT_LABEL}: {GREETING}")
        while True:
            try:
                user_input = await asyncio.to_thread(console.input, "\n[bold green]You[/bold green]: ")
            except EOFError:
                break
            if is_exit_command(user_input):
                break
            with console.status("Thinking..."):
                reply = await session.handle(user_input)
            _print_reply(reply)

    try:
        asyncio.run(_loop())
    except KeyboardInterrupt:
        console.print()
    console.print("[dim]Session ended.[/dim]")


def ask(
    question: str = typer.Argument(..., help="Problem description"),
    model: str = typer.Option(None, "--model", "-m", help="Claude model to use"),
    max_tool_rounds: int = typer.Option(
        None, "--max-tool-rounds", min=0, help="Tool rounds allowed per turn"
    ),
    patterns_file: Path = typer.Option(
        None, "--patterns", exists=True, dir_okay=False, help="JSON file of extra patterns"
    ),
) -> None:
    """Send a single message and print the reply."""
    settings = _load_settings(model, max_tool_rounds, patterns_file)
    session = _create_session(settings)
    reply = asyncio.run(session.handle(question))
    _print_reply(reply)
