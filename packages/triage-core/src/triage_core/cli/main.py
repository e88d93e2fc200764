"""Triage CLI - two-phase diagnosis and mitigation support agent."""

import logging

import typer
from rich.logging import RichHandler

from triage_core.cli.catalog import list_categories, list_patterns, list_tools
from triage_core.cli.chat import ask, chat
from triage_core.config import Settings

app = typer.Typer(
    name="triage",
    help="Diagnose and fix application problems with a language-model support agent",
    no_args_is_help=True,
)


def configure_logging(level: str) -> None:
    """Send log records through Rich so they stay readable next to the chat."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        None, "--log-level", help="Logging level (default: TRIAGE_LOG_LEVEL or WARNING)"
    ),
) -> None:
    """Diagnose and fix application problems with a language-model support agent."""
    configure_logging(log_level or Settings().log_level)


app.command("chat")(chat)
app.command("ask")(ask)
app.command("categories")(list_categories)
app.command("tools")(list_tools)
app.command("patterns")(list_patterns)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
