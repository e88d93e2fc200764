"""Catalog CLI commands.

Read-only views of what the agent knows, no API key required:
- categories: Specializations and their tools
- tools: Tool names and descriptions, for one category or all
- patterns: Troubleshooting hints for a category
"""

import asyncio
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from triage_core.bootstrap import load_memory
from triage_core.config import Settings
from triage_core.specializations import create_default_registry
from triage_core.tools.registry import ToolRegistry

console = Console()


def list_categories() -> None:
    """List specializations and the tools each one uses."""
    registry = create_default_registry()
    tools = ToolRegistry(registry)

    table = Table(title="Specializations")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Focus areas", justify="right")
    table.add_column("Tools")

    for name in registry.names():
        specialization = registry.get(name)
        label = f"{name} [dim](default)[/dim]" if name == registry.default_name else name
        table.add_row(
            label,
            str(len(specialization.diagnostic_focus)),
            ", ".join(tools.list_tool_names(name)) or "-",
        )

    console.print(table)


def list_tools(
    category: str = typer.Argument(None, help="Specialization name (all if omitted)"),
) -> None:
    """Show tool names, usage and descriptions."""
    registry = create_default_registry()
    tools = ToolRegistry(registry)
    names = [category] if category else registry.names()

    table = Table(title="Tools")
    table.add_column("Category", style="cyan", no_wrap=True)
    table.add_column("Tool", style="green", no_wrap=True)
    table.add_column("Usage")
    table.add_column("Description")

    for name in names:
        resolved = registry.resolve(name).name
        for tool in tools.get_tools_for_category(name):
            table.add_row(resolved, tool.name, getattr(tool, "usage", ""), tool.description)

    console.print(table)


def list_patterns(
    category: str = typer.Argument(..., help="Specialization name"),
    patterns_file: Path = typer.Option(
        None, "--patterns", exists=True, dir_okay=False, help="JSON file of extra patterns"
    ),
) -> None:
    """Show troubleshooting patterns for a category."""
    settings = Settings(patterns_file=patterns_file) if patterns_file else Settings()
    memory = load_memory(settings)
    patterns = asyncio.run(memory.search_patterns(category))

    if not patterns:
        console.print(f"[yellow]No patterns for category '{category}'[/yellow]")
        console.print(f"Known categories: {', '.join(memory.categories())}")
        return

    console.print(f"[bold]Patterns for {category}[/bold]")
    for pattern in patterns:
        console.print(f"  - {pattern}")
