"""
CLI utility helpers — taskfile loading and output formatting.
"""

from __future__ import annotations

import json
from typing import Any, NoReturn

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from taskspine.core.errors import TaskSpineError
from taskspine.core.settings import get_settings
from taskspine.orchestration.loader import load_taskfile
from taskspine.orchestration.spine import TaskSpine
from taskspine.orchestration.tree import TreeNode
from taskspine.orchestration.visualizer import to_rich_tree, to_text

console = Console()
err_console = Console(stderr=True)


# ── Taskfile helper ──────────────────────────────────────────────────────


def open_taskfile(taskfile: str | None, variable: str | None) -> TaskSpine:
    """Load the taskfile named on the command line, or the configured default."""
    settings = get_settings()
    try:
        return load_taskfile(taskfile or settings.taskfile, variable or settings.spine_variable)
    except TaskSpineError as e:
        fail(e)


def fail(error: TaskSpineError) -> NoReturn:
    """Print ``error`` to stderr and exit with status 1."""
    err_console.print(f"[bold red]Error[/bold red] ({error.category.value}): {escape(error.message)}")
    raise typer.Exit(code=1)


# ── Output helpers ───────────────────────────────────────────────────────


def output_json(payload: Any) -> None:
    """Write ``payload`` to stdout as indented JSON."""
    typer.echo(json.dumps(payload, indent=2, default=str))


def output_tree(nodes: list[TreeNode], *, as_json: bool = False, plain: bool = False, title: str = "Tasks") -> None:
    """Render a task tree to the terminal."""
    if as_json:
        output_json([n.to_dict() for n in nodes])
        return

    if not nodes:
        console.print("[dim]No tasks.[/dim]")
        return

    if plain:
        typer.echo(to_text(nodes, title=title))
    else:
        console.print(to_rich_tree(nodes, title=title))


def output_table(nodes: list[TreeNode], *, title: str = "") -> None:
    """Render root nodes as a name / type / description table."""
    if not nodes:
        console.print("[dim]No tasks.[/dim]")
        return

    table = Table(title=title or None, show_lines=False, pad_edge=False)
    table.add_column("name", overflow="fold")
    table.add_column("type")
    table.add_column("description", overflow="fold")
    for node in nodes:
        table.add_row(node.label, node.type or "task", node.description or "")
    console.print(table)
