"""
CLI: ``taskspine tasks`` — inspect the tasks defined by a taskfile.
"""

from __future__ import annotations

import typer

from taskspine.cli.utils import fail, open_taskfile, output_json, output_table, output_tree
from taskspine.core.errors import TaskSpineError
from taskspine.core.settings import get_settings

app = typer.Typer(no_args_is_help=True)


@app.command("list")
def list_tasks(
    taskfile: str | None = typer.Argument(None, help="Taskfile path (default: taskfile.py)"),
    variable: str | None = typer.Option(None, "--variable", "-v", help="TaskSpine variable name"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """List top-level tasks in registration order."""
    spine = open_taskfile(taskfile, variable)
    nodes = spine.render_tree()
    if json_out:
        output_json([n.to_dict() for n in nodes])
        return
    output_table(nodes, title="Tasks")


@app.command("tree")
def tree(
    taskfile: str | None = typer.Argument(None, help="Taskfile path (default: taskfile.py)"),
    variable: str | None = typer.Option(None, "--variable", "-v", help="TaskSpine variable name"),
    depth: int | None = typer.Option(None, "--depth", "-d", min=1, help="Levels to expand"),
    shallow: bool = typer.Option(False, "--shallow", help="Show top-level tasks only"),
    plain: bool = typer.Option(False, "--plain", help="Plain-text outline without colors"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Show the task dependency tree."""
    spine = open_taskfile(taskfile, variable)
    if depth is None:
        depth = get_settings().tree_depth
    try:
        nodes = spine.render_tree(deep=not shallow, depth=depth)
    except TaskSpineError as e:
        fail(e)
    output_tree(nodes, as_json=json_out, plain=plain)


@app.command("show")
def show(
    name: str = typer.Argument(..., help="Task name"),
    taskfile: str | None = typer.Argument(None, help="Taskfile path (default: taskfile.py)"),
    variable: str | None = typer.Option(None, "--variable", "-v", help="TaskSpine variable name"),
    depth: int | None = typer.Option(None, "--depth", "-d", min=1, help="Levels to expand"),
    plain: bool = typer.Option(False, "--plain", help="Plain-text outline without colors"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Show one task and its subtree."""
    spine = open_taskfile(taskfile, variable)
    try:
        node = spine.render_task(name, deep=True, depth=depth)
    except TaskSpineError as e:
        fail(e)
    if json_out:
        output_json(node.to_dict())
        return
    output_tree([node], plain=plain, title=f"Task: {name}")
