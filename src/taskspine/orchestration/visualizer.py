"""Task Visualizer — render task trees as rich trees or plain text.

Consumes the ``TreeNode`` lists produced by ``TreeRenderer`` and turns them
into something a terminal can show.

Architecture::

    list[TreeNode]
        │
        ▼
    to_rich_tree(nodes, title)  → rich.tree.Tree (colors, descriptions, flags)
    to_text(nodes, title)       → str (box-drawing outline, no colors)

Example::

    print(to_text(spine.render_tree(deep=True)))
    # Tasks
    # ├── clean
    # └─┬ build
    #   ├── clean
    #   └── compile
"""

from __future__ import annotations

from rich.markup import escape
from rich.text import Text
from rich.tree import Tree

from taskspine.orchestration.tree import TreeNode

_TYPE_STYLES = {
    "series": "cyan",
    "parallel": "magenta",
}


# ---------------------------------------------------------------------------
# Rich rendering
# ---------------------------------------------------------------------------


def _rich_label(node: TreeNode) -> Text:
    text = Text(node.label, style="bold")
    if node.type:
        text.append(f" ({node.type})", style=_TYPE_STYLES.get(node.type, "dim"))
    if node.description:
        text.append(f"  {node.description}", style="dim")
    return text


def _add_rich(parent: Tree, node: TreeNode) -> None:
    branch = parent.add(_rich_label(node))
    for option, help_text in (node.flag or {}).items():
        branch.add(f"[yellow]{escape(option)}[/yellow]  [dim]{escape(help_text)}[/dim]")
    for child in node.nodes or ():
        _add_rich(branch, child)


def to_rich_tree(nodes: list[TreeNode], title: str = "Tasks") -> Tree:
    """Build a ``rich.tree.Tree`` for console output.

    Parameters
    ----------
    nodes
        Root nodes from ``TreeRenderer.render()``.
    title
        Label of the tree's top node.
    """
    tree = Tree(Text(title, style="bold underline"))
    for node in nodes:
        _add_rich(tree, node)
    return tree


# ---------------------------------------------------------------------------
# Plain-text rendering
# ---------------------------------------------------------------------------


def _text_lines(node: TreeNode, prefix: str, last: bool, lines: list[str]) -> None:
    children = node.nodes or []
    branch = "└─" if last else "├─"
    joint = "┬" if children else "─"
    label = node.label
    if node.description:
        label = f"{label}  {node.description}"
    lines.append(f"{prefix}{branch}{joint} {label}")

    child_prefix = prefix + ("  " if last else "│ ")
    for i, child in enumerate(children):
        _text_lines(child, child_prefix, i == len(children) - 1, lines)


def to_text(nodes: list[TreeNode], title: str = "Tasks") -> str:
    """Render nodes as a box-drawing outline."""
    lines = [title]
    for i, node in enumerate(nodes):
        _text_lines(node, "", i == len(nodes) - 1, lines)
    return "\n".join(lines)
