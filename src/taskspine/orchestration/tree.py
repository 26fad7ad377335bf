"""Task Tree — depth-bounded rendering of the registry as plain nodes.

Produces the structure behind ``taskspine tasks list`` / ``tasks tree``:
one ``TreeNode`` per registry root, in registration order, optionally
expanded into the composites' children.

Architecture::

    TaskRegistry
    ├── root_names()
    └── get(name)
        │
        ▼
    TreeRenderer(registry).render(TreeOptions(deep, depth))
        │   root          → label = registry name
        │   nested child  → label = canonical label
        │   NameRef       → resolved now (UnresolvedReferenceError)
        │   revisit       → CyclicCompositionError
        ▼
    list[TreeNode]  → .to_dict() → {"label", "type"?, "description"?,
                                     "flag"?, "nodes"?}

Depth counts tree levels: roots are level 1 and expanding a node's children
consumes one level.  A composite whose children fall outside the depth limit is
still emitted, just without ``nodes``.  Every call walks the graph afresh.

Example::

    renderer = TreeRenderer(registry)
    [n.to_dict() for n in renderer.render(TreeOptions(deep=True, depth=2))]
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from taskspine.core.logging import get_logger
from taskspine.orchestration.exceptions import (
    CyclicCompositionError,
    InvalidTreeOptionsError,
    UnresolvedReferenceError,
)
from taskspine.orchestration.labels import resolve_label
from taskspine.orchestration.registry import TaskRegistry
from taskspine.orchestration.units import DirectRef, NameRef, Unit, UnitRef

logger = get_logger(__name__)


class TreeOptions(BaseModel):
    """Render options.

    ``depth`` of None means unbounded.  Without ``deep`` only roots are
    rendered, whatever the depth.
    """

    model_config = ConfigDict(strict=True, frozen=True, extra="forbid")

    deep: bool = False
    depth: int | None = Field(default=None, ge=1)

    @classmethod
    def build(cls, deep: bool = False, depth: int | None = None) -> TreeOptions:
        """Validate options, raising ``InvalidTreeOptionsError`` on bad input."""
        try:
            return cls(deep=deep, depth=depth)
        except PydanticValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(p) for p in first.get("loc", ())) or None
            raise InvalidTreeOptionsError(
                f"Invalid tree options: {first.get('msg', e)}", field=field
            ) from e


@dataclass
class TreeNode:
    """One unit at one tree position."""

    label: str
    type: str | None = None
    description: str | None = None
    flag: dict[str, str] | None = None
    nodes: list[TreeNode] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict form; absent fields are omitted rather than null."""
        result: dict[str, Any] = {"label": self.label}
        if self.type is not None:
            result["type"] = self.type
        if self.description is not None:
            result["description"] = self.description
        if self.flag is not None:
            result["flag"] = dict(self.flag)
        if self.nodes is not None:
            result["nodes"] = [n.to_dict() for n in self.nodes]
        return result

    def count(self) -> int:
        """Number of nodes in this subtree, including this one."""
        return 1 + sum(n.count() for n in self.nodes or ())


class TreeRenderer:
    """Walks a registry and produces ``TreeNode`` lists."""

    def __init__(self, registry: TaskRegistry) -> None:
        self.registry = registry

    def render(self, options: TreeOptions | None = None) -> list[TreeNode]:
        """Render every registry root, in registration order."""
        options = options or TreeOptions()
        roots = [self._render_root(name, options) for name in self.registry.root_names()]

        logger.debug(
            "tree_rendered",
            roots=len(roots),
            nodes=sum(n.count() for n in roots),
            deep=options.deep,
            depth=options.depth,
        )
        return roots

    def render_task(self, name: str, options: TreeOptions | None = None) -> TreeNode:
        """Render a single root by name (``TaskNotFoundError`` if absent)."""
        return self._render_root(name, options or TreeOptions())

    def _render_root(self, name: str, options: TreeOptions) -> TreeNode:
        unit = self.registry.get(name)
        return self._render_unit(unit, name, level=1, path=[], options=options)

    def _render_unit(
        self,
        unit: Unit,
        context_name: str | None,
        level: int,
        path: list[tuple[Unit, str]],
        options: TreeOptions,
    ) -> TreeNode:
        label = resolve_label(unit, context_name)
        node = TreeNode(label=label)

        if unit.is_composite:
            node.type = unit.kind.value
        if unit.description is not None:
            node.description = unit.description
        if unit.flag is not None:
            node.flag = dict(unit.flag)

        if unit.is_composite and self._can_expand(level, options):
            trail = path + [(unit, label)]
            node.nodes = [
                self._render_child(ref, level + 1, trail, options) for ref in unit.children
            ]
        return node

    def _render_child(
        self,
        ref: UnitRef,
        level: int,
        path: list[tuple[Unit, str]],
        options: TreeOptions,
    ) -> TreeNode:
        if isinstance(ref, NameRef):
            if not self.registry.has(ref.name):
                raise UnresolvedReferenceError(ref.name, [label for _, label in path])
            unit = self.registry.get(ref.name)
        elif isinstance(ref, DirectRef):
            unit = ref.unit
        else:
            raise TypeError(f"Unknown unit reference: {ref!r}")

        if any(seen is unit for seen, _ in path):
            cycle = [label for _, label in path] + [unit.canonical_label]
            raise CyclicCompositionError(cycle)

        return self._render_unit(unit, None, level, path, options)

    @staticmethod
    def _can_expand(level: int, options: TreeOptions) -> bool:
        if not options.deep:
            return False
        return options.depth is None or level < options.depth
