"""TaskSpine — the object build files talk to.

Bundles one registry, its callable catalog, the combinators and the tree
renderer behind a small API.  Every instance is independent; there is no
module-level default spine.

ARCHITECTURE
────────────
::

    TaskSpine(registry=None)
      register_task(name, target)   → Unit
      get_task(name)                → Unit (TaskNotFoundError)
      task(name) / task(name, fn) / task(fn)
      series(*refs) / parallel(*refs) → Unit
      render_tree(deep, depth)      → list[TreeNode]
      render_task(name, deep, depth) → TreeNode
      use_registry(registry)        → move tasks into another registry

Example::

    tasks = TaskSpine()

    def clean(): ...
    def compile(): ...

    tasks.task(clean)
    tasks.task("build", tasks.series("clean", compile))
    tasks.get_task("build").description = "Clean, then compile."

    [n.to_dict() for n in tasks.render_tree(deep=True)]
    # [{'label': 'clean'},
    #  {'label': 'build', 'type': 'series', 'description': 'Clean, then compile.',
    #   'nodes': [{'label': 'clean'}, {'label': 'compile'}]}]
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from taskspine.core.logging import get_logger
from taskspine.orchestration import composition
from taskspine.orchestration.composition import TaskRef
from taskspine.orchestration.exceptions import InvalidTaskNameError, MissingTaskNameError
from taskspine.orchestration.registry import TaskRegistry
from taskspine.orchestration.tree import TreeNode, TreeOptions, TreeRenderer
from taskspine.orchestration.units import Unit, derive_name

logger = get_logger(__name__)


class TaskSpine:
    """Registry, combinators and tree rendering for one set of tasks."""

    def __init__(self, registry: TaskRegistry | None = None) -> None:
        self._registry = registry if registry is not None else TaskRegistry()

    @property
    def registry(self) -> TaskRegistry:
        return self._registry

    # ── Registration ─────────────────────────────────────────────────

    def register_task(self, name: str, target: Unit | Callable[..., Any]) -> Unit:
        """Bind ``name`` to a callable or Unit; see ``TaskRegistry.register``."""
        return self._registry.register(name, target)

    def get_task(self, name: str) -> Unit:
        """Look a task up by name (``TaskNotFoundError`` if missing)."""
        return self._registry.get(name)

    def has_task(self, name: str) -> bool:
        return self._registry.has(name)

    def task(
        self,
        name: str | Unit | Callable[..., Any],
        target: Unit | Callable[..., Any] | None = None,
    ) -> Unit:
        """Get or register a task, build-file style.

        - ``task("name")`` returns the registered Unit.
        - ``task("name", fn_or_unit)`` registers it under ``name``.
        - ``task(fn)`` registers ``fn`` under its ``display_name`` or
          ``__name__``; anonymous callables raise ``MissingTaskNameError``.
        """
        if isinstance(name, str):
            if target is None:
                return self.get_task(name)
            return self.register_task(name, target)

        if target is not None:
            raise InvalidTaskNameError(name)

        if isinstance(name, Unit):
            if not name.has_canonical_label:
                raise MissingTaskNameError()
            return self.register_task(name.canonical_label, name)

        if callable(name):
            derived = derive_name(name)
            if derived is None:
                raise MissingTaskNameError()
            return self.register_task(derived, name)

        raise InvalidTaskNameError(name)

    # ── Composition ──────────────────────────────────────────────────

    def series(self, *refs: TaskRef) -> Unit:
        """Compose tasks to run in order."""
        return composition.series(self._registry.catalog, *refs)

    def parallel(self, *refs: TaskRef) -> Unit:
        """Compose tasks to run concurrently."""
        return composition.parallel(self._registry.catalog, *refs)

    # ── Introspection ────────────────────────────────────────────────

    def render_tree(self, deep: bool = False, depth: int | None = None) -> list[TreeNode]:
        """Render all registered tasks as a tree."""
        options = TreeOptions.build(deep=deep, depth=depth)
        return TreeRenderer(self._registry).render(options)

    def render_task(self, name: str, deep: bool = True, depth: int | None = None) -> TreeNode:
        """Render one registered task and (by default) its subtree."""
        options = TreeOptions.build(deep=deep, depth=depth)
        return TreeRenderer(self._registry).render_task(name, options)

    # ── Registry management ──────────────────────────────────────────

    def use_registry(self, registry: TaskRegistry) -> None:
        """Switch to ``registry``, registering the current tasks into it."""
        if registry is self._registry:
            return

        carried = self._registry.tasks()
        for name, unit in carried.items():
            registry.register(name, unit)
        registry.catalog.merge(self._registry.catalog)

        logger.debug("registry_replaced", carried=len(carried), total=len(registry))
        self._registry = registry

    def __repr__(self) -> str:
        return f"TaskSpine({self._registry!r})"
