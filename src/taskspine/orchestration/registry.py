"""Task Registry — name → Unit lookup for one task spine.

Manifesto:
Build files name their tasks, compose them, and look them up again by name.
The registry is the single table those names live in.  It is an explicit
object: every ``TaskSpine`` (and every test) owns its own, so there is no
process-wide state to clear between runs.

ARCHITECTURE
────────────
::

    TaskRegistry(catalog=None)
      register(name, target)  → Unit   (callable → leaf, Unit → alias;
                                        an unnamed composite takes name)
      get(name)               → Unit   or TaskNotFoundError
      has(name) / name in reg → bool
      root_names()            → names in first-registration order
      tasks()                 → {name: Unit} snapshot
      stats()                 → counts for debugging

    Re-registering a name replaces its Unit in place: the name keeps its
    original position and units that already hold a DirectRef to the old
    Unit are unaffected.

Related modules:
    units.py        — Unit, UnitCatalog (callable identity → leaf)
    composition.py  — builds the composite Units that get registered
    tree.py         — renders the registry as a tree

Example::

    registry = TaskRegistry()
    registry.register("clean", clean)
    registry.register("wipe", clean)          # alias, same Unit
    registry.get("wipe").canonical_label      # 'clean'
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

from taskspine.core.logging import get_logger
from taskspine.orchestration.exceptions import (
    InvalidReferenceError,
    InvalidTaskNameError,
    TaskNotFoundError,
)
from taskspine.orchestration.units import Unit, UnitCatalog

logger = get_logger(__name__)


class TaskRegistry:
    """Mapping from task name to Unit."""

    def __init__(self, catalog: UnitCatalog | None = None) -> None:
        self.catalog = catalog if catalog is not None else UnitCatalog()
        self._tasks: dict[str, Unit] = {}

    def register(self, name: str, target: Unit | Callable[..., Any]) -> Unit:
        """
        Bind ``name`` to a task.

        Args:
            name: Registry name
            target: A raw callable or an existing Unit

        Returns:
            The bound Unit

        Raises:
            InvalidTaskNameError: If name is not a non-empty string
            InvalidReferenceError: If target is neither a Unit nor callable
        """
        if not isinstance(name, str) or not name:
            raise InvalidTaskNameError(name)

        if isinstance(target, Unit):
            unit = target
            # A composite takes the first name it is registered under.
            unit.bind_label(name)
        elif callable(target):
            unit = self.catalog.leaf_for(target, name)
        else:
            raise InvalidReferenceError(target)

        previous = self._tasks.get(name)
        self._tasks[name] = unit

        if previous is not None and previous is not unit:
            logger.debug(
                "task_overwritten",
                name=name,
                previous=previous.canonical_label,
                label=unit.canonical_label,
            )
        elif unit.canonical_label != name:
            logger.debug("task_alias_registered", name=name, label=unit.canonical_label)
        else:
            logger.debug("task_registered", name=name, kind=unit.kind.value)

        return unit

    def get(self, name: str) -> Unit:
        """
        Get a task by name.

        Raises:
            TaskNotFoundError: If the name is not registered
        """
        try:
            return self._tasks[name]
        except KeyError:
            raise TaskNotFoundError(name, self.root_names()) from None

    def has(self, name: str) -> bool:
        """Check if a task is registered."""
        return name in self._tasks

    def root_names(self) -> list[str]:
        """Task names in the order they were first registered."""
        return list(self._tasks)

    def tasks(self) -> dict[str, Unit]:
        """Snapshot of the registry, in registration order."""
        return dict(self._tasks)

    def stats(self) -> dict[str, Any]:
        """Get statistics about the registry (for debugging)."""
        by_kind: dict[str, int] = {}
        for unit in self._tasks.values():
            by_kind[unit.kind.value] = by_kind.get(unit.kind.value, 0) + 1

        return {
            "total_tasks": len(self._tasks),
            "distinct_units": len({id(u) for u in self._tasks.values()}),
            "tasks_by_kind": by_kind,
            "known_callables": len(self.catalog),
        }

    def __contains__(self, name: object) -> bool:
        return name in self._tasks

    def __iter__(self) -> Iterator[str]:
        return iter(self.root_names())

    def __len__(self) -> int:
        return len(self._tasks)

    def __repr__(self) -> str:
        return f"TaskRegistry({len(self._tasks)} tasks)"
