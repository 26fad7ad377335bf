"""
Protocol definitions for taskspine.

Architecture:
    ::

        protocols.py
        └── ExecutorProtocol   ─ runs a Unit graph built by taskspine

    taskspine builds and renders task graphs; it never runs them.  A runner
    that wants to execute the graph implements ``ExecutorProtocol``:

    - ``LEAF``      invoke ``unit.func``
    - ``SERIES``    run ``unit.children`` strictly in order, stop on the first failure
    - ``PARALLEL``  run ``unit.children`` concurrently, aggregate failures

    Children are ``NameRef`` (look the name up in the registry at run time)
    or ``DirectRef`` (use ``ref.unit``).

Tags:
    protocol, executor, contracts, taskspine

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from taskspine.orchestration.registry import TaskRegistry
    from taskspine.orchestration.units import Unit


@runtime_checkable
class ExecutorProtocol(Protocol):
    """
    Contract for task executors.

    ``run`` executes ``unit`` and everything below it, resolving name
    references against ``registry``.
    """

    def run(self, unit: Unit, registry: TaskRegistry) -> Any:
        """Execute a unit graph."""
        ...


__all__ = ["ExecutorProtocol"]
