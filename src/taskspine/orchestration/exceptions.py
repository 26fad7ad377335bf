"""Orchestration exceptions — structured error hierarchy.

All orchestration exceptions inherit from ``taskspine.core.errors.OrchestrationError``
so that callers can catch the entire family with a single ``except`` clause.
The ones marked (V) are raised for a bad argument and are also
``ValidationError``s.

Hierarchy::

    OrchestrationError  (from taskspine.core.errors)
      └── TaskError                       ── base for all task graph errors
            ├── TaskNotFoundError           ── name not in the registry
            ├── InvalidTaskNameError    (V) ── name is empty or not a string
            ├── MissingTaskNameError    (V) ── anonymous callable registered without a name
            ├── InvalidReferenceError   (V) ── combinator got an unusable ref
            ├── UnresolvedReferenceError    ── render found an unregistered name ref
            ├── CyclicCompositionError      ── render revisited a unit on its path
            └── InvalidTreeOptionsError (V) ── bad render options
    ConfigError  (from taskspine.core.errors)
      └── TaskfileError                   ── taskfile cannot be loaded
"""

from __future__ import annotations

from taskspine.core.errors import (
    ConfigError,
    ErrorCategory,
    ErrorContext,
    OrchestrationError,
    ValidationError,
)


class TaskError(OrchestrationError):
    """Base exception for all task registry/composition errors."""

    pass


class TaskNotFoundError(TaskError):
    """Raised when a requested task name is not registered."""

    def __init__(self, task_name: str, available: list[str] | None = None):
        self.task_name = task_name
        listing = ", ".join(available) if available else "(none)"
        super().__init__(
            f"Task '{task_name}' not found. Available: {listing}",
            context=ErrorContext(task=task_name),
        )


class InvalidTaskNameError(TaskError, ValidationError):
    """Raised when a task is registered under an unusable name."""

    default_category = ErrorCategory.VALIDATION

    def __init__(self, name: object):
        self.name = name
        super().__init__(
            f"Task name must be a non-empty string, got {name!r}",
            context=ErrorContext(reference=repr(name)),
        )


class MissingTaskNameError(TaskError, ValidationError):
    """Raised when an anonymous callable is registered without a name."""

    default_category = ErrorCategory.VALIDATION

    def __init__(self) -> None:
        super().__init__(
            "Task name must be specified: the callable has no name "
            "and no display_name attribute"
        )


class InvalidReferenceError(TaskError, ValidationError):
    """Raised when a combinator receives something that is not a name, unit or callable."""

    default_category = ErrorCategory.VALIDATION

    def __init__(self, ref: object, position: int | None = None):
        self.ref = ref
        self.position = position
        where = f" at position {position}" if position is not None else ""
        super().__init__(
            f"Invalid task reference{where}: expected a task name, "
            f"unit or callable, got {type(ref).__name__}",
            context=ErrorContext(reference=repr(ref)),
        )
        if position is not None:
            self.with_context(position=position)


class UnresolvedReferenceError(TaskError):
    """Raised at render time when a name reference was never registered."""

    def __init__(self, name: str, path: list[str]):
        self.task_name = name
        self.path = path
        where = " -> ".join(path) if path else "(root)"
        super().__init__(
            f"Task '{name}' referenced from {where} is not registered",
            context=ErrorContext(task=name, path=path),
        )


class CyclicCompositionError(TaskError):
    """Raised at render time when a composite transitively contains itself."""

    def __init__(self, cycle: list[str]):
        self.cycle = cycle
        cycle_str = " -> ".join(cycle)
        super().__init__(
            f"Cycle detected in task composition: {cycle_str}",
            context=ErrorContext(path=cycle),
        )


class InvalidTreeOptionsError(TaskError, ValidationError):
    """Raised when tree render options are invalid."""

    default_category = ErrorCategory.VALIDATION

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)


class TaskfileError(ConfigError):
    """Raised when a taskfile cannot be loaded."""

    def __init__(self, message: str, taskfile: str, cause: Exception | None = None):
        self.taskfile = taskfile
        super().__init__(message, context=ErrorContext(taskfile=taskfile), cause=cause)
