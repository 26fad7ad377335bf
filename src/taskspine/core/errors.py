"""
Structured error types for taskspine.

Every error raised by taskspine derives from ``TaskSpineError`` so callers can
catch the whole family with one ``except`` clause, while still carrying enough
metadata to log or print a useful message.

Manifesto:
    - **Typed Error Hierarchy:** One subclass per failure domain
    - **Rich Context:** Errors carry the task, reference and traversal path
    - **Error Chaining:** Original exceptions are preserved as ``cause``

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────┐
        │                      TaskSpineError                          │
        │               (category, context, cause)                     │
        ├─────────────────────────────────────────────────────────────┤
        │  ConfigError        ValidationError     OrchestrationError   │
        │  (CONFIG)           (VALIDATION)        (ORCHESTRATION)      │
        │                                              │               │
        │                                  taskspine.orchestration     │
        │                                  .exceptions.TaskError ...   │
        └─────────────────────────────────────────────────────────────┘

Examples:
    >>> error = OrchestrationError("Task graph is broken")
    >>> error.with_context(task="build", path=["build", "lint"])
    OrchestrationError('Task graph is broken', category=ORCHESTRATION)
    >>> error.context.task
    'build'

Tags:
    error-handling, exception-hierarchy, error-context, taskspine

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """
    Standard error categories for classification and reporting.

    Attributes:
        CONFIG: Invalid settings, unloadable taskfiles
        VALIDATION: Bad arguments (names, references, render options)
        ORCHESTRATION: Registry lookups and composition graph failures
        INTERNAL: Bugs, unexpected state
        UNKNOWN: Uncategorized errors
    """

    CONFIG = "CONFIG"
    VALIDATION = "VALIDATION"
    ORCHESTRATION = "ORCHESTRATION"
    INTERNAL = "INTERNAL"
    UNKNOWN = "UNKNOWN"


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an error.

    Only fields that are set show up in ``to_dict()``; anything that does not
    fit a typed field goes into ``metadata``.

    Attributes:
        task: Name of the task being registered, looked up or rendered
        reference: Raw reference that could not be used
        path: Labels on the traversal path when the error occurred
        taskfile: Taskfile being loaded
        metadata: Additional key-value pairs
    """

    task: str | None = None
    reference: str | None = None
    path: list[str] | None = None
    taskfile: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result: dict[str, Any] = {}
        for key in ["task", "reference", "path", "taskfile"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class TaskSpineError(Exception):
    """
    Base exception for all taskspine errors.

    Subclasses set ``default_category`` so every instance is classified
    without the raiser having to think about it.

    Examples:
        >>> error = TaskSpineError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.to_dict()["error_type"]
        'TaskSpineError'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> TaskSpineError:
        """
        Add context to this error (fluent API).

        Usage:
            raise OrchestrationError("Broken graph").with_context(task="build")
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


class ConfigError(TaskSpineError):
    """Configuration or taskfile loading error."""

    default_category = ErrorCategory.CONFIG


class ValidationError(TaskSpineError):
    """Invalid argument passed to a public operation."""

    default_category = ErrorCategory.VALIDATION


class OrchestrationError(TaskSpineError):
    """Registry or composition graph error."""

    default_category = ErrorCategory.ORCHESTRATION


def categorize_error(error: Exception) -> ErrorCategory:
    """Get the category of an error."""
    if isinstance(error, TaskSpineError):
        return error.category
    if isinstance(error, (TypeError, ValueError)):
        return ErrorCategory.VALIDATION
    if isinstance(error, (ImportError, OSError)):
        return ErrorCategory.CONFIG
    return ErrorCategory.UNKNOWN


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "TaskSpineError",
    "ConfigError",
    "ValidationError",
    "OrchestrationError",
    "categorize_error",
]
