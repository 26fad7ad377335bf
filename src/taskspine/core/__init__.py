"""taskspine core -- errors, logging and settings shared by every layer.

Architecture::

    errors.py     Structured error hierarchy (TaskSpineError, OrchestrationError)
    logging.py    structlog configuration + get_logger
    settings.py   pydantic-settings for entry points (TASKSPINE_*)
    protocols.py  ExecutorProtocol (runners implement it; nothing here executes)
"""

from taskspine.core.errors import (
    ConfigError,
    ErrorCategory,
    ErrorContext,
    OrchestrationError,
    TaskSpineError,
    ValidationError,
    categorize_error,
)
from taskspine.core.logging import configure_logging, get_logger
from taskspine.core.protocols import ExecutorProtocol

__all__ = [
    "ConfigError",
    "ErrorCategory",
    "ErrorContext",
    "ExecutorProtocol",
    "OrchestrationError",
    "TaskSpineError",
    "ValidationError",
    "categorize_error",
    "configure_logging",
    "get_logger",
]
