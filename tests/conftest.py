"""
Shared pytest fixtures and configuration for taskspine tests.

This module provides:
- A fresh TaskSpine per test (no shared registry)
- Sample task callables
- Logging/settings reset between tests
- Taskfile writer for loader and CLI tests
"""

from __future__ import annotations

import logging
import textwrap
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
import structlog

from taskspine import TaskSpine
from taskspine.core.settings import get_settings


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-mark tests based on their location."""
    for item in items:
        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def _reset_global_state() -> Iterator[None]:
    """Drop cached settings and logging configuration around every test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()
    # configure_logging() installs its own root handler
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)


@pytest.fixture
def spine() -> TaskSpine:
    """A fresh, empty TaskSpine."""
    return TaskSpine()


# =============================================================================
# Sample Tasks
# =============================================================================


def noop():
    pass


@pytest.fixture
def anon() -> Callable[[], None]:
    """A callable with no usable name."""
    return lambda: None


@pytest.fixture
def triple_level(spine: TaskSpine, anon) -> TaskSpine:
    """fn1, fn2 = parallel(anon, noop); fn3 = series("fn1", "fn2")."""
    spine.task("fn1", spine.parallel(anon, noop))
    spine.task("fn2", spine.parallel(anon, noop))
    spine.task("fn3", spine.series("fn1", "fn2"))
    return spine


# =============================================================================
# Taskfiles
# =============================================================================


@pytest.fixture
def write_taskfile(tmp_path: Path) -> Callable[..., Path]:
    """Write a dedented taskfile into tmp_path and return its path."""

    def _write(content: str, filename: str = "taskfile.py") -> Path:
        path = tmp_path / filename
        path.write_text(textwrap.dedent(content))
        return path

    return _write
