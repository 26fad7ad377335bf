"""
Taskfile loader.

A taskfile is a plain Python module that builds a ``TaskSpine`` and binds it
to a module-level variable (``tasks`` by default)::

    # taskfile.py
    from taskspine import TaskSpine

    tasks = TaskSpine()

    def clean(): ...
    tasks.task(clean)

``load_taskfile()`` imports the file under a private module name and returns
that variable.
"""

from __future__ import annotations

import importlib.util
import sys
from pathlib import Path

from taskspine.core.errors import categorize_error
from taskspine.core.logging import LogContext, get_logger
from taskspine.orchestration.exceptions import TaskfileError
from taskspine.orchestration.spine import TaskSpine

logger = get_logger(__name__)

_MODULE_NAME = "_taskspine_taskfile"


def load_taskfile(path: Path | str, variable: str = "tasks") -> TaskSpine:
    """
    Import a taskfile and return its ``TaskSpine``.

    Args:
        path: Path to the Python taskfile
        variable: Module attribute holding the TaskSpine

    Returns:
        The TaskSpine defined by the taskfile

    Raises:
        TaskfileError: If the file is missing, fails to import, or does not
            define a TaskSpine under ``variable``
    """
    path = Path(path)

    if not path.is_file():
        raise TaskfileError(f"Taskfile not found: {path}", taskfile=str(path))

    spec = importlib.util.spec_from_file_location(_MODULE_NAME, path)
    if spec is None or spec.loader is None:
        raise TaskfileError(f"Cannot load module from: {path}", taskfile=str(path))

    module = importlib.util.module_from_spec(spec)
    sys.modules[_MODULE_NAME] = module

    # Events logged while the taskfile registers its tasks carry its path.
    with LogContext(taskfile=str(path)):
        logger.debug("loader.import")
        try:
            spec.loader.exec_module(module)
        except Exception as e:
            sys.modules.pop(_MODULE_NAME, None)
            logger.warning(
                "loader.failed",
                error_type=type(e).__name__,
                category=categorize_error(e).value,
            )
            raise TaskfileError(f"Error loading {path}: {e}", taskfile=str(path), cause=e) from e

    spine = getattr(module, variable, None)
    if not isinstance(spine, TaskSpine):
        found = type(spine).__name__ if spine is not None else "nothing"
        raise TaskfileError(
            f"Expected a TaskSpine in '{variable}' of {path}, found {found}",
            taskfile=str(path),
        )

    logger.info("loader.loaded", path=str(path), tasks=len(spine.registry))
    return spine
