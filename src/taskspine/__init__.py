"""
taskspine - named tasks, series/parallel composition, and task trees.

Usage:
    from taskspine import TaskSpine

    tasks = TaskSpine()
    tasks.task("build", tasks.series("clean", tasks.parallel("scripts", "styles")))
    tasks.render_tree(deep=True)
"""

__version__ = "0.1.0"

from taskspine.core.errors import TaskSpineError
from taskspine.orchestration import (
    ANONYMOUS_LABEL,
    CyclicCompositionError,
    InvalidReferenceError,
    TaskNotFoundError,
    TaskRegistry,
    TaskSpine,
    TreeNode,
    Unit,
    UnitKind,
    UnresolvedReferenceError,
)

__all__ = [
    "__version__",
    "ANONYMOUS_LABEL",
    "CyclicCompositionError",
    "InvalidReferenceError",
    "TaskNotFoundError",
    "TaskRegistry",
    "TaskSpine",
    "TaskSpineError",
    "TreeNode",
    "Unit",
    "UnitKind",
    "UnresolvedReferenceError",
]
